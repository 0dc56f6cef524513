"""
Object stores for the approval workflow.

This module exports the store interface and its implementations.
"""

from .base import ObjectStore
from .s3 import S3ObjectStore
from .memory import InMemoryObjectStore, StoreCall

__all__ = [
    "ObjectStore",
    "S3ObjectStore",
    "InMemoryObjectStore",
    "StoreCall",
]
