"""
Object store interface for the approval workflow.

Stores are key-addressed blob storage. `head` and `get` must raise
ObjectNotFoundError for a missing key; every other failure is a StoreError.
"""

from abc import ABC, abstractmethod


class ObjectStore(ABC):
    """
    Abstract base class for object stores.

    The workflow only ever needs existence checks, whole-object reads and
    writes, and deletes. Implementations are free to bind these to any
    storage backend.
    """

    @abstractmethod
    def head(self, bucket: str, key: str) -> None:
        """
        Check that an object exists.

        Raises:
            ObjectNotFoundError: If the key does not exist
            StoreError: For any other failure
        """
        pass

    @abstractmethod
    def get(self, bucket: str, key: str) -> bytes:
        """
        Read an object's full body.

        Raises:
            ObjectNotFoundError: If the key does not exist
            StoreError: For any other failure
        """
        pass

    @abstractmethod
    def put(self, bucket: str, key: str, body: bytes) -> None:
        """Write an object, replacing any existing one."""
        pass

    @abstractmethod
    def delete(self, bucket: str, key: str) -> None:
        """Delete an object."""
        pass
