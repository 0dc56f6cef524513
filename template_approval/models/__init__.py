"""
Data models for template approval.

This module exports the Pydantic models, enums and exceptions used
throughout the package.
"""

# Errors
from .errors import (
    TemplateApprovalError,
    ConfigurationError,
    ObjectNotFoundError,
    StoreError,
    PartialPromotionError,
)

# Key layout
from .location import (
    ApprovedLocation,
    StoreLocation,
    PENDING_SUFFIX,
    LATEST_NAME,
)

# Stack-args file
from .stack_args import StackArgs

# Diff chunks
from .diff import (
    DiffKind,
    DiffChunk,
)

# Approval workflow models
from .approval import (
    ApprovalStatus,
    SubmissionOutcome,
    ReviewDecision,
    SubmissionResult,
    ReviewResult,
)

__all__ = [
    # Errors
    "TemplateApprovalError",
    "ConfigurationError",
    "ObjectNotFoundError",
    "StoreError",
    "PartialPromotionError",
    # Key layout
    "ApprovedLocation",
    "StoreLocation",
    "PENDING_SUFFIX",
    "LATEST_NAME",
    # Stack args
    "StackArgs",
    # Diff
    "DiffKind",
    "DiffChunk",
    # Approval workflow
    "ApprovalStatus",
    "SubmissionOutcome",
    "ReviewDecision",
    "SubmissionResult",
    "ReviewResult",
]
