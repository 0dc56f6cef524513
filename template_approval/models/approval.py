"""
Approval workflow models for template approval.

This module defines the data structures describing the outcome of a
submission and of a review, and the reviewer's decision.
"""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

from .diff import DiffChunk
from .location import ApprovedLocation, StoreLocation


class ApprovalStatus(str, Enum):
    """
    Terminal state of a review.

    - APPROVED: Reviewer approved and the template was promoted
    - REJECTED: Reviewer declined; the pending object is left in place
    - ALREADY_APPROVED: The canonical key already existed, nothing was done
    """
    APPROVED = "approved"
    REJECTED = "rejected"
    ALREADY_APPROVED = "already_approved"


class SubmissionOutcome(str, Enum):
    """Result of requesting approval for a template."""
    SUBMITTED = "submitted"
    ALREADY_PENDING = "already_pending"


class ReviewDecision(BaseModel):
    """
    Captures the reviewer's answer to the confirmation prompt.
    """
    approved: bool = Field(..., description="Whether the reviewer confirmed the changes")
    timestamp: datetime = Field(
        default_factory=datetime.now,
        description="When the decision was made"
    )


class SubmissionResult(BaseModel):
    """What `request` did for a template."""
    outcome: SubmissionOutcome = Field(..., description="Whether a pending object was written")
    location: ApprovedLocation = Field(..., description="Approved location of the template version")

    @property
    def review_url(self) -> str:
        return self.location.pending_url


class ReviewResult(BaseModel):
    """
    What `approve_template` did for a pending object.

    `diff` is empty when the review short-circuited before fetching anything.
    """
    status: ApprovalStatus = Field(..., description="Terminal state reached by the review")
    location: StoreLocation = Field(..., description="The pending object that was reviewed")
    diff: list[DiffChunk] = Field(default_factory=list, description="Diff shown to the reviewer")
    decision: Optional[ReviewDecision] = Field(None, description="Reviewer decision, if one was asked for")
