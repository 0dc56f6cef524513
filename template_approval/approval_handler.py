"""
Approval handler interface for template reviews.

This module defines the abstract interface for approval handlers,
enabling different implementations (CLI, chat bot, etc.) to be used
interchangeably with the approval workflow.
"""

from abc import ABC, abstractmethod

from template_approval.models import DiffChunk, ReviewDecision, StoreLocation


class ApprovalHandler(ABC):
    """
    Abstract base class for approval handlers.

    Approval handlers are responsible for presenting the diff between the
    last approved template and a pending one, and for collecting the
    reviewer's yes/no decision.
    """

    @abstractmethod
    async def request_approval(
        self,
        location: StoreLocation,
        chunks: list[DiffChunk]
    ) -> ReviewDecision:
        """
        Request approval from the reviewer for a pending template.

        This method should:
        1. Present the diff to the reviewer
        2. Wait for a yes/no answer, treating anything but an explicit yes as no
        3. Return the decision

        Args:
            location: The pending object under review
            chunks: Line diff from the latest approved template to the pending one

        Returns:
            ReviewDecision recording whether the reviewer approved
        """
        pass
