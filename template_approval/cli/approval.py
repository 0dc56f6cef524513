"""
CLI-based approval handler for template reviews.

This module provides a terminal-based interface for reviewers to inspect
the diff of a pending template and confirm or decline it.
"""

from datetime import datetime

from template_approval.approval_handler import ApprovalHandler
from template_approval.diff import has_changes, render_diff
from template_approval.formatting import CLIFormatter
from template_approval.models import DiffChunk, ReviewDecision, StoreLocation

CONFIRM_PROMPT = "Do these changes look good for you?"


class CLIApprovalHandler(ApprovalHandler):
    """
    Command-line interface approval handler.

    Prints the colorized diff to standard output and asks a single
    yes/no question on standard input. The default answer is no.
    """

    def __init__(self, color: bool = True):
        self.color = color

    async def request_approval(
        self,
        location: StoreLocation,
        chunks: list[DiffChunk]
    ) -> ReviewDecision:
        """
        Request approval from the reviewer via CLI.

        Args:
            location: The pending object under review
            chunks: Line diff from the latest approved template

        Returns:
            ReviewDecision with the reviewer's answer
        """
        self._display_diff(location, chunks)

        return ReviewDecision(
            approved=self._confirm(),
            timestamp=datetime.now()
        )

    def _display_diff(self, location: StoreLocation, chunks: list[DiffChunk]) -> None:
        print(CLIFormatter.section(f"Reviewing {location.url}") if self.color else f"\nReviewing {location.url}")

        if not has_changes(chunks):
            print("\nNo changes compared to the latest approved template.")
            return

        print()
        print(render_diff(chunks, color=self.color))

    def _confirm(self) -> bool:
        try:
            answer = input(f"{CONFIRM_PROMPT} (y/N): ").strip().lower()
        except (EOFError, KeyboardInterrupt):
            # Treat interrupted input as declining
            print()
            return False

        return answer in ("y", "yes")
