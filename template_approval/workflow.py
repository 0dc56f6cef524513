"""
Approval workflow for CloudFormation templates.

This module holds the approval state machine: submitting a template as a
pending object, and reviewing a pending object into the canonical key and
the `latest` alias.

Existence checks and the writes that follow them are not atomic. Two
submitters or two reviewers racing on the same key both pass their check
and the store's last write wins; the workflow assumes one reviewer per
template at a time.
"""

import logging
from typing import Optional

from template_approval.approval_handler import ApprovalHandler
from template_approval.diff import diff_lines
from template_approval.formatting import CLIFormatter
from template_approval.models import (
    ApprovalStatus,
    ConfigurationError,
    ObjectNotFoundError,
    PartialPromotionError,
    ReviewResult,
    StackArgs,
    StoreError,
    StoreLocation,
    SubmissionOutcome,
    SubmissionResult,
)
from template_approval.stores import ObjectStore
from template_approval.templates import TemplateSource

logger = logging.getLogger(__name__)


def log_success(text: str, color: bool = True) -> None:
    logger.info(CLIFormatter.success(text) if color else text)


def log_error(text: str, color: bool = True) -> None:
    logger.error(CLIFormatter.error(text) if color else text)


class TemplateApprovalWorkflow:
    """
    Coordinates template submission and review against an object store.

    Key layout for a template version stored at `s3://bucket/prefix`:
    1. `prefix.pending` holds a submission awaiting review
    2. `prefix` holds the approved template once reviewed
    3. `dirname(prefix)/latest` mirrors the most recently approved template
    """

    def __init__(
        self,
        store: ObjectStore,
        template_source: Optional[TemplateSource] = None,
        approval_handler: Optional[ApprovalHandler] = None,
        command_name: str = "template-approval",
        color: bool = True
    ):
        """
        Initialize the workflow.

        Args:
            store: Object store holding pending and approved templates
            template_source: Resolves template references (needed for `request`)
            approval_handler: Collects the reviewer's decision (needed for review)
            command_name: CLI name used in the follow-up hint after a submission
            color: Whether log messages carry ANSI colors
        """
        self.store = store
        self.template_source = template_source
        self.approval_handler = approval_handler
        self.command_name = command_name
        self.color = color

    async def request(self, stack_args: StackArgs, argsfile: Optional[str] = None) -> SubmissionResult:
        """
        Submit a template for approval.

        Writes the template to its pending key unless a pending object is
        already there, in which case nothing is written.

        Args:
            stack_args: Parsed stack-args file
            argsfile: Path of the stack-args file, used to resolve the template

        Returns:
            SubmissionResult describing what happened

        Raises:
            ConfigurationError: If ApprovedTemplateLocation or Template is missing
            StoreError: If the store fails for any reason other than a missing key
        """
        if not stack_args.has_approved_location:
            raise ConfigurationError(
                f"`ApprovedTemplateLocation` must be provided in {argsfile or 'the stack args'}"
            )
        if not stack_args.template:
            raise ConfigurationError(f"`Template` must be provided in {argsfile or 'the stack args'}")
        if self.template_source is None:
            raise ConfigurationError("A template source is required to request approval")

        body = self.template_source.load(stack_args.template, argsfile)
        location = self.template_source.resolve_location(
            stack_args.approved_template_location,
            stack_args.template,
            body
        )

        try:
            self.store.head(location.bucket, location.pending_key)
        except ObjectNotFoundError:
            self.store.put(location.bucket, location.pending_key, body)

            self._log_success(
                f"Successfully uploaded the cloudformation template to "
                f"{stack_args.approved_template_location}"
            )
            self._log_success(
                f"Approve template with:\n  {self.command_name} review {location.pending_url}"
            )
            return SubmissionResult(outcome=SubmissionOutcome.SUBMITTED, location=location)

        self._log_success("👍 Your template has already been approved")
        return SubmissionResult(outcome=SubmissionOutcome.ALREADY_PENDING, location=location)

    async def approve_template(self, location: StoreLocation) -> ReviewResult:
        """
        Review a pending template and promote it if the reviewer agrees.

        If the canonical key already exists the template counts as approved
        and nothing else is read or written, whatever the pending object
        holds. This also finishes a promotion that failed part way.

        Args:
            location: The pending object, e.g. `s3://bucket/path/abc.yaml.pending`

        Returns:
            ReviewResult with the terminal status

        Raises:
            ConfigurationError: If no approval handler is configured
            ObjectNotFoundError: If the pending object does not exist
            PartialPromotionError: If promotion stopped after the canonical write
            StoreError: For any other store failure
        """
        if self.approval_handler is None:
            raise ConfigurationError("An approval handler is required to review templates")

        bucket = location.bucket

        try:
            self.store.head(bucket, location.canonical_key)
        except ObjectNotFoundError:
            pass
        else:
            self._log_success("👍 The template has already been approved")
            return ReviewResult(status=ApprovalStatus.ALREADY_APPROVED, location=location)

        pending = self.store.get(bucket, location.key)
        previous = self._get_latest(bucket, location.latest_key)

        chunks = diff_lines(previous, pending)
        decision = await self.approval_handler.request_approval(location, chunks)

        if not decision.approved:
            logger.info(f"Template {location.url} was not approved; leaving it pending")
            return ReviewResult(
                status=ApprovalStatus.REJECTED,
                location=location,
                diff=chunks,
                decision=decision
            )

        self._promote(location, pending)

        self._log_success("Template has been successfully approved!")
        return ReviewResult(
            status=ApprovalStatus.APPROVED,
            location=location,
            diff=chunks,
            decision=decision
        )

    def _log_success(self, text: str) -> None:
        log_success(text, self.color)

    def _log_error(self, text: str) -> None:
        log_error(text, self.color)

    def _get_latest(self, bucket: str, key: str) -> bytes:
        """Latest approved template, or empty bytes before the first approval."""
        try:
            return self.store.get(bucket, key)
        except ObjectNotFoundError:
            logger.debug(f"No previously approved template at s3://{bucket}/{key}")
            return b""

    def _promote(self, location: StoreLocation, body: bytes) -> None:
        """
        Write the pending body to the canonical key and `latest`, then delete it.

        No rollback is attempted. A failure of the first write leaves the
        store untouched; a later failure raises PartialPromotionError.
        """
        bucket = location.bucket

        self.store.put(bucket, location.canonical_key, body)
        logger.debug("Created a new cfn-template")
        completed = [f"put {location.canonical_key}"]

        try:
            self.store.put(bucket, location.latest_key, body)
            logger.debug("Updated latest")
            completed.append(f"put {location.latest_key}")

            self.store.delete(bucket, location.key)
            logger.debug("Deleted pending file.")
        except StoreError as e:
            self._log_error(f"Promotion of {location.url} did not complete: {e}")
            raise PartialPromotionError(location.url, completed) from e
