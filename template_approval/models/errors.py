"""
Exception hierarchy for the template approval workflow.

Only ObjectNotFoundError is used for control flow; every other store failure
is a StoreError and aborts the command.
"""


class TemplateApprovalError(Exception):
    """Base class for all template approval errors."""
    pass


class ConfigurationError(TemplateApprovalError):
    """Raised when a required setting is missing or malformed."""
    pass


class ObjectNotFoundError(TemplateApprovalError):
    """Raised by an object store when a key does not exist."""

    def __init__(self, bucket: str, key: str):
        super().__init__(f"s3://{bucket}/{key} does not exist")
        self.bucket = bucket
        self.key = key


class StoreError(TemplateApprovalError):
    """Raised for any object store failure other than a missing key."""
    pass


class PartialPromotionError(StoreError):
    """
    Raised when promotion fails after the canonical key was written.

    The store is left with the canonical key (and possibly `latest`) updated
    while the pending object still exists. Re-running the review detects the
    canonical key and finishes as already approved.
    """

    def __init__(self, pending_url: str, completed_steps: list[str]):
        steps = ", ".join(completed_steps)
        super().__init__(
            f"Promotion of {pending_url} stopped after: {steps}. "
            f"Re-run the review to confirm the approval."
        )
        self.pending_url = pending_url
        self.completed_steps = completed_steps
