"""Shared fixtures for the template approval tests."""

from datetime import datetime
from typing import Optional

import pytest

from template_approval.approval_handler import ApprovalHandler
from template_approval.models import DiffChunk, ReviewDecision, StoreLocation
from template_approval.stores import InMemoryObjectStore
from template_approval.templates import TemplateSource

BUCKET = "approved-templates"

TEMPLATE_V1 = b"Resources:\n  Bucket:\n    Type: AWS::S3::Bucket\n"
TEMPLATE_V2 = b"Resources:\n  Queue:\n    Type: AWS::SQS::Queue\n"


class StaticTemplateSource(TemplateSource):
    """Template source serving fixed bytes per template reference."""

    def __init__(self, templates: dict[str, bytes]):
        self.templates = templates
        self.loads: list[str] = []

    def load(self, template: str, argsfile: Optional[str] = None) -> bytes:
        self.loads.append(template)
        return self.templates[template]


class ScriptedApprovalHandler(ApprovalHandler):
    """Approval handler answering with a fixed decision and remembering what it saw."""

    def __init__(self, approve: bool):
        self.approve = approve
        self.requests: list[tuple[StoreLocation, list[DiffChunk]]] = []

    async def request_approval(self, location: StoreLocation, chunks: list[DiffChunk]) -> ReviewDecision:
        self.requests.append((location, chunks))
        return ReviewDecision(approved=self.approve, timestamp=datetime.now())


@pytest.fixture
def store():
    """Create an empty in-memory object store."""
    return InMemoryObjectStore()


@pytest.fixture
def template_source():
    """Create a template source with two versions of a template."""
    return StaticTemplateSource({
        "stack.yaml": TEMPLATE_V1,
        "stack-v2.yaml": TEMPLATE_V2,
    })
