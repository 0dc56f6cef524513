"""
In-memory object store.

Keeps objects in a dict and records every operation, which makes it handy
for exercising the approval state machine without S3.
"""

from dataclasses import dataclass, field
from typing import Optional

from template_approval.models import ObjectNotFoundError, StoreError
from .base import ObjectStore


@dataclass
class StoreCall:
    """One recorded store operation."""
    operation: str
    bucket: str
    key: str


class InMemoryObjectStore(ObjectStore):
    """
    Dict-backed object store.

    Failures can be injected per (operation, key) with `fail_on` to simulate
    permission errors or an interrupted promotion.
    """

    def __init__(self, objects: Optional[dict[tuple[str, str], bytes]] = None):
        self.objects: dict[tuple[str, str], bytes] = dict(objects or {})
        self.calls: list[StoreCall] = []
        self._failures: dict[tuple[str, str], Exception] = {}

    def fail_on(self, operation: str, key: str, error: Optional[Exception] = None) -> None:
        """Make the next `operation` on `key` raise `error` (a StoreError by default)."""
        self._failures[(operation, key)] = error or StoreError(f"{operation} denied for {key}")

    def _record(self, operation: str, bucket: str, key: str) -> None:
        self.calls.append(StoreCall(operation, bucket, key))
        failure = self._failures.pop((operation, key), None)
        if failure is not None:
            raise failure

    def writes(self) -> list[StoreCall]:
        """Recorded puts and deletes, in order."""
        return [c for c in self.calls if c.operation in ("put", "delete")]

    def exists(self, bucket: str, key: str) -> bool:
        return (bucket, key) in self.objects

    def head(self, bucket: str, key: str) -> None:
        self._record("head", bucket, key)
        if (bucket, key) not in self.objects:
            raise ObjectNotFoundError(bucket, key)

    def get(self, bucket: str, key: str) -> bytes:
        self._record("get", bucket, key)
        try:
            return self.objects[(bucket, key)]
        except KeyError:
            raise ObjectNotFoundError(bucket, key) from None

    def put(self, bucket: str, key: str, body: bytes) -> None:
        self._record("put", bucket, key)
        self.objects[(bucket, key)] = bytes(body)

    def delete(self, bucket: str, key: str) -> None:
        self._record("delete", bucket, key)
        self.objects.pop((bucket, key), None)
