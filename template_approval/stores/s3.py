"""
S3-backed object store.

Wraps a boto3 S3 client and translates botocore errors into the workflow's
ObjectNotFoundError / StoreError distinction.
"""

import logging
from typing import Any, Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from template_approval.models import ObjectNotFoundError, StoreError
from .base import ObjectStore

logger = logging.getLogger(__name__)

# head_object reports a bare HTTP status, get_object a named error
NOT_FOUND_CODES = frozenset({"404", "NotFound", "NoSuchKey"})


def _error_code(error: ClientError) -> str:
    return str(error.response.get("Error", {}).get("Code", ""))


class S3ObjectStore(ObjectStore):
    """Object store backed by Amazon S3 (or any S3-compatible endpoint)."""

    def __init__(
        self,
        client: Any = None,
        profile: Optional[str] = None,
        region: Optional[str] = None,
        endpoint_url: Optional[str] = None,
    ):
        """
        Args:
            client: A boto3 S3 client; built on first use from the other
                arguments when omitted
            profile: AWS shared-credentials profile (default chain if None)
            region: AWS region (SDK default if None)
            endpoint_url: Alternative S3 endpoint, e.g. for MinIO
        """
        self._client = client
        self.profile = profile
        self.region = region
        self.endpoint_url = endpoint_url

    @property
    def client(self) -> Any:
        if self._client is None:
            logger.debug(f"Creating S3 client (profile={self.profile}, region={self.region})")
            session = boto3.session.Session(profile_name=self.profile, region_name=self.region)
            self._client = session.client("s3", endpoint_url=self.endpoint_url)
        return self._client

    @classmethod
    def from_profile(
        cls,
        profile: Optional[str] = None,
        region: Optional[str] = None,
        endpoint_url: Optional[str] = None,
    ) -> "S3ObjectStore":
        """
        Build a store for a named AWS profile and region.

        No session or client is created until the first store operation.
        """
        return cls(profile=profile, region=region, endpoint_url=endpoint_url)

    def _translate(self, error: Exception, bucket: str, key: str, operation: str) -> Exception:
        if isinstance(error, ClientError) and _error_code(error) in NOT_FOUND_CODES:
            return ObjectNotFoundError(bucket, key)
        return StoreError(f"S3 {operation} failed for s3://{bucket}/{key}: {error}")

    def head(self, bucket: str, key: str) -> None:
        try:
            self.client.head_object(Bucket=bucket, Key=key)
        except (ClientError, BotoCoreError) as e:
            raise self._translate(e, bucket, key, "head") from e

    def get(self, bucket: str, key: str) -> bytes:
        try:
            response = self.client.get_object(Bucket=bucket, Key=key)
            return response["Body"].read()
        except (ClientError, BotoCoreError) as e:
            raise self._translate(e, bucket, key, "get") from e

    def put(self, bucket: str, key: str, body: bytes) -> None:
        try:
            self.client.put_object(Bucket=bucket, Key=key, Body=body)
        except (ClientError, BotoCoreError) as e:
            raise StoreError(f"S3 put failed for s3://{bucket}/{key}: {e}") from e

    def delete(self, bucket: str, key: str) -> None:
        try:
            self.client.delete_object(Bucket=bucket, Key=key)
        except (ClientError, BotoCoreError) as e:
            raise StoreError(f"S3 delete failed for s3://{bucket}/{key}: {e}") from e
