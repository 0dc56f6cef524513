"""
Object key layout for approved templates.

For an approved location `s3://bucket/prefix` the store holds:

- `prefix`             the approved template for one version (canonical key)
- `prefix.pending`     a candidate awaiting review
- `dirname(prefix)/latest`  the most recently approved template
"""

import posixpath
from urllib.parse import urlparse

from pydantic import BaseModel, Field

from .errors import ConfigurationError

PENDING_SUFFIX = ".pending"
LATEST_NAME = "latest"


def latest_key_for(key: str) -> str:
    """Key of the `latest` alias living next to `key`."""
    return posixpath.join(posixpath.dirname(key), LATEST_NAME)


def strip_pending_suffix(key: str) -> str:
    if key.endswith(PENDING_SUFFIX):
        return key[: -len(PENDING_SUFFIX)]
    return key


class ApprovedLocation(BaseModel):
    """
    Where one version of a template is approved.

    Derived from the configured ApprovedTemplateLocation and the template's
    version identifier.
    """
    bucket: str = Field(..., description="S3 bucket holding approved templates")
    key_prefix: str = Field(..., description="Canonical key for this template version")

    @property
    def approved_key(self) -> str:
        return self.key_prefix

    @property
    def pending_key(self) -> str:
        return f"{self.key_prefix}{PENDING_SUFFIX}"

    @property
    def latest_key(self) -> str:
        return latest_key_for(self.key_prefix)

    @property
    def pending_url(self) -> str:
        return f"s3://{self.bucket}/{self.pending_key}"

    class Config:
        frozen = True
        json_schema_extra = {
            "example": {
                "bucket": "approved-templates",
                "key_prefix": "my-stack/0cc175b9c0f1b6a831c399e269772661.yaml",
            }
        }


class StoreLocation(BaseModel):
    """A single object addressed by an `s3://bucket/key` URL."""
    bucket: str = Field(..., description="S3 bucket")
    key: str = Field(..., description="Object key, without a leading slash")

    @classmethod
    def from_url(cls, url: str) -> "StoreLocation":
        """
        Parse an `s3://bucket/key` URL.

        Raises:
            ConfigurationError: If the URL is not an S3 URL or lacks a bucket or key
        """
        parsed = urlparse(url)
        if parsed.scheme != "s3":
            raise ConfigurationError(f"Expected an s3:// URL, got {url!r}")
        key = parsed.path.lstrip("/")
        if not parsed.netloc or not key:
            raise ConfigurationError(f"S3 URL must include a bucket and a key: {url!r}")
        return cls(bucket=parsed.netloc, key=key)

    @property
    def directory(self) -> str:
        return posixpath.dirname(self.key)

    @property
    def canonical_key(self) -> str:
        return strip_pending_suffix(self.key)

    @property
    def latest_key(self) -> str:
        return latest_key_for(self.key)

    @property
    def url(self) -> str:
        return f"s3://{self.bucket}/{self.key}"

    class Config:
        frozen = True
