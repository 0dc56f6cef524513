"""
Template sources for the approval workflow.

A template source turns a template reference from a stack-args file into the
bytes that get submitted for approval, and works out where that version of
the template lives once approved.
"""

import hashlib
import logging
import os
import posixpath
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Optional
from urllib.parse import urlparse

import yaml
from pydantic import ValidationError

from template_approval.models import ApprovedLocation, ConfigurationError, StackArgs

logger = logging.getLogger(__name__)


def load_stack_args(argsfile: str) -> StackArgs:
    """
    Load a stack-args YAML file.

    Args:
        argsfile: Path to the stack-args file

    Returns:
        Parsed StackArgs

    Raises:
        ConfigurationError: If the file is missing, is not valid YAML or its
            root is not a mapping
    """
    args_path = Path(argsfile)

    if not args_path.exists():
        raise ConfigurationError(f"Stack args file not found: {argsfile}")

    try:
        with args_path.open("r") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {argsfile}: {e}") from e

    if data is None:
        data = {}

    if not isinstance(data, dict):
        raise ConfigurationError(
            f"Stack args root must be a mapping, got {type(data).__name__}"
        )

    try:
        return StackArgs.model_validate(_expand_env_vars(data))
    except ValidationError as e:
        raise ConfigurationError(f"Invalid stack args in {argsfile}: {e}") from e


def _expand_env_vars(obj: Any) -> Any:
    """Recursively expand environment variables in string values."""
    if isinstance(obj, dict):
        return {key: _expand_env_vars(value) for key, value in obj.items()}
    elif isinstance(obj, list):
        return [_expand_env_vars(item) for item in obj]
    elif isinstance(obj, str):
        return os.path.expandvars(obj)
    else:
        return obj


def template_version(body: bytes) -> str:
    """Version identifier of a template: the MD5 hex digest of its bytes."""
    return hashlib.md5(body).hexdigest()


def approved_template_version_location(
    approved_template_location: str,
    template_path: str,
    body: bytes,
) -> ApprovedLocation:
    """
    Work out the canonical key for one version of a template.

    `s3://bucket/some/path` plus `stack.yaml` with digest `abc` gives
    bucket `bucket`, key `some/path/abc.yaml`.

    Raises:
        ConfigurationError: If the location is not an s3:// URL with a bucket
    """
    parsed = urlparse(approved_template_location)
    if parsed.scheme != "s3" or not parsed.netloc:
        raise ConfigurationError(
            f"ApprovedTemplateLocation must be an s3://bucket/path URL, "
            f"got {approved_template_location!r}"
        )

    extension = posixpath.splitext(template_path)[1]
    key = posixpath.join(parsed.path.strip("/"), f"{template_version(body)}{extension}")
    return ApprovedLocation(bucket=parsed.netloc, key_prefix=key)


class TemplateSource(ABC):
    """
    Abstract base class for template sources.

    Implementations decide how a template reference resolves to bytes;
    rendering and validation of templates are their concern, not the
    workflow's.
    """

    @abstractmethod
    def load(self, template: str, argsfile: Optional[str] = None) -> bytes:
        """
        Return the template body to submit.

        Args:
            template: Template reference from the stack-args file
            argsfile: Path of the stack-args file the reference came from
        """
        pass

    def resolve_location(
        self,
        approved_template_location: str,
        template: str,
        body: bytes,
    ) -> ApprovedLocation:
        """
        Approved location for the version of `template` whose bytes are `body`.

        Callers pass the same buffer they submit, so the key always matches
        the uploaded content.
        """
        return approved_template_version_location(approved_template_location, template, body)


class FileTemplateSource(TemplateSource):
    """Reads templates from the local filesystem."""

    def _resolve_path(self, template: str, argsfile: Optional[str]) -> Path:
        if template.startswith("file:"):
            template = template[len("file:"):]
        path = Path(template)
        if not path.is_absolute() and argsfile:
            path = Path(argsfile).parent / path
        return path

    def load(self, template: str, argsfile: Optional[str] = None) -> bytes:
        """
        Read a template file.

        Relative paths are resolved against the stack-args file's directory.

        Raises:
            ConfigurationError: If the template file does not exist
        """
        path = self._resolve_path(template, argsfile)

        logger.debug(f"Loading template from {path}")

        if not path.exists():
            raise ConfigurationError(f"Template file not found: {path}")

        return path.read_bytes()
