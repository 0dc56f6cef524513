"""Tests for stack-args loading and the file template source."""

import hashlib

import pytest

from template_approval.models import ConfigurationError
from template_approval.templates import (
    FileTemplateSource,
    approved_template_version_location,
    load_stack_args,
    template_version,
)

TEMPLATE = b"Resources: {}\n"
DIGEST = hashlib.md5(TEMPLATE).hexdigest()


class TestLoadStackArgs:
    """Tests for load_stack_args."""

    def test_loads_yaml(self, tmp_path):
        """Test reading ApprovedTemplateLocation and Template from YAML."""
        argsfile = tmp_path / "stack-args.yaml"
        argsfile.write_text(
            "StackName: web\n"
            "Template: stack.yaml\n"
            "ApprovedTemplateLocation: s3://approved/web\n"
            "Profile: sandbox\n"
        )

        args = load_stack_args(str(argsfile))

        assert args.template == "stack.yaml"
        assert args.approved_template_location == "s3://approved/web"
        assert args.profile == "sandbox"
        assert args.region is None

    def test_expands_environment_variables(self, tmp_path, monkeypatch):
        """Test that ${VAR} references are expanded."""
        monkeypatch.setenv("APPROVAL_BUCKET", "approved-prod")
        argsfile = tmp_path / "stack-args.yaml"
        argsfile.write_text("ApprovedTemplateLocation: s3://${APPROVAL_BUCKET}/web\n")

        args = load_stack_args(str(argsfile))

        assert args.approved_template_location == "s3://approved-prod/web"

    def test_empty_file(self, tmp_path):
        """Test that an empty file gives empty stack args."""
        argsfile = tmp_path / "stack-args.yaml"
        argsfile.write_text("")

        assert not load_stack_args(str(argsfile)).has_approved_location

    def test_missing_file(self, tmp_path):
        """Test that a missing stack-args file is a configuration error."""
        with pytest.raises(ConfigurationError):
            load_stack_args(str(tmp_path / "nope.yaml"))

    def test_non_mapping_root(self, tmp_path):
        """Test that a YAML list is rejected."""
        argsfile = tmp_path / "stack-args.yaml"
        argsfile.write_text("- a\n- b\n")

        with pytest.raises(ConfigurationError):
            load_stack_args(str(argsfile))

    def test_invalid_yaml(self, tmp_path):
        """Test that unparsable YAML is a configuration error."""
        argsfile = tmp_path / "stack-args.yaml"
        argsfile.write_text("Template: [unclosed\n")

        with pytest.raises(ConfigurationError):
            load_stack_args(str(argsfile))


class TestApprovedTemplateVersionLocation:
    """Tests for deriving the canonical key of a template version."""

    def test_key_is_digest_with_extension(self):
        """Test that the key is the location path plus digest and extension."""
        location = approved_template_version_location("s3://approved/stacks/web", "cfn/stack.yaml", TEMPLATE)

        assert location.bucket == "approved"
        assert location.key_prefix == f"stacks/web/{DIGEST}.yaml"
        assert location.latest_key == "stacks/web/latest"

    def test_bucket_root(self):
        """Test a location without a path."""
        location = approved_template_version_location("s3://approved", "stack.json", TEMPLATE)

        assert location.key_prefix == f"{DIGEST}.json"

    def test_trailing_slash_is_ignored(self):
        """Test that a trailing slash on the location does not double up."""
        location = approved_template_version_location("s3://approved/web/", "stack.yaml", TEMPLATE)

        assert location.key_prefix == f"web/{DIGEST}.yaml"

    def test_content_decides_version(self):
        """Test that different content yields a different key."""
        first = approved_template_version_location("s3://approved/web", "stack.yaml", TEMPLATE)
        second = approved_template_version_location("s3://approved/web", "stack.yaml", TEMPLATE + b"# x\n")

        assert first.key_prefix != second.key_prefix
        assert template_version(TEMPLATE) == DIGEST

    def test_requires_s3_url(self):
        """Test that a non-S3 location is a configuration error."""
        with pytest.raises(ConfigurationError):
            approved_template_version_location("approved/web", "stack.yaml", TEMPLATE)


class TestFileTemplateSource:
    """Tests for FileTemplateSource."""

    def test_relative_to_argsfile(self, tmp_path):
        """Test that templates are resolved next to the stack-args file."""
        (tmp_path / "stack.yaml").write_bytes(TEMPLATE)
        argsfile = tmp_path / "stack-args.yaml"

        assert FileTemplateSource().load("stack.yaml", str(argsfile)) == TEMPLATE

    def test_file_prefix(self, tmp_path):
        """Test that file: references are read from disk."""
        (tmp_path / "stack.yaml").write_bytes(TEMPLATE)

        assert FileTemplateSource().load("file:stack.yaml", str(tmp_path / "stack-args.yaml")) == TEMPLATE

    def test_missing_template(self, tmp_path):
        """Test that a missing template is a configuration error."""
        with pytest.raises(ConfigurationError):
            FileTemplateSource().load("missing.yaml", str(tmp_path / "stack-args.yaml"))

    def test_resolve_location(self):
        """Test resolving the approved location from the loaded template bytes."""
        location = FileTemplateSource().resolve_location("s3://approved/web", "stack.yaml", TEMPLATE)

        assert location.pending_key == f"web/{DIGEST}.yaml.pending"
