"""Tests for the line diff engine."""

import time

from template_approval.diff import diff_lines, has_changes, render_diff
from template_approval.formatting import CLIFormatter
from template_approval.models import DiffChunk, DiffKind


def kinds_and_text(chunks):
    return [(c.kind, c.text) for c in chunks]


def parameters_template(count, changed=frozenset()):
    """A parameter-heavy template where every parameter repeats the same lines."""
    lines = ["Parameters:\n"]
    for i in range(count):
        lines.append(f"  Param{i}:\n")
        lines.append("    Type: String\n")
        lines.append(f"    Default: {'y' if i in changed else 'x'}\n")
    return "".join(lines)


class TestDiffLines:
    """Tests for diff_lines."""

    def test_replaced_line(self):
        """Test that a changed line is reported as removed then added."""
        chunks = diff_lines("a\nb\nc\n", "a\nx\nc\n")

        assert kinds_and_text(chunks) == [
            (DiffKind.UNCHANGED, "a\n"),
            (DiffKind.REMOVED, "b\n"),
            (DiffKind.ADDED, "x\n"),
            (DiffKind.UNCHANGED, "c\n"),
        ]

    def test_first_approval_is_all_added(self):
        """Test that diffing against an empty template adds everything."""
        pending = b"Resources:\n  Bucket:\n    Type: AWS::S3::Bucket\n"

        chunks = diff_lines(b"", pending)

        assert kinds_and_text(chunks) == [(DiffKind.ADDED, pending.decode())]

    def test_identical_inputs_coalesce(self):
        """Test that identical inputs give a single unchanged chunk."""
        chunks = diff_lines("a\nb\nc\n", "a\nb\nc\n")

        assert kinds_and_text(chunks) == [(DiffKind.UNCHANGED, "a\nb\nc\n")]
        assert not has_changes(chunks)

    def test_both_empty(self):
        """Test that two empty inputs give no chunks."""
        assert diff_lines("", "") == []

    def test_contiguous_lines_are_grouped(self):
        """Test that consecutive removed and added lines form one chunk each."""
        chunks = diff_lines("a\nb\nc\nd\n", "a\nx\ny\nz\nd\n")

        assert kinds_and_text(chunks) == [
            (DiffKind.UNCHANGED, "a\n"),
            (DiffKind.REMOVED, "b\nc\n"),
            (DiffKind.ADDED, "x\ny\nz\n"),
            (DiffKind.UNCHANGED, "d\n"),
        ]

    def test_pure_deletion(self):
        """Test that deleting lines gives only a removed chunk between unchanged ones."""
        chunks = diff_lines("a\nb\nc\n", "a\nc\n")

        assert kinds_and_text(chunks) == [
            (DiffKind.UNCHANGED, "a\n"),
            (DiffKind.REMOVED, "b\n"),
            (DiffKind.UNCHANGED, "c\n"),
        ]

    def test_accepts_bytes(self):
        """Test that byte buffers are decoded before diffing."""
        chunks = diff_lines(b"a\n", b"a\nb\n")

        assert kinds_and_text(chunks) == [
            (DiffKind.UNCHANGED, "a\n"),
            (DiffKind.ADDED, "b\n"),
        ]

    def test_missing_final_newline_is_a_change(self):
        """Test that a trailing newline difference shows up in the diff."""
        chunks = diff_lines("a\nb", "a\nb\n")

        assert has_changes(chunks)
        assert chunks[0] == DiffChunk(text="a\n", kind=DiffKind.UNCHANGED)


class TestRenderDiff:
    """Tests for render_diff."""

    def test_colorized(self):
        """Test that added lines are green, removed red, unchanged plain."""
        rendered = render_diff(diff_lines("a\nb\n", "a\nx\n"))

        assert rendered == "a\n" + CLIFormatter.removed("b\n") + CLIFormatter.added("x\n")

    def test_plain(self):
        """Test that without color lines are prefixed instead."""
        rendered = render_diff(diff_lines("a\nb\n", "a\nx\ny\n"), color=False)

        assert rendered == "  a\n- b\n+ x\n+ y\n"


class TestLargeTemplates:
    """Tests for diffing templates of realistic size."""

    def test_parameter_heavy_template_is_fast(self):
        """Test that thousands of repeated lines diff within a few seconds."""
        changed = frozenset(range(0, 4000, 2))
        old = parameters_template(4000)
        new = parameters_template(4000, changed)

        started = time.perf_counter()
        chunks = diff_lines(old, new)
        elapsed = time.perf_counter() - started

        assert elapsed < 5.0
        removed = [c for c in chunks if c.removed]
        added = [c for c in chunks if c.added]
        assert len(removed) == len(added) == 2000
        assert all(c.text == "    Default: x\n" for c in removed)
        assert all(c.text == "    Default: y\n" for c in added)

    def test_chunks_rebuild_both_sides(self):
        """Test that unchanged+removed gives the old text and unchanged+added the new."""
        old = parameters_template(500)
        new = parameters_template(500, frozenset({3, 250, 499})).replace("  Param7:\n", "")

        chunks = diff_lines(old, new)

        assert "".join(c.text for c in chunks if not c.added) == old
        assert "".join(c.text for c in chunks if not c.removed) == new

    def test_no_unique_lines(self):
        """Test a diff where every line repeats, so nothing can anchor."""
        chunks = diff_lines("a\na\nb\nb\n", "a\nb\nb\nb\n")

        assert "".join(c.text for c in chunks if not c.added) == "a\na\nb\nb\n"
        assert "".join(c.text for c in chunks if not c.removed) == "a\nb\nb\nb\n"
        assert [c.kind for c in chunks].count(DiffKind.REMOVED) == 1
        assert [c.kind for c in chunks].count(DiffKind.ADDED) == 1

    def test_removed_precedes_added_in_each_change(self):
        """Test that every changed region lists removed lines before added ones."""
        chunks = diff_lines(parameters_template(50), parameters_template(50, frozenset({10, 20})))

        for previous, current in zip(chunks, chunks[1:]):
            assert not (previous.added and current.removed)
            assert previous.kind != current.kind
