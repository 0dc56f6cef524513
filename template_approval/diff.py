"""
Line diff between the last approved template and a pending one.

The diff is for display only; approval is decided by the reviewer, never by
how much changed.

Lines are interned to integers, lines unique to both sides are matched up
first (patience anchors), and the gaps between anchors are diffed with
Myers' O(ND) algorithm. CloudFormation templates repeat lines like
`Type: String` thousands of times, so the anchors keep each Myers run small.
"""

from bisect import bisect_left
from collections import Counter
from typing import Union

from template_approval.formatting import CLIFormatter
from template_approval.models import DiffChunk, DiffKind

Text = Union[str, bytes]

EQUAL = "equal"
DELETE = "delete"
INSERT = "insert"


def _as_text(value: Text) -> str:
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    return value


def _myers(a: list[int], b: list[int]) -> list[str]:
    """
    Shortest edit script from `a` to `b` as a list of EQUAL/DELETE/INSERT.

    Each d-step keeps only the slice of V for diagonals -d-1..d+1, which is
    all the backtrack needs.
    """
    n, m = len(a), len(b)
    if n == 0:
        return [INSERT] * m
    if m == 0:
        return [DELETE] * n

    offset = n + m + 1
    v = [0] * (2 * offset + 1)
    trace = []

    for d in range(n + m + 1):
        trace.append(v[offset - d - 1: offset + d + 2])
        for k in range(-d, d + 1, 2):
            if k == -d or (k != d and v[offset + k - 1] < v[offset + k + 1]):
                x = v[offset + k + 1]
            else:
                x = v[offset + k - 1] + 1
            y = x - k
            while x < n and y < m and a[x] == b[y]:
                x += 1
                y += 1
            v[offset + k] = x
            if x >= n and y >= m:
                return _backtrack(trace, n, m)

    raise AssertionError("unreachable: an edit script always exists")


def _backtrack(trace: list[list[int]], n: int, m: int) -> list[str]:
    ops = []
    x, y = n, m

    for d in range(len(trace) - 1, 0, -1):
        snapshot = trace[d]
        k = x - y
        if k == -d or (k != d and snapshot[k - 1 + d + 1] < snapshot[k + 1 + d + 1]):
            prev_k = k + 1
        else:
            prev_k = k - 1
        prev_x = snapshot[prev_k + d + 1]
        prev_y = prev_x - prev_k

        while x > prev_x and y > prev_y:
            ops.append(EQUAL)
            x -= 1
            y -= 1
        ops.append(INSERT if x == prev_x else DELETE)
        x, y = prev_x, prev_y

    ops.extend([EQUAL] * x)
    ops.reverse()
    return ops


def _unique_anchors(a: list[int], b: list[int]) -> list[tuple[int, int]]:
    """
    Pairs (i, j) of lines occurring exactly once in each side, reduced to
    the longest run increasing in both i and j.
    """
    count_a = Counter(a)
    count_b = Counter(b)
    position_b = {line: j for j, line in enumerate(b) if count_b[line] == 1}
    pairs = [
        (i, position_b[line])
        for i, line in enumerate(a)
        if count_a[line] == 1 and line in position_b
    ]

    # Longest increasing subsequence on j (patience sorting)
    tails: list[int] = []
    tail_index: list[int] = []
    previous: list[int] = []
    for index, (_, j) in enumerate(pairs):
        pile = bisect_left(tails, j)
        if pile == len(tails):
            tails.append(j)
            tail_index.append(index)
        else:
            tails[pile] = j
            tail_index[pile] = index
        previous.append(tail_index[pile - 1] if pile else -1)

    anchors = []
    index = tail_index[-1] if tail_index else -1
    while index != -1:
        anchors.append(pairs[index])
        index = previous[index]
    anchors.reverse()
    return anchors


def _edit_script(a: list[int], b: list[int]) -> list[str]:
    ops: list[str] = []
    ai = bj = 0
    for i, j in _unique_anchors(a, b):
        ops.extend(_myers(a[ai:i], b[bj:j]))
        ops.append(EQUAL)
        ai, bj = i + 1, j + 1
    ops.extend(_myers(a[ai:], b[bj:]))
    return ops


def diff_lines(old: Text, new: Text) -> list[DiffChunk]:
    """
    Compute a line-based diff from `old` to `new`.

    Runs of identical lines become unchanged chunks. A region that differs
    yields its removed lines first, then its added lines.

    Args:
        old: Previously approved template (empty for a first approval)
        new: Pending template

    Returns:
        Ordered list of DiffChunk covering both inputs
    """
    old_lines = _as_text(old).splitlines(keepends=True)
    new_lines = _as_text(new).splitlines(keepends=True)

    ids: dict[str, int] = {}
    a = [ids.setdefault(line, len(ids)) for line in old_lines]
    b = [ids.setdefault(line, len(ids)) for line in new_lines]

    chunks: list[DiffChunk] = []
    unchanged: list[str] = []
    removed: list[str] = []
    added: list[str] = []

    def flush_changes() -> None:
        if removed:
            chunks.append(DiffChunk(text="".join(removed), kind=DiffKind.REMOVED))
            removed.clear()
        if added:
            chunks.append(DiffChunk(text="".join(added), kind=DiffKind.ADDED))
            added.clear()

    def flush_unchanged() -> None:
        if unchanged:
            chunks.append(DiffChunk(text="".join(unchanged), kind=DiffKind.UNCHANGED))
            unchanged.clear()

    x = y = 0
    for op in _edit_script(a, b):
        if op == EQUAL:
            flush_changes()
            unchanged.append(old_lines[x])
            x += 1
            y += 1
        elif op == DELETE:
            flush_unchanged()
            removed.append(old_lines[x])
            x += 1
        else:
            flush_unchanged()
            added.append(new_lines[y])
            y += 1

    flush_unchanged()
    flush_changes()
    return chunks


def has_changes(chunks: list[DiffChunk]) -> bool:
    return any(chunk.kind != DiffKind.UNCHANGED for chunk in chunks)


def _prefix_lines(text: str, prefix: str) -> str:
    return "".join(f"{prefix}{line}" for line in text.splitlines(keepends=True))


def render_diff(chunks: list[DiffChunk], color: bool = True) -> str:
    """
    Render diff chunks for a terminal.

    With color, added lines are green and removed lines red. Without color,
    every line is prefixed with "+ ", "- " or two spaces instead.
    """
    output = []

    for chunk in chunks:
        if color:
            if chunk.added:
                output.append(CLIFormatter.added(chunk.text))
            elif chunk.removed:
                output.append(CLIFormatter.removed(chunk.text))
            else:
                output.append(chunk.text)
        else:
            prefix = "+ " if chunk.added else "- " if chunk.removed else "  "
            output.append(_prefix_lines(chunk.text, prefix))

    return "".join(output)
