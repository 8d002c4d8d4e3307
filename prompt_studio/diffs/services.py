import logging
from collections.abc import Sequence

from prompt_studio.diffs.enums import DiffLineType
from prompt_studio.diffs.schemas import ChangeChunk, DiffLine, DiffStats

logger = logging.getLogger(__name__)


def split_lines(text: str) -> list[str]:
    """
    Splits a document on newlines. The empty document has no lines, and the
    empty element left by a final newline is dropped unless it is the only one.
    """
    if not text:
        return []
    lines = text.split("\n")
    if len(lines) > 1 and lines[-1] == "":
        lines.pop()
    return lines


def shortest_edit(a: Sequence[str], b: Sequence[str]) -> list[DiffLineType]:
    """
    Myers' O(ND) shortest edit script between two line sequences.

    Returns one entry per step in document order: EQUAL consumes a line from
    both sides, REMOVED one from `a`, ADDED one from `b`. The number of EQUAL
    steps is the length of a longest common subsequence.
    """
    n, m = len(a), len(b)
    offset = n + m + 1
    frontier = [0] * (2 * offset + 1)
    trace: list[list[int]] = []

    for d in range(n + m + 1):
        trace.append(frontier.copy())
        for k in range(-d, d + 1, 2):
            if k == -d or (k != d and frontier[offset + k - 1] < frontier[offset + k + 1]):
                x = frontier[offset + k + 1]
            else:
                x = frontier[offset + k - 1] + 1
            y = x - k
            while x < n and y < m and a[x] == b[y]:
                x += 1
                y += 1
            frontier[offset + k] = x
            if x >= n and y >= m:
                return _backtrack(trace, n, m, offset)

    raise AssertionError("edit graph has no path to its end")  # unreachable: d = n + m always reaches it


def _backtrack(trace: list[list[int]], n: int, m: int, offset: int) -> list[DiffLineType]:
    steps: list[DiffLineType] = []
    x, y = n, m
    for d in range(len(trace) - 1, -1, -1):
        frontier = trace[d]
        k = x - y
        if k == -d or (k != d and frontier[offset + k - 1] < frontier[offset + k + 1]):
            prev_k = k + 1
        else:
            prev_k = k - 1
        prev_x = frontier[offset + prev_k]
        prev_y = prev_x - prev_k

        while x > prev_x and y > prev_y:
            steps.append(DiffLineType.EQUAL)
            x -= 1
            y -= 1
        if d > 0:
            steps.append(DiffLineType.ADDED if x == prev_x else DiffLineType.REMOVED)
        x, y = prev_x, prev_y

    steps.reverse()
    return steps


class DiffService:
    """Line diffs for display, plus chunk-level revert on top of them."""

    def diff_lines(self, original: str, modified: str) -> list[DiffLine]:
        original_lines = split_lines(original)
        modified_lines = split_lines(modified)

        result: list[DiffLine] = []
        removed: list[DiffLine] = []
        added: list[DiffLine] = []
        original_index = 1
        modified_index = 1

        for step in shortest_edit(original_lines, modified_lines):
            if step == DiffLineType.REMOVED:
                removed.append(
                    DiffLine(
                        type=DiffLineType.REMOVED,
                        content=original_lines[original_index - 1],
                        original_index=original_index,
                    )
                )
                original_index += 1
                continue
            if step == DiffLineType.ADDED:
                added.append(
                    DiffLine(
                        type=DiffLineType.ADDED,
                        content=modified_lines[modified_index - 1],
                        modified_index=modified_index,
                    )
                )
                modified_index += 1
                continue

            # a change region reads old text above new text
            result.extend(removed)
            result.extend(added)
            removed.clear()
            added.clear()
            result.append(
                DiffLine(
                    type=DiffLineType.EQUAL,
                    content=original_lines[original_index - 1],
                    original_index=original_index,
                    modified_index=modified_index,
                )
            )
            original_index += 1
            modified_index += 1

        result.extend(removed)
        result.extend(added)
        return result

    @staticmethod
    def stats(diff: Sequence[DiffLine]) -> DiffStats:
        added = sum(1 for line in diff if line.type == DiffLineType.ADDED)
        removed = sum(1 for line in diff if line.type == DiffLineType.REMOVED)
        return DiffStats(added=added, removed=removed)

    @staticmethod
    def find_chunks(diff: Sequence[DiffLine]) -> list[ChangeChunk]:
        chunks: list[ChangeChunk] = []
        start: int | None = None
        for index, line in enumerate(diff):
            if line.type == DiffLineType.EQUAL:
                if start is not None:
                    chunks.append(ChangeChunk(start_index=start, end_index=index - 1))
                    start = None
                continue
            if start is None:
                start = index
        if start is not None:
            chunks.append(ChangeChunk(start_index=start, end_index=len(diff) - 1))
        return chunks

    @staticmethod
    def revert_chunk(diff: Sequence[DiffLine], chunk: ChangeChunk) -> str:
        """
        Rebuilds the modified document with one chunk restored to its original text.

        Inside the chunk, removed and equal lines are kept (the pre-change content).
        Outside it, added and equal lines are kept (the current content).
        """
        kept: list[str] = []
        for index, line in enumerate(diff):
            if index in chunk:
                if line.type in (DiffLineType.REMOVED, DiffLineType.EQUAL):
                    kept.append(line.content)
            elif line.type in (DiffLineType.ADDED, DiffLineType.EQUAL):
                kept.append(line.content)

        logger.debug(
            "Reverted chunk [%s, %s] of a %s-line diff", chunk.start_index, chunk.end_index, len(diff)
        )
        return "\n".join(kept)
