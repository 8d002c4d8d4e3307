import logging

from apply_patch_py.models import AddFile, Hunk, UpdateFile, UpdateFileChunk
from apply_patch_py.parser import PatchParser as V4AParser

from prompt_studio.patches.enums import ApplyFailureReason, PatchAction, PatchIntent
from prompt_studio.patches.schemas import (
    AppliedHunks,
    HunkApplyFailure,
    HunkApplyResult,
    ParsedPatch,
)

logger = logging.getLogger(__name__)

DOCUMENT_PATH = "document"
EMPTY_HUNK_ERRORS = ("is empty", "does not contain any lines")


class HunkApplier:
    """
    Applies the body of a V4A patch to a base document.

    The body is parsed into chunks by apply_patch_py. Context and removal lines
    of a chunk form its anchor, which must appear verbatim in the base text.
    Anchors are searched from the end of the previous match forward, and the
    first occurrence wins, so hunks have to be ordered top to bottom.
    Everything outside the matched anchors is copied through untouched.
    """

    def __init__(self, hunk_parser: V4AParser | None = None):
        self.hunk_parser = hunk_parser or V4AParser()

    def apply(self, base: str, parsed: ParsedPatch, intent: PatchIntent) -> HunkApplyResult:
        if intent == PatchIntent.CREATE:
            return self._apply_create(base, parsed)
        return self._apply_update(base, parsed)

    def _apply_create(self, base: str, parsed: ParsedPatch) -> HunkApplyResult:
        if parsed.action == PatchAction.DELETE:
            return HunkApplyFailure(
                reason=ApplyFailureReason.DELETE_ON_CREATE,
                message="Diff requests delete operation",
            )
        if base and base.strip():
            return HunkApplyFailure(
                reason=ApplyFailureReason.TARGET_EXISTS,
                message="Cannot create file: target already has content",
            )
        if parsed.is_empty:
            return HunkApplyFailure(reason=ApplyFailureReason.EMPTY_HUNK, message="Empty diff body")

        hunk = self._parse_hunk(f"{V4AParser.ADD_FILE}{DOCUMENT_PATH}\n{parsed.body}", AddFile)
        if isinstance(hunk, HunkApplyFailure):
            return hunk

        document = hunk.content.removesuffix("\n")
        added = len(hunk.content.splitlines())
        return AppliedHunks(document=document, hunks=1, added=added, removed=0)

    def _apply_update(self, base: str, parsed: ParsedPatch) -> HunkApplyResult:
        if parsed.is_empty:
            return HunkApplyFailure(reason=ApplyFailureReason.EMPTY_HUNK, message="Empty diff body")

        hunk = self._parse_hunk(f"{V4AParser.UPDATE_FILE}{DOCUMENT_PATH}\n{parsed.body}", UpdateFile)
        if isinstance(hunk, HunkApplyFailure):
            return hunk

        chunks = [chunk for chunk in hunk.chunks if chunk.old_lines or chunk.new_lines]
        if not chunks:
            return HunkApplyFailure(
                reason=ApplyFailureReason.EMPTY_HUNK,
                message="Diff body contains no context, removal or addition lines",
            )

        lines = base.split("\n") if base else []
        replacements: list[tuple[int, int, list[str]]] = []
        cursor = 0

        for number, chunk in enumerate(chunks, start=1):
            anchored_at: int | None = None
            if chunk.change_context:
                found = self._find_anchor(lines, chunk.change_context, cursor)
                if found >= 0:
                    cursor = found + 1
                    anchored_at = cursor

            if not chunk.old_lines:
                if anchored_at is not None:
                    position = anchored_at
                elif lines and lines[-1] == "":
                    position = len(lines) - 1
                else:
                    position = len(lines)
                position = max(position, cursor)
                replacements.append((position, 0, chunk.new_lines))
                cursor = position
                continue

            start = self._find_context(lines, chunk.old_lines, cursor, chunk.is_end_of_file)
            if start < 0:
                context = "\n".join(chunk.old_lines)
                eof = "EOF " if chunk.is_end_of_file else ""
                return HunkApplyFailure(
                    reason=ApplyFailureReason.CONTEXT_NOT_FOUND,
                    message=f"Could not find {eof}context for hunk {number}:\n{context}",
                )
            replacements.append((start, len(chunk.old_lines), chunk.new_lines))
            cursor = start + len(chunk.old_lines)

        output: list[str] = []
        position = 0
        for start, length, new_lines in replacements:
            output.extend(lines[position:start])
            output.extend(new_lines)
            position = start + length
        output.extend(lines[position:])

        added, removed = self._count_changes(chunks)
        logger.debug("Applied %s hunk(s): +%s/-%s", len(chunks), added, removed)
        return AppliedHunks(document="\n".join(output), hunks=len(chunks), added=added, removed=removed)

    def _parse_hunk(self, text: str, expected: type[Hunk]) -> Hunk | HunkApplyFailure:
        try:
            patch = self.hunk_parser.parse(text)
        except ValueError as e:
            message = str(e)
            if any(marker in message for marker in EMPTY_HUNK_ERRORS):
                return HunkApplyFailure(reason=ApplyFailureReason.EMPTY_HUNK, message=message)
            return HunkApplyFailure(reason=ApplyFailureReason.MALFORMED_HUNK, message=message)

        if len(patch.hunks) != 1 or not isinstance(patch.hunks[0], expected):
            return HunkApplyFailure(
                reason=ApplyFailureReason.MALFORMED_HUNK,
                message="Diff must describe exactly one change to the document",
            )
        return patch.hunks[0]

    @staticmethod
    def _count_changes(chunks: list[UpdateFileChunk]) -> tuple[int, int]:
        added = 0
        removed = 0
        for chunk in chunks:
            for line in chunk.diff.splitlines():
                if line.startswith("+"):
                    added += 1
                elif line.startswith("-"):
                    removed += 1
        return added, removed

    @staticmethod
    def _find_anchor(lines: list[str], anchor: str, start: int) -> int:
        for index in range(start, len(lines)):
            if lines[index].strip() == anchor:
                return index
        return -1

    @staticmethod
    def _find_context(lines: list[str], context: list[str], start: int, eof: bool) -> int:
        size = len(context)
        if eof:
            candidates = [len(lines) - size]
            if lines and lines[-1] == "":
                candidates.append(len(lines) - 1 - size)
            for index in candidates:
                if index >= start and lines[index:index + size] == context:
                    return index
            return -1

        for index in range(start, len(lines) - size + 1):
            if lines[index:index + size] == context:
                return index
        return -1
