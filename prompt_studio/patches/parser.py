import logging
import re

from prompt_studio.patches.enums import PatchAction
from prompt_studio.patches.schemas import ParsedPatch

logger = logging.getLogger(__name__)

BEGIN_MARKER = "*** Begin Patch"
END_MARKER = "*** End Patch"

HEADER_PATTERN = re.compile(
    r"^[ \t]*\*\*\*[ \t]*(?P<action>update|add|create|delete)\b[^\n]*(?:\n|\Z)",
    re.IGNORECASE | re.MULTILINE,
)
MOVE_TO_PATTERN = re.compile(r"\A[ \t]*\*\*\*[ \t]*move to:[^\n]*(?:\n|\Z)", re.IGNORECASE)
LEADING_BLANK_LINES = re.compile(r"\A(?:[ \t]*\n)+")
TRAILING_BLANK_LINES = re.compile(r"(?:\n[ \t]*)+\Z")

_ACTIONS = {
    "update": PatchAction.UPDATE,
    "delete": PatchAction.DELETE,
    "add": PatchAction.ADD,
    "create": PatchAction.ADD,
}


class PatchParser:
    """
    Unwraps a V4A patch block as produced by the generator.

    The envelope markers and the file header are all optional: whatever cannot
    be recognised is left in the body and the action degrades to UNKNOWN.
    A body without a header is trimmed of surrounding whitespace.
    Parsing never raises.
    """

    def parse(self, raw_diff: str) -> ParsedPatch:
        body = (raw_diff or "").replace("\r\n", "\n")

        begin_index = body.find(BEGIN_MARKER)
        if begin_index >= 0:
            body = body[begin_index + len(BEGIN_MARKER):]

        end_index = body.find(END_MARKER)
        if end_index >= 0:
            body = body[:end_index]

        action = PatchAction.UNKNOWN
        header = HEADER_PATTERN.search(body)
        if header:
            action = _ACTIONS[header.group("action").lower()]
            body = body[header.end():]
            body = MOVE_TO_PATTERN.sub("", body, count=1)
        else:
            logger.debug("No V4A action header found in patch block (%s chars)", len(body))
            body = body.strip()

        return ParsedPatch(action=action, body=self._trim_blank_lines(body))

    @staticmethod
    def _trim_blank_lines(body: str) -> str:
        # leading spaces on the first real line are context markers, so only whole blank lines go
        body = LEADING_BLANK_LINES.sub("", body)
        return TRAILING_BLANK_LINES.sub("", body)
