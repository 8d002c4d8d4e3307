from enum import StrEnum


class DiffLineType(StrEnum):
    EQUAL = "equal"
    ADDED = "add"
    REMOVED = "remove"
