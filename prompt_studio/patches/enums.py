from enum import StrEnum


class PatchAction(StrEnum):
    """Action declared by the header inside a raw patch block."""

    ADD = "ADD"
    UPDATE = "UPDATE"
    DELETE = "DELETE"
    UNKNOWN = "UNKNOWN"


class PatchIntent(StrEnum):
    CREATE = "CREATE"
    UPDATE = "UPDATE"


class PatchOperationType(StrEnum):
    CREATE_FILE = "create_file"
    UPDATE_FILE = "update_file"
    DELETE_FILE = "delete_file"


class ApplyStatus(StrEnum):
    COMPLETED = "completed"
    FAILED = "failed"


class ApplyFailureReason(StrEnum):
    EMPTY_HUNK = "EMPTY_HUNK"
    CONTEXT_NOT_FOUND = "CONTEXT_NOT_FOUND"
    TARGET_EXISTS = "TARGET_EXISTS"
    DELETE_ON_CREATE = "DELETE_ON_CREATE"
    MALFORMED_HUNK = "MALFORMED_HUNK"


class PatchTerminalState(StrEnum):
    COMPLETED = "COMPLETED"
    EXHAUSTED = "EXHAUSTED"
    NO_CHANGE = "NO_CHANGE"
    ALL_FAILED = "ALL_FAILED"
