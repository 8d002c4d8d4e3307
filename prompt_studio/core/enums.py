from enum import StrEnum


class LogLevel(StrEnum):
    CRITICAL = "CRITICAL"
    ERROR = "ERROR"
    WARNING = "WARNING"
    INFO = "INFO"
    DEBUG = "DEBUG"


class ReasoningLevel(StrEnum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class PatchMode(StrEnum):
    """How patch notes are handed to the generator."""

    BATCH = "BATCH"
    PER_NOTE = "PER_NOTE"
