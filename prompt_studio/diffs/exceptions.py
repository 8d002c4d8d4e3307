class DiffException(Exception):
    """Base exception for diffs application."""


class InvalidChunkIndexException(DiffException):
    """Raised when a revert targets a chunk that does not exist in the diff."""
