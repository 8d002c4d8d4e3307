class StudioException(Exception):
    """Base exception for studio application."""


class EmptyPatchPlanException(StudioException):
    """Raised when a patch is requested without any patch notes."""
