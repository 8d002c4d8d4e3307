from .commons import (
    AppliedHunks,
    ApplyOutcome,
    HunkApplyFailure,
    HunkApplyResult,
    ParsedPatch,
    PatchRound,
    PatchRunResult,
)
from .operations import (
    CreateFileOperation,
    DeleteFileOperation,
    PatchOperation,
    PatchOperationCall,
    UpdateFileOperation,
    patch_operation_adapter,
)

__all__ = [
    "AppliedHunks",
    "ApplyOutcome",
    "CreateFileOperation",
    "DeleteFileOperation",
    "HunkApplyFailure",
    "HunkApplyResult",
    "ParsedPatch",
    "PatchOperation",
    "PatchOperationCall",
    "PatchRound",
    "PatchRunResult",
    "UpdateFileOperation",
    "patch_operation_adapter",
]
