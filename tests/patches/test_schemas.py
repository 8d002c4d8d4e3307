import pytest

from prompt_studio.patches.enums import ApplyStatus, PatchOperationType, PatchTerminalState
from prompt_studio.patches.schemas import (
    ApplyOutcome,
    CreateFileOperation,
    DeleteFileOperation,
    PatchOperationCall,
    PatchRunResult,
)


@pytest.mark.parametrize(
    "kwargs,expected_cls",
    [
        ({"type": "create_file", "path": "p", "diff": "+a"}, CreateFileOperation),
        ({"type": "delete_file", "path": "p"}, DeleteFileOperation),
    ],
)
def test_from_tool_kwargs__decodes_by_type(kwargs, expected_cls):
    call = PatchOperationCall.from_tool_kwargs(call_id="c1", tool_kwargs=kwargs)

    assert isinstance(call.operation, expected_cls)
    assert call.decode_error is None


def test_from_tool_kwargs__rejects_unknown_fields():
    """Unknown keys are never treated as present: the whole call fails decoding."""
    call = PatchOperationCall.from_tool_kwargs(
        call_id="c1", tool_kwargs={"type": "update_file", "path": "p", "diff": "", "mode": "force"}
    )

    assert call.operation is None
    assert call.operation_type is None
    assert call.decode_error.startswith("Unsupported apply_patch operation type: update_file")


def test_from_tool_kwargs__non_mapping_input():
    call = PatchOperationCall.from_tool_kwargs(call_id=None, tool_kwargs="not a dict")

    assert call.decode_error.startswith("Unsupported apply_patch operation type: None")


def test_operation_type__maps_literal_to_enum():
    call = PatchOperationCall.from_tool_kwargs(call_id="c1", tool_kwargs={"type": "create_file", "path": "p"})

    assert call.operation_type == PatchOperationType.CREATE_FILE


def test_apply_outcome__failed_flag():
    assert ApplyOutcome(status=ApplyStatus.FAILED, message="x").failed
    assert not ApplyOutcome(status=ApplyStatus.COMPLETED, message="x").failed


def test_patch_run_result__succeeded_only_on_completed():
    done = PatchRunResult(revised_document="a", outcomes=(), terminal=PatchTerminalState.COMPLETED)
    no_change = done.model_copy(update={"terminal": PatchTerminalState.NO_CHANGE})

    assert done.succeeded
    assert not no_change.succeeded
