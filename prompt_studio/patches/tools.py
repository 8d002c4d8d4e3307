from typing import Literal

from llama_index.core.tools import FunctionTool
from llama_index.core.tools.types import ToolMetadata
from pydantic import BaseModel, Field, create_model

from prompt_studio.patches.constants import (
    APPLY_PATCH_DIFF_DESCRIPTION,
    APPLY_PATCH_PATH_DESCRIPTION,
    APPLY_PATCH_TOOL_DESCRIPTION,
    APPLY_PATCH_TOOL_NAME,
    APPLY_PATCH_TYPE_DESCRIPTION,
)
from prompt_studio.patches.schemas import PatchOperationCall


def _build_apply_patch_metadata() -> ToolMetadata:
    schema: type[BaseModel] = create_model(
        "ApplyPatchToolSchema",
        type=(
            Literal["create_file", "update_file", "delete_file"],
            Field(description=APPLY_PATCH_TYPE_DESCRIPTION),
        ),
        path=(str, Field(description=APPLY_PATCH_PATH_DESCRIPTION)),
        diff=(str, Field(default="", description=APPLY_PATCH_DIFF_DESCRIPTION)),
    )

    return ToolMetadata(
        name=APPLY_PATCH_TOOL_NAME,
        description=APPLY_PATCH_TOOL_DESCRIPTION,
        fn_schema=schema,
    )


def acknowledge_patch_operation(type: str, path: str, diff: str = "") -> str:  # noqa: A002
    """
    Tool body for apply_patch. Operations are applied by the orchestrator after the
    generator replies, so the tool only acknowledges what it was asked to do.
    """
    call = PatchOperationCall.from_tool_kwargs(
        call_id=None, tool_kwargs={"type": type, "path": path, "diff": diff}
    )
    if call.decode_error:
        return call.decode_error
    return f"Received {type} for {path}"


def build_apply_patch_tool() -> FunctionTool:
    return FunctionTool.from_defaults(
        fn=acknowledge_patch_operation,
        tool_metadata=_build_apply_patch_metadata(),
    )
