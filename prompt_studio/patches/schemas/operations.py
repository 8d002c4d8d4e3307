from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError

from prompt_studio.patches.enums import PatchOperationType


class CreateFileOperation(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    type: Literal["create_file"]
    path: str
    diff: str = ""


class UpdateFileOperation(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    type: Literal["update_file"]
    path: str
    diff: str = ""


class DeleteFileOperation(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    type: Literal["delete_file"]
    path: str
    diff: str | None = None


PatchOperation = Annotated[
    Union[CreateFileOperation, UpdateFileOperation, DeleteFileOperation],
    Field(discriminator="type"),
]

patch_operation_adapter: TypeAdapter[PatchOperation] = TypeAdapter(PatchOperation)


class PatchOperationCall(BaseModel):
    """One edit proposed by the generator, decoded at the boundary."""

    model_config = ConfigDict(frozen=True)

    call_id: str | None = None
    operation: PatchOperation | None = None
    decode_error: str | None = None

    @classmethod
    def from_tool_kwargs(cls, *, call_id: str | None, tool_kwargs: Any) -> "PatchOperationCall":
        try:
            operation = patch_operation_adapter.validate_python(tool_kwargs)
        except ValidationError as e:
            kind = tool_kwargs.get("type") if isinstance(tool_kwargs, dict) else None
            return cls(
                call_id=call_id,
                decode_error=f"Unsupported apply_patch operation type: {kind} ({e.error_count()} validation error(s))",
            )
        return cls(call_id=call_id, operation=operation)

    @property
    def operation_type(self) -> PatchOperationType | None:
        if self.operation is None:
            return None
        return PatchOperationType(self.operation.type)
