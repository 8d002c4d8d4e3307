from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from prompt_studio.diffs.enums import DiffLineType


class DiffLine(BaseModel):
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    type: DiffLineType
    content: str
    original_index: int | None = Field(default=None, ge=1)
    modified_index: int | None = Field(default=None, ge=1)


class ChangeChunk(BaseModel):
    """Inclusive [start_index, end_index] range into a DiffLine sequence."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    start_index: int = Field(ge=0)
    end_index: int = Field(ge=0)

    @model_validator(mode="after")
    def check_order(self) -> "ChangeChunk":
        if self.start_index > self.end_index:
            raise ValueError("start_index must not be greater than end_index")
        return self

    def __contains__(self, index: int) -> bool:
        return self.start_index <= index <= self.end_index


class DiffStats(BaseModel):
    model_config = ConfigDict(frozen=True)

    added: int = 0
    removed: int = 0
