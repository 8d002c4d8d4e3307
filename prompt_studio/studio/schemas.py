from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from prompt_studio.core.enums import ReasoningLevel
from prompt_studio.diffs.schemas import ChangeChunk, DiffLine, DiffStats
from prompt_studio.patches.enums import PatchTerminalState


class StudioSchema(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class StructuredOutput(BaseModel):
    """Base for models the LLM fills in; unknown keys are rejected."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="forbid")


class Driver(StructuredOutput):
    line: str = Field(description="Exact or paraphrased line from prompt")
    why: str = Field(description="Why it matters")


class FailureMode(StructuredOutput):
    name: str = Field(description="Name of the failure mode")
    description: str = Field(description="Explanation of the failure mode and how the prompt causes it")
    drivers: list[Driver] = Field(
        description="Specific quotes or paraphrased lines from the prompt that drive this behavior"
    )


class AnalysisResult(StructuredOutput):
    failure_modes: list[FailureMode]
    raw_analysis: str = Field(description="A high-level summary or overview of the analysis")


class PatchPlanResult(StructuredOutput):
    patch_notes: list[str] = Field(
        description="Concise bullet-style notes explaining the key changes and why you made them."
    )


class StructuredReplyFailure(BaseModel):
    model_config = ConfigDict(frozen=True)

    error: str


class PatchResult(StudioSchema):
    revised_prompt: str
    patch_notes: list[str]
    terminal: PatchTerminalState


class AnalyzeRequest(StudioSchema):
    system_prompt: str
    feedback: str = ""
    reasoning_level: ReasoningLevel | None = None


class PlanRequest(StudioSchema):
    system_prompt: str
    analysis: AnalysisResult
    reasoning_level: ReasoningLevel | None = None


class PatchRequest(StudioSchema):
    system_prompt: str
    analysis: AnalysisResult
    plan: list[str]
    reasoning_level: ReasoningLevel | None = None


class DiffRequest(StudioSchema):
    original: str
    modified: str


class DiffResponse(StudioSchema):
    lines: list[DiffLine]
    chunks: list[ChangeChunk]
    stats: DiffStats


class RevertRequest(StudioSchema):
    original: str
    modified: str
    chunk_index: int = Field(ge=0)


class RevertResponse(StudioSchema):
    document: str
