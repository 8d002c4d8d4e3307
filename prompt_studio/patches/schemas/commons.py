from pydantic import BaseModel, ConfigDict

from prompt_studio.patches.enums import (
    ApplyFailureReason,
    ApplyStatus,
    PatchAction,
    PatchTerminalState,
)


class ParsedPatch(BaseModel):
    model_config = ConfigDict(frozen=True)

    action: PatchAction
    body: str

    @property
    def is_empty(self) -> bool:
        return not self.body.strip()


class AppliedHunks(BaseModel):
    model_config = ConfigDict(frozen=True)

    document: str
    hunks: int
    added: int
    removed: int


class HunkApplyFailure(BaseModel):
    model_config = ConfigDict(frozen=True)

    reason: ApplyFailureReason
    message: str


HunkApplyResult = AppliedHunks | HunkApplyFailure


class ApplyOutcome(BaseModel):
    model_config = ConfigDict(frozen=True)

    call_id: str | None = None
    status: ApplyStatus
    message: str

    @property
    def failed(self) -> bool:
        return self.status == ApplyStatus.FAILED


class PatchRound(BaseModel):
    model_config = ConfigDict(frozen=True)

    index: int
    outcomes: tuple[ApplyOutcome, ...]


class PatchRunResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    revised_document: str
    outcomes: tuple[ApplyOutcome, ...]
    terminal: PatchTerminalState
    rounds: tuple[PatchRound, ...] = ()

    @property
    def succeeded(self) -> bool:
        return self.terminal == PatchTerminalState.COMPLETED
