import json
import logging
from collections.abc import Callable
from typing import TypeVar

from llama_index.core.llms import ChatMessage
from llama_index.core.llms.function_calling import FunctionCallingLLM
from pydantic import BaseModel

from prompt_studio.core.enums import PatchMode, ReasoningLevel
from prompt_studio.diffs.exceptions import InvalidChunkIndexException
from prompt_studio.diffs.services import DiffService
from prompt_studio.llms.enums import LLMModel
from prompt_studio.llms.services import LLMService
from prompt_studio.patches.enums import PatchTerminalState
from prompt_studio.patches.generator import PatchGenerator
from prompt_studio.patches.services import PatchOrchestrator
from prompt_studio.studio.constants import (
    ANALYSIS_PARSE_ERROR,
    ANALYZE_PROMPT_TEMPLATE,
    NO_FEEDBACK_PLACEHOLDER,
    PLAN_PARSE_ERROR,
    PLAN_PROMPT_TEMPLATE,
    STRUCTURED_SYSTEM_MESSAGE,
    STRUCTURED_SYSTEM_MESSAGE_STRICT,
    TERMINAL_STATE_NOTES,
)
from prompt_studio.studio.exceptions import EmptyPatchPlanException
from prompt_studio.studio.schemas import (
    AnalysisResult,
    DiffResponse,
    PatchPlanResult,
    PatchResult,
    StructuredReplyFailure,
)

logger = logging.getLogger(__name__)

OutputT = TypeVar("OutputT", bound=BaseModel)


class AnalysisService:
    """Diagnose and plan phases. Both ask the model for a strict structured reply."""

    def __init__(
        self,
        *,
        llm_service: LLMService,
        model_name: LLMModel,
        default_reasoning_level: ReasoningLevel,
    ):
        self.llm_service = llm_service
        self.model_name = model_name
        self.default_reasoning_level = default_reasoning_level

    async def analyze(
        self, system_prompt: str, feedback: str, reasoning_level: ReasoningLevel | None = None
    ) -> AnalysisResult:
        llm = await self.llm_service.get_client(self.model_name, reasoning_level or self.default_reasoning_level)
        prompt = ANALYZE_PROMPT_TEMPLATE.format(
            system_prompt=system_prompt,
            feedback=feedback.strip() or NO_FEEDBACK_PLACEHOLDER,
        )
        reply = await self._structured_reply(llm, AnalysisResult, STRUCTURED_SYSTEM_MESSAGE, prompt)
        if isinstance(reply, StructuredReplyFailure):
            logger.error("Failed to parse analysis reply: %s", reply.error)
            return AnalysisResult(failure_modes=[], raw_analysis=ANALYSIS_PARSE_ERROR)

        logger.info("Analysis found %s failure mode(s)", len(reply.failure_modes))
        return reply

    async def plan(
        self, system_prompt: str, analysis: AnalysisResult, reasoning_level: ReasoningLevel | None = None
    ) -> PatchPlanResult:
        llm = await self.llm_service.get_client(self.model_name, reasoning_level or self.default_reasoning_level)
        failure_modes = [mode.model_dump(by_alias=True) for mode in analysis.failure_modes]
        prompt = PLAN_PROMPT_TEMPLATE.format(
            system_prompt=system_prompt,
            failure_modes=json.dumps(failure_modes, indent=2),
            raw_analysis=analysis.raw_analysis,
        )
        reply = await self._structured_reply(llm, PatchPlanResult, STRUCTURED_SYSTEM_MESSAGE_STRICT, prompt)
        if isinstance(reply, StructuredReplyFailure):
            logger.error("Failed to parse patch plan reply: %s", reply.error)
            return PatchPlanResult(patch_notes=[PLAN_PARSE_ERROR])

        logger.info("Plan produced %s patch note(s)", len(reply.patch_notes))
        return reply

    @staticmethod
    async def _structured_reply(
        llm: FunctionCallingLLM, output_cls: type[OutputT], system_message: str, prompt: str
    ) -> OutputT | StructuredReplyFailure:
        messages = [
            ChatMessage(role="system", content=system_message),
            ChatMessage(role="user", content=prompt),
        ]
        try:
            response = await llm.as_structured_llm(output_cls).achat(messages)
        except ValueError as e:
            # pydantic.ValidationError is a ValueError
            return StructuredReplyFailure(error=str(e))

        if not isinstance(response.raw, output_cls):
            return StructuredReplyFailure(error=f"Expected {output_cls.__name__}, got {type(response.raw).__name__}")
        return response.raw


class PatchService:
    """Turns patch notes into a revised prompt through the apply_patch loop."""

    def __init__(
        self,
        *,
        llm_service: LLMService,
        model_name: LLMModel,
        default_reasoning_level: ReasoningLevel,
        patch_mode: PatchMode,
        generator_factory: Callable[[FunctionCallingLLM], PatchGenerator],
        orchestrator_factory: Callable[[PatchGenerator], PatchOrchestrator],
    ):
        self.llm_service = llm_service
        self.model_name = model_name
        self.default_reasoning_level = default_reasoning_level
        self.patch_mode = patch_mode
        self.generator_factory = generator_factory
        self.orchestrator_factory = orchestrator_factory

    async def patch_prompt(
        self,
        system_prompt: str,
        analysis: AnalysisResult,
        plan: list[str],
        reasoning_level: ReasoningLevel | None = None,
    ) -> PatchResult:
        if not plan:
            raise EmptyPatchPlanException("At least one patch note is required to patch the prompt.")

        llm = await self.llm_service.get_client(self.model_name, reasoning_level or self.default_reasoning_level)
        orchestrator = self.orchestrator_factory(self.generator_factory(llm))

        if self.patch_mode == PatchMode.PER_NOTE:
            result = await orchestrator.run_per_note(system_prompt, plan, failure_modes=analysis.failure_modes)
        else:
            result = await orchestrator.run(system_prompt, plan, failure_modes=analysis.failure_modes)

        if result.terminal == PatchTerminalState.COMPLETED:
            return PatchResult(revised_prompt=result.revised_document, patch_notes=list(plan), terminal=result.terminal)

        return PatchResult(
            revised_prompt=result.revised_document,
            patch_notes=[TERMINAL_STATE_NOTES[result.terminal]],
            terminal=result.terminal,
        )


class ComparisonService:
    def __init__(self, *, diff_service: DiffService):
        self.diff_service = diff_service

    def compare(self, original: str, modified: str) -> DiffResponse:
        lines = self.diff_service.diff_lines(original, modified)
        return DiffResponse(
            lines=lines,
            chunks=self.diff_service.find_chunks(lines),
            stats=self.diff_service.stats(lines),
        )

    def revert(self, original: str, modified: str, chunk_index: int) -> str:
        lines = self.diff_service.diff_lines(original, modified)
        chunks = self.diff_service.find_chunks(lines)
        if not 0 <= chunk_index < len(chunks):
            raise InvalidChunkIndexException(
                f"Chunk index {chunk_index} is out of range: the diff has {len(chunks)} change chunk(s)"
            )
        return self.diff_service.revert_chunk(lines, chunks[chunk_index])
