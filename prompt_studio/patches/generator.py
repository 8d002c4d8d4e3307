import logging
from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Any

from llama_index.core.llms import ChatMessage
from llama_index.core.llms.function_calling import FunctionCallingLLM
from llama_index.core.tools import BaseTool
from pydantic import BaseModel, ConfigDict

from prompt_studio.patches.constants import APPLY_PATCH_TOOL_NAME
from prompt_studio.patches.schemas import ApplyOutcome, PatchOperationCall
from prompt_studio.patches.tools import build_apply_patch_tool

logger = logging.getLogger(__name__)


class GeneratorReply(BaseModel):
    """
    Operations proposed in one exchange with the generator.

    `context` is whatever the generator needs to continue the same conversation
    on repair; callers treat it as opaque.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    operations: tuple[PatchOperationCall, ...] = ()
    context: Any = None


class PatchGenerator(ABC):
    """Capability the orchestrator uses to ask for, and repair, edit operations."""

    @abstractmethod
    async def propose(self, prompt: str) -> GeneratorReply:
        raise NotImplementedError

    @abstractmethod
    async def repair(self, reply: GeneratorReply, outcomes: Sequence[ApplyOutcome]) -> GeneratorReply:
        raise NotImplementedError


class LlamaIndexPatchGenerator(PatchGenerator):
    def __init__(self, *, llm: FunctionCallingLLM, tool: BaseTool | None = None):
        self.llm = llm
        self.tool = tool or build_apply_patch_tool()

    async def propose(self, prompt: str) -> GeneratorReply:
        return await self._exchange([ChatMessage(role="user", content=prompt)])

    async def repair(self, reply: GeneratorReply, outcomes: Sequence[ApplyOutcome]) -> GeneratorReply:
        history: list[ChatMessage] = list(reply.context or [])
        for outcome in outcomes:
            history.append(
                ChatMessage(
                    role="tool",
                    content=f"{outcome.status}: {outcome.message}",
                    additional_kwargs={"tool_call_id": outcome.call_id},
                )
            )
        return await self._exchange(history)

    async def _exchange(self, messages: list[ChatMessage]) -> GeneratorReply:
        response = await self.llm.achat_with_tools(
            tools=[self.tool],
            chat_history=messages,
            allow_parallel_tool_calls=True,
        )
        tool_calls = self.llm.get_tool_calls_from_response(response, error_on_no_tool_call=False)

        operations: list[PatchOperationCall] = []
        for tool_call in tool_calls:
            if tool_call.tool_name != APPLY_PATCH_TOOL_NAME:
                operations.append(
                    PatchOperationCall(
                        call_id=tool_call.tool_id,
                        decode_error=f"Unknown tool {tool_call.tool_name}. Only {APPLY_PATCH_TOOL_NAME} is available.",
                    )
                )
                continue
            operations.append(
                PatchOperationCall.from_tool_kwargs(call_id=tool_call.tool_id, tool_kwargs=tool_call.tool_kwargs)
            )

        logger.info("Generator proposed %s apply_patch call(s)", len(operations))
        return GeneratorReply(operations=tuple(operations), context=[*messages, response.message])
