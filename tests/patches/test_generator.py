from llama_index.core.base.llms.types import ChatMessage, ChatResponse
from llama_index.core.llms.llm import ToolSelection

from prompt_studio.patches.enums import ApplyStatus, PatchOperationType
from prompt_studio.patches.generator import LlamaIndexPatchGenerator
from prompt_studio.patches.schemas import ApplyOutcome


def _response(content: str = "") -> ChatResponse:
    return ChatResponse(message=ChatMessage(role="assistant", content=content))


async def test_propose__decodes_apply_patch_calls(function_calling_llm_mock):
    """Scenario: the model answers with one valid and one malformed apply_patch call.

    Asserts:
        - the valid call becomes an UpdateFileOperation keyed by its tool id
        - the malformed call carries a decode error instead of an operation
        - the request exposes only the apply_patch tool
    """
    response = _response()
    function_calling_llm_mock.achat_with_tools.return_value = response
    function_calling_llm_mock.get_tool_calls_from_response.return_value = [
        ToolSelection(
            tool_id="call_1",
            tool_name="apply_patch",
            tool_kwargs={"type": "update_file", "path": "system_prompt.txt", "diff": "-a\n+b"},
        ),
        ToolSelection(tool_id="call_2", tool_name="apply_patch", tool_kwargs={"type": "rename_file", "path": "x"}),
    ]
    generator = LlamaIndexPatchGenerator(llm=function_calling_llm_mock)

    reply = await generator.propose("patch it")

    first, second = reply.operations
    assert first.call_id == "call_1"
    assert first.operation_type == PatchOperationType.UPDATE_FILE
    assert first.operation.diff == "-a\n+b"
    assert second.operation is None
    assert second.decode_error.startswith("Unsupported apply_patch operation type: rename_file")

    kwargs = function_calling_llm_mock.achat_with_tools.await_args.kwargs
    assert [tool.metadata.name for tool in kwargs["tools"]] == ["apply_patch"]
    assert kwargs["chat_history"][0].content == "patch it"
    function_calling_llm_mock.get_tool_calls_from_response.assert_called_once_with(
        response, error_on_no_tool_call=False
    )
    assert reply.context[-1] is response.message


async def test_propose__unknown_tool_is_a_decode_error(function_calling_llm_mock):
    function_calling_llm_mock.achat_with_tools.return_value = _response()
    function_calling_llm_mock.get_tool_calls_from_response.return_value = [
        ToolSelection(tool_id="call_1", tool_name="shell", tool_kwargs={"cmd": "ls"}),
    ]
    generator = LlamaIndexPatchGenerator(llm=function_calling_llm_mock)

    reply = await generator.propose("patch it")

    assert reply.operations[0].operation is None
    assert "Unknown tool shell" in reply.operations[0].decode_error


async def test_propose__no_tool_calls_gives_empty_reply(function_calling_llm_mock):
    function_calling_llm_mock.achat_with_tools.return_value = _response("I cannot do that.")
    function_calling_llm_mock.get_tool_calls_from_response.return_value = []
    generator = LlamaIndexPatchGenerator(llm=function_calling_llm_mock)

    reply = await generator.propose("patch it")

    assert reply.operations == ()


async def test_repair__continues_history_with_tool_outputs(function_calling_llm_mock):
    """Scenario: one failed call is reported back.

    Asserts:
        - the history keeps the previous exchange
        - a tool message linked by tool_call_id carries status and message
    """
    first_response = _response()
    function_calling_llm_mock.achat_with_tools.side_effect = [first_response, _response()]
    function_calling_llm_mock.get_tool_calls_from_response.return_value = []
    generator = LlamaIndexPatchGenerator(llm=function_calling_llm_mock)

    reply = await generator.propose("patch it")
    await generator.repair(
        reply,
        [ApplyOutcome(call_id="call_1", status=ApplyStatus.FAILED, message="Failed to apply update_file diff: nope")],
    )

    history = function_calling_llm_mock.achat_with_tools.await_args.kwargs["chat_history"]
    assert history[0].content == "patch it"
    assert history[1] is first_response.message
    assert history[2].role == "tool"
    assert history[2].content == "failed: Failed to apply update_file diff: nope"
    assert history[2].additional_kwargs == {"tool_call_id": "call_1"}
