from unittest.mock import MagicMock

import pytest
from pytest_mock import MockerFixture

from prompt_studio.diffs.services import DiffService
from prompt_studio.patches.applier import HunkApplier
from prompt_studio.patches.generator import GeneratorReply, PatchGenerator
from prompt_studio.patches.parser import PatchParser
from prompt_studio.patches.schemas import (
    CreateFileOperation,
    DeleteFileOperation,
    PatchOperationCall,
    UpdateFileOperation,
)
from prompt_studio.patches.services import PatchOrchestrator

TARGET_NAME = "system_prompt.txt"


def wrap_patch(body: str, header: str = f"*** Update File: {TARGET_NAME}") -> str:
    return f"*** Begin Patch\n{header}\n{body}\n*** End Patch"


def update_call(call_id: str | None, body: str, path: str = TARGET_NAME) -> PatchOperationCall:
    return PatchOperationCall(
        call_id=call_id,
        operation=UpdateFileOperation(type="update_file", path=path, diff=wrap_patch(body)),
    )


def create_call(call_id: str | None, body: str) -> PatchOperationCall:
    return PatchOperationCall(
        call_id=call_id,
        operation=CreateFileOperation(
            type="create_file", path=TARGET_NAME, diff=wrap_patch(body, f"*** Add File: {TARGET_NAME}")
        ),
    )


def delete_call(call_id: str | None) -> PatchOperationCall:
    return PatchOperationCall(call_id=call_id, operation=DeleteFileOperation(type="delete_file", path=TARGET_NAME))


def reply_with(*calls: PatchOperationCall) -> GeneratorReply:
    return GeneratorReply(operations=tuple(calls), context=["history"])


@pytest.fixture
def patch_parser() -> PatchParser:
    return PatchParser()


@pytest.fixture
def hunk_applier() -> HunkApplier:
    return HunkApplier()


@pytest.fixture
def patch_generator_mock(mocker: MockerFixture) -> MagicMock:
    return mocker.create_autospec(PatchGenerator, instance=True)


@pytest.fixture
def patch_orchestrator(patch_generator_mock: MagicMock) -> PatchOrchestrator:
    return PatchOrchestrator(
        generator=patch_generator_mock,
        diff_service=DiffService(),
        parser=PatchParser(),
        applier=HunkApplier(),
        target_name=TARGET_NAME,
        max_attempts=3,
    )


@pytest.fixture
def function_calling_llm_mock(mocker: MockerFixture) -> MagicMock:
    llm = mocker.MagicMock()
    llm.achat_with_tools = mocker.AsyncMock()
    return llm
