from unittest.mock import MagicMock

import pytest
from pytest_mock import MockerFixture

from prompt_studio.core.enums import PatchMode, ReasoningLevel
from prompt_studio.diffs.services import DiffService
from prompt_studio.llms.enums import LLMModel
from prompt_studio.llms.services import LLMService
from prompt_studio.patches.services import PatchOrchestrator
from prompt_studio.studio.schemas import AnalysisResult, Driver, FailureMode
from prompt_studio.studio.services import AnalysisService, ComparisonService, PatchService


@pytest.fixture
def studio_llm_service_mock(mocker: MockerFixture) -> MagicMock:
    return mocker.create_autospec(LLMService, instance=True)


@pytest.fixture
def structured_llm_mock(mocker: MockerFixture, studio_llm_service_mock: MagicMock) -> MagicMock:
    """The structured wrapper returned by llm.as_structured_llm(...); its achat is awaited."""
    llm = mocker.MagicMock()
    structured = mocker.MagicMock()
    structured.achat = mocker.AsyncMock()
    llm.as_structured_llm.return_value = structured
    studio_llm_service_mock.get_client.return_value = llm
    return structured


@pytest.fixture
def analysis_service(studio_llm_service_mock: MagicMock) -> AnalysisService:
    return AnalysisService(
        llm_service=studio_llm_service_mock,
        model_name=LLMModel.GPT_5_1,
        default_reasoning_level=ReasoningLevel.LOW,
    )


@pytest.fixture
def orchestrator_mock(mocker: MockerFixture) -> MagicMock:
    return mocker.create_autospec(PatchOrchestrator, instance=True)


@pytest.fixture
def generator_factory_mock(mocker: MockerFixture) -> MagicMock:
    return mocker.MagicMock()


@pytest.fixture
def make_patch_service(studio_llm_service_mock, orchestrator_mock, generator_factory_mock, mocker):
    def _make(patch_mode: PatchMode = PatchMode.BATCH) -> PatchService:
        return PatchService(
            llm_service=studio_llm_service_mock,
            model_name=LLMModel.GPT_5_1,
            default_reasoning_level=ReasoningLevel.LOW,
            patch_mode=patch_mode,
            generator_factory=generator_factory_mock,
            orchestrator_factory=mocker.MagicMock(return_value=orchestrator_mock),
        )

    return _make


@pytest.fixture
def comparison_service() -> ComparisonService:
    return ComparisonService(diff_service=DiffService())


@pytest.fixture
def analysis_result() -> AnalysisResult:
    return AnalysisResult(
        failure_modes=[
            FailureMode(
                name="verbosity_vs_concision",
                description="Conflicting length guidance",
                drivers=[Driver(line="Be concise.", why="Contradicts 'err on the side of completeness'")],
            )
        ],
        raw_analysis="The prompt asks for two incompatible answer lengths.",
    )
