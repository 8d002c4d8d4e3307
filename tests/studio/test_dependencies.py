from unittest.mock import AsyncMock

from prompt_studio.core.enums import PatchMode
from prompt_studio.studio.dependencies import (
    get_analysis_service,
    get_comparison_service,
    get_llm_service,
    get_patch_service,
)
from prompt_studio.studio.services import AnalysisService, ComparisonService, PatchService


async def test_get_llm_service__delegates_to_factory(mocker, studio_llm_service_mock):
    build_mock = mocker.patch(
        "prompt_studio.studio.dependencies.build_llm_service",
        new=AsyncMock(return_value=studio_llm_service_mock),
    )

    assert await get_llm_service() is studio_llm_service_mock
    build_mock.assert_awaited_once()


async def test_get_analysis_service__uses_settings_model(mocker, studio_llm_service_mock):
    settings_mock = mocker.patch("prompt_studio.studio.factories.settings")

    service = await get_analysis_service(llm_service=studio_llm_service_mock)

    assert isinstance(service, AnalysisService)
    assert service.llm_service is studio_llm_service_mock
    assert service.model_name is settings_mock.LLM_MODEL
    assert service.default_reasoning_level is settings_mock.DEFAULT_REASONING_LEVEL


async def test_get_patch_service__uses_settings_patch_mode(mocker, studio_llm_service_mock):
    settings_mock = mocker.patch("prompt_studio.studio.factories.settings")
    settings_mock.PATCH_MODE = PatchMode.PER_NOTE

    service = await get_patch_service(llm_service=studio_llm_service_mock)

    assert isinstance(service, PatchService)
    assert service.patch_mode == PatchMode.PER_NOTE


async def test_get_comparison_service__returns_service():
    assert isinstance(await get_comparison_service(), ComparisonService)
