from prompt_studio.core.config import settings
from prompt_studio.diffs.services import DiffService
from prompt_studio.llms.services import LLMService
from prompt_studio.patches.factories import build_patch_generator, build_patch_orchestrator
from prompt_studio.studio.services import AnalysisService, ComparisonService, PatchService


def build_analysis_service(llm_service: LLMService) -> AnalysisService:
    return AnalysisService(
        llm_service=llm_service,
        model_name=settings.LLM_MODEL,
        default_reasoning_level=settings.DEFAULT_REASONING_LEVEL,
    )


def build_patch_service(llm_service: LLMService) -> PatchService:
    return PatchService(
        llm_service=llm_service,
        model_name=settings.LLM_MODEL,
        default_reasoning_level=settings.DEFAULT_REASONING_LEVEL,
        patch_mode=settings.PATCH_MODE,
        generator_factory=build_patch_generator,
        orchestrator_factory=build_patch_orchestrator,
    )


def build_comparison_service() -> ComparisonService:
    return ComparisonService(diff_service=DiffService())
