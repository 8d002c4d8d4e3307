from fastapi import Depends

from prompt_studio.llms.factories import build_llm_service
from prompt_studio.llms.services import LLMService
from prompt_studio.studio.factories import (
    build_analysis_service,
    build_comparison_service,
    build_patch_service,
)
from prompt_studio.studio.services import AnalysisService, ComparisonService, PatchService


async def get_llm_service() -> LLMService:
    return await build_llm_service()


async def get_analysis_service(llm_service: LLMService = Depends(get_llm_service)) -> AnalysisService:
    return build_analysis_service(llm_service)


async def get_patch_service(llm_service: LLMService = Depends(get_llm_service)) -> PatchService:
    return build_patch_service(llm_service)


async def get_comparison_service() -> ComparisonService:
    return build_comparison_service()
