from fastapi import APIRouter, Depends, HTTPException, status

from prompt_studio.diffs.exceptions import InvalidChunkIndexException
from prompt_studio.llms.exceptions import LLMException
from prompt_studio.studio.dependencies import (
    get_analysis_service,
    get_comparison_service,
    get_patch_service,
)
from prompt_studio.studio.exceptions import StudioException
from prompt_studio.studio.schemas import (
    AnalysisResult,
    AnalyzeRequest,
    DiffRequest,
    DiffResponse,
    PatchPlanResult,
    PatchRequest,
    PatchResult,
    PlanRequest,
    RevertRequest,
    RevertResponse,
)
from prompt_studio.studio.services import AnalysisService, ComparisonService, PatchService

router = APIRouter()


@router.post("/analyze", response_model=AnalysisResult)
async def analyze_prompt(
    request: AnalyzeRequest,
    service: AnalysisService = Depends(get_analysis_service),
):
    try:
        return await service.analyze(request.system_prompt, request.feedback, request.reasoning_level)
    except LLMException as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))


@router.post("/plan", response_model=PatchPlanResult)
async def plan_patch(
    request: PlanRequest,
    service: AnalysisService = Depends(get_analysis_service),
):
    try:
        return await service.plan(request.system_prompt, request.analysis, request.reasoning_level)
    except LLMException as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))


@router.post("/patch", response_model=PatchResult)
async def patch_prompt(
    request: PatchRequest,
    service: PatchService = Depends(get_patch_service),
):
    try:
        return await service.patch_prompt(
            request.system_prompt, request.analysis, request.plan, request.reasoning_level
        )
    except StudioException as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except LLMException as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))


@router.post("/diff", response_model=DiffResponse)
async def diff_prompts(
    request: DiffRequest,
    service: ComparisonService = Depends(get_comparison_service),
):
    return service.compare(request.original, request.modified)


@router.post("/revert", response_model=RevertResponse)
async def revert_chunk(
    request: RevertRequest,
    service: ComparisonService = Depends(get_comparison_service),
):
    try:
        document = service.revert(request.original, request.modified, request.chunk_index)
    except InvalidChunkIndexException as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return RevertResponse(document=document)
