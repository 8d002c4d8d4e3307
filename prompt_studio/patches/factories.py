from llama_index.core.llms.function_calling import FunctionCallingLLM

from prompt_studio.core.config import settings
from prompt_studio.diffs.services import DiffService
from prompt_studio.patches.applier import HunkApplier
from prompt_studio.patches.generator import LlamaIndexPatchGenerator, PatchGenerator
from prompt_studio.patches.parser import PatchParser
from prompt_studio.patches.services import PatchOrchestrator


def build_patch_generator(llm: FunctionCallingLLM) -> PatchGenerator:
    return LlamaIndexPatchGenerator(llm=llm)


def build_patch_orchestrator(generator: PatchGenerator) -> PatchOrchestrator:
    return PatchOrchestrator(
        generator=generator,
        diff_service=DiffService(),
        parser=PatchParser(),
        applier=HunkApplier(),
        target_name=settings.PATCH_TARGET_NAME,
        max_attempts=settings.MAX_PATCH_ATTEMPTS,
    )
