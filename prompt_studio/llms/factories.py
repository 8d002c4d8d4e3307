from async_lru import alru_cache

from prompt_studio.core.config import settings
from prompt_studio.llms.enums import LLMProvider
from prompt_studio.llms.registry import LLMFactory
from prompt_studio.llms.services import LLMService


@alru_cache
async def build_llm_factory_instance() -> LLMFactory:
    return LLMFactory()


@alru_cache
async def build_llm_service() -> LLMService:
    llm_factory = await build_llm_factory_instance()
    api_keys = {
        LLMProvider.OPENAI: settings.OPENAI_API_KEY,
        LLMProvider.ANTHROPIC: settings.ANTHROPIC_API_KEY,
        LLMProvider.GOOGLE: settings.GOOGLE_API_KEY,
    }
    return LLMService(llm_factory=llm_factory, api_keys=api_keys)
