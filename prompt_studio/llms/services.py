import logging
from typing import Union

from async_lru import alru_cache
from google.genai import types as genai_types
from llama_index.llms.anthropic import Anthropic
from llama_index.llms.google_genai import GoogleGenAI
from llama_index.llms.openai import OpenAI

from prompt_studio.core.enums import ReasoningLevel
from prompt_studio.llms.enums import LLMModel, LLMProvider
from prompt_studio.llms.exceptions import MissingLLMApiKeyException, UnsupportedLLMProviderException
from prompt_studio.llms.registry import LLMFactory
from prompt_studio.llms.schemas import (
    AnthropicReasoningConfig,
    GoogleReasoningConfig,
    OpenAIReasoningConfig,
)

logger = logging.getLogger(__name__)

API_KEY_ENV_NAMES: dict[LLMProvider, str] = {
    LLMProvider.OPENAI: "OPENAI_API_KEY",
    LLMProvider.ANTHROPIC: "ANTHROPIC_API_KEY",
    LLMProvider.GOOGLE: "GOOGLE_API_KEY",
}


class LLMService:
    def __init__(self, *, llm_factory: LLMFactory, api_keys: dict[LLMProvider, str | None]):
        self.llm_factory = llm_factory
        self.api_keys = api_keys

    async def get_client(
        self, model_name: LLMModel, reasoning_level: ReasoningLevel
    ) -> Union[OpenAI, Anthropic, GoogleGenAI]:
        """
        Hydrates a client for the model using the configured provider key.
        Raises MissingLLMApiKeyException before any request is made if the key is absent.
        """
        llm_metadata = await self.llm_factory.get_llm(model_name)
        api_key = self.api_keys.get(llm_metadata.provider)
        if not api_key:
            env_name = API_KEY_ENV_NAMES.get(llm_metadata.provider, "the provider API key")
            raise MissingLLMApiKeyException(
                f"{llm_metadata.provider} API Key is missing. "
                f"Please set {env_name} in your environment variables."
            )

        return await self._get_client_instance(model_name, reasoning_level, api_key)

    @alru_cache
    async def _get_client_instance(self, model_name: LLMModel, reasoning_level: ReasoningLevel, api_key: str):
        llm_metadata = await self.llm_factory.get_llm(model_name)
        provider = llm_metadata.provider
        logger.info("Building %s client for %s (reasoning=%s)", provider, model_name, reasoning_level)

        if provider == LLMProvider.OPENAI:
            if not llm_metadata.supports_reasoning:
                return OpenAI(model=model_name, temperature=0, api_key=api_key)
            reasoning = OpenAIReasoningConfig.from_level(reasoning_level)
            return OpenAI(model=model_name, api_key=api_key, reasoning_effort=reasoning.reasoning_effort)
        elif provider == LLMProvider.ANTHROPIC:
            reasoning = AnthropicReasoningConfig.from_level(reasoning_level)
            # extended thinking requires temperature 1 and room for the answer past the budget
            return Anthropic(
                model=model_name,
                api_key=api_key,
                temperature=1.0,
                max_tokens=reasoning.budget_tokens + 8192,
                thinking_dict=reasoning.model_dump(),
            )
        elif provider == LLMProvider.GOOGLE:
            reasoning = GoogleReasoningConfig.from_level(reasoning_level)
            return GoogleGenAI(
                model=model_name,
                api_key=api_key,
                generation_config=genai_types.GenerateContentConfig(
                    thinking_config=genai_types.ThinkingConfig(thinking_budget=reasoning.thinking_budget)
                ),
            )
        else:
            raise UnsupportedLLMProviderException(f"Unsupported LLM provider: {provider}")
