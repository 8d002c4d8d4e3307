from prompt_studio.llms.enums import LLMModel, LLMProvider
from prompt_studio.llms.schemas import LLM


class LLMFactory:
    _MODEL_REGISTRY: dict[LLMModel, LLM] = {
        # Anthropic
        LLMModel.CLAUDE_SONNET_4_5: LLM(
            model_name=LLMModel.CLAUDE_SONNET_4_5, provider=LLMProvider.ANTHROPIC, default_context_window=200000
        ),
        LLMModel.CLAUDE_OPUS_4_1: LLM(
            model_name=LLMModel.CLAUDE_OPUS_4_1, provider=LLMProvider.ANTHROPIC, default_context_window=200000
        ),
        # Google
        LLMModel.GEMINI_2_5_PRO: LLM(
            model_name=LLMModel.GEMINI_2_5_PRO, provider=LLMProvider.GOOGLE, default_context_window=1000000
        ),
        LLMModel.GEMINI_2_5_FLASH: LLM(
            model_name=LLMModel.GEMINI_2_5_FLASH, provider=LLMProvider.GOOGLE, default_context_window=1000000
        ),
        # OpenAI
        LLMModel.GPT_5_1: LLM(model_name=LLMModel.GPT_5_1, provider=LLMProvider.OPENAI, default_context_window=400000),
        LLMModel.GPT_5: LLM(model_name=LLMModel.GPT_5, provider=LLMProvider.OPENAI, default_context_window=400000),
        LLMModel.GPT_5_MINI: LLM(model_name=LLMModel.GPT_5_MINI, provider=LLMProvider.OPENAI,
                                 default_context_window=400000),
        LLMModel.GPT_4_1: LLM(
            model_name=LLMModel.GPT_4_1,
            provider=LLMProvider.OPENAI,
            default_context_window=128000,
            supports_reasoning=False,
        ),
        LLMModel.GPT_4_1_MINI: LLM(
            model_name=LLMModel.GPT_4_1_MINI,
            provider=LLMProvider.OPENAI,
            default_context_window=128000,
            supports_reasoning=False,
        ),
    }

    async def get_llm(self, model_name: LLMModel) -> LLM:
        """
        Retrieves an LLM from the registry.
        Raises KeyError if the model is not found.
        """
        return self._MODEL_REGISTRY[model_name]
