from typing import Literal

from pydantic import BaseModel, Field

from prompt_studio.core.enums import ReasoningLevel
from prompt_studio.llms.enums import LLMModel, LLMProvider


class LLM(BaseModel):
    model_name: LLMModel
    provider: LLMProvider
    default_context_window: int = Field(gt=0)
    supports_reasoning: bool = True


class OpenAIReasoningConfig(BaseModel):
    reasoning_effort: Literal["low", "medium", "high"] = "medium"

    @classmethod
    def from_level(cls, level: ReasoningLevel) -> "OpenAIReasoningConfig":
        return cls(reasoning_effort=level.value)


class AnthropicReasoningConfig(BaseModel):
    type: Literal["enabled", "disabled"] = "enabled"
    budget_tokens: int = Field(ge=1024, le=16000, default=8000)

    @classmethod
    def from_level(cls, level: ReasoningLevel) -> "AnthropicReasoningConfig":
        budgets = {
            ReasoningLevel.LOW: 2048,
            ReasoningLevel.MEDIUM: 8000,
            ReasoningLevel.HIGH: 16000,
        }
        return cls(budget_tokens=budgets[level])


class GoogleReasoningConfig(BaseModel):
    thinking_budget: int = Field(
        default=8192,
        ge=0,
        description="Number of thought tokens the model may spend before answering.",
    )

    @classmethod
    def from_level(cls, level: ReasoningLevel) -> "GoogleReasoningConfig":
        budgets = {
            ReasoningLevel.LOW: 1024,
            ReasoningLevel.MEDIUM: 8192,
            ReasoningLevel.HIGH: 24576,
        }
        return cls(thinking_budget=budgets[level])
