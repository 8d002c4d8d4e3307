from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from prompt_studio.core.enums import LogLevel, PatchMode, ReasoningLevel
from prompt_studio.llms.enums import LLMModel


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_ignore_empty=True,
        extra="ignore",
    )
    OPENAI_API_KEY: str | None = None
    ANTHROPIC_API_KEY: str | None = None
    GOOGLE_API_KEY: str | None = None
    LLM_MODEL: LLMModel = LLMModel.GPT_5_1
    DEFAULT_REASONING_LEVEL: ReasoningLevel = ReasoningLevel.LOW
    PATCH_TARGET_NAME: str = "system_prompt.txt"
    MAX_PATCH_ATTEMPTS: int = Field(default=5, ge=1)
    PATCH_MODE: PatchMode = PatchMode.BATCH
    LOG_LEVEL: LogLevel = LogLevel.INFO
    OBSERVABILITY_ENABLED: bool = False
    OBSERVABILITY_ENDPOINT: str = "http://127.0.0.1:6006/v1/traces"


settings = Settings()
