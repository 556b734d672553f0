import sys
import logging

from typing import List, Literal, Optional
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    PROJECT_NAME: str = "Resume Evaluator"
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    ALLOWED_ORIGINS: List[str] = ["http://localhost:3000"]

    # The credential is supplied per request, never through the environment.
    LLM_PROVIDER: str = "llama_index.llms.anthropic.Anthropic"
    LL_MODEL: str = "claude-3-5-sonnet-20241022"
    LLM_BASE_URL: Optional[str] = None
    LLM_MAX_TOKENS: int = 4000
    LLM_TEMPERATURE: float = 0.3
    LLM_TIMEOUT_SECONDS: float = 60.0
    LLM_API_KEY_PREFIX: str = "sk-ant-"

    MIN_JOB_DESCRIPTION_LENGTH: int = 50
    RESUME_MEDIA_TYPE: str = "application/pdf"
    RESUME_MIN_BYTES: int = 1024
    RESUME_MAX_BYTES: int = 10 * 1024 * 1024

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


settings = Settings()


class LLMConfig(BaseModel):
    """
    Everything one upstream generation call needs.

    Built per analysis and handed to the orchestrator explicitly, so two
    requests with different credentials never share provider state.
    """

    provider: str = settings.LLM_PROVIDER
    model: str = settings.LL_MODEL
    api_key: str = ""
    base_url: Optional[str] = settings.LLM_BASE_URL
    max_tokens: int = Field(default=settings.LLM_MAX_TOKENS, gt=0)
    temperature: float = Field(default=settings.LLM_TEMPERATURE, ge=0.0, le=1.0)
    timeout_seconds: float = Field(default=settings.LLM_TIMEOUT_SECONDS, gt=0)

    @classmethod
    def from_settings(cls, source: Settings, api_key: str) -> "LLMConfig":
        return cls(
            provider=source.LLM_PROVIDER,
            model=source.LL_MODEL,
            api_key=api_key.strip(),
            base_url=source.LLM_BASE_URL,
            max_tokens=source.LLM_MAX_TOKENS,
            temperature=source.LLM_TEMPERATURE,
            timeout_seconds=source.LLM_TIMEOUT_SECONDS,
        )


def setup_logging() -> None:
    """
    Configure the root logger from LOG_LEVEL.
    """
    logging.basicConfig(
        level=getattr(logging, settings.LOG_LEVEL),
        format="[%(asctime)s - %(name)s - %(levelname)s] %(message)s",
        stream=sys.stdout,
    )
