"""Application settings."""

from functools import lru_cache
import os
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

PROJECT_ROOT = Path(__file__).resolve().parents[3]


class Settings(BaseSettings):
    """Runtime settings loaded from environment variables."""

    app_name: str = "growth-agent"
    log_level: str = "INFO"
    database_url: str = ""
    llm_provider: str = "openai"
    llm_model: str = ""
    llm_base_url: str = "https://api.openai.com/v1"
    llm_max_retries: int = Field(default=0, ge=0)
    llm_backoff_s: float = Field(default=0.2, ge=0.0)
    openai_api_key: str = ""
    agent_timeout_s: float | None = Field(default=None, gt=0.0)
    max_parallel_agents: int | None = Field(default=None, ge=1)
    max_transcript_chars: int = Field(default=100_000, ge=1)
    recommended_min_chars: int = Field(default=1_000, ge=0)
    min_alnum_ratio: float = Field(default=0.5, ge=0.0, le=1.0)

    model_config = SettingsConfigDict(
        env_prefix="GROWTH_AGENT_",
        extra="ignore",
        env_file=(PROJECT_ROOT / ".env", PROJECT_ROOT / ".env.local"),
        env_file_encoding="utf-8",
    )

    def resolved_database_url(self) -> str:
        return self.database_url or os.getenv("DATABASE_URL", "")

    def resolved_openai_api_key(self) -> str:
        return self.openai_api_key or os.getenv("OPENAI_API_KEY", "")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
