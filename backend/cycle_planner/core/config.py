"""Application configuration managed via environment variables."""
from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    app_name: str = "Cycle Planner Backend"
    debug: bool = False
    log_level: str = "INFO"
    openai_api_key: str | None = None
    openai_model: str = "gpt-4.1-mini"
    openai_timeout_seconds: float = 30.0
    max_output_tokens: int = 1200
    prompt_max_chars: int = 2000
    opik_enabled: bool = False
    opik_api_key: str | None = None
    opik_project: str = "cycle-planner"


@lru_cache
def get_settings() -> Settings:
    """Return a cached Settings instance."""
    return Settings()


settings = get_settings()
