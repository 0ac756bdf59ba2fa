"""Application configuration."""

from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings loaded from environment variables (prefixed with DAMA_) or a .env file."""

    model_config = SettingsConfigDict(
        env_prefix="DAMA_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Search AI: plies searched below the root. Values of 3-4 keep a move under a second.
    ai_search_depth: int = 3
    # Fix the seed to make the AI's tie-breaking reproducible
    ai_seed: Optional[int] = None

    log_level: str = "INFO"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
