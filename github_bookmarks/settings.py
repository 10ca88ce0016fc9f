"""Application settings loaded from environment variables and .env file."""

from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings for the bookmark application."""

    model_config = SettingsConfigDict(
        env_prefix="GITHUB_BOOKMARKS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    api_base: str = "https://api.github.com"
    search_debounce: float = 0.5  # seconds of quiet before a search fires
    request_timeout: float = 30.0
    max_retries: int = 2
    log_level: str = "WARNING"
    log_file: Path | None = None


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
