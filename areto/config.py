"""Runtime settings loaded from the environment or a .env file."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

from areto.constants.network_constants import (
    DEFAULT_API_BASE_URL,
    DEFAULT_HOST,
    DEFAULT_PORT,
    RATE_LIMIT_MAX_REQUESTS,
    RATE_LIMIT_WINDOW_SECONDS,
)


class Settings(BaseSettings):
    """Application settings; every field can be overridden with ``ARETO_<NAME>``."""

    model_config = SettingsConfigDict(env_prefix="ARETO_", env_file=".env", extra="ignore")

    # Server
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    data_file: Path | None = None  # None keeps quizzes in memory only

    # Request-rate guard
    rate_limit_max_requests: int = RATE_LIMIT_MAX_REQUESTS
    rate_limit_window_seconds: int = RATE_LIMIT_WINDOW_SECONDS
    rate_limit_fail_open: bool = True
    redis_url: str = ""  # e.g. "redis://localhost:6379/0"; empty uses in-process counters

    # Desktop client
    api_base_url: str = DEFAULT_API_BASE_URL
    user_id: str = ""
    embedded_server: bool = True

    log_level: str = "INFO"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()
