from __future__ import annotations
"""Application configuration using Pydantic Settings."""

from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Vidu tools settings.

    Loaded from environment variables or .env file.
    """

    # --- Application ---
    APP_NAME: str = "Vidu Video Generator"
    DEBUG: bool = False

    # --- Vidu API ---
    VIDU_API_KEY: str = ""
    VIDU_API_BASE_URL: str = "https://api.vidu.com"
    VIDU_HTTP_TIMEOUT: float = 30.0

    # --- Polling ---
    POLL_INTERVAL_SECONDS: float = 5.0
    MAX_POLL_ATTEMPTS: int = 60  # ~5 minutes at the default cadence

    # --- Upload ---
    MAX_UPLOAD_BYTES: int = 10 * 1024 * 1024

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings singleton."""
    return Settings()
