"""
Centralized configuration for the ValoHub backend.

All environment variables and settings should be defined here
to avoid duplication across modules.
"""
import os
from functools import lru_cache


class Settings:
    """Application settings loaded from environment variables."""

    # CORS - comma-separated list of allowed origins
    ALLOWED_ORIGINS: list = os.environ.get("ALLOWED_ORIGINS", "*").split(",")

    # Deployment environment; worker auth is only enforced in production.
    # NODE_ENV is still read so older deploy configs keep working.
    APP_ENV: str = os.environ.get("APP_ENV", os.environ.get("NODE_ENV", "development")).lower()

    # Shared secret the notification worker sends as X-API-Key
    WORKER_API_KEY: str = os.environ.get("WORKER_API_KEY", "")

    LOG_LEVEL: str = os.environ.get("LOG_LEVEL", "INFO").upper()

    @property
    def is_production(self) -> bool:
        return self.APP_ENV == "production"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Singleton instance for easy import
settings = get_settings()
