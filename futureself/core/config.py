"""
Application configuration.

Loads settings from environment variables and .env file.
All configuration is centralized here.
"""

from enum import Enum
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Environment(str, Enum):
    """Deployment mode. Controls how much error detail reaches clients."""

    DEVELOPMENT = "development"
    PRODUCTION = "production"


class Settings(BaseSettings):
    """Application settings loaded from environment.

    Attributes:
        project_name: Display name for the API.
        version: Current API version string.
        environment: development exposes stack traces and raw messages
            for unexpected errors; production never does.
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR).
        ai_api_url: Chat-completions endpoint of the reflection assistant.
        ai_api_key: Bearer token for the reflection assistant.
        ai_model: Model name sent to the reflection assistant.
        ai_timeout_seconds: HTTP timeout for reflection assistant calls.
    """

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    project_name: str = "Future Letters"
    version: str = "0.1.0"
    environment: Environment = Environment.PRODUCTION
    log_level: str = "INFO"

    ai_api_url: str = "https://openrouter.ai/api/v1/chat/completions"
    ai_api_key: Optional[str] = None
    ai_model: str = "google/gemini-2.0-flash-001"
    ai_timeout_seconds: float = 30.0

    @property
    def is_development(self) -> bool:
        """True when running in development mode."""
        return self.environment is Environment.DEVELOPMENT


settings = Settings()
