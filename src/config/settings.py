"""Environment configuration and validation.

This module defines strongly-typed application settings loaded from environment variables
(optionally via a local `.env` file).
"""

from __future__ import annotations

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class Settings(BaseSettings):
    """Interpreter settings loaded from environment variables.

    Model artifact paths are resolved relative to the working directory of the process.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    intent_model_path: str = Field(default="models/intent.joblib", alias="INTENT_MODEL_PATH")
    token_model_path: str = Field(default="models/token.joblib", alias="TOKEN_MODEL_PATH")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    @field_validator("intent_model_path", "token_model_path")
    @classmethod
    def validate_model_path(cls, value: str) -> str:
        """Validate that a model artifact path is configured."""

        value = value.strip()
        if not value:
            raise ValueError("model artifact path must not be empty")
        return value

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        """Validate that the log level is one of the standard `logging` level names."""

        level = value.strip().upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"LOG_LEVEL must be one of {', '.join(_LOG_LEVELS)}")
        return level


def load_settings() -> Settings:
    """Load and validate settings from environment variables.

    Raises:
        RuntimeError: If the environment configuration is invalid.
    """

    try:
        return Settings()
    except ValidationError as exc:
        raise RuntimeError(f"Invalid environment configuration: {exc}") from exc
