# securelayer/core/config.py
from __future__ import annotations

from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Security layer settings, loaded from environment variables and/or .env file.
    """

    # Environment settings
    APP_NAME: str = "securelayer"
    APP_ENV: str = "development"
    LOG_LEVEL: str = "INFO"

    # Encryption at rest (BYOK provider keys)
    ENCRYPTION_KEY: Optional[str] = Field(default=None, repr=False)

    # Rate limiting (per-key fixed windows)
    RATE_LIMIT_AI_MAX_REQUESTS: int = 30
    RATE_LIMIT_AI_WINDOW_SECONDS: float = 60.0
    RATE_LIMIT_UPLOAD_MAX_REQUESTS: int = 10
    RATE_LIMIT_UPLOAD_WINDOW_SECONDS: float = 60.0
    RATE_LIMIT_SWEEP_INTERVAL_SECONDS: float = 60.0

    @property
    def is_production(self) -> bool:
        return self.APP_ENV == "production"

    @property
    def is_development(self) -> bool:
        return self.APP_ENV in ("development", "dev", "local")

    @field_validator("APP_ENV", mode="before")
    @classmethod
    def _normalize_env(cls, value: Optional[str]) -> str:
        """Treat APP_ENV case-insensitively; empty means development."""
        return (value or "development").strip().lower()

    @field_validator(
        "RATE_LIMIT_AI_MAX_REQUESTS",
        "RATE_LIMIT_AI_WINDOW_SECONDS",
        "RATE_LIMIT_UPLOAD_MAX_REQUESTS",
        "RATE_LIMIT_UPLOAD_WINDOW_SECONDS",
        "RATE_LIMIT_SWEEP_INTERVAL_SECONDS",
    )
    @classmethod
    def _require_positive(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("rate limit settings must be greater than zero")
        return value

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )


settings = Settings()
