"""
InfraGraph application configuration.

Loads settings from environment variables with sensible defaults for local
development.  Uses Pydantic BaseSettings so every value can be overridden via
an environment variable or a ``.env`` file placed next to the project root.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Central configuration for the InfraGraph service.

    All attributes can be overridden through environment variables of the same
    name (case-insensitive).  For example, set ``MAX_UPLOAD_BYTES`` in the
    shell or in a ``.env`` file to change the state-file size limit.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ── Application ─────────────────────────────────────────────────────────
    APP_NAME: str = "InfraGraph"
    APP_VERSION: str = "1.0.0"
    API_PREFIX: str = "/api"
    DEBUG: bool = False
    LOG_LEVEL: Optional[str] = None

    # ── CORS ────────────────────────────────────────────────────────────────
    CORS_ORIGINS: list[str] = ["http://localhost:3000"]

    # ── State ingestion ─────────────────────────────────────────────────────
    MAX_UPLOAD_BYTES: int = 10 * 1024 * 1024
    REDACT_SENSITIVE_ATTRIBUTES: bool = True

    # ── Validators ──────────────────────────────────────────────────────────

    @field_validator("CORS_ORIGINS", mode="before")
    @classmethod
    def parse_cors_origins(cls, value: object) -> list[str]:
        """Accept a comma-separated string *or* an actual list."""
        if isinstance(value, str):
            return [origin.strip() for origin in value.split(",") if origin.strip()]
        return list(value)  # type: ignore[arg-type]

    @field_validator("MAX_UPLOAD_BYTES", mode="after")
    @classmethod
    def validate_upload_limit(cls, value: int) -> int:
        """Reject non-positive upload limits."""
        if value <= 0:
            raise ValueError("MAX_UPLOAD_BYTES must be a positive integer.")
        return value


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached singleton of the application settings.

    Using ``lru_cache`` ensures the ``.env`` file is read only once and the
    same ``Settings`` instance is reused across the entire process.
    """
    return Settings()
