"""Centralized application configuration using Pydantic Settings.

Loads configuration from environment variables and `.env` file with
full validation, type coercion, and sensible defaults.

Usage:
    from chat_assistant.config import get_settings

    settings = get_settings()  # cached singleton
    print(settings.COMPLETION_ENDPOINT)
"""
from __future__ import annotations

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables / .env file.

    Every field has a default, so both the completion service and the
    terminal client start without any configuration.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",  # silently ignore unknown env vars
    )

    # ── Flask ──────────────────────────────────────────────────────────
    FLASK_ENV: str = Field(default="development", description="Flask environment (development/production)")
    FLASK_DEBUG: bool = Field(default=False, description="Enable Flask debug mode")
    SECRET_KEY: str = Field(default="change-me-in-production", description="Flask secret key")

    # ── Completion service ────────────────────────────────────────────
    SERVER_HOST: str = Field(default="0.0.0.0", description="Interface the completion service binds to")
    SERVER_PORT: int = Field(default=4000, ge=1, le=65535, description="Port the completion service listens on")
    CORS_ORIGINS: str = Field(default="*", description="Allowed CORS origins for /api/*")

    # ── Completion client ─────────────────────────────────────────────
    COMPLETION_ENDPOINT: str = Field(
        default="http://localhost:4000/api/completion",
        description="URL the client POSTs completion requests to",
    )
    COMPLETION_TIMEOUT_SECONDS: float | None = Field(
        default=None,
        gt=0,
        description="Optional request deadline; unset means wait indefinitely",
    )

    # ── Logging ───────────────────────────────────────────────────────
    LOG_LEVEL: str = Field(default="INFO", description="Logging level (DEBUG/INFO/WARNING/ERROR)")
    LOG_FORMAT: str = Field(default="console", description="Log output format ('json' for prod, 'console' for dev)")

    # ── Validators ────────────────────────────────────────────────────

    @field_validator("SECRET_KEY")
    @classmethod
    def validate_secret_key(cls, v: str, info) -> str:
        """Refuse the default secret key in production."""
        env = info.data.get("FLASK_ENV", "development")
        if env == "production" and v == "change-me-in-production":
            raise ValueError("SECRET_KEY must be changed from the default in production.")
        return v

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Normalize and validate log level."""
        v = v.upper().strip()
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v not in valid_levels:
            raise ValueError(f"LOG_LEVEL must be one of {valid_levels}, got '{v}'")
        return v

    @field_validator("LOG_FORMAT")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        """Validate log format."""
        v = v.lower().strip()
        if v not in ("json", "console"):
            raise ValueError("LOG_FORMAT must be 'json' or 'console'")
        return v

    @field_validator("COMPLETION_ENDPOINT")
    @classmethod
    def validate_endpoint(cls, v: str) -> str:
        """Ensure the endpoint is an http(s) URL without a trailing slash."""
        v = v.strip().rstrip("/")
        if not v.startswith(("http://", "https://")):
            raise ValueError("COMPLETION_ENDPOINT must be an http:// or https:// URL")
        return v


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached singleton Settings instance.

    Uses `lru_cache` so the `.env` file is only read once.
    Call this everywhere instead of instantiating Settings directly.
    """
    return Settings()
