"""Application settings using Pydantic."""

import os
from functools import lru_cache
from pathlib import Path
from typing import Any, Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Environment
    environment: str = Field(
        default=os.getenv("ENVIRONMENT", "development"),
        description="Deployment environment (development|production)",
    )

    # Remote generation service
    generation_provider: Literal["real", "fake", "off"] = Field(
        default="real",
        description=(
            "Generation provider mode: real=call the remote service, "
            "fake=serve a local MP4 fixture, off=disable generation."
        ),
    )
    generation_api_url: str = Field(
        default="https://oi-server.onrender.com/chat/completions",
        description="Chat-completion endpoint that produces the video",
    )
    generation_model: str = "replicate/google/veo-3"
    generation_api_key: str = Field(
        default="",
        description="Bearer token for the generation endpoint (empty = no Authorization header)",
    )
    generation_customer_id: str = Field(
        default="",
        description="Value for the CustomerId header (empty = header omitted)",
    )
    generation_timeout_s: float | None = Field(
        default=None,
        description=(
            "Timeout for outbound generation calls in seconds. "
            "Unset means wait indefinitely for the remote service."
        ),
    )
    generation_fake_clip_path: str = Field(
        default="fake_clips/sample.mp4",
        description="MP4 fixture served when GENERATION_PROVIDER=fake",
    )

    # API Configuration
    api_host: str = "127.0.0.1"
    api_port: int = 8000
    cors_origins: list[str] = Field(
        default_factory=list,
        description="CORS allowlist for browser clients (empty = CORS disabled).",
    )
    generate_rate_limit: str = Field(
        default="10/minute",
        description="Rate limit for POST /generate-video (SlowAPI syntax)",
    )

    # Observability / Alerting
    sentry_dsn: str = Field(
        default="",
        description="Sentry DSN for error monitoring. Leave empty to disable.",
    )
    log_level: str = "INFO"

    # Client-side state (CLI)
    gateway_url: str = Field(
        default="http://127.0.0.1:8000",
        description="Base URL of the gateway used by `reelsmith generate`",
    )
    history_path: str = Field(
        default=str(Path.home() / ".reelsmith" / "history.json"),
        description="JSON file holding the local generation history",
    )
    history_limit: int = Field(default=10, description="Maximum number of history records kept")
    output_dir: str = Field(
        default=str(Path.home() / ".reelsmith" / "videos"),
        description="Directory where generated videos are written",
    )

    @field_validator("history_limit")
    @classmethod
    def validate_history_limit(cls, v: int) -> int:
        if v < 1:
            raise ValueError("HISTORY_LIMIT must be at least 1")
        return v

    @field_validator("generation_timeout_s", mode="before")
    @classmethod
    def validate_generation_timeout(cls, v: Any) -> Any:
        # Empty env var means "unset".
        if isinstance(v, str) and not v.strip():
            return None
        return v


# Global settings instance
@lru_cache(maxsize=1)
def get_settings() -> Settings:
    # Lazily construct Settings so tests and CLIs can set env vars before first access.
    return Settings()


def reset_settings_cache() -> None:
    get_settings.cache_clear()


class _SettingsProxy:
    """Lazy proxy for Settings.

    This avoids eager settings instantiation at import time, which can make tests
    order-dependent when env vars are changed during `pytest_configure()`.
    """

    def __getattr__(self, name: str) -> Any:
        return getattr(get_settings(), name)

    def __repr__(self) -> str:  # pragma: no cover
        return f"<SettingsProxy {get_settings()!r}>"


settings = _SettingsProxy()
