from __future__ import annotations

from pathlib import Path
from urllib.parse import urlparse

from pydantic import AnyUrl, Field
from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_FILE = Path(__file__).resolve().parents[2] / ".env"

_LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=(str(ENV_FILE), ".env"),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # App
    app_env: str = Field(default="development", alias="APP_ENV")
    frontend_url: AnyUrl = Field(
        default="http://localhost:3000", alias="FRONTEND_URL", validate_default=True
    )
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # Observability
    sentry_dsn: str | None = Field(default=None, alias="SENTRY_DSN")
    sentry_traces_sample_rate: float = Field(
        default=0.0, alias="SENTRY_TRACES_SAMPLE_RATE"
    )

    # Parsing limits
    parse_per_minute_limit: int = Field(default=60, alias="PARSE_PER_MINUTE_LIMIT")
    lifestyle_max_lines: int = Field(default=50, alias="LIFESTYLE_MAX_LINES")
    prompt_guard_max_chars: int = Field(default=600, alias="PROMPT_GUARD_MAX_CHARS")

    @model_validator(mode="after")
    def validate_runtime_constraints(self) -> "Settings":
        env = (self.app_env or "").strip().lower()
        is_prod = env in {"production", "prod"}

        frontend_origin = urlparse(str(self.frontend_url))
        frontend_host = (frontend_origin.hostname or "").lower()
        if is_prod and frontend_host in {"localhost", "127.0.0.1"}:
            raise ValueError(
                "Invalid FRONTEND_URL for production: localhost is not allowed. "
                "Set FRONTEND_URL to your public web domain."
            )

        if not (0.0 <= self.sentry_traces_sample_rate <= 1.0):
            raise ValueError("SENTRY_TRACES_SAMPLE_RATE must be 0..1")
        if self.parse_per_minute_limit < 0:
            raise ValueError("PARSE_PER_MINUTE_LIMIT must be >= 0 (0 disables)")
        if not (1 <= self.lifestyle_max_lines <= 500):
            raise ValueError("LIFESTYLE_MAX_LINES must be between 1 and 500")
        if self.prompt_guard_max_chars < 1:
            raise ValueError("PROMPT_GUARD_MAX_CHARS must be positive")

        self.log_level = (self.log_level or "INFO").strip().upper()
        if self.log_level not in _LOG_LEVELS:
            raise ValueError(f"LOG_LEVEL must be one of {sorted(_LOG_LEVELS)}")

        return self

    def is_sentry_configured(self) -> bool:
        return bool(self.sentry_dsn and self.sentry_dsn.strip())


settings = Settings()  # singleton import via env settings
