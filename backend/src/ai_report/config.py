"""AI Report Gateway — Application Configuration."""

from __future__ import annotations

import enum
from typing import Any

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Environment(str, enum.Enum):
    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"


class Settings(BaseSettings):
    """Centralised, validated configuration loaded from environment / .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ── Application ──────────────────────────────────────────
    app_name: str = "ai-report-gateway"
    app_env: Environment = Environment.DEVELOPMENT
    app_debug: bool = False
    app_host: str = "0.0.0.0"
    app_port: int = 8000
    log_level: str = "INFO"

    # ── Provider credentials (each optional) ─────────────────
    openai_api_key: str = ""
    openrouter_api_key: str = ""
    google_gemini_api_key: str = ""
    hugging_face_access_token: str = ""
    replicate_api_key: str = ""

    # ── Models ───────────────────────────────────────────────
    openai_model: str = "gpt-4.1-2025-04-14"
    openrouter_model: str = "openai/gpt-4o-mini"
    gemini_model: str = "gemini-1.5-flash"
    huggingface_model: str = "mistralai/Mixtral-8x7B-Instruct-v0.1"
    replicate_model: str = "meta/meta-llama-3-8b-instruct"
    llm_temperature: float = 0.2

    # ── Gateway settings ─────────────────────────────────────
    provider_timeout_seconds: float = 60.0
    replicate_max_polls: int = 30
    replicate_poll_interval_seconds: float = 1.0

    # ── Derived helpers ──────────────────────────────────────
    @property
    def is_production(self) -> bool:
        return self.app_env == Environment.PRODUCTION

    @field_validator("log_level")
    @classmethod
    def _upper_log_level(cls, v: str) -> str:
        return v.upper()

    @field_validator("replicate_max_polls")
    @classmethod
    def _positive_poll_budget(cls, v: int) -> int:
        if v < 1:
            raise ValueError("replicate_max_polls must be at least 1")
        return v

    @field_validator("replicate_poll_interval_seconds", "provider_timeout_seconds")
    @classmethod
    def _non_negative_seconds(cls, v: float) -> float:
        if v < 0:
            raise ValueError("durations must not be negative")
        return v


def get_settings(**overrides: Any) -> Settings:
    """Factory that allows test-time overrides."""
    return Settings(**overrides)
