"""Dependency injection container — wires adapters to routes.

FastAPI's ``Depends()`` system uses these factories to inject the
configured adapter into route handlers.  Tests swap them through
``app.dependency_overrides``.
"""

from __future__ import annotations

from functools import lru_cache

from fastapi import Request

from ai_report.adapters.outbound.llm import ReportLLMAdapter, build_provider_configs
from ai_report.config import Settings, get_settings


# ── Settings ─────────────────────────────────────────────────
@lru_cache(maxsize=1)
def get_cached_settings() -> Settings:
    return get_settings()


# ── LLM ──────────────────────────────────────────────────────
def build_llm_adapter(settings: Settings) -> ReportLLMAdapter:
    """Credentials are read here once and passed down; adapters never touch the environment."""
    configs = build_provider_configs(
        openai_api_key=settings.openai_api_key,
        openrouter_api_key=settings.openrouter_api_key,
        google_gemini_api_key=settings.google_gemini_api_key,
        hugging_face_access_token=settings.hugging_face_access_token,
        replicate_api_key=settings.replicate_api_key,
        openai_model=settings.openai_model,
        openrouter_model=settings.openrouter_model,
        gemini_model=settings.gemini_model,
        huggingface_model=settings.huggingface_model,
        replicate_model=settings.replicate_model,
        temperature=settings.llm_temperature,
        timeout_s=settings.provider_timeout_seconds,
        replicate_max_polls=settings.replicate_max_polls,
        replicate_poll_interval_s=settings.replicate_poll_interval_seconds,
    )
    return ReportLLMAdapter(configs, timeout=settings.provider_timeout_seconds)


def get_llm(request: Request) -> ReportLLMAdapter:
    return request.app.state.llm


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings
