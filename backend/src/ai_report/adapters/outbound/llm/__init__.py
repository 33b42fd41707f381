"""LLM provider adapters — backed by the FallbackSequencer.

Each provider-specific HTTP call is a pure request function.  The adapter
wrapper handles credentials, error conversion, logging and metrics; the
sequencer handles ordering and fallback.
"""

from __future__ import annotations

from typing import Sequence

import httpx

from ai_report.adapters.outbound.llm.base import make_adapter
from ai_report.adapters.outbound.llm.chat import (
    OPENAI_BASE_URL,
    OPENROUTER_BASE_URL,
    invoke_chat_completion,
)
from ai_report.adapters.outbound.llm.gemini import invoke_gemini
from ai_report.adapters.outbound.llm.huggingface import invoke_huggingface
from ai_report.adapters.outbound.llm.replicate import invoke_replicate
from ai_report.domain.entities import AggregateResult
from ai_report.domain.enums import PROVIDER_PRIORITY, ProviderId
from ai_report.shared.providers.sequencer import FallbackSequencer
from ai_report.shared.providers.types import Adapter, ProviderConfig, RequestFn

REQUEST_FNS: dict[ProviderId, RequestFn] = {
    ProviderId.OPENAI: invoke_chat_completion,
    ProviderId.OPENROUTER: invoke_chat_completion,
    ProviderId.GEMINI: invoke_gemini,
    ProviderId.HUGGINGFACE: invoke_huggingface,
    ProviderId.REPLICATE: invoke_replicate,
}


def build_provider_configs(
    *,
    openai_api_key: str = "",
    openrouter_api_key: str = "",
    google_gemini_api_key: str = "",
    hugging_face_access_token: str = "",
    replicate_api_key: str = "",
    openai_model: str = "gpt-4.1-2025-04-14",
    openrouter_model: str = "openai/gpt-4o-mini",
    gemini_model: str = "gemini-1.5-flash",
    huggingface_model: str = "mistralai/Mixtral-8x7B-Instruct-v0.1",
    replicate_model: str = "meta/meta-llama-3-8b-instruct",
    temperature: float = 0.2,
    timeout_s: float = 60.0,
    replicate_max_polls: int = 30,
    replicate_poll_interval_s: float = 1.0,
) -> list[ProviderConfig]:
    """Build the ProviderConfig list, in fallback priority order."""
    configs = {
        ProviderId.OPENAI: ProviderConfig(
            provider_id=ProviderId.OPENAI,
            credential_name="OPENAI_API_KEY",
            api_key=openai_api_key,
            model=openai_model,
            temperature=temperature,
            timeout_s=timeout_s,
            metadata={"base_url": OPENAI_BASE_URL},
        ),
        ProviderId.OPENROUTER: ProviderConfig(
            provider_id=ProviderId.OPENROUTER,
            credential_name="OPENROUTER_API_KEY",
            api_key=openrouter_api_key,
            model=openrouter_model,
            temperature=temperature,
            timeout_s=timeout_s,
            metadata={"base_url": OPENROUTER_BASE_URL},
        ),
        ProviderId.GEMINI: ProviderConfig(
            provider_id=ProviderId.GEMINI,
            credential_name="GOOGLE_GEMINI_API_KEY",
            api_key=google_gemini_api_key,
            model=gemini_model,
            temperature=temperature,
            timeout_s=timeout_s,
        ),
        ProviderId.HUGGINGFACE: ProviderConfig(
            provider_id=ProviderId.HUGGINGFACE,
            credential_name="HUGGING_FACE_ACCESS_TOKEN",
            api_key=hugging_face_access_token,
            model=huggingface_model,
            temperature=temperature,
            timeout_s=timeout_s,
        ),
        ProviderId.REPLICATE: ProviderConfig(
            provider_id=ProviderId.REPLICATE,
            credential_name="REPLICATE_API_KEY",
            api_key=replicate_api_key,
            model=replicate_model,
            temperature=temperature,
            timeout_s=timeout_s,
            metadata={
                "max_polls": replicate_max_polls,
                "poll_interval_s": replicate_poll_interval_s,
            },
        ),
    }
    return [configs[pid] for pid in PROVIDER_PRIORITY]


def build_adapters(
    configs: Sequence[ProviderConfig], client: httpx.AsyncClient
) -> list[Adapter]:
    """One adapter per config, keeping the order of ``configs``."""
    return [make_adapter(cfg, REQUEST_FNS[cfg.provider_id], client) for cfg in configs]


class ReportLLMAdapter:
    """Report generation with ordered fallback across all providers.

    Owns the pooled HTTP client; call ``close()`` on shutdown.
    """

    def __init__(
        self,
        provider_configs: Sequence[ProviderConfig],
        *,
        timeout: float = 60.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._configs = tuple(provider_configs)
        self._client = client or httpx.AsyncClient(timeout=timeout)
        self._sequencer = FallbackSequencer(build_adapters(self._configs, self._client))

    @property
    def configs(self) -> tuple[ProviderConfig, ...]:
        return self._configs

    async def generate(self, prompt: str) -> AggregateResult:
        return await self._sequencer.run(prompt)

    async def close(self) -> None:
        await self._client.aclose()


__all__ = [
    "REQUEST_FNS",
    "ReportLLMAdapter",
    "build_adapters",
    "build_provider_configs",
    "make_adapter",
]
