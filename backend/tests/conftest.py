"""Shared test fixtures."""

from __future__ import annotations

import json
from collections.abc import Callable
from typing import Any

import httpx
import pytest

from ai_report.adapters.outbound.llm import build_provider_configs
from ai_report.shared.providers.types import ProviderConfig

Handler = Callable[[httpx.Request], httpx.Response]


class RecordingTransport(httpx.MockTransport):
    """MockTransport that keeps every request it served."""

    def __init__(self, handler: Handler) -> None:
        self.requests: list[httpx.Request] = []

        def _record(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return handler(request)

        super().__init__(_record)

    def bodies(self) -> list[Any]:
        return [json.loads(r.content) if r.content else None for r in self.requests]


@pytest.fixture
def provider_configs() -> list[ProviderConfig]:
    """All five providers configured, with an instant poll interval."""
    return build_provider_configs(
        openai_api_key="sk-openai",
        openrouter_api_key="sk-openrouter",
        google_gemini_api_key="gemini-key",
        hugging_face_access_token="hf-token",
        replicate_api_key="r8-key",
        replicate_poll_interval_s=0.0,
    )


@pytest.fixture
def make_transport() -> Callable[[Handler], RecordingTransport]:
    return RecordingTransport


@pytest.fixture
def make_client() -> Callable[[httpx.MockTransport], httpx.AsyncClient]:
    def _make(transport: httpx.MockTransport) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=transport)

    return _make
