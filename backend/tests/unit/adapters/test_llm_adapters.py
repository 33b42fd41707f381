"""Unit tests for the provider adapters.

Provider HTTP APIs are replaced with ``httpx.MockTransport`` so the tests
verify payload building, text extraction, and failure conversion without
hitting real endpoints.
"""

from __future__ import annotations

import json
from dataclasses import replace
from typing import Any

import httpx
import pytest

from ai_report.adapters.outbound.llm import (
    REQUEST_FNS,
    ReportLLMAdapter,
    build_adapters,
    build_provider_configs,
    make_adapter,
)
from ai_report.domain.entities import AllFailed, Failure, Success
from ai_report.domain.enums import PROVIDER_PRIORITY, ProviderId
from ai_report.shared.providers.types import SYSTEM_INSTRUCTION, ProviderConfig

STATUS_URL = "https://api.replicate.com/v1/predictions/p-1"


def _config(configs: list[ProviderConfig], pid: ProviderId) -> ProviderConfig:
    return next(c for c in configs if c.provider_id == pid)


def _success_body(pid: ProviderId, text: Any) -> Any:
    """The provider's native reply carrying ``text``."""
    if pid in (ProviderId.OPENAI, ProviderId.OPENROUTER):
        return {"choices": [{"message": {"role": "assistant", "content": text}}]}
    if pid is ProviderId.GEMINI:
        return {"candidates": [{"content": {"parts": [{"text": text}]}}]}
    if pid is ProviderId.HUGGINGFACE:
        return [{"generated_text": text}]
    return {"status": "succeeded", "output": text}


def _provider_handler(pid: ProviderId, text: Any):
    def handler(request: httpx.Request) -> httpx.Response:
        if pid is ProviderId.REPLICATE and request.method == "POST":
            return httpx.Response(201, json={"id": "p-1", "urls": {"get": STATUS_URL}})
        return httpx.Response(200, json=_success_body(pid, text))

    return handler


async def _attempt(cfg: ProviderConfig, transport: httpx.MockTransport, prompt: str = "Q3 churn"):
    async with httpx.AsyncClient(transport=transport) as client:
        adapter = make_adapter(cfg, REQUEST_FNS[cfg.provider_id], client)
        return await adapter(prompt)


# ═══════════════════════════════════════════════════════════════
#  Behaviour shared by every provider
# ═══════════════════════════════════════════════════════════════
class TestAdapterContract:
    @pytest.mark.asyncio
    @pytest.mark.parametrize("pid", PROVIDER_PRIORITY)
    async def test_text_round_trips_unchanged(
        self, provider_configs, make_transport, pid: ProviderId
    ) -> None:
        text = "  Churn rose 4%.\nAct on onboarding.  "
        transport = make_transport(_provider_handler(pid, text))

        outcome = await _attempt(_config(provider_configs, pid), transport)

        assert outcome == Success(pid, text)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("pid", PROVIDER_PRIORITY)
    @pytest.mark.parametrize("text", ["", "   \n\t"])
    async def test_blank_text_is_failure(
        self, provider_configs, make_transport, pid: ProviderId, text: str
    ) -> None:
        transport = make_transport(_provider_handler(pid, text))

        outcome = await _attempt(_config(provider_configs, pid), transport)

        assert isinstance(outcome, Failure)
        expected = "empty output" if pid is ProviderId.REPLICATE else "empty response"
        assert outcome.reason == expected

    @pytest.mark.asyncio
    @pytest.mark.parametrize("pid", PROVIDER_PRIORITY)
    async def test_missing_credential_makes_no_call(
        self, provider_configs, make_transport, pid: ProviderId
    ) -> None:
        transport = make_transport(_provider_handler(pid, "never"))
        cfg = replace(_config(provider_configs, pid), api_key="  ")

        outcome = await _attempt(cfg, transport)

        assert transport.requests == []
        assert isinstance(outcome, Failure)
        assert outcome.reason.startswith("credential not configured")
        assert cfg.credential_name in outcome.reason

    @pytest.mark.asyncio
    @pytest.mark.parametrize("pid", PROVIDER_PRIORITY)
    async def test_non_2xx_is_http_status_failure(
        self, provider_configs, make_transport, pid: ProviderId
    ) -> None:
        transport = make_transport(lambda request: httpx.Response(503, text="overloaded"))

        outcome = await _attempt(_config(provider_configs, pid), transport)

        assert outcome == Failure(pid, "HTTP 503")
        assert len(transport.requests) == 1

    @pytest.mark.asyncio
    async def test_network_fault_is_failure(self, provider_configs, make_transport) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        outcome = await _attempt(
            _config(provider_configs, ProviderId.OPENAI), make_transport(handler)
        )

        assert isinstance(outcome, Failure)
        assert outcome.reason.startswith("transport error: ConnectError")

    @pytest.mark.asyncio
    async def test_non_json_body_is_empty_response(self, provider_configs, make_transport) -> None:
        transport = make_transport(lambda request: httpx.Response(200, text="<html>"))

        outcome = await _attempt(_config(provider_configs, ProviderId.GEMINI), transport)

        assert outcome == Failure(ProviderId.GEMINI, "empty response")

    @pytest.mark.asyncio
    async def test_unexpected_error_never_escapes(self, provider_configs) -> None:
        async def broken(client, cfg, prompt):
            raise KeyError("choices")

        cfg = _config(provider_configs, ProviderId.OPENAI)
        async with httpx.AsyncClient() as client:
            outcome = await make_adapter(cfg, broken, client)("p")

        assert isinstance(outcome, Failure)
        assert outcome.reason.startswith("KeyError")


# ═══════════════════════════════════════════════════════════════
#  Provider payloads
# ═══════════════════════════════════════════════════════════════
class TestChatCompletionProviders:
    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("pid", "url", "model"),
        [
            (ProviderId.OPENAI, "https://api.openai.com/v1/chat/completions", "gpt-4.1-2025-04-14"),
            (ProviderId.OPENROUTER, "https://openrouter.ai/api/v1/chat/completions", "openai/gpt-4o-mini"),
        ],
    )
    async def test_request_shape(
        self, provider_configs, make_transport, pid: ProviderId, url: str, model: str
    ) -> None:
        transport = make_transport(_provider_handler(pid, "ok"))
        cfg = _config(provider_configs, pid)

        await _attempt(cfg, transport, prompt="Summarise churn")

        request = transport.requests[0]
        assert str(request.url) == url
        assert request.headers["Authorization"] == f"Bearer {cfg.api_key}"
        body = json.loads(request.content)
        assert body["model"] == model
        assert body["temperature"] == 0.2
        assert body["messages"] == [
            {"role": "system", "content": SYSTEM_INSTRUCTION},
            {"role": "user", "content": "Summarise churn"},
        ]

    @pytest.mark.asyncio
    async def test_missing_choices_is_empty_response(self, provider_configs, make_transport) -> None:
        transport = make_transport(lambda request: httpx.Response(200, json={"choices": []}))

        outcome = await _attempt(_config(provider_configs, ProviderId.OPENROUTER), transport)

        assert outcome == Failure(ProviderId.OPENROUTER, "empty response")


class TestGeminiProvider:
    @pytest.mark.asyncio
    async def test_request_shape(self, provider_configs, make_transport) -> None:
        transport = make_transport(_provider_handler(ProviderId.GEMINI, "ok"))

        await _attempt(_config(provider_configs, ProviderId.GEMINI), transport, prompt="Summarise")

        request = transport.requests[0]
        assert request.url.path == "/v1beta/models/gemini-1.5-flash:generateContent"
        assert request.url.params["key"] == "gemini-key"
        body = json.loads(request.content)
        assert body["contents"] == [{"role": "user", "parts": [{"text": "Summarise"}]}]
        assert body["system_instruction"] == {"parts": [{"text": SYSTEM_INSTRUCTION}]}
        assert body["generationConfig"]["temperature"] == 0.2


class TestHuggingFaceProvider:
    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "reply",
        [
            [{"generated_text": "insight"}],
            {"generated_text": "insight"},
            [{"summary_text": "insight"}],
        ],
    )
    async def test_reply_shapes(self, provider_configs, make_transport, reply: Any) -> None:
        transport = make_transport(lambda request: httpx.Response(200, json=reply))

        outcome = await _attempt(_config(provider_configs, ProviderId.HUGGINGFACE), transport)

        assert outcome == Success(ProviderId.HUGGINGFACE, "insight")

    @pytest.mark.asyncio
    async def test_unrecognised_shape_is_empty_response(self, provider_configs, make_transport) -> None:
        transport = make_transport(lambda request: httpx.Response(200, json={"error": "loading"}))

        outcome = await _attempt(_config(provider_configs, ProviderId.HUGGINGFACE), transport)

        assert outcome == Failure(ProviderId.HUGGINGFACE, "empty response")

    @pytest.mark.asyncio
    async def test_request_shape(self, provider_configs, make_transport) -> None:
        transport = make_transport(_provider_handler(ProviderId.HUGGINGFACE, "ok"))

        await _attempt(_config(provider_configs, ProviderId.HUGGINGFACE), transport, prompt="Why?")

        request = transport.requests[0]
        assert request.url.path == "/models/mistralai/Mixtral-8x7B-Instruct-v0.1"
        assert request.headers["Authorization"] == "Bearer hf-token"
        body = json.loads(request.content)
        assert body["inputs"].endswith("Why?")
        assert body["options"] == {"wait_for_model": True}


class TestReplicateProvider:
    @pytest.mark.asyncio
    async def test_submits_then_polls(self, provider_configs, make_transport) -> None:
        polls = {"count": 0}

        def handler(request: httpx.Request) -> httpx.Response:
            if request.method == "POST":
                return httpx.Response(201, json={"urls": {"get": STATUS_URL}})
            polls["count"] += 1
            if polls["count"] < 3:
                return httpx.Response(200, json={"status": "processing"})
            return httpx.Response(200, json={"status": "succeeded", "output": ["Line 1", "Line 2"]})

        transport = make_transport(handler)

        outcome = await _attempt(_config(provider_configs, ProviderId.REPLICATE), transport, prompt="Go")

        assert outcome == Success(ProviderId.REPLICATE, "Line 1\nLine 2")
        submit = transport.requests[0]
        assert str(submit.url) == (
            "https://api.replicate.com/v1/models/meta/meta-llama-3-8b-instruct/predictions"
        )
        assert submit.headers["Authorization"] == "Token r8-key"
        assert json.loads(submit.content)["input"]["prompt"] == "Go"
        assert [r.method for r in transport.requests] == ["POST", "GET", "GET", "GET"]

    @pytest.mark.asyncio
    async def test_missing_status_url(self, provider_configs, make_transport) -> None:
        transport = make_transport(lambda request: httpx.Response(201, json={"id": "p-1"}))

        outcome = await _attempt(_config(provider_configs, ProviderId.REPLICATE), transport)

        assert outcome == Failure(ProviderId.REPLICATE, "missing status URL")
        assert len(transport.requests) == 1

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status", ["failed", "canceled"])
    async def test_terminal_status(self, provider_configs, make_transport, status: str) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            if request.method == "POST":
                return httpx.Response(201, json={"urls": {"get": STATUS_URL}})
            return httpx.Response(200, json={"status": status})

        outcome = await _attempt(
            _config(provider_configs, ProviderId.REPLICATE), make_transport(handler)
        )

        assert outcome == Failure(ProviderId.REPLICATE, status)

    @pytest.mark.asyncio
    async def test_timeout(self, provider_configs, make_transport) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            if request.method == "POST":
                return httpx.Response(201, json={"urls": {"get": STATUS_URL}})
            return httpx.Response(200, json={"status": "starting"})

        transport = make_transport(handler)
        cfg = _config(provider_configs, ProviderId.REPLICATE)
        cfg = replace(cfg, metadata={**cfg.metadata, "max_polls": 4})

        outcome = await _attempt(cfg, transport)

        assert outcome == Failure(ProviderId.REPLICATE, "timeout")
        assert len(transport.requests) == 1 + 4


# ═══════════════════════════════════════════════════════════════
#  Registry
# ═══════════════════════════════════════════════════════════════
class TestRegistry:
    def test_configs_follow_priority_order(self) -> None:
        configs = build_provider_configs()
        assert [c.provider_id for c in configs] == list(PROVIDER_PRIORITY)
        assert [c.credential_name for c in configs] == [
            "OPENAI_API_KEY",
            "OPENROUTER_API_KEY",
            "GOOGLE_GEMINI_API_KEY",
            "HUGGING_FACE_ACCESS_TOKEN",
            "REPLICATE_API_KEY",
        ]
        assert not any(c.has_key for c in configs)

    def test_build_adapters_keeps_order(self, provider_configs) -> None:
        adapters = build_adapters(provider_configs, httpx.AsyncClient())
        assert [a.__name__ for a in adapters] == [
            f"attempt_{pid.value}" for pid in PROVIDER_PRIORITY
        ]

    @pytest.mark.asyncio
    async def test_falls_back_to_first_configured_provider(self, make_transport) -> None:
        configs = build_provider_configs(google_gemini_api_key="gemini-key")
        transport = make_transport(_provider_handler(ProviderId.GEMINI, "from gemini"))
        llm = ReportLLMAdapter(configs, client=httpx.AsyncClient(transport=transport))

        result = await llm.generate("Summarise")
        await llm.close()

        assert result == Success(ProviderId.GEMINI, "from gemini")
        assert len(transport.requests) == 1

    @pytest.mark.asyncio
    async def test_no_credentials_means_all_failed_without_calls(self, make_transport) -> None:
        transport = make_transport(lambda request: httpx.Response(200))
        llm = ReportLLMAdapter(build_provider_configs(), client=httpx.AsyncClient(transport=transport))

        result = await llm.generate("Summarise")
        await llm.close()

        assert isinstance(result, AllFailed)
        assert [f.provider for f in result.attempts] == list(PROVIDER_PRIORITY)
        assert transport.requests == []
