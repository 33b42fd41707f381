"""Shared plumbing for provider adapters.

``make_adapter`` binds a pure request function to its configuration and
returns the uniform ``attempt(prompt)`` callable.  Request functions raise;
the adapter converts every failure into a ``Failure`` outcome.
"""

from __future__ import annotations

import time
from typing import Any

import httpx
import structlog

from ai_report.domain.entities import Failure, ProviderOutcome, Success
from ai_report.domain.exceptions import (
    ConfigurationMissingError,
    MalformedResponseError,
    ProviderError,
    TransportError,
)
from ai_report.shared.observability.metrics import PROVIDER_ATTEMPTS, PROVIDER_LATENCY
from ai_report.shared.providers.types import Adapter, ProviderConfig, RequestFn

logger = structlog.get_logger(__name__)


def make_adapter(
    cfg: ProviderConfig,
    request_fn: RequestFn,
    client: httpx.AsyncClient,
) -> Adapter:
    """Wrap ``request_fn`` into an adapter that never raises."""
    pid = cfg.provider_id

    async def attempt(prompt: str) -> ProviderOutcome:
        log = logger.bind(provider=pid.value)

        if not cfg.has_key:
            reason = ConfigurationMissingError(cfg.credential_name).reason
            log.info("provider_skipped", reason=reason)
            PROVIDER_ATTEMPTS.labels(provider=pid.value, outcome="failure").inc()
            return Failure(pid, reason)

        start = time.monotonic()
        try:
            text = await request_fn(client, cfg, prompt)
            require_text(text)
        except ProviderError as exc:
            reason = exc.reason
        except httpx.HTTPError as exc:
            reason = f"transport error: {type(exc).__name__}: {exc}"
        except Exception as exc:
            reason = f"{type(exc).__name__}: {exc}"
        else:
            latency = time.monotonic() - start
            PROVIDER_ATTEMPTS.labels(provider=pid.value, outcome="success").inc()
            PROVIDER_LATENCY.labels(provider=pid.value).observe(latency)
            log.info("provider_attempt_success", latency_ms=round(latency * 1000, 1))
            return Success(pid, text)

        latency = time.monotonic() - start
        PROVIDER_ATTEMPTS.labels(provider=pid.value, outcome="failure").inc()
        PROVIDER_LATENCY.labels(provider=pid.value).observe(latency)
        log.warning(
            "provider_attempt_failed",
            error=reason,
            latency_ms=round(latency * 1000, 1),
        )
        return Failure(pid, reason)

    attempt.__name__ = f"attempt_{pid.value}"
    attempt.__qualname__ = attempt.__name__
    return attempt


def require_text(text: Any, reason: str = "empty response") -> str:
    """Return ``text`` unchanged, or raise if it is missing or blank."""
    if not isinstance(text, str) or not text.strip():
        raise MalformedResponseError(reason)
    return text


async def post_json(
    client: httpx.AsyncClient,
    url: str,
    *,
    headers: dict[str, str],
    body: dict[str, Any],
    timeout_s: float,
) -> Any:
    """POST ``body`` and decode the JSON reply; non-2xx raises ``TransportError``."""
    response = await client.post(url, headers=headers, json=body, timeout=timeout_s)
    if response.is_error:
        raise TransportError.from_status(response.status_code)
    try:
        return response.json()
    except ValueError as exc:
        raise MalformedResponseError("empty response") from exc


def dig(data: Any, *path: str | int) -> Any:
    """Follow a key/index path through nested JSON, ``None`` on any miss."""
    for step in path:
        if isinstance(step, int):
            if not isinstance(data, list) or len(data) <= step:
                return None
        elif not isinstance(data, dict):
            return None
        data = data[step] if isinstance(step, int) else data.get(step)
    return data
