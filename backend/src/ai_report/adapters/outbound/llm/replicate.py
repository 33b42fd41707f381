"""Replicate predictions provider. Generation runs as a polled job."""

from __future__ import annotations

import httpx

from ai_report.adapters.outbound.llm.base import dig, post_json
from ai_report.domain.entities import AsyncJob
from ai_report.domain.exceptions import MalformedResponseError
from ai_report.shared.providers.polling import (
    DEFAULT_INTERVAL_S,
    DEFAULT_MAX_POLLS,
    poll_job,
)
from ai_report.shared.providers.types import SYSTEM_INSTRUCTION, ProviderConfig

REPLICATE_BASE_URL = "https://api.replicate.com/v1"


async def submit_prediction(
    client: httpx.AsyncClient, cfg: ProviderConfig, prompt: str
) -> AsyncJob:
    """Create the prediction and return a pending job pointing at its status URL."""
    base_url = cfg.metadata.get("base_url", REPLICATE_BASE_URL)
    data = await post_json(
        client,
        f"{base_url}/models/{cfg.model}/predictions",
        headers={
            "Authorization": f"Token {cfg.api_key}",
            "Content-Type": "application/json",
        },
        body={
            "input": {
                "prompt": prompt,
                "system_prompt": SYSTEM_INSTRUCTION,
                "temperature": cfg.temperature,
            }
        },
        timeout_s=cfg.timeout_s,
    )
    status_url = dig(data, "urls", "get")
    if not isinstance(status_url, str) or not status_url:
        raise MalformedResponseError("missing status URL")
    return AsyncJob(status_url=status_url)


async def invoke_replicate(
    client: httpx.AsyncClient, cfg: ProviderConfig, prompt: str
) -> str:
    job = await submit_prediction(client, cfg, prompt)
    return await poll_job(
        client,
        job,
        headers={"Authorization": f"Token {cfg.api_key}"},
        max_polls=cfg.metadata.get("max_polls", DEFAULT_MAX_POLLS),
        interval_s=cfg.metadata.get("poll_interval_s", DEFAULT_INTERVAL_S),
    )
