"""OpenAI-compatible chat completion providers (OpenAI, OpenRouter)."""

from __future__ import annotations

from typing import Any

import httpx

from ai_report.adapters.outbound.llm.base import dig, post_json, require_text
from ai_report.shared.providers.types import SYSTEM_INSTRUCTION, ProviderConfig

OPENAI_BASE_URL = "https://api.openai.com/v1"
OPENROUTER_BASE_URL = "https://openrouter.ai/api/v1"


def extract_chat_text(data: Any) -> str:
    """Text of the first choice of a chat completion."""
    return require_text(dig(data, "choices", 0, "message", "content"))


async def invoke_chat_completion(
    client: httpx.AsyncClient, cfg: ProviderConfig, prompt: str
) -> str:
    base_url = cfg.metadata.get("base_url", OPENAI_BASE_URL)
    data = await post_json(
        client,
        f"{base_url}/chat/completions",
        headers={
            "Authorization": f"Bearer {cfg.api_key}",
            "Content-Type": "application/json",
        },
        body={
            "model": cfg.model,
            "messages": [
                {"role": "system", "content": SYSTEM_INSTRUCTION},
                {"role": "user", "content": prompt},
            ],
            "temperature": cfg.temperature,
        },
        timeout_s=cfg.timeout_s,
    )
    return extract_chat_text(data)
