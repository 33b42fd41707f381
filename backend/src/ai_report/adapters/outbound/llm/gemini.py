"""Google Gemini ``generateContent`` provider."""

from __future__ import annotations

from typing import Any

import httpx

from ai_report.adapters.outbound.llm.base import dig, post_json, require_text
from ai_report.shared.providers.types import SYSTEM_INSTRUCTION, ProviderConfig

GEMINI_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"


def extract_gemini_text(data: Any) -> str:
    return require_text(dig(data, "candidates", 0, "content", "parts", 0, "text"))


async def invoke_gemini(client: httpx.AsyncClient, cfg: ProviderConfig, prompt: str) -> str:
    base_url = cfg.metadata.get("base_url", GEMINI_BASE_URL)
    data = await post_json(
        client,
        f"{base_url}/models/{cfg.model}:generateContent?key={cfg.api_key}",
        headers={"Content-Type": "application/json"},
        body={
            "system_instruction": {"parts": [{"text": SYSTEM_INSTRUCTION}]},
            "contents": [{"role": "user", "parts": [{"text": prompt}]}],
            "generationConfig": {"temperature": cfg.temperature},
        },
        timeout_s=cfg.timeout_s,
    )
    return extract_gemini_text(data)
