"""Hugging Face Inference API provider.

The reply shape depends on the model's backend: a list of generations, a
single object, or a list of summaries.  Anything else counts as an empty
response.
"""

from __future__ import annotations

from typing import Any

import httpx

from ai_report.adapters.outbound.llm.base import dig, post_json, require_text
from ai_report.shared.providers.types import SYSTEM_INSTRUCTION, ProviderConfig

HUGGINGFACE_BASE_URL = "https://api-inference.huggingface.co/models"


def extract_huggingface_text(data: Any) -> str:
    for path in (
        (0, "generated_text"),
        ("generated_text",),
        (0, "summary_text"),
    ):
        text = dig(data, *path)
        if isinstance(text, str) and text.strip():
            return text
    return require_text(None)


async def invoke_huggingface(
    client: httpx.AsyncClient, cfg: ProviderConfig, prompt: str
) -> str:
    base_url = cfg.metadata.get("base_url", HUGGINGFACE_BASE_URL)
    data = await post_json(
        client,
        f"{base_url}/{cfg.model}",
        headers={
            "Authorization": f"Bearer {cfg.api_key}",
            "Content-Type": "application/json",
        },
        body={
            "inputs": f"{SYSTEM_INSTRUCTION}\n\n{prompt}",
            "parameters": {"temperature": cfg.temperature, "return_full_text": False},
            "options": {"wait_for_model": True},
        },
        timeout_s=cfg.timeout_s,
    )
    return extract_huggingface_text(data)
