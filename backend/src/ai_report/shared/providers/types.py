"""Core types for the provider fallback framework."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable

import httpx

from ai_report.domain.entities import ProviderOutcome
from ai_report.domain.enums import ProviderId

SYSTEM_INSTRUCTION = "You are an expert analyst that produces concise, actionable reports."


@dataclass(frozen=True)
class ProviderConfig:
    """Static configuration for a single provider.

    Attributes:
        provider_id:      Which provider this configures.
        credential_name:  Environment variable the credential comes from.
        api_key:          The credential itself ("" when not configured).
        model:            Provider-side model identifier.
        temperature:      Sampling temperature for providers that accept one.
        timeout_s:        Per-request HTTP timeout in seconds.
        metadata:         Arbitrary extra config (poll budget, base URL, etc.).
    """

    provider_id: ProviderId
    credential_name: str
    api_key: str = ""
    model: str = ""
    temperature: float = 0.2
    timeout_s: float = 60.0
    metadata: dict[str, Any] = field(default_factory=dict)

    @property
    def has_key(self) -> bool:
        return bool(self.api_key.strip())


# A provider request function: performs the HTTP exchange and returns the
# generated text, raising ProviderError subclasses on failure.
RequestFn = Callable[[httpx.AsyncClient, ProviderConfig, str], Awaitable[str]]

# The uniform adapter contract used by the sequencer.  Never raises.
Adapter = Callable[[str], Awaitable[ProviderOutcome]]
