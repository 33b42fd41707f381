"""Domain enumerations for the report gateway."""

from __future__ import annotations

import enum


class ProviderId(str, enum.Enum):
    """The closed set of text-generation providers."""

    OPENAI = "openai"
    OPENROUTER = "openrouter"
    GEMINI = "gemini"
    HUGGINGFACE = "huggingface"
    REPLICATE = "replicate"


class JobStatus(str, enum.Enum):
    """Lifecycle of an asynchronous generation job."""

    PENDING = "pending"
    SUCCEEDED = "succeeded"
    FAILED = "failed"
    CANCELED = "canceled"

    @property
    def is_terminal(self) -> bool:
        return self is not JobStatus.PENDING

    @classmethod
    def from_remote(cls, value: object) -> JobStatus:
        """Map a provider-reported status; anything not terminal is pending."""
        try:
            return cls(str(value).lower())
        except ValueError:
            return cls.PENDING


# Fallback priority: first entry is tried first.
PROVIDER_PRIORITY: tuple[ProviderId, ...] = (
    ProviderId.OPENAI,
    ProviderId.OPENROUTER,
    ProviderId.GEMINI,
    ProviderId.HUGGINGFACE,
    ProviderId.REPLICATE,
)
