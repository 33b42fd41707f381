"""Value types passed between the boundary, the sequencer and the adapters."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from ai_report.domain.enums import JobStatus, ProviderId


@dataclass(frozen=True)
class GenerationRequest:
    prompt: str

    def __post_init__(self) -> None:
        if not isinstance(self.prompt, str) or not self.prompt:
            raise ValueError("prompt must be a non-empty string")


@dataclass(frozen=True)
class Success:
    provider: ProviderId
    text: str

    ok = True


@dataclass(frozen=True)
class Failure:
    provider: ProviderId
    reason: str

    ok = False


ProviderOutcome = Union[Success, Failure]


@dataclass(frozen=True)
class AllFailed:
    """Every adapter failed; ``attempts`` keeps the order they were tried in."""

    attempts: tuple[Failure, ...]

    ok = False


AggregateResult = Union[Success, AllFailed]


@dataclass(frozen=True)
class AsyncJob:
    """Snapshot of a provider-side job.  Each poll yields a new snapshot."""

    status_url: str
    status: JobStatus = JobStatus.PENDING
    output: str | None = None
