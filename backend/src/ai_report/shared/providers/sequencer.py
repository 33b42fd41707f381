"""Fallback sequencer — the entry-point for report generation.

Walks the adapter registry in priority order, one attempt at a time, and
stops at the first success so that at most one provider is used on the
success path.  Adapters never raise; each failure is appended to the run's
own attempts log.
"""

from __future__ import annotations

from typing import Sequence

import structlog

from ai_report.domain.entities import AggregateResult, AllFailed, Failure, Success
from ai_report.shared.observability.metrics import REPORTS_TOTAL
from ai_report.shared.providers.types import Adapter

logger = structlog.get_logger(__name__)


class FallbackSequencer:
    """Tries adapters in a fixed order until one succeeds.

    Usage::

        sequencer = FallbackSequencer(build_adapters(configs, client))
        result = await sequencer.run("Summarise Q3 churn drivers")

    ``result`` is either the winning ``Success`` or ``AllFailed`` with one
    ``Failure`` per adapter, in the order they were tried.
    """

    def __init__(self, adapters: Sequence[Adapter]) -> None:
        if not adapters:
            raise ValueError("at least one adapter is required")
        self._adapters = tuple(adapters)

    async def run(self, prompt: str) -> AggregateResult:
        attempts: list[Failure] = []

        for adapter in self._adapters:
            outcome = await adapter(prompt)

            if isinstance(outcome, Success):
                if attempts:
                    logger.info(
                        "provider_failover_success",
                        provider=outcome.provider.value,
                        attempts=len(attempts) + 1,
                        failed_providers=[f.provider.value for f in attempts],
                    )
                REPORTS_TOTAL.labels(result="success", provider=outcome.provider.value).inc()
                return outcome

            attempts.append(outcome)

        logger.error(
            "all_providers_failed",
            attempts=[{"provider": f.provider.value, "error": f.reason} for f in attempts],
        )
        REPORTS_TOTAL.labels(result="all_failed", provider="none").inc()
        return AllFailed(tuple(attempts))
