"""Provider fallback framework.

Provides the uniform adapter contract, the fallback sequencer, and the
bounded polling protocol for asynchronous generation jobs.
"""

from ai_report.shared.providers.types import (
    SYSTEM_INSTRUCTION,
    Adapter,
    ProviderConfig,
    RequestFn,
)
from ai_report.shared.providers.polling import poll_job
from ai_report.shared.providers.sequencer import FallbackSequencer

__all__ = [
    "Adapter",
    "FallbackSequencer",
    "ProviderConfig",
    "RequestFn",
    "SYSTEM_INSTRUCTION",
    "poll_job",
]
