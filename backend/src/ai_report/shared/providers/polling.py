"""Bounded polling for providers that run generation as an asynchronous job.

State machine::

    PENDING → PENDING     (wait the fixed interval, spend one poll)
    PENDING → SUCCEEDED   (extract output)
    PENDING → FAILED      (stop immediately)
    PENDING → CANCELED    (stop immediately)
    budget exhausted      → timeout

The poll count is the only bound, so a loop whose caller has gone away still
ends after ``max_polls`` status reads.
"""

from __future__ import annotations

import asyncio
from dataclasses import replace
from typing import Any, Awaitable, Callable

import httpx
import structlog

from ai_report.domain.entities import AsyncJob
from ai_report.domain.enums import JobStatus
from ai_report.domain.exceptions import (
    AsyncTerminalFailureError,
    AsyncTimeoutError,
    MalformedResponseError,
    TransportError,
)
from ai_report.shared.observability.metrics import POLL_ITERATIONS

logger = structlog.get_logger(__name__)

DEFAULT_MAX_POLLS = 30
DEFAULT_INTERVAL_S = 1.0


def join_output(output: Any) -> str:
    """Flatten job output: a list of segments is joined by newlines."""
    if output is None:
        return ""
    if isinstance(output, list):
        return "\n".join("" if part is None else str(part) for part in output)
    return str(output)


async def read_status(
    client: httpx.AsyncClient, job: AsyncJob, headers: dict[str, str]
) -> AsyncJob:
    """Issue one status read and return the updated job snapshot."""
    response = await client.get(job.status_url, headers=headers)
    if response.is_error:
        raise TransportError.from_status(response.status_code)
    body = response.json()
    if not isinstance(body, dict):
        raise MalformedResponseError("empty response")
    status = JobStatus.from_remote(body.get("status"))
    output = join_output(body.get("output")) if status is JobStatus.SUCCEEDED else None
    return replace(job, status=status, output=output)


async def poll_job(
    client: httpx.AsyncClient,
    job: AsyncJob,
    *,
    headers: dict[str, str],
    max_polls: int = DEFAULT_MAX_POLLS,
    interval_s: float = DEFAULT_INTERVAL_S,
    sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
) -> str:
    """Poll ``job`` until it reaches a terminal state and return its output.

    Raises:
        AsyncTerminalFailureError: The job reported ``failed`` or ``canceled``.
        MalformedResponseError: The job succeeded with blank output.
        AsyncTimeoutError: Still pending after ``max_polls`` status reads.
        TransportError: A status read returned a non-2xx response.
    """
    log = logger.bind(status_url=job.status_url, max_polls=max_polls)

    for poll in range(1, max_polls + 1):
        job = await read_status(client, job, headers)

        if job.status is JobStatus.SUCCEEDED:
            POLL_ITERATIONS.observe(poll)
            if not job.output or not job.output.strip():
                raise MalformedResponseError("empty output")
            log.debug("job_succeeded", polls=poll)
            return job.output

        if job.status.is_terminal:
            POLL_ITERATIONS.observe(poll)
            log.info("job_terminal_failure", status=job.status.value, polls=poll)
            raise AsyncTerminalFailureError(job.status.value)

        if poll < max_polls:
            await sleep(interval_s)

    POLL_ITERATIONS.observe(max_polls)
    log.warning("job_poll_timeout")
    raise AsyncTimeoutError(max_polls)
