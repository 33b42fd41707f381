"""Prometheus metrics for the report gateway."""

from __future__ import annotations

from prometheus_client import Counter, Histogram


# ── HTTP metrics ─────────────────────────────────────────────
HTTP_REQUESTS_TOTAL = Counter(
    "http_requests_total",
    "Total HTTP requests",
    ["method", "endpoint", "status_code"],
)

HTTP_REQUEST_DURATION = Histogram(
    "http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["method", "endpoint"],
    buckets=(0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0, 60.0),
)

# ── Provider metrics ─────────────────────────────────────────
PROVIDER_ATTEMPTS = Counter(
    "provider_attempts_total",
    "Provider attempts by outcome",
    ["provider", "outcome"],  # success / failure
)

PROVIDER_LATENCY = Histogram(
    "provider_attempt_latency_seconds",
    "Latency of a single provider attempt",
    ["provider"],
    buckets=(0.5, 1.0, 2.0, 5.0, 10.0, 30.0, 60.0),
)

POLL_ITERATIONS = Histogram(
    "async_job_polls",
    "Status reads spent per asynchronous job",
    buckets=(1, 2, 5, 10, 20, 30),
)

# ── Report metrics ───────────────────────────────────────────
REPORTS_TOTAL = Counter(
    "ai_reports_total",
    "Report requests by final result",
    ["result", "provider"],  # success / all_failed
)
