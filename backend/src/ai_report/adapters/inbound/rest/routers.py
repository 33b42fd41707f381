"""Health, Metrics, AI Report — REST routers."""

from __future__ import annotations

import structlog
from fastapi import APIRouter, Depends, Request
from fastapi.responses import ORJSONResponse
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest
from starlette.responses import Response

from ai_report.adapters.outbound.llm import ReportLLMAdapter
from ai_report.application.dtos import (
    AllFailedResponse,
    ErrorResponse,
    HealthResponse,
    ReportResponse,
    parse_report_request,
)
from ai_report.config import Settings
from ai_report.dependencies import get_app_settings, get_llm
from ai_report.domain.entities import Success
from ai_report.domain.exceptions import ValidationError
from ai_report.shared.errors import unexpected_error_response

logger = structlog.get_logger(__name__)


# ═══════════════════════════════════════════════════════════════
#  Health
# ═══════════════════════════════════════════════════════════════
health_router = APIRouter(tags=["Health"])


@health_router.get("/health", response_model=HealthResponse)
async def health_check(
    settings: Settings = Depends(get_app_settings),
    llm: ReportLLMAdapter = Depends(get_llm),
) -> HealthResponse:
    return HealthResponse(
        status="ok",
        environment=settings.app_env.value,
        providers={
            cfg.provider_id.value: "configured" if cfg.has_key else "missing credential"
            for cfg in llm.configs
        },
    )


@health_router.get("/metrics")
async def prometheus_metrics() -> Response:
    return Response(
        content=generate_latest(),
        media_type=CONTENT_TYPE_LATEST,
    )


# ═══════════════════════════════════════════════════════════════
#  AI Report
# ═══════════════════════════════════════════════════════════════
report_router = APIRouter(tags=["AI Report"])


@report_router.post(
    "/ai-report",
    response_model=ReportResponse,
    responses={
        400: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
        502: {"model": AllFailedResponse},
    },
)
async def create_report(
    request: Request,
    llm: ReportLLMAdapter = Depends(get_llm),
) -> ORJSONResponse:
    """Generate a report with the first provider that succeeds."""
    try:
        generation = parse_report_request(await request.json())
        result = await llm.generate(generation.prompt)
    except ValidationError:
        raise
    except Exception as exc:
        logger.exception("ai_report_handler_error", error=str(exc))
        return unexpected_error_response(exc)

    if isinstance(result, Success):
        return ORJSONResponse(content=ReportResponse.from_success(result).model_dump())

    return ORJSONResponse(
        status_code=502,
        content=AllFailedResponse.from_result(result).model_dump(),
    )
