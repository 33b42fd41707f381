"""Global exception handlers — map domain errors to HTTP responses."""

from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.responses import ORJSONResponse
import structlog

from ai_report.domain.exceptions import ValidationError

logger = structlog.get_logger(__name__)


def unexpected_error_response(exc: Exception) -> ORJSONResponse:
    """The 500 body every unhandled fault is reported with."""
    return ORJSONResponse(
        status_code=500,
        content={"error": "Unexpected error", "details": str(exc)},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register all domain→HTTP exception mappings."""

    @app.exception_handler(ValidationError)
    async def handle_validation(request: Request, exc: ValidationError) -> ORJSONResponse:
        logger.info("validation_error_http", message=exc.message, path=request.url.path)
        return ORJSONResponse(
            status_code=400,
            content={"error": exc.message},
        )

    @app.exception_handler(Exception)
    async def handle_unexpected(request: Request, exc: Exception) -> ORJSONResponse:
        logger.exception("unhandled_exception", error=str(exc))
        return unexpected_error_response(exc)
