"""FastAPI application entry-point.

Assembles routers, middleware, exception handlers, and lifecycle hooks.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from collections.abc import AsyncIterator

import structlog
from fastapi import FastAPI
from fastapi.responses import ORJSONResponse

from ai_report import __version__
from ai_report.adapters.inbound.rest.routers import health_router, report_router
from ai_report.adapters.outbound.llm import ReportLLMAdapter
from ai_report.config import Settings
from ai_report.dependencies import build_llm_adapter, get_cached_settings
from ai_report.shared.errors import register_exception_handlers
from ai_report.shared.middleware import (
    CorsHeadersMiddleware,
    LoggingMiddleware,
    MetricsMiddleware,
    RequestIdMiddleware,
)
from ai_report.shared.observability import configure_logging

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifecycle — startup & shutdown hooks."""
    settings: Settings = app.state.settings
    configure_logging(
        log_level=settings.log_level,
        json_logs=settings.is_production,
    )
    llm: ReportLLMAdapter = app.state.llm
    logger.info(
        "application_starting",
        env=settings.app_env.value,
        providers_configured=[c.provider_id.value for c in llm.configs if c.has_key],
    )

    yield

    await llm.close()
    logger.info("application_shutdown")


def create_app(
    settings: Settings | None = None,
    *,
    llm: ReportLLMAdapter | None = None,
) -> FastAPI:
    """Application factory — creates a fully configured FastAPI instance."""
    settings = settings or get_cached_settings()

    app = FastAPI(
        title="AI Report Gateway",
        description=(
            "Generates a concise analysis for a free-text prompt, falling back "
            "across several text-generation providers in a fixed priority order."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        default_response_class=ORJSONResponse,
        lifespan=lifespan,
    )

    # Store settings and the provider chain in app state for lifecycle access
    app.state.settings = settings
    app.state.llm = llm or build_llm_adapter(settings)

    # ── Middleware (last added = outermost) ──────────────────
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(LoggingMiddleware)
    app.add_middleware(RequestIdMiddleware)
    app.add_middleware(CorsHeadersMiddleware)

    # ── Exception handlers ───────────────────────────────────
    register_exception_handlers(app)

    # ── REST routers (versioned) ─────────────────────────────
    api_v1 = "/api/v1"
    app.include_router(health_router, prefix=api_v1)
    app.include_router(report_router, prefix=api_v1)

    @app.get("/")
    async def root() -> dict[str, str]:
        return {
            "message": "AI Report Gateway is running",
            "docs": "/docs",
            "health": f"{api_v1}/health",
        }

    return app


# Uvicorn entry-point
app = create_app()
