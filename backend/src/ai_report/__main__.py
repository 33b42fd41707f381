"""Run the gateway under uvicorn: ``python -m ai_report``."""

from __future__ import annotations

import uvicorn

from ai_report.dependencies import get_cached_settings


def main() -> None:
    settings = get_cached_settings()
    uvicorn.run(
        "ai_report.main:app",
        host=settings.app_host,
        port=settings.app_port,
        reload=settings.app_debug,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
