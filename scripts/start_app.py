#!/usr/bin/env python3
"""Serve the enrollment API with uvicorn.

Logfire is configured before the app module is imported so that failures
while building the app are reported too.
"""

import sys

import logfire
import uvicorn

from campus.config import Settings
from campus.util.observability import configure_logfire

APP = "campus.interface.api.app:app"


def main() -> int:
    settings = Settings()
    configure_logfire(settings)

    logfire.info(
        "Starting campus enrollment API",
        environment=settings.environment,
        git_sha=settings.git_sha,
        port=settings.port,
    )
    try:
        uvicorn.run(
            APP,
            host="0.0.0.0",
            port=settings.port,
            reload=settings.environment == "development",
            log_level="debug" if settings.debug else "info",
        )
    except Exception as e:
        logfire.error(
            "Application startup failed",
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        raise
    return 0


if __name__ == "__main__":
    sys.exit(main())
