#!/usr/bin/env python3
"""Serve the interaction API under uvicorn.

Logfire is configured here, before the app module is imported, so that
import-time failures (bad settings, missing dependencies) are reported.
"""

import sys

import logfire
import uvicorn

from interaction.config import Settings
from interaction.util.observability import configure_logfire

APP_PATH = "interaction.interface.api.app:app"


def main() -> int:
    settings = Settings()
    configure_logfire(settings)

    logfire.info(
        "Starting interaction API",
        environment=settings.environment,
        git_sha=settings.git_sha,
        port=settings.port,
    )
    try:
        uvicorn.run(
            APP_PATH,
            host="0.0.0.0",
            port=settings.port,
            log_level="debug" if settings.debug else "info",
        )
    except Exception as e:
        logfire.error(
            "Interaction API failed to start",
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        # Let the process exit non-zero so the orchestrator restarts it
        raise
    return 0


if __name__ == "__main__":
    sys.exit(main())
