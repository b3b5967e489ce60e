#!/usr/bin/env python3
"""Serve the API under uvicorn.

Logfire is configured before the app module is imported, so failures
while building the app are reported too.
"""

import sys

import logfire
import uvicorn

from nomen.config import Settings
from nomen.util.logging import setup_logging
from nomen.util.observability import configure_logfire


def main() -> int:
    settings = Settings()
    setup_logging(settings)
    configure_logfire(settings)

    logfire.info(
        "Serving nomen",
        environment=settings.environment,
        git_sha=settings.git_sha,
        port=settings.port,
    )
    try:
        uvicorn.run(
            "nomen.interface.api.app:app",
            host="0.0.0.0",
            port=settings.port,
            log_level="debug" if settings.debug else "info",
        )
    except Exception:
        logfire.exception("nomen failed to start")
        raise
    return 0


if __name__ == "__main__":
    sys.exit(main())
