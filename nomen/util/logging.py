"""Stdlib logging for third-party libraries.

Nomen's own events go through Logfire. Uvicorn, asyncpg and alembic log
through the standard library, so their output is levelled here.
"""

import logging
import sys

from nomen.config import Settings

_QUIET_LOGGERS = ("httpx", "httpcore", "asyncio")


def _root_level(settings: Settings) -> int:
    if settings.debug:
        return logging.DEBUG
    if settings.environment == "test":
        return logging.WARNING
    return logging.INFO


def setup_logging(settings: Settings) -> None:
    """Route stdlib logging to stdout at a level fitting the environment.

    SQL statements are only echoed in debug mode.

    Args:
        settings: Application settings
    """
    level = _root_level(settings)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)-8s [%(name)s] %(message)s",
        stream=sys.stdout,
        force=True,
    )

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(
        logging.INFO if settings.debug else logging.WARNING
    )

    logging.getLogger(__name__).info(
        "stdlib logging at %s for %s",
        logging.getLevelName(level),
        settings.environment,
    )
