#!/usr/bin/env python3
"""Bring the schema to the latest Alembic revision.

Run before every deploy; the app assumes the schema is current.
"""

import sys

import logfire
from alembic import command
from alembic.config import Config

from nomen.config import Settings
from nomen.util.observability import configure_logfire


def main() -> int:
    settings = Settings()
    configure_logfire(settings)

    with logfire.span("migrations.upgrade", environment=settings.environment):
        try:
            command.upgrade(Config("alembic.ini"), "head")
        except Exception:
            logfire.exception("Schema upgrade failed")
            raise
    return 0


if __name__ == "__main__":
    sys.exit(main())
