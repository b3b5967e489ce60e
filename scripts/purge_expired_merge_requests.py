#!/usr/bin/env python3
"""Delete expired merge requests. Meant to run from cron."""

import asyncio
import sys

import logfire
from dishka import Scope

from nomen.application.usecase.merge import PurgeExpiredMergeRequestsUseCase
from nomen.config import Settings
from nomen.util.di.container import create_container
from nomen.util.observability import configure_logfire


async def purge() -> int:
    """Run the purge use case inside a request scope."""
    container = create_container()
    try:
        async with container(scope=Scope.REQUEST) as request_container:
            use_case = await request_container.get(PurgeExpiredMergeRequestsUseCase)
            response = await use_case.execute()
        return response.deleted
    finally:
        await container.close()


def main() -> int:
    settings = Settings()
    configure_logfire(settings)

    try:
        deleted = asyncio.run(purge())
    except Exception:
        logfire.exception("Merge request purge failed")
        raise
    logfire.info("Expired merge requests purged", deleted=deleted)
    return 0


if __name__ == "__main__":
    sys.exit(main())
