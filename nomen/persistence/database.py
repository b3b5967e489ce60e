"""Engine and session factory for the Postgres store."""

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from nomen.config import Settings


def create_engine(settings: Settings) -> AsyncEngine:
    """Pooled asyncpg engine.

    Merges hold row locks on two accounts for the length of a transaction,
    so the pool is sized from settings rather than left at the default.
    """
    database = settings.database
    return create_async_engine(
        database.url,
        echo=settings.debug,
        pool_pre_ping=True,
        pool_size=database.pool_size,
        max_overflow=database.max_overflow,
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Sessions for ``PostgresTransactionManager``.

    Commits are explicit and rows are mapped to frozen models right away,
    so neither expiry nor autoflush is wanted.
    """
    return async_sessionmaker(engine, expire_on_commit=False, autoflush=False)
