"""Postgres wiring for the repositories."""

from collections.abc import AsyncIterator

import logfire
from dishka import Scope, provide
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from nomen.config import Settings
from nomen.domain.repository import (
    AccountRepository,
    ExternalIdentityRepository,
    MergeRequestRepository,
    ProfileAttributeRepository,
    ProfileRepository,
    TransactionManager,
)
from nomen.persistence.database import create_engine, create_session_factory
from nomen.persistence.repository import (
    PostgresAccountRepository,
    PostgresExternalIdentityRepository,
    PostgresMergeRequestRepository,
    PostgresProfileAttributeRepository,
    PostgresProfileRepository,
    PostgresTransactionManager,
)
from nomen.util.di.base import ProviderBase
from nomen.util.observability import instrument_sqlalchemy


class PersistenceProvider(ProviderBase):
    """Where accounts, profiles, identities and merge requests are stored."""

    __mock_component__ = "persistence"


class ProdPersistenceProvider(PersistenceProvider):
    """Repositories over one ``AsyncSession`` per request.

    Use cases delimit their own transactions through the
    ``TransactionManager``; the session only has to be closed, and rolled
    back if the request failed halfway.
    """

    __is_mock__ = False

    @provide(scope=Scope.APP)
    async def get_engine(self, settings: Settings) -> AsyncIterator[AsyncEngine]:
        engine = create_engine(settings)
        instrument_sqlalchemy(engine)
        yield engine
        await engine.dispose()

    @provide(scope=Scope.APP)
    def get_session_factory(
        self, engine: AsyncEngine
    ) -> async_sessionmaker[AsyncSession]:
        return create_session_factory(engine)

    @provide(scope=Scope.REQUEST)
    async def get_session(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> AsyncIterator[AsyncSession]:
        async with session_factory() as session:
            try:
                yield session
            except Exception:
                if session.in_transaction():
                    logfire.warn("Rolling back unfinished transaction")
                    await session.rollback()
                raise

    @provide(scope=Scope.REQUEST)
    def get_transaction_manager(self, session: AsyncSession) -> TransactionManager:
        return PostgresTransactionManager(session)

    @provide(scope=Scope.REQUEST)
    def get_account_repository(self, session: AsyncSession) -> AccountRepository:
        return PostgresAccountRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_profile_repository(self, session: AsyncSession) -> ProfileRepository:
        return PostgresProfileRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_identity_repository(
        self, session: AsyncSession
    ) -> ExternalIdentityRepository:
        return PostgresExternalIdentityRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_profile_attribute_repository(
        self, session: AsyncSession
    ) -> ProfileAttributeRepository:
        return PostgresProfileAttributeRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_merge_request_repository(
        self, session: AsyncSession
    ) -> MergeRequestRepository:
        return PostgresMergeRequestRepository(session)
