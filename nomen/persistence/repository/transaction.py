"""Transaction manager backed by the request's SQLAlchemy session."""

from contextlib import asynccontextmanager
from typing import AsyncIterator

from sqlalchemy.ext.asyncio import AsyncSession

from nomen.domain.repository.transaction import TransactionManager


class PostgresTransactionManager(TransactionManager):
    """Transactions on the session shared by the request's repositories.

    The outermost block commits; inner blocks are savepoints.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[None]:
        """Open a transaction, or a savepoint if one is already open."""
        if self.session.in_transaction():
            async with self.session.begin_nested():
                yield
        else:
            async with self.session.begin():
                yield
