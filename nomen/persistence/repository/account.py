"""Account repository implementation using PostgreSQL."""

from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from nomen.domain.error import NotFoundError
from nomen.domain.model.account import Account
from nomen.domain.repository.account import AccountRepository
from nomen.domain.value import AccountId, ProfileId
from nomen.persistence.mappers import account_to_dict, row_to_account
from nomen.persistence.tables import accounts_table


class PostgresAccountRepository(AccountRepository):
    """PostgreSQL implementation of AccountRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(
        self, account_id: AccountId, for_update: bool = False
    ) -> Optional[Account]:
        """Get account by ID, optionally locking the row."""
        stmt = select(accounts_table).where(accounts_table.c.id == account_id)
        if for_update:
            stmt = stmt.with_for_update()
        result = await self.session.execute(stmt)
        row = result.mappings().first()

        if not row:
            return None

        return row_to_account(dict(row))

    async def insert_if_absent(self, account: Account) -> Account:
        """Insert account, ignoring a concurrent or repeated insert.

        Args:
            account: Account to insert

        Returns:
            The stored account
        """
        stmt = (
            insert(accounts_table)
            .values(**account_to_dict(account))
            .on_conflict_do_nothing(index_elements=["id"])
        )
        await self.session.execute(stmt)
        await self.session.flush()

        stored = await self.find_by_id(account.id)
        if stored is None:
            # Deleted by a merge between the insert and the read
            raise NotFoundError("Account", str(account.id))
        return stored

    async def set_profile(self, account_id: AccountId, profile_id: ProfileId) -> None:
        """Point account at a profile."""
        stmt = (
            accounts_table.update()
            .where(accounts_table.c.id == account_id)
            .values(profile_id=profile_id, updated_at=func.now())
        )
        await self.session.execute(stmt)
        await self.session.flush()

    async def delete(self, account_id: AccountId) -> None:
        """Delete account."""
        stmt = accounts_table.delete().where(accounts_table.c.id == account_id)
        await self.session.execute(stmt)
        await self.session.flush()
