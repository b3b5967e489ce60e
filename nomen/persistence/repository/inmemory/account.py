"""In-memory account repository for testing."""

from datetime import datetime, timezone
from typing import Optional

from nomen.domain.model.account import Account
from nomen.domain.repository.account import AccountRepository
from nomen.domain.value import AccountId, ProfileId

from .database import InMemoryDatabase


class InMemoryAccountRepository(AccountRepository):
    """In-memory implementation of AccountRepository for testing."""

    def __init__(self, database: InMemoryDatabase) -> None:
        self.database = database

    async def find_by_id(
        self, account_id: AccountId, for_update: bool = False
    ) -> Optional[Account]:
        """Find account by ID. Row locks are implied by the database lock."""
        return self.database.accounts.get(account_id)

    async def insert_if_absent(self, account: Account) -> Account:
        """Insert account unless present."""
        return self.database.accounts.setdefault(account.id, account)

    async def set_profile(self, account_id: AccountId, profile_id: ProfileId) -> None:
        """Point account at a profile."""
        account = self.database.accounts.get(account_id)
        if account is not None:
            self.database.accounts[account_id] = account.model_copy(
                update={
                    "profile_id": profile_id,
                    "updated_at": datetime.now(timezone.utc),
                }
            )

    async def delete(self, account_id: AccountId) -> None:
        """Delete account."""
        self.database.delete_account(account_id)
