"""Account repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from nomen.domain.model.account import Account
from nomen.domain.value import AccountId, ProfileId


class AccountRepository(ABC):
    """Repository for Account entity.

    Defines the contract for account persistence operations.
    Implementations live in the infrastructure layer.
    """

    @abstractmethod
    async def find_by_id(
        self, account_id: AccountId, for_update: bool = False
    ) -> Optional[Account]:
        """Find an account by ID.

        Args:
            account_id: The account's unique identifier
            for_update: Lock the row until the transaction ends

        Returns:
            The account if found, None otherwise
        """
        pass

    @abstractmethod
    async def insert_if_absent(self, account: Account) -> Account:
        """Insert an account unless one with the same ID exists.

        Must be safe under concurrent callers: a duplicate is not an error.

        Args:
            account: The account to insert

        Returns:
            The stored account (the existing one if it was already there)
        """
        pass

    @abstractmethod
    async def set_profile(self, account_id: AccountId, profile_id: ProfileId) -> None:
        """Point an account at a profile.

        Args:
            account_id: The account to update
            profile_id: The profile to link
        """
        pass

    @abstractmethod
    async def delete(self, account_id: AccountId) -> None:
        """Delete an account.

        Args:
            account_id: The account to delete
        """
        pass
