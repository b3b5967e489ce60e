"""Account domain service (identity binding)."""

import logfire

from nomen.domain.error import NotFoundError
from nomen.domain.model.account import Account
from nomen.domain.repository import AccountRepository
from nomen.domain.value import AccountId

from .base import Service


class AccountService(Service):
    """Domain service binding gateway principals to accounts."""

    def __init__(self, account_repository: AccountRepository) -> None:
        """Initialize account service.

        Args:
            account_repository: Account repository
        """
        self.account_repository = account_repository

    async def ensure_account(self, principal_id: AccountId) -> Account:
        """Make sure an account exists for a principal.

        Idempotent: principal and identity events may arrive in any order
        and more than once, so an existing account is simply returned.

        Args:
            principal_id: Gateway principal ID

        Returns:
            The account for that principal
        """
        with logfire.span(
            "account_service.ensure_account", principal_id=str(principal_id)
        ):
            account = await self.account_repository.insert_if_absent(
                Account(id=principal_id)
            )
            logfire.info(
                "Account ensured",
                account_id=str(account.id),
                has_profile=account.profile_id is not None,
            )
            return account

    async def get_by_id(self, account_id: AccountId) -> Account:
        """Get an account by ID.

        Args:
            account_id: Account ID

        Returns:
            The account

        Raises:
            NotFoundError: If the account does not exist
        """
        account = await self.account_repository.find_by_id(account_id)
        if account is None:
            logfire.warn("Account not found", account_id=str(account_id))
            raise NotFoundError("Account", str(account_id))
        return account
