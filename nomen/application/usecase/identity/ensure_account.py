"""Ensure account use case (principal-created hook)."""

from uuid import UUID

import logfire
from pydantic import BaseModel

from nomen.application.usecase.base import BaseUseCase
from nomen.domain.repository import TransactionManager
from nomen.domain.service import AccountService
from nomen.domain.value import AccountId


class EnsureAccountRequest(BaseModel):
    """Ensure account request."""

    principal_id: UUID


class EnsureAccountResponse(BaseModel):
    """Ensure account response."""

    account_id: str
    profile_id: str | None


class EnsureAccountUseCase(BaseUseCase):
    """Use case run when the gateway reports a new principal."""

    def __init__(
        self,
        account_service: AccountService,
        transaction_manager: TransactionManager,
    ) -> None:
        """Initialize ensure account use case.

        Args:
            account_service: Account domain service
            transaction_manager: Transaction boundary
        """
        self.account_service = account_service
        self.transaction_manager = transaction_manager

    async def execute(self, request: EnsureAccountRequest) -> EnsureAccountResponse:
        """Create the principal's account if it does not exist yet.

        Args:
            request: Request with the principal ID

        Returns:
            The account (new or existing)
        """
        with logfire.span(
            "ensure_account.execute", principal_id=str(request.principal_id)
        ):
            async with self.transaction_manager.transaction():
                account = await self.account_service.ensure_account(
                    AccountId(request.principal_id)
                )

            return EnsureAccountResponse(
                account_id=str(account.id),
                profile_id=str(account.profile_id) if account.profile_id else None,
            )
