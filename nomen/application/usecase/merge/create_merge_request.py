"""Create merge request use case."""

from datetime import datetime
from uuid import UUID

import logfire
from pydantic import BaseModel

from nomen.application.usecase.base import BaseUseCase
from nomen.domain.repository import TransactionManager
from nomen.domain.service import AccountService, MergeRequestService
from nomen.domain.value import AccountId


class CreateMergeRequestRequest(BaseModel):
    """Create merge request request."""

    account_id: UUID  # From authenticated caller (the future survivor)


class CreateMergeRequestResponse(BaseModel):
    """Create merge request response."""

    token: str
    expires_at: datetime


class CreateMergeRequestUseCase(BaseUseCase):
    """Use case starting the merge handshake.

    The caller keeps the token across signing in with the other login, then
    presents it again as that other account.
    """

    def __init__(
        self,
        account_service: AccountService,
        merge_request_service: MergeRequestService,
        transaction_manager: TransactionManager,
    ) -> None:
        """Initialize create merge request use case.

        Args:
            account_service: Account domain service
            merge_request_service: Merge request domain service
            transaction_manager: Transaction boundary
        """
        self.account_service = account_service
        self.merge_request_service = merge_request_service
        self.transaction_manager = transaction_manager

    async def execute(
        self, request: CreateMergeRequestRequest
    ) -> CreateMergeRequestResponse:
        """Issue a merge token, replacing any earlier one.

        Args:
            request: Request with the caller's account ID

        Returns:
            The token and its expiry

        Raises:
            NotFoundError: If the caller has no account
        """
        account_id = AccountId(request.account_id)

        with logfire.span("create_merge_request.execute", account_id=str(account_id)):
            async with self.transaction_manager.transaction():
                await self.account_service.get_by_id(account_id)
                merge_request = await self.merge_request_service.create_request(
                    account_id
                )

            return CreateMergeRequestResponse(
                token=merge_request.token.root,
                expires_at=merge_request.expires_at,
            )
