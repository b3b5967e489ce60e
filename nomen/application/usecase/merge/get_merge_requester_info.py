"""Get merge requester info use case."""

from uuid import UUID

import logfire
from pydantic import BaseModel

from nomen.application.usecase.base import BaseUseCase
from nomen.domain.repository import TransactionManager
from nomen.domain.service import MergeRequestService
from nomen.domain.value import AccountId

from .token import parse_merge_token


class GetMergeRequesterInfoRequest(BaseModel):
    """Get merge requester info request."""

    token: str
    account_id: UUID  # From authenticated caller (the second party)


class GetMergeRequesterInfoResponse(BaseModel):
    """Who is asking to absorb the caller's account."""

    requester_account_id: str
    requester_display_name: str | None
    requester_email: str | None


class GetMergeRequesterInfoUseCase(BaseUseCase):
    """Use case showing the second party who started the merge."""

    def __init__(
        self,
        merge_request_service: MergeRequestService,
        transaction_manager: TransactionManager,
    ) -> None:
        """Initialize get merge requester info use case.

        Args:
            merge_request_service: Merge request domain service
            transaction_manager: Transaction boundary
        """
        self.merge_request_service = merge_request_service
        self.transaction_manager = transaction_manager

    async def execute(
        self, request: GetMergeRequesterInfoRequest
    ) -> GetMergeRequesterInfoResponse:
        """Look up the requester behind a token.

        Args:
            request: Token and caller

        Returns:
            Requester display name and email

        Raises:
            NotFoundError: If the token is unknown
            ExpiredError: If the token is past its TTL
            SameAccountError: If the caller is the requester
        """
        token = parse_merge_token(request.token)

        with logfire.span(
            "get_merge_requester_info.execute",
            token=token.redacted(),
            account_id=str(request.account_id),
        ):
            async with self.transaction_manager.transaction():
                info = await self.merge_request_service.get_requester_info(
                    token, AccountId(request.account_id)
                )

            return GetMergeRequesterInfoResponse(
                requester_account_id=str(info.requester_account_id),
                requester_display_name=info.requester_display_name,
                requester_email=info.requester_email,
            )
