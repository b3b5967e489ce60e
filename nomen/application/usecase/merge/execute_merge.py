"""Execute merge use case."""

from uuid import UUID

import logfire
from pydantic import BaseModel

from nomen.application.usecase.base import BaseUseCase
from nomen.domain.error import InvalidMergeError
from nomen.domain.repository import TransactionManager
from nomen.domain.service import MergeRequestService, MergeService
from nomen.domain.value import AccountId

from .token import parse_merge_token


class ExecuteMergeRequest(BaseModel):
    """Execute merge request."""

    token: str
    account_id: UUID  # From authenticated caller (the account to absorb)


class ExecuteMergeResponse(BaseModel):
    """Execute merge response."""

    success: bool
    target_account_id: str
    target_profile_id: str
    source_profile_id: str
    source_account_deleted: str
    attributes_merged: int
    identities_moved: int
    reauthentication_required: bool


class ExecuteMergeUseCase(BaseUseCase):
    """Use case confirming a merge with a token.

    The requester survives; the caller's account is absorbed into it and
    deleted, so the caller must sign in again.
    """

    def __init__(
        self,
        merge_request_service: MergeRequestService,
        merge_service: MergeService,
        transaction_manager: TransactionManager,
    ) -> None:
        """Initialize execute merge use case.

        Args:
            merge_request_service: Merge request domain service
            merge_service: Merge domain service
            transaction_manager: Transaction boundary
        """
        self.merge_request_service = merge_request_service
        self.merge_service = merge_service
        self.transaction_manager = transaction_manager

    async def execute(self, request: ExecuteMergeRequest) -> ExecuteMergeResponse:
        """Execute the merge.

        Steps:
        1. Consume the token in its own transaction (single use even if the
           merge below fails)
        2. Reject a caller who is the requester
        3. Merge caller into requester in a second transaction

        Args:
            request: Token and caller

        Returns:
            Merge summary

        Raises:
            NotFoundError: If the token is unknown or already used
            ExpiredError: If the token is past its TTL
            InvalidMergeError: If the caller is the requester
            NoProfileError: If either side has no profile
            AlreadyMergedError: If both sides share a profile
        """
        token = parse_merge_token(request.token)
        caller_account_id = AccountId(request.account_id)

        with logfire.span(
            "execute_merge.execute",
            token=token.redacted(),
            account_id=str(caller_account_id),
        ):
            async with self.transaction_manager.transaction():
                merge_request = await self.merge_request_service.consume(token)

            if merge_request.requester_account_id == caller_account_id:
                logfire.warn(
                    "Merge confirmed by its own requester",
                    account_id=str(caller_account_id),
                )
                raise InvalidMergeError()

            async with self.transaction_manager.transaction():
                result = await self.merge_service.merge(
                    target_account_id=merge_request.requester_account_id,
                    source_account_id=caller_account_id,
                )

            return ExecuteMergeResponse(
                success=result.success,
                target_account_id=str(result.target_account_id),
                target_profile_id=str(result.target_profile_id),
                source_profile_id=str(result.source_profile_id),
                source_account_deleted=str(result.source_account_deleted),
                attributes_merged=result.attributes_merged,
                identities_moved=result.identities_moved,
                reauthentication_required=result.reauthentication_required,
            )
