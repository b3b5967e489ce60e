"""Cancel merge request use case."""

import logfire
from pydantic import BaseModel

from nomen.application.usecase.base import BaseUseCase
from nomen.domain.repository import TransactionManager
from nomen.domain.service import MergeRequestService

from .token import parse_merge_token


class CancelMergeRequestRequest(BaseModel):
    """Cancel merge request request."""

    token: str


class CancelMergeRequestResponse(BaseModel):
    """Cancel merge request response."""

    cancelled: bool


class CancelMergeRequestUseCase(BaseUseCase):
    """Use case for declining or abandoning a merge. Idempotent."""

    def __init__(
        self,
        merge_request_service: MergeRequestService,
        transaction_manager: TransactionManager,
    ) -> None:
        """Initialize cancel merge request use case.

        Args:
            merge_request_service: Merge request domain service
            transaction_manager: Transaction boundary
        """
        self.merge_request_service = merge_request_service
        self.transaction_manager = transaction_manager

    async def execute(
        self, request: CancelMergeRequestRequest
    ) -> CancelMergeRequestResponse:
        """Delete the request behind a token, if any.

        Args:
            request: Request with token

        Returns:
            Whether a pending request was deleted
        """
        token = parse_merge_token(request.token)

        async with self.transaction_manager.transaction():
            cancelled = await self.merge_request_service.cancel(token)

        logfire.info(
            "Merge request cancel handled", token=token.redacted(), cancelled=cancelled
        )
        return CancelMergeRequestResponse(cancelled=cancelled)
