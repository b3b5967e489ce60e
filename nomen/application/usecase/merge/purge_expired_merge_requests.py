"""Purge expired merge requests use case."""

from pydantic import BaseModel

from nomen.application.usecase.base import BaseUseCase
from nomen.domain.repository import TransactionManager
from nomen.domain.service import MergeRequestService


class PurgeExpiredMergeRequestsResponse(BaseModel):
    """Purge expired merge requests response."""

    deleted: int


class PurgeExpiredMergeRequestsUseCase(BaseUseCase):
    """Housekeeping: drop merge requests nobody can use any more."""

    def __init__(
        self,
        merge_request_service: MergeRequestService,
        transaction_manager: TransactionManager,
    ) -> None:
        self.merge_request_service = merge_request_service
        self.transaction_manager = transaction_manager

    async def execute(self, request: None = None) -> PurgeExpiredMergeRequestsResponse:
        """Delete every expired request."""
        async with self.transaction_manager.transaction():
            deleted = await self.merge_request_service.purge_expired()
        return PurgeExpiredMergeRequestsResponse(deleted=deleted)
