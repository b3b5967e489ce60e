"""In-memory merge request repository for testing."""

from datetime import datetime
from typing import Optional

from nomen.domain.error import ConflictError
from nomen.domain.model.merge_request import MergeRequest
from nomen.domain.repository.merge_request import MergeRequestRepository
from nomen.domain.value import AccountId, MergeToken

from .database import InMemoryDatabase


class InMemoryMergeRequestRepository(MergeRequestRepository):
    """In-memory implementation of MergeRequestRepository for testing."""

    def __init__(self, database: InMemoryDatabase) -> None:
        self.database = database

    async def find_by_token(self, token: MergeToken) -> Optional[MergeRequest]:
        """Find merge request by token."""
        for merge_request in self.database.merge_requests.values():
            if merge_request.token == token:
                return merge_request
        return None

    async def find_all_by_requester(
        self, requester_account_id: AccountId
    ) -> list[MergeRequest]:
        """Find merge requests of a requester, newest first."""
        matches = [
            r
            for r in self.database.merge_requests.values()
            if r.requester_account_id == requester_account_id
        ]
        matches.sort(key=lambda r: r.created_at, reverse=True)
        return matches

    async def add(self, merge_request: MergeRequest) -> MergeRequest:
        """Insert merge request."""
        if await self.find_by_token(merge_request.token) is not None:
            raise ConflictError("Merge token already issued")
        self.database.merge_requests[merge_request.id] = merge_request
        return merge_request

    async def delete_by_token(self, token: MergeToken) -> bool:
        """Delete merge request by token."""
        merge_request = await self.find_by_token(token)
        if merge_request is None:
            return False
        del self.database.merge_requests[merge_request.id]
        return True

    async def delete_by_requester(self, requester_account_id: AccountId) -> int:
        """Delete merge requests of a requester."""
        doomed = [
            r.id
            for r in self.database.merge_requests.values()
            if r.requester_account_id == requester_account_id
        ]
        for request_id in doomed:
            del self.database.merge_requests[request_id]
        return len(doomed)

    async def delete_expired(self, now: datetime) -> int:
        """Delete expired merge requests."""
        doomed = [
            r.id for r in self.database.merge_requests.values() if r.is_expired(now)
        ]
        for request_id in doomed:
            del self.database.merge_requests[request_id]
        return len(doomed)
