"""Merge request repository interface."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional

from nomen.domain.model.merge_request import MergeRequest
from nomen.domain.value import AccountId, MergeToken


class MergeRequestRepository(ABC):
    """Repository for MergeRequest entity."""

    @abstractmethod
    async def find_by_token(self, token: MergeToken) -> Optional[MergeRequest]:
        """Find a merge request by token, expired or not.

        Args:
            token: The merge token

        Returns:
            The merge request if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_all_by_requester(
        self, requester_account_id: AccountId
    ) -> list[MergeRequest]:
        """Get all merge requests created by an account.

        Args:
            requester_account_id: The requesting account

        Returns:
            List of merge requests (may be empty)
        """
        pass

    @abstractmethod
    async def add(self, merge_request: MergeRequest) -> MergeRequest:
        """Insert a new merge request.

        Args:
            merge_request: The merge request to insert

        Returns:
            The inserted merge request
        """
        pass

    @abstractmethod
    async def delete_by_token(self, token: MergeToken) -> bool:
        """Delete a merge request by token.

        Args:
            token: The merge token

        Returns:
            True if a request was deleted, False if none matched
        """
        pass

    @abstractmethod
    async def delete_by_requester(self, requester_account_id: AccountId) -> int:
        """Delete every merge request created by an account.

        Args:
            requester_account_id: The requesting account

        Returns:
            Number of requests deleted
        """
        pass

    @abstractmethod
    async def delete_expired(self, now: datetime) -> int:
        """Delete every request whose TTL has passed.

        Args:
            now: Reference time

        Returns:
            Number of requests deleted
        """
        pass
