"""Merge request domain service.

Owns the lifecycle of merge tokens: issue, inspect, cancel, consume.
"""

import secrets
from datetime import datetime, timedelta, timezone
from uuid import uuid4

import logfire

from nomen.config import MergeSettings
from nomen.domain.error import ExpiredError, NotFoundError, SameAccountError
from nomen.domain.model.merge_request import MergeRequest
from nomen.domain.repository import (
    AccountRepository,
    MergeRequestRepository,
    ProfileRepository,
)
from nomen.domain.value import AccountId, MergeRequestId, MergeToken, RequesterInfo

from .base import Service


class MergeRequestService(Service):
    """Domain service for pending merge handshakes."""

    def __init__(
        self,
        merge_request_repository: MergeRequestRepository,
        account_repository: AccountRepository,
        profile_repository: ProfileRepository,
        merge_settings: MergeSettings,
    ) -> None:
        """Initialize merge request service.

        Args:
            merge_request_repository: Merge request repository
            account_repository: Account repository
            profile_repository: Profile repository
            merge_settings: Merge configuration (TTL, token size)
        """
        self.merge_request_repository = merge_request_repository
        self.account_repository = account_repository
        self.profile_repository = profile_repository
        self.merge_settings = merge_settings

    def _generate_token(self) -> MergeToken:
        return MergeToken(secrets.token_urlsafe(self.merge_settings.token_bytes))

    async def create_request(self, requester_account_id: AccountId) -> MergeRequest:
        """Start a merge handshake, superseding any earlier one.

        Args:
            requester_account_id: Account that will survive the merge

        Returns:
            The new pending request
        """
        with logfire.span(
            "merge_request_service.create_request",
            requester_account_id=str(requester_account_id),
        ):
            superseded = await self.merge_request_repository.delete_by_requester(
                requester_account_id
            )
            if superseded:
                logfire.info(
                    "Superseded earlier merge requests",
                    requester_account_id=str(requester_account_id),
                    count=superseded,
                )

            now = datetime.now(timezone.utc)
            merge_request = MergeRequest(
                id=MergeRequestId(uuid4()),
                requester_account_id=requester_account_id,
                token=self._generate_token(),
                created_at=now,
                expires_at=now
                + timedelta(minutes=self.merge_settings.token_ttl_minutes),
            )
            saved = await self.merge_request_repository.add(merge_request)
            logfire.info(
                "Merge request created",
                merge_request_id=str(saved.id),
                token=saved.token.redacted(),
                expires_at=saved.expires_at.isoformat(),
            )
            return saved

    async def get_live_request(self, token: MergeToken) -> MergeRequest:
        """Get a pending request that has not expired.

        Args:
            token: Merge token

        Returns:
            The pending request

        Raises:
            NotFoundError: If no request has this token
            ExpiredError: If the request is past its TTL
        """
        merge_request = await self.merge_request_repository.find_by_token(token)
        if merge_request is None:
            logfire.warn("Merge request not found", token=token.redacted())
            raise NotFoundError("MergeRequest", token.redacted())
        if merge_request.is_expired():
            logfire.warn(
                "Merge request expired",
                token=token.redacted(),
                expires_at=merge_request.expires_at.isoformat(),
            )
            raise ExpiredError("MergeRequest", token.redacted())
        return merge_request

    async def get_requester_info(
        self, token: MergeToken, caller_account_id: AccountId
    ) -> RequesterInfo:
        """Describe the requester to the second party.

        Args:
            token: Merge token
            caller_account_id: Account viewing the request

        Returns:
            Requester display name and email

        Raises:
            NotFoundError: If no request has this token
            ExpiredError: If the request is past its TTL
            SameAccountError: If the caller is the requester
        """
        with logfire.span(
            "merge_request_service.get_requester_info",
            token=token.redacted(),
            caller_account_id=str(caller_account_id),
        ):
            merge_request = await self.get_live_request(token)
            if merge_request.requester_account_id == caller_account_id:
                raise SameAccountError(str(caller_account_id))

            display_name = None
            email = None
            account = await self.account_repository.find_by_id(
                merge_request.requester_account_id
            )
            if account is not None and account.profile_id is not None:
                profile = await self.profile_repository.find_by_id(account.profile_id)
                if profile is not None:
                    display_name = profile.display_name
                    email = profile.primary_email

            return RequesterInfo(
                requester_account_id=merge_request.requester_account_id,
                requester_display_name=display_name,
                requester_email=email,
            )

    async def cancel(self, token: MergeToken) -> bool:
        """Delete a request. Idempotent.

        Args:
            token: Merge token

        Returns:
            True if a request was deleted
        """
        with logfire.span("merge_request_service.cancel", token=token.redacted()):
            deleted = await self.merge_request_repository.delete_by_token(token)
            logfire.info(
                "Merge request cancelled", token=token.redacted(), deleted=deleted
            )
            return deleted

    async def consume(self, token: MergeToken) -> MergeRequest:
        """Validate and delete a live request in one step.

        Args:
            token: Merge token

        Returns:
            The consumed request

        Raises:
            NotFoundError: If no request has this token, or another caller
                consumed it first
            ExpiredError: If the request is past its TTL
        """
        with logfire.span("merge_request_service.consume", token=token.redacted()):
            merge_request = await self.get_live_request(token)
            if not await self.merge_request_repository.delete_by_token(token):
                # Lost a race with a concurrent confirm or cancel
                raise NotFoundError("MergeRequest", token.redacted())
            logfire.info(
                "Merge request consumed",
                merge_request_id=str(merge_request.id),
                requester_account_id=str(merge_request.requester_account_id),
            )
            return merge_request

    async def purge_expired(self) -> int:
        """Delete every expired request.

        Returns:
            Number of requests deleted
        """
        with logfire.span("merge_request_service.purge_expired"):
            deleted = await self.merge_request_repository.delete_expired(
                datetime.now(timezone.utc)
            )
            logfire.info("Expired merge requests purged", count=deleted)
            return deleted
