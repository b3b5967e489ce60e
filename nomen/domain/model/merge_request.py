"""Merge request entity."""

from datetime import datetime, timezone

from pydantic import Field

from nomen.domain.model.common import DomainModel
from nomen.domain.value import AccountId, MergeRequestId, MergeToken


class MergeRequest(DomainModel):
    """Pending two-party merge handshake.

    Created by the account that will survive the merge. Consumed on confirm,
    reject, or when the same requester starts a new request. Never updated.
    """

    id: MergeRequestId
    requester_account_id: AccountId
    token: MergeToken
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    expires_at: datetime

    def is_expired(self, now: datetime | None = None) -> bool:
        """Whether the request is past its TTL."""
        now = now or datetime.now(timezone.utc)
        return self.expires_at <= now
