"""Profile aggregate.

The profile is the consolidated, user-facing identity. ``display_name`` and
``primary_email`` are a read-optimized copy of the preferred attributes;
the attributes themselves are the source of truth.
"""

from datetime import datetime, timezone
from typing import Optional

from pydantic import Field

from nomen.domain.model.common import DomainModel
from nomen.domain.value import AccountId, ProfileId


class Profile(DomainModel):
    """Consolidated identity aggregating one or more linked logins."""

    id: ProfileId
    display_name: Optional[str] = None
    primary_email: Optional[str] = None
    merged_account_ids: list[AccountId] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    def with_merged_account(self, account_id: AccountId) -> "Profile":
        """Return a copy recording an absorbed account.

        The audit trail is append-only and holds each account once.
        """
        if account_id in self.merged_account_ids:
            return self
        return self.model_copy(
            update={
                "merged_account_ids": [*self.merged_account_ids, account_id],
                "updated_at": datetime.now(timezone.utc),
            }
        )
