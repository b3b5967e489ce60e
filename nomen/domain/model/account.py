"""Account entity.

One row per gateway principal. The account is the anchor that identities
bind to and that points at the consolidated profile.
"""

from datetime import datetime, timezone
from typing import Optional

from pydantic import Field

from nomen.domain.model.common import DomainModel
from nomen.domain.value import AccountId, ProfileId


class Account(DomainModel):
    """Internal record bound 1:1 to a gateway principal."""

    id: AccountId  # Same UUID as the principal
    profile_id: Optional[ProfileId] = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
