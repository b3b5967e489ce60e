"""External identity entity.

Mirrors one login method bound to an account by the authentication gateway.
The gateway owns these rows; this service stores what it is told and reacts
to create/update events.
"""

from datetime import datetime, timezone
from typing import Any

from pydantic import Field

from nomen.domain.model.common import DomainModel
from nomen.domain.value import AccountId, AuthProvider, IdentityId


class ExternalIdentity(DomainModel):
    """One OAuth or email/password login bound to an account."""

    id: IdentityId  # Assigned by the gateway
    account_id: AccountId
    provider: AuthProvider
    provider_user_id: str  # Permanent ID from the provider
    claims: dict[str, Any] = Field(default_factory=dict)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
