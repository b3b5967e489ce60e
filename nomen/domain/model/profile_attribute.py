"""Profile attribute entity."""

from datetime import datetime, timezone
from typing import Optional

from pydantic import Field

from nomen.domain.model.common import DomainModel
from nomen.domain.value import (
    AttributeKey,
    IdentityId,
    ProfileAttributeId,
    ProfileId,
)


class ProfileAttribute(DomainModel):
    """One candidate value for a profile field.

    Scoped to the identity that supplied it. Legacy rows carry no
    ``identity_id`` and are keyed by ``(profile_id, attribute_key,
    source_provider)`` instead. At most one row per profile and key is
    preferred.
    """

    id: ProfileAttributeId
    profile_id: ProfileId
    identity_id: Optional[IdentityId] = None
    attribute_key: AttributeKey
    attribute_value: str = Field(min_length=1)
    source_provider: Optional[str] = None
    is_preferred: bool = False
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def is_legacy(self) -> bool:
        """Whether this row predates identity scoping."""
        return self.identity_id is None
