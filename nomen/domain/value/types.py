"""Domain value objects for Nomen.

Value objects are immutable and defined by their values, not identity.
"""

from enum import Enum
from uuid import UUID

from pydantic import field_validator

from nomen.domain.value.common import RootValueObject, ValueObject
from nomen.domain.value.identifiers import AccountId, ProfileId


class AuthProvider(str, Enum):
    """Login methods the gateway can bind to an account."""

    EMAIL = "email"
    GOOGLE = "google"
    GITHUB = "github"
    LINKEDIN_OIDC = "linkedin_oidc"
    FACEBOOK = "facebook"
    DISCORD = "discord"
    TWITTER = "twitter"
    APPLE = "apple"
    AZURE = "azure"


class AttributeKey(str, Enum):
    """Profile fields that can be sourced from an identity's claims."""

    DISPLAY_NAME = "display_name"
    PRIMARY_EMAIL = "primary_email"
    USERNAME = "username"
    AVATAR_URL = "avatar_url"


# Keys mirrored onto the profile aggregate
AGGREGATE_KEYS: tuple[AttributeKey, ...] = (
    AttributeKey.DISPLAY_NAME,
    AttributeKey.PRIMARY_EMAIL,
)


class MergeToken(RootValueObject[str]):
    """Opaque bearer credential for one pending merge request."""

    @field_validator("root")
    @classmethod
    def validate_token_format(cls, v: str) -> str:
        """Validate token is not empty."""
        if len(v) < 1 or len(v) > 255:
            raise ValueError("Token must be 1-255 characters")
        return v

    def redacted(self) -> str:
        """Token prefix safe to put in logs."""
        return self.root[:8] + "..."


class RequesterInfo(ValueObject):
    """What the second party sees before consenting to a merge."""

    requester_account_id: AccountId
    requester_display_name: str | None = None
    requester_email: str | None = None


class MergeCandidate(ValueObject):
    """Owner of an identity the caller might want to merge in."""

    can_merge: bool = True
    other_account_id: AccountId
    other_profile_id: ProfileId | None = None
    other_display_name: str | None = None
    other_email: str | None = None


class MergeResult(ValueObject):
    """Outcome of a completed account merge.

    The source principal no longer exists, so a caller that authenticated
    as it must sign in again.
    """

    success: bool = True
    target_account_id: AccountId
    target_profile_id: ProfileId
    source_profile_id: ProfileId
    source_account_deleted: UUID
    attributes_merged: int
    identities_moved: int
    reauthentication_required: bool = True


class ConsolidationResult(ValueObject):
    """Outcome of syncing one identity's claims onto its profile."""

    account_id: AccountId
    profile_id: ProfileId
    profile_created: bool
    attributes_upserted: list[AttributeKey]
    preferences_assigned: int
