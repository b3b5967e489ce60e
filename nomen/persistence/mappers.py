"""Mappers for converting between database rows and domain models.

Since we're using Pydantic domain models (immutable), we use manual mapping
instead of SQLAlchemy's classical imperative mapping.
"""

from typing import Any, Dict, Optional
from uuid import UUID

from nomen.domain.model import (
    Account,
    ExternalIdentity,
    MergeRequest,
    Profile,
    ProfileAttribute,
)
from nomen.domain.value import (
    AccountId,
    AttributeKey,
    AuthProvider,
    IdentityId,
    MergeRequestId,
    MergeToken,
    ProfileAttributeId,
    ProfileId,
)


def _uuid(value: Any) -> Optional[UUID]:
    """Coerce a driver value to UUID (asyncpg returns UUID, others str)."""
    if value is None:
        return None
    return UUID(value) if isinstance(value, str) else value


def row_to_account(row: Dict[str, Any]) -> Account:
    """Convert database row to Account domain model.

    Args:
        row: Database row as dict

    Returns:
        Account domain model
    """
    profile_id = _uuid(row.get("profile_id"))
    return Account(
        id=AccountId(_uuid(row["id"])),
        profile_id=ProfileId(profile_id) if profile_id else None,
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def account_to_dict(account: Account) -> Dict[str, Any]:
    """Convert Account domain model to database dict."""
    return account.model_dump()


def row_to_profile(row: Dict[str, Any]) -> Profile:
    """Convert database row to Profile domain model.

    Args:
        row: Database row as dict

    Returns:
        Profile domain model
    """
    return Profile(
        id=ProfileId(_uuid(row["id"])),
        display_name=row.get("display_name"),
        primary_email=row.get("primary_email"),
        merged_account_ids=[
            AccountId(_uuid(account_id))
            for account_id in row.get("merged_account_ids") or []
        ],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def profile_to_dict(profile: Profile) -> Dict[str, Any]:
    """Convert Profile domain model to database dict."""
    return profile.model_dump()


def row_to_external_identity(row: Dict[str, Any]) -> ExternalIdentity:
    """Convert database row to ExternalIdentity domain model.

    Args:
        row: Database row as dict

    Returns:
        ExternalIdentity domain model
    """
    return ExternalIdentity(
        id=IdentityId(_uuid(row["id"])),
        account_id=AccountId(_uuid(row["account_id"])),
        provider=AuthProvider(row["provider"]),
        provider_user_id=row["provider_user_id"],
        claims=row.get("claims") or {},
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def external_identity_to_dict(identity: ExternalIdentity) -> Dict[str, Any]:
    """Convert ExternalIdentity domain model to database dict.

    Args:
        identity: ExternalIdentity domain model

    Returns:
        Dict suitable for database insertion/update
    """
    data = identity.model_dump()
    data["provider"] = identity.provider.value
    return data


def row_to_profile_attribute(row: Dict[str, Any]) -> ProfileAttribute:
    """Convert database row to ProfileAttribute domain model.

    Args:
        row: Database row as dict

    Returns:
        ProfileAttribute domain model
    """
    identity_id = _uuid(row.get("identity_id"))
    return ProfileAttribute(
        id=ProfileAttributeId(_uuid(row["id"])),
        profile_id=ProfileId(_uuid(row["profile_id"])),
        identity_id=IdentityId(identity_id) if identity_id else None,
        attribute_key=AttributeKey(row["attribute_key"]),
        attribute_value=row["attribute_value"],
        source_provider=row.get("source_provider"),
        is_preferred=row["is_preferred"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def profile_attribute_to_dict(attribute: ProfileAttribute) -> Dict[str, Any]:
    """Convert ProfileAttribute domain model to database dict."""
    data = attribute.model_dump()
    data["attribute_key"] = attribute.attribute_key.value
    return data


def row_to_merge_request(row: Dict[str, Any]) -> MergeRequest:
    """Convert database row to MergeRequest domain model.

    Args:
        row: Database row as dict

    Returns:
        MergeRequest domain model
    """
    return MergeRequest(
        id=MergeRequestId(_uuid(row["id"])),
        requester_account_id=AccountId(_uuid(row["requester_account_id"])),
        token=MergeToken(root=row["token"]),
        created_at=row["created_at"],
        expires_at=row["expires_at"],
    )


def merge_request_to_dict(merge_request: MergeRequest) -> Dict[str, Any]:
    """Convert MergeRequest domain model to database dict.

    Args:
        merge_request: MergeRequest domain model

    Returns:
        Dict suitable for database insertion
    """
    data = merge_request.model_dump()
    data["token"] = merge_request.token.root
    return data
