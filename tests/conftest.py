"""Test configuration and shared helpers."""

from typing import Any
from uuid import UUID, uuid4

from nomen.application.usecase.identity import SyncIdentityRequest
from nomen.domain.model import ExternalIdentity
from nomen.domain.value import AccountId, AuthProvider, IdentityId


def make_identity(
    account_id: UUID,
    provider: AuthProvider = AuthProvider.GITHUB,
    claims: dict[str, Any] | None = None,
    provider_user_id: str | None = None,
    identity_id: UUID | None = None,
) -> ExternalIdentity:
    """Build an identity as the gateway would report it."""
    return ExternalIdentity(
        id=IdentityId(identity_id or uuid4()),
        account_id=AccountId(account_id),
        provider=provider,
        provider_user_id=provider_user_id or f"{provider.value}-{uuid4().hex[:12]}",
        claims=claims or {},
    )


def make_sync_request(
    principal_id: UUID,
    provider: AuthProvider = AuthProvider.GITHUB,
    claims: dict[str, Any] | None = None,
    provider_user_id: str | None = None,
    identity_id: UUID | None = None,
) -> SyncIdentityRequest:
    """Build an identity hook payload."""
    return SyncIdentityRequest(
        identity_id=identity_id or uuid4(),
        principal_id=principal_id,
        provider=provider,
        provider_user_id=provider_user_id or f"{provider.value}-{uuid4().hex[:12]}",
        claims=claims or {},
    )
