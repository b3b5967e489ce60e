"""In-memory external identity repository for testing."""

from datetime import datetime, timezone
from typing import Optional

from nomen.domain.error import ConflictError
from nomen.domain.model.external_identity import ExternalIdentity
from nomen.domain.repository.external_identity import ExternalIdentityRepository
from nomen.domain.value import AccountId, AuthProvider, IdentityId

from .database import InMemoryDatabase


class InMemoryExternalIdentityRepository(ExternalIdentityRepository):
    """In-memory implementation of ExternalIdentityRepository for testing."""

    def __init__(self, database: InMemoryDatabase) -> None:
        self.database = database

    async def find_by_id(self, identity_id: IdentityId) -> Optional[ExternalIdentity]:
        """Find identity by ID."""
        return self.database.identities.get(identity_id)

    async def find_by_provider(
        self, provider: AuthProvider, provider_user_id: str
    ) -> Optional[ExternalIdentity]:
        """Find identity by provider and provider user ID."""
        for identity in self.database.identities.values():
            if (
                identity.provider == provider
                and identity.provider_user_id == provider_user_id
            ):
                return identity
        return None

    async def find_all_by_account_id(
        self, account_id: AccountId
    ) -> list[ExternalIdentity]:
        """Find all identities for an account."""
        matches = [
            identity
            for identity in self.database.identities.values()
            if identity.account_id == account_id
        ]
        matches.sort(key=lambda i: (i.created_at, i.id))
        return matches

    async def upsert(self, identity: ExternalIdentity) -> ExternalIdentity:
        """Insert identity or refresh its claims."""
        existing = self.database.identities.get(identity.id)
        if existing is not None:
            stored = existing.model_copy(
                update={
                    "claims": identity.claims,
                    "updated_at": datetime.now(timezone.utc),
                }
            )
            self.database.identities[identity.id] = stored
            return stored

        holder = await self.find_by_provider(
            identity.provider, identity.provider_user_id
        )
        if holder is not None:
            raise ConflictError(
                f"Identity {identity.provider.value}:{identity.provider_user_id} "
                "is already bound"
            )
        self.database.identities[identity.id] = identity
        return identity

    async def reassign_account(
        self, source_account_id: AccountId, target_account_id: AccountId
    ) -> int:
        """Move identities between accounts."""
        now = datetime.now(timezone.utc)
        moved = 0
        for identity_id, identity in list(self.database.identities.items()):
            if identity.account_id == source_account_id:
                self.database.identities[identity_id] = identity.model_copy(
                    update={"account_id": target_account_id, "updated_at": now}
                )
                moved += 1
        return moved

    async def delete(self, identity_id: IdentityId) -> None:
        """Delete identity."""
        self.database.delete_identity(identity_id)
