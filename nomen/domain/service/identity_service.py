"""External identity domain service."""

from collections import Counter

import logfire

from nomen.domain.model.external_identity import ExternalIdentity
from nomen.domain.repository.external_identity import ExternalIdentityRepository
from nomen.domain.value import AccountId, AuthProvider, IdentityId


class IdentityService:
    """Domain service for external identity operations."""

    def __init__(self, identity_repository: ExternalIdentityRepository) -> None:
        """Initialize identity service.

        Args:
            identity_repository: External identity repository
        """
        self.identity_repository = identity_repository

    async def get_identity_by_id(
        self, identity_id: IdentityId
    ) -> ExternalIdentity | None:
        """Get identity by ID.

        Args:
            identity_id: Identity ID

        Returns:
            Identity if found, None otherwise
        """
        with logfire.span(
            "identity_service.get_identity_by_id", identity_id=str(identity_id)
        ):
            identity = await self.identity_repository.find_by_id(identity_id)
            if identity is None:
                logfire.warn("Identity not found", identity_id=str(identity_id))
            return identity

    async def get_identity_by_provider(
        self, provider: AuthProvider, provider_user_id: str
    ) -> ExternalIdentity | None:
        """Get identity by provider and provider user ID.

        Args:
            provider: Authentication provider
            provider_user_id: Provider-specific user ID

        Returns:
            Identity if found, None otherwise
        """
        with logfire.span(
            "identity_service.get_identity_by_provider",
            provider=provider.value,
            provider_user_id=provider_user_id,
        ):
            identity = await self.identity_repository.find_by_provider(
                provider, provider_user_id
            )
            if identity:
                logfire.info(
                    "Identity found",
                    provider=provider.value,
                    provider_user_id=provider_user_id,
                    account_id=str(identity.account_id),
                )
            else:
                logfire.warn(
                    "Identity not found",
                    provider=provider.value,
                    provider_user_id=provider_user_id,
                )
            return identity

    async def record_identity(self, identity: ExternalIdentity) -> ExternalIdentity:
        """Store an identity reported by the gateway.

        A repeated event for a known identity only refreshes its claims.

        Args:
            identity: Identity as reported

        Returns:
            The stored identity
        """
        with logfire.span(
            "identity_service.record_identity",
            identity_id=str(identity.id),
            provider=identity.provider.value,
        ):
            stored = await self.identity_repository.upsert(identity)
            if stored.account_id != identity.account_id:
                logfire.warn(
                    "Identity event names a different account, keeping stored binding",
                    identity_id=str(identity.id),
                    reported_account_id=str(identity.account_id),
                    stored_account_id=str(stored.account_id),
                )
            logfire.info(
                "Identity recorded",
                identity_id=str(stored.id),
                account_id=str(stored.account_id),
            )
            return stored

    async def get_identities_for_account(
        self, account_id: AccountId
    ) -> list[ExternalIdentity]:
        """Get all identities bound to an account.

        Args:
            account_id: Account ID

        Returns:
            List of identities, oldest first
        """
        return await self.identity_repository.find_all_by_account_id(account_id)

    async def count_by_provider(self, account_id: AccountId) -> dict[AuthProvider, int]:
        """Count an account's identities per provider.

        Args:
            account_id: Account ID

        Returns:
            Mapping of provider to number of linked identities
        """
        identities = await self.identity_repository.find_all_by_account_id(account_id)
        return dict(Counter(identity.provider for identity in identities))

    async def remove_identity(self, identity_id: IdentityId) -> ExternalIdentity | None:
        """Delete an identity, cascading its attributes.

        Args:
            identity_id: Identity ID

        Returns:
            The removed identity, or None if it was already gone
        """
        with logfire.span(
            "identity_service.remove_identity", identity_id=str(identity_id)
        ):
            identity = await self.identity_repository.find_by_id(identity_id)
            if identity is None:
                logfire.info("Identity already removed", identity_id=str(identity_id))
                return None
            await self.identity_repository.delete(identity_id)
            logfire.info(
                "Identity removed",
                identity_id=str(identity_id),
                account_id=str(identity.account_id),
            )
            return identity
