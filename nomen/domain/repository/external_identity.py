"""External identity repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from nomen.domain.model.external_identity import ExternalIdentity
from nomen.domain.value import AccountId, AuthProvider, IdentityId


class ExternalIdentityRepository(ABC):
    """Repository for ExternalIdentity entity.

    Holds this service's copy of the gateway's identity bindings.
    """

    @abstractmethod
    async def find_by_id(self, identity_id: IdentityId) -> Optional[ExternalIdentity]:
        """Find an identity by ID.

        Args:
            identity_id: The identity's unique identifier

        Returns:
            The identity if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_provider(
        self, provider: AuthProvider, provider_user_id: str
    ) -> Optional[ExternalIdentity]:
        """Find an identity by provider and provider user ID.

        Args:
            provider: The authentication provider
            provider_user_id: The user's ID on that provider

        Returns:
            The identity if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_all_by_account_id(
        self, account_id: AccountId
    ) -> list[ExternalIdentity]:
        """Get all identities bound to an account, oldest first.

        Args:
            account_id: The account's unique identifier

        Returns:
            List of identities (may be empty)
        """
        pass

    @abstractmethod
    async def upsert(self, identity: ExternalIdentity) -> ExternalIdentity:
        """Insert an identity or refresh its claims.

        On conflict by ID only ``claims`` and ``updated_at`` change; the
        binding to an account is moved exclusively by a merge.

        Args:
            identity: The identity as reported by the gateway

        Returns:
            The stored identity
        """
        pass

    @abstractmethod
    async def reassign_account(
        self, source_account_id: AccountId, target_account_id: AccountId
    ) -> int:
        """Move every identity of one account to another.

        Args:
            source_account_id: Account giving up its identities
            target_account_id: Account receiving them

        Returns:
            Number of identities moved
        """
        pass

    @abstractmethod
    async def delete(self, identity_id: IdentityId) -> None:
        """Delete an identity and, by cascade, its attributes.

        Args:
            identity_id: The identity to delete
        """
        pass
