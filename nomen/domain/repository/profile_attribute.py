"""Profile attribute repository interface (the Attribute Store)."""

from abc import ABC, abstractmethod
from typing import Optional

from nomen.domain.model.profile_attribute import ProfileAttribute
from nomen.domain.value import (
    AttributeKey,
    ProfileAttributeId,
    ProfileId,
)


class ProfileAttributeRepository(ABC):
    """Repository for ProfileAttribute entity.

    Upserts are keyed by the natural unique key and must be atomic
    insert-or-update operations, never a lookup followed by an insert.
    """

    @abstractmethod
    async def find_by_id(
        self, attribute_id: ProfileAttributeId
    ) -> Optional[ProfileAttribute]:
        """Find an attribute by ID.

        Args:
            attribute_id: The attribute's unique identifier

        Returns:
            The attribute if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_all_by_profile_id(
        self, profile_id: ProfileId
    ) -> list[ProfileAttribute]:
        """Get all attributes of a profile.

        Ordered by attribute key, then creation time, then ID.

        Args:
            profile_id: The profile's unique identifier

        Returns:
            List of attributes (may be empty)
        """
        pass

    @abstractmethod
    async def find_preferred(
        self, profile_id: ProfileId, attribute_key: AttributeKey
    ) -> Optional[ProfileAttribute]:
        """Get the preferred attribute for a profile and key.

        Args:
            profile_id: The profile's unique identifier
            attribute_key: Attribute key

        Returns:
            The preferred attribute if one is set, None otherwise
        """
        pass

    @abstractmethod
    async def upsert_for_identity(self, attribute: ProfileAttribute) -> ProfileAttribute:
        """Insert or update keyed by ``(identity_id, attribute_key)``.

        New rows are inserted as given. On conflict only the value and
        ``updated_at`` change; ``is_preferred`` and ``profile_id`` are kept.

        Args:
            attribute: Candidate attribute with ``identity_id`` set

        Returns:
            The stored attribute
        """
        pass

    @abstractmethod
    async def upsert_legacy(self, attribute: ProfileAttribute) -> ProfileAttribute:
        """Insert or update keyed by ``(profile_id, attribute_key, source_provider)``.

        For rows that predate identity scoping. Same conflict rules as
        ``upsert_for_identity``.

        Args:
            attribute: Candidate attribute with ``identity_id`` unset

        Returns:
            The stored attribute
        """
        pass

    @abstractmethod
    async def set_preferred(self, attribute_ids: list[ProfileAttributeId]) -> None:
        """Mark attributes as preferred.

        Args:
            attribute_ids: Attributes to mark
        """
        pass

    @abstractmethod
    async def clear_preferred(
        self, profile_id: ProfileId, attribute_key: AttributeKey
    ) -> None:
        """Unmark every preferred attribute of a profile and key.

        Args:
            profile_id: The profile's unique identifier
            attribute_key: Attribute key
        """
        pass

    @abstractmethod
    async def reassign_profile(
        self, source_profile_id: ProfileId, target_profile_id: ProfileId
    ) -> int:
        """Move every attribute of one profile to another, unpreferred.

        A source legacy row whose key and provider the target already holds
        is deleted instead, so the legacy key stays unique.

        Args:
            source_profile_id: Profile giving up its attributes
            target_profile_id: Profile receiving them

        Returns:
            Number of attributes moved or folded
        """
        pass
