"""Profile repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from nomen.domain.model.profile import Profile
from nomen.domain.value import ProfileId


class ProfileRepository(ABC):
    """Repository for Profile aggregate."""

    @abstractmethod
    async def find_by_id(
        self, profile_id: ProfileId, for_update: bool = False
    ) -> Optional[Profile]:
        """Find a profile by ID.

        Args:
            profile_id: The profile's unique identifier
            for_update: Lock the row until the transaction ends

        Returns:
            The profile if found, None otherwise
        """
        pass

    @abstractmethod
    async def save(self, profile: Profile) -> Profile:
        """Save a profile (create or update).

        Args:
            profile: The profile to save

        Returns:
            The saved profile
        """
        pass

    @abstractmethod
    async def delete(self, profile_id: ProfileId) -> None:
        """Delete a profile and, by cascade, its attributes.

        Args:
            profile_id: The profile to delete
        """
        pass
