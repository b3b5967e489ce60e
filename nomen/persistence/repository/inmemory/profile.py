"""In-memory profile repository for testing."""

from typing import Optional

from nomen.domain.model.profile import Profile
from nomen.domain.repository.profile import ProfileRepository
from nomen.domain.value import ProfileId

from .database import InMemoryDatabase


class InMemoryProfileRepository(ProfileRepository):
    """In-memory implementation of ProfileRepository for testing."""

    def __init__(self, database: InMemoryDatabase) -> None:
        self.database = database

    async def find_by_id(
        self, profile_id: ProfileId, for_update: bool = False
    ) -> Optional[Profile]:
        """Find profile by ID."""
        return self.database.profiles.get(profile_id)

    async def save(self, profile: Profile) -> Profile:
        """Save profile."""
        self.database.profiles[profile.id] = profile
        return profile

    async def delete(self, profile_id: ProfileId) -> None:
        """Delete profile."""
        self.database.delete_profile(profile_id)
