"""Profile repository implementation using PostgreSQL."""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from nomen.domain.model.profile import Profile
from nomen.domain.repository.profile import ProfileRepository
from nomen.domain.value import ProfileId
from nomen.persistence.mappers import profile_to_dict, row_to_profile
from nomen.persistence.tables import profiles_table


class PostgresProfileRepository(ProfileRepository):
    """PostgreSQL implementation of ProfileRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(
        self, profile_id: ProfileId, for_update: bool = False
    ) -> Optional[Profile]:
        """Get profile by ID, optionally locking the row."""
        stmt = select(profiles_table).where(profiles_table.c.id == profile_id)
        if for_update:
            stmt = stmt.with_for_update()
        result = await self.session.execute(stmt)
        row = result.mappings().first()

        if not row:
            return None

        return row_to_profile(dict(row))

    async def save(self, profile: Profile) -> Profile:
        """Insert or update profile.

        Args:
            profile: Profile to save

        Returns:
            Saved profile
        """
        profile_dict = profile_to_dict(profile)
        stmt = insert(profiles_table).values(**profile_dict)
        stmt = stmt.on_conflict_do_update(
            index_elements=["id"],
            set_={
                "display_name": stmt.excluded.display_name,
                "primary_email": stmt.excluded.primary_email,
                "merged_account_ids": stmt.excluded.merged_account_ids,
                "updated_at": stmt.excluded.updated_at,
            },
        )
        await self.session.execute(stmt)
        await self.session.flush()
        return profile

    async def delete(self, profile_id: ProfileId) -> None:
        """Delete profile (attributes cascade, accounts are unlinked)."""
        stmt = profiles_table.delete().where(profiles_table.c.id == profile_id)
        await self.session.execute(stmt)
        await self.session.flush()
