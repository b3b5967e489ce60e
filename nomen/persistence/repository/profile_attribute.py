"""ProfileAttribute repository implementation using PostgreSQL."""

from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from nomen.domain.model.profile_attribute import ProfileAttribute
from nomen.domain.repository.profile_attribute import ProfileAttributeRepository
from nomen.domain.value import AttributeKey, ProfileAttributeId, ProfileId
from nomen.persistence.mappers import (
    profile_attribute_to_dict,
    row_to_profile_attribute,
)
from nomen.persistence.tables import profile_attributes_table

_t = profile_attributes_table


class PostgresProfileAttributeRepository(ProfileAttributeRepository):
    """PostgreSQL implementation of ProfileAttributeRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(
        self, attribute_id: ProfileAttributeId
    ) -> Optional[ProfileAttribute]:
        """Get attribute by ID."""
        stmt = select(_t).where(_t.c.id == attribute_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()

        if not row:
            return None

        return row_to_profile_attribute(dict(row))

    async def find_all_by_profile_id(
        self, profile_id: ProfileId
    ) -> list[ProfileAttribute]:
        """Get all attributes of a profile, by key then age."""
        stmt = (
            select(_t)
            .where(_t.c.profile_id == profile_id)
            .order_by(_t.c.attribute_key, _t.c.created_at, _t.c.id)
        )
        result = await self.session.execute(stmt)
        rows = result.mappings().all()

        return [row_to_profile_attribute(dict(row)) for row in rows]

    async def find_preferred(
        self, profile_id: ProfileId, attribute_key: AttributeKey
    ) -> Optional[ProfileAttribute]:
        """Get the preferred attribute for a profile and key."""
        stmt = select(_t).where(
            _t.c.profile_id == profile_id,
            _t.c.attribute_key == attribute_key.value,
            _t.c.is_preferred.is_(True),
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()

        if not row:
            return None

        return row_to_profile_attribute(dict(row))

    async def upsert_for_identity(self, attribute: ProfileAttribute) -> ProfileAttribute:
        """Atomic insert-or-update keyed by identity and key.

        Args:
            attribute: Candidate attribute with identity_id set

        Returns:
            The stored attribute
        """
        stmt = insert(_t).values(**profile_attribute_to_dict(attribute))
        stmt = stmt.on_conflict_do_update(
            index_elements=["identity_id", "attribute_key"],
            index_where=_t.c.identity_id.isnot(None),
            set_={
                "attribute_value": stmt.excluded.attribute_value,
                "updated_at": func.now(),
            },
        ).returning(*_t.c)
        result = await self.session.execute(stmt)
        row = result.mappings().one()
        await self.session.flush()
        return row_to_profile_attribute(dict(row))

    async def upsert_legacy(self, attribute: ProfileAttribute) -> ProfileAttribute:
        """Atomic insert-or-update keyed by profile, key and provider.

        Args:
            attribute: Candidate attribute with identity_id unset

        Returns:
            The stored attribute
        """
        stmt = insert(_t).values(**profile_attribute_to_dict(attribute))
        stmt = stmt.on_conflict_do_update(
            index_elements=["profile_id", "attribute_key", "source_provider"],
            index_where=_t.c.identity_id.is_(None),
            set_={
                "attribute_value": stmt.excluded.attribute_value,
                "updated_at": func.now(),
            },
        ).returning(*_t.c)
        result = await self.session.execute(stmt)
        row = result.mappings().one()
        await self.session.flush()
        return row_to_profile_attribute(dict(row))

    async def set_preferred(self, attribute_ids: list[ProfileAttributeId]) -> None:
        """Mark attributes as preferred."""
        if not attribute_ids:
            return
        stmt = (
            _t.update()
            .where(_t.c.id.in_(attribute_ids))
            .values(is_preferred=True, updated_at=func.now())
        )
        await self.session.execute(stmt)
        await self.session.flush()

    async def clear_preferred(
        self, profile_id: ProfileId, attribute_key: AttributeKey
    ) -> None:
        """Unmark preferred attributes of a profile and key."""
        stmt = (
            _t.update()
            .where(
                _t.c.profile_id == profile_id,
                _t.c.attribute_key == attribute_key.value,
                _t.c.is_preferred.is_(True),
            )
            .values(is_preferred=False, updated_at=func.now())
        )
        await self.session.execute(stmt)
        await self.session.flush()

    async def reassign_profile(
        self, source_profile_id: ProfileId, target_profile_id: ProfileId
    ) -> int:
        """Move attributes to another profile, dropping their preference.

        Source legacy rows that would collide with a target legacy row on
        ``uq_profile_attributes_legacy_key`` are deleted first and counted
        with the moved rows.
        """
        kept = _t.alias("kept")
        collides = (
            select(kept.c.id)
            .where(
                kept.c.profile_id == target_profile_id,
                kept.c.identity_id.is_(None),
                kept.c.attribute_key == _t.c.attribute_key,
                kept.c.source_provider == _t.c.source_provider,
            )
            .exists()
        )
        dropped = await self.session.execute(
            _t.delete().where(
                _t.c.profile_id == source_profile_id,
                _t.c.identity_id.is_(None),
                collides,
            )
        )

        stmt = (
            _t.update()
            .where(_t.c.profile_id == source_profile_id)
            .values(
                profile_id=target_profile_id,
                is_preferred=False,
                updated_at=func.now(),
            )
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return dropped.rowcount + result.rowcount
