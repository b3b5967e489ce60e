"""In-memory profile attribute repository for testing."""

from datetime import datetime, timezone
from typing import Callable, Optional

from nomen.domain.error import ConflictError
from nomen.domain.model.profile_attribute import ProfileAttribute
from nomen.domain.repository.profile_attribute import ProfileAttributeRepository
from nomen.domain.value import AttributeKey, ProfileAttributeId, ProfileId

from .database import InMemoryDatabase


class InMemoryProfileAttributeRepository(ProfileAttributeRepository):
    """In-memory implementation of ProfileAttributeRepository for testing.

    Enforces the same unique indexes as the real schema.
    """

    def __init__(self, database: InMemoryDatabase) -> None:
        self.database = database

    def _rows(self) -> list[ProfileAttribute]:
        return list(self.database.attributes.values())

    def _upsert(
        self,
        attribute: ProfileAttribute,
        same_key: Callable[[ProfileAttribute], bool],
    ) -> ProfileAttribute:
        for existing in self._rows():
            if same_key(existing):
                stored = existing.model_copy(
                    update={
                        "attribute_value": attribute.attribute_value,
                        "updated_at": datetime.now(timezone.utc),
                    }
                )
                self.database.attributes[stored.id] = stored
                return stored
        self.database.attributes[attribute.id] = attribute
        return attribute

    def _check_legacy_index(self) -> None:
        seen = set()
        for attribute in self._rows():
            if attribute.identity_id is not None or attribute.source_provider is None:
                continue
            key = (
                attribute.profile_id,
                attribute.attribute_key,
                attribute.source_provider,
            )
            if key in seen:
                raise ConflictError(
                    f"Profile {attribute.profile_id} already has a "
                    f"{attribute.source_provider} {attribute.attribute_key.value}"
                )
            seen.add(key)

    async def find_by_id(
        self, attribute_id: ProfileAttributeId
    ) -> Optional[ProfileAttribute]:
        """Find attribute by ID."""
        return self.database.attributes.get(attribute_id)

    async def find_all_by_profile_id(
        self, profile_id: ProfileId
    ) -> list[ProfileAttribute]:
        """Find attributes of a profile, by key then age."""
        matches = [a for a in self._rows() if a.profile_id == profile_id]
        matches.sort(key=lambda a: (a.attribute_key.value, a.created_at, a.id))
        return matches

    async def find_preferred(
        self, profile_id: ProfileId, attribute_key: AttributeKey
    ) -> Optional[ProfileAttribute]:
        """Find the preferred attribute for a profile and key."""
        for attribute in self._rows():
            if (
                attribute.profile_id == profile_id
                and attribute.attribute_key == attribute_key
                and attribute.is_preferred
            ):
                return attribute
        return None

    async def upsert_for_identity(self, attribute: ProfileAttribute) -> ProfileAttribute:
        """Insert or update keyed by identity and key."""
        return self._upsert(
            attribute,
            lambda a: a.identity_id is not None
            and a.identity_id == attribute.identity_id
            and a.attribute_key == attribute.attribute_key,
        )

    async def upsert_legacy(self, attribute: ProfileAttribute) -> ProfileAttribute:
        """Insert or update keyed by profile, key and provider."""
        return self._upsert(
            attribute,
            lambda a: a.identity_id is None
            and a.profile_id == attribute.profile_id
            and a.attribute_key == attribute.attribute_key
            and a.source_provider == attribute.source_provider,
        )

    async def set_preferred(self, attribute_ids: list[ProfileAttributeId]) -> None:
        """Mark attributes as preferred."""
        now = datetime.now(timezone.utc)
        for attribute_id in attribute_ids:
            attribute = self.database.attributes.get(attribute_id)
            if attribute is None or attribute.is_preferred:
                continue
            current = await self.find_preferred(
                attribute.profile_id, attribute.attribute_key
            )
            if current is not None:
                raise ConflictError(
                    f"Profile {attribute.profile_id} already has a preferred "
                    f"{attribute.attribute_key.value}"
                )
            self.database.attributes[attribute_id] = attribute.model_copy(
                update={"is_preferred": True, "updated_at": now}
            )

    async def clear_preferred(
        self, profile_id: ProfileId, attribute_key: AttributeKey
    ) -> None:
        """Unmark preferred attributes of a profile and key."""
        now = datetime.now(timezone.utc)
        for attribute in self._rows():
            if (
                attribute.profile_id == profile_id
                and attribute.attribute_key == attribute_key
                and attribute.is_preferred
            ):
                self.database.attributes[attribute.id] = attribute.model_copy(
                    update={"is_preferred": False, "updated_at": now}
                )

    async def reassign_profile(
        self, source_profile_id: ProfileId, target_profile_id: ProfileId
    ) -> int:
        """Move attributes to another profile, dropping their preference.

        Source legacy rows whose provider and key the target already has
        are deleted instead of moved, and still counted.
        """
        target_legacy_keys = {
            (a.attribute_key, a.source_provider)
            for a in self._rows()
            if a.profile_id == target_profile_id
            and a.identity_id is None
            and a.source_provider is not None
        }
        now = datetime.now(timezone.utc)
        moved = 0
        for attribute in self._rows():
            if attribute.profile_id != source_profile_id:
                continue
            if (
                attribute.identity_id is None
                and (attribute.attribute_key, attribute.source_provider)
                in target_legacy_keys
            ):
                del self.database.attributes[attribute.id]
                moved += 1
                continue
            self.database.attributes[attribute.id] = attribute.model_copy(
                update={
                    "profile_id": target_profile_id,
                    "is_preferred": False,
                    "updated_at": now,
                }
            )
            moved += 1
        self._check_legacy_index()
        return moved
