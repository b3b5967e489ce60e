"""Preference domain service.

Decides which attribute per key is shown on a profile and keeps the profile
aggregate in step with that choice.
"""

from datetime import datetime, timezone

import logfire

from nomen.domain.error import NotAuthorizedError, NotFoundError
from nomen.domain.model.profile import Profile
from nomen.domain.model.profile_attribute import ProfileAttribute
from nomen.domain.repository import (
    AccountRepository,
    ProfileAttributeRepository,
    ProfileRepository,
)
from nomen.domain.value import (
    AGGREGATE_KEYS,
    AccountId,
    AttributeKey,
    ProfileAttributeId,
    ProfileId,
)

from .base import Service


class PreferenceService(Service):
    """Domain service for attribute preference and the profile aggregate."""

    def __init__(
        self,
        account_repository: AccountRepository,
        profile_repository: ProfileRepository,
        profile_attribute_repository: ProfileAttributeRepository,
    ) -> None:
        """Initialize preference service.

        Args:
            account_repository: Account repository
            profile_repository: Profile repository
            profile_attribute_repository: Profile attribute repository
        """
        self.account_repository = account_repository
        self.profile_repository = profile_repository
        self.profile_attribute_repository = profile_attribute_repository

    async def bootstrap_preferences(self, profile_id: ProfileId) -> int:
        """Give every attribute key without a preferred row one winner.

        The earliest-created row wins, ties broken by lowest ID, so the
        first identity ever linked supplies the initial values.

        Args:
            profile_id: Profile to fix up

        Returns:
            Number of attributes newly marked preferred
        """
        with logfire.span(
            "preference_service.bootstrap_preferences", profile_id=str(profile_id)
        ):
            attributes = await self.profile_attribute_repository.find_all_by_profile_id(
                profile_id
            )
            settled = {a.attribute_key for a in attributes if a.is_preferred}

            winners: dict[AttributeKey, ProfileAttributeId] = {}
            for attribute in sorted(attributes, key=lambda a: (a.created_at, a.id)):
                key = attribute.attribute_key
                if key in settled or key in winners:
                    continue
                winners[key] = attribute.id

            if winners:
                await self.profile_attribute_repository.set_preferred(
                    list(winners.values())
                )
                logfire.info(
                    "Preferences bootstrapped",
                    profile_id=str(profile_id),
                    keys=[key.value for key in winners],
                )
            return len(winners)

    async def refresh_aggregate(self, profile_id: ProfileId) -> Profile:
        """Copy preferred display name and email onto the profile.

        Keys without a preferred attribute keep their current value.

        Args:
            profile_id: Profile to refresh

        Returns:
            The refreshed profile

        Raises:
            NotFoundError: If the profile does not exist
        """
        profile = await self.profile_repository.find_by_id(profile_id)
        if profile is None:
            raise NotFoundError("Profile", str(profile_id))

        updates: dict[str, str] = {}
        for key in AGGREGATE_KEYS:
            preferred = await self.profile_attribute_repository.find_preferred(
                profile_id, key
            )
            if preferred is not None and getattr(profile, key.value) != (
                preferred.attribute_value
            ):
                updates[key.value] = preferred.attribute_value

        if not updates:
            return profile

        refreshed = profile.model_copy(
            update={**updates, "updated_at": datetime.now(timezone.utc)}
        )
        await self.profile_repository.save(refreshed)
        logfire.info(
            "Profile aggregate refreshed",
            profile_id=str(profile_id),
            fields=sorted(updates),
        )
        return refreshed

    async def set_preferred_attribute(
        self, attribute_id: ProfileAttributeId, caller_account_id: AccountId
    ) -> ProfileAttribute:
        """Make one attribute the preferred value for its key.

        Args:
            attribute_id: Attribute to prefer
            caller_account_id: Account making the change

        Returns:
            The attribute, now preferred

        Raises:
            NotFoundError: If the attribute does not exist
            NotAuthorizedError: If the caller does not own the attribute's profile
        """
        with logfire.span(
            "preference_service.set_preferred_attribute",
            attribute_id=str(attribute_id),
            account_id=str(caller_account_id),
        ):
            attribute = await self.profile_attribute_repository.find_by_id(
                attribute_id
            )
            if attribute is None:
                logfire.warn("Attribute not found", attribute_id=str(attribute_id))
                raise NotFoundError("ProfileAttribute", str(attribute_id))

            account = await self.account_repository.find_by_id(caller_account_id)
            if account is None or account.profile_id != attribute.profile_id:
                logfire.warn(
                    "Preference change rejected",
                    attribute_id=str(attribute_id),
                    account_id=str(caller_account_id),
                )
                raise NotAuthorizedError(
                    "ProfileAttribute", str(attribute_id), str(caller_account_id)
                )

            # Serializes concurrent preference changes on the same profile
            profile = await self.profile_repository.find_by_id(
                attribute.profile_id, for_update=True
            )
            if profile is None:
                raise NotFoundError("Profile", str(attribute.profile_id))

            # A merge committed before the lock may have moved or dropped the row
            attribute = await self.profile_attribute_repository.find_by_id(
                attribute_id
            )
            if attribute is None or attribute.profile_id != profile.id:
                raise NotFoundError("ProfileAttribute", str(attribute_id))

            await self.profile_attribute_repository.clear_preferred(
                attribute.profile_id, attribute.attribute_key
            )
            await self.profile_attribute_repository.set_preferred([attribute.id])

            if attribute.attribute_key in AGGREGATE_KEYS:
                await self.profile_repository.save(
                    profile.model_copy(
                        update={
                            attribute.attribute_key.value: attribute.attribute_value,
                            "updated_at": datetime.now(timezone.utc),
                        }
                    )
                )

            logfire.info(
                "Preferred attribute set",
                profile_id=str(attribute.profile_id),
                attribute_key=attribute.attribute_key.value,
                attribute_id=str(attribute_id),
            )
            return attribute.model_copy(update={"is_preferred": True})
