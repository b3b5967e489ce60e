"""Consolidation domain service.

Turns one external identity's claims into profile attributes. Runs on every
identity create/update event, inside the same transaction as the identity
write.
"""

from datetime import datetime, timezone
from uuid import uuid4

import logfire

from nomen.domain.error import NotFoundError
from nomen.domain.model.external_identity import ExternalIdentity
from nomen.domain.model.profile import Profile
from nomen.domain.model.profile_attribute import ProfileAttribute
from nomen.domain.repository import (
    AccountRepository,
    ProfileAttributeRepository,
    ProfileRepository,
)
from nomen.domain.value import (
    AttributeKey,
    ConsolidationResult,
    ProfileAttributeId,
    ProfileId,
)

from .account_service import AccountService
from .base import Service
from .claims import extract_attributes
from .preference_service import PreferenceService


class ConsolidationService(Service):
    """Domain service attaching identities to profiles."""

    def __init__(
        self,
        account_service: AccountService,
        preference_service: PreferenceService,
        account_repository: AccountRepository,
        profile_repository: ProfileRepository,
        profile_attribute_repository: ProfileAttributeRepository,
    ) -> None:
        """Initialize consolidation service.

        Args:
            account_service: Account domain service
            preference_service: Preference domain service
            account_repository: Account repository
            profile_repository: Profile repository
            profile_attribute_repository: Profile attribute repository
        """
        self.account_service = account_service
        self.preference_service = preference_service
        self.account_repository = account_repository
        self.profile_repository = profile_repository
        self.profile_attribute_repository = profile_attribute_repository

    async def _lock_profile(self, profile_id: ProfileId) -> Profile:
        # Aggregate writers serialize on the profile row
        profile = await self.profile_repository.find_by_id(profile_id, for_update=True)
        if profile is None:
            raise NotFoundError("Profile", str(profile_id))
        return profile

    async def consolidate(self, identity: ExternalIdentity) -> ConsolidationResult:
        """Sync an identity's claims onto its account's profile.

        Steps:
        1. Ensure the account exists (self-heals out-of-order events)
        2. Create and link a profile if the account has none
        3. Upsert one attribute per present claim, keyed by identity and key
        4. Bootstrap preferences for keys with no preferred row
        5. Refresh the profile aggregate

        Args:
            identity: Stored identity (after upsert)

        Returns:
            Summary of what changed
        """
        with logfire.span(
            "consolidation_service.consolidate",
            identity_id=str(identity.id),
            account_id=str(identity.account_id),
            provider=identity.provider.value,
        ):
            await self.account_service.ensure_account(identity.account_id)
            # Concurrent events for one account serialize on this lock
            account = await self.account_repository.find_by_id(
                identity.account_id, for_update=True
            )
            if account is None:
                raise NotFoundError("Account", str(identity.account_id))

            extracted = extract_attributes(identity.claims)

            profile_created = False
            if account.profile_id is None:
                profile = Profile(
                    id=ProfileId(uuid4()),
                    display_name=extracted.get(AttributeKey.DISPLAY_NAME),
                    primary_email=extracted.get(AttributeKey.PRIMARY_EMAIL),
                )
                await self.profile_repository.save(profile)
                await self.account_repository.set_profile(account.id, profile.id)
                profile_id = profile.id
                profile_created = True
                logfire.info(
                    "Profile created",
                    profile_id=str(profile_id),
                    account_id=str(account.id),
                )
            else:
                profile_id = account.profile_id
                await self._lock_profile(profile_id)

            now = datetime.now(timezone.utc)
            for attribute_key, value in extracted.items():
                await self.profile_attribute_repository.upsert_for_identity(
                    ProfileAttribute(
                        id=ProfileAttributeId(uuid4()),
                        profile_id=profile_id,
                        identity_id=identity.id,
                        attribute_key=attribute_key,
                        attribute_value=value,
                        source_provider=identity.provider.value,
                        is_preferred=False,
                        created_at=now,
                        updated_at=now,
                    )
                )

            assigned = await self.preference_service.bootstrap_preferences(profile_id)
            await self.preference_service.refresh_aggregate(profile_id)

            logfire.info(
                "Identity consolidated",
                identity_id=str(identity.id),
                profile_id=str(profile_id),
                profile_created=profile_created,
                attributes=[key.value for key in extracted],
                preferences_assigned=assigned,
            )
            return ConsolidationResult(
                account_id=account.id,
                profile_id=profile_id,
                profile_created=profile_created,
                attributes_upserted=list(extracted),
                preferences_assigned=assigned,
            )

    async def import_legacy_claims(
        self, profile_id: ProfileId, source_provider: str, claims: dict
    ) -> list[AttributeKey]:
        """Attach claims that are not tied to a stored identity.

        Rows are keyed by provider instead of identity and go through the
        same preference bootstrap and aggregate refresh.

        Args:
            profile_id: Profile receiving the attributes
            source_provider: Provider the claims came from
            claims: Claims bag

        Returns:
            Attribute keys written
        """
        with logfire.span(
            "consolidation_service.import_legacy_claims",
            profile_id=str(profile_id),
            provider=source_provider,
        ):
            await self._lock_profile(profile_id)

            extracted = extract_attributes(claims)
            now = datetime.now(timezone.utc)
            for attribute_key, value in extracted.items():
                await self.profile_attribute_repository.upsert_legacy(
                    ProfileAttribute(
                        id=ProfileAttributeId(uuid4()),
                        profile_id=profile_id,
                        attribute_key=attribute_key,
                        attribute_value=value,
                        source_provider=source_provider,
                        created_at=now,
                        updated_at=now,
                    )
                )
            await self.reconcile_profile(profile_id)
            return list(extracted)

    async def reconcile_profile(self, profile_id: ProfileId) -> int:
        """Restore preference invariants after attributes went away.

        Used when an identity is unlinked and its attributes cascade away,
        possibly taking the preferred row of some key with them.

        Args:
            profile_id: Profile to reconcile

        Returns:
            Number of attributes newly marked preferred
        """
        with logfire.span(
            "consolidation_service.reconcile_profile", profile_id=str(profile_id)
        ):
            await self._lock_profile(profile_id)
            assigned = await self.preference_service.bootstrap_preferences(profile_id)
            await self.preference_service.refresh_aggregate(profile_id)
            return assigned
