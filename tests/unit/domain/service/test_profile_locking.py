"""Unit tests for profile row locking by the aggregate writers."""

from typing import Optional
from uuid import uuid4

import pytest

from nomen.adapter.directory.client import MockPrincipalDirectoryClient
from nomen.domain.model import Profile
from nomen.domain.service import (
    AccountService,
    ConsolidationService,
    IdentityService,
    MergeService,
    PreferenceService,
)
from nomen.domain.value import AccountId, AuthProvider, ProfileId
from nomen.persistence.repository.inmemory import (
    InMemoryAccountRepository,
    InMemoryDatabase,
    InMemoryExternalIdentityRepository,
    InMemoryProfileAttributeRepository,
    InMemoryProfileRepository,
)
from tests.conftest import make_identity


class LockRecordingProfileRepository(InMemoryProfileRepository):
    """Remembers every profile read with ``for_update``."""

    def __init__(self, database: InMemoryDatabase) -> None:
        super().__init__(database)
        self.locked: list[ProfileId] = []

    async def find_by_id(
        self, profile_id: ProfileId, for_update: bool = False
    ) -> Optional[Profile]:
        if for_update:
            self.locked.append(profile_id)
        return await super().find_by_id(profile_id, for_update)


class Services:
    """Domain services wired over one in-memory database."""

    def __init__(self) -> None:
        self.database = InMemoryDatabase()
        accounts = InMemoryAccountRepository(self.database)
        identities = InMemoryExternalIdentityRepository(self.database)
        attributes = InMemoryProfileAttributeRepository(self.database)
        self.profiles = LockRecordingProfileRepository(self.database)

        self.preference = PreferenceService(
            account_repository=accounts,
            profile_repository=self.profiles,
            profile_attribute_repository=attributes,
        )
        self.identity = IdentityService(identity_repository=identities)
        self.consolidation = ConsolidationService(
            account_service=AccountService(account_repository=accounts),
            preference_service=self.preference,
            account_repository=accounts,
            profile_repository=self.profiles,
            profile_attribute_repository=attributes,
        )
        self.merge = MergeService(
            account_repository=accounts,
            profile_repository=self.profiles,
            identity_repository=identities,
            profile_attribute_repository=attributes,
            preference_service=self.preference,
            principal_directory=MockPrincipalDirectoryClient(),
        )

    async def link(self, account_id: AccountId, provider: AuthProvider, claims: dict):
        identity = await self.identity.record_identity(
            make_identity(account_id, provider=provider, claims=claims)
        )
        return await self.consolidation.consolidate(identity)


class TestProfileLocking:
    """Every path rewriting the aggregate locks the profile row first."""

    @pytest.mark.asyncio
    async def test_merge_locks_both_profiles(self):
        """Should lock target and source profiles in a fixed order."""
        # Arrange
        services = Services()
        target = AccountId(uuid4())
        source = AccountId(uuid4())
        target_profile = (
            await services.link(target, AuthProvider.GITHUB, {"name": "Ada"})
        ).profile_id
        source_profile = (
            await services.link(source, AuthProvider.GOOGLE, {"name": "A"})
        ).profile_id
        services.profiles.locked.clear()

        # Act
        await services.merge.merge(target, source)

        # Assert
        assert services.profiles.locked[:2] == sorted(
            [target_profile, source_profile], key=str
        )

    @pytest.mark.asyncio
    async def test_second_identity_locks_existing_profile(self):
        """Should lock the profile before refreshing it from a new identity."""
        # Arrange
        services = Services()
        account_id = AccountId(uuid4())
        first = await services.link(account_id, AuthProvider.GITHUB, {"name": "Ada"})
        services.profiles.locked.clear()

        # Act
        await services.link(account_id, AuthProvider.GOOGLE, {"name": "Ada L."})

        # Assert
        assert services.profiles.locked == [first.profile_id]

    @pytest.mark.asyncio
    async def test_reconcile_locks_profile(self):
        """Should lock the profile before re-bootstrapping preferences."""
        # Arrange
        services = Services()
        result = await services.link(
            AccountId(uuid4()), AuthProvider.GITHUB, {"name": "Ada"}
        )
        services.profiles.locked.clear()

        # Act
        await services.consolidation.reconcile_profile(result.profile_id)

        # Assert
        assert services.profiles.locked == [result.profile_id]

