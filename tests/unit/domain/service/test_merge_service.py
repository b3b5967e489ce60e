"""Unit tests for MergeService."""

from collections import Counter
from uuid import uuid4

import pytest

from nomen.adapter.directory.client import MockPrincipalDirectoryClient
from nomen.adapter.error import DirectoryError
from nomen.domain.error import (
    AlreadyMergedError,
    AlreadyOwnedError,
    InvalidMergeError,
    NoProfileError,
    NotFoundError,
)
from nomen.domain.model import Account
from nomen.domain.repository import TransactionManager
from nomen.domain.service import ConsolidationService, IdentityService, MergeService
from nomen.domain.service.merge_service import PrincipalDirectory
from nomen.domain.value import AccountId, AttributeKey, AuthProvider
from nomen.persistence.repository.inmemory import InMemoryDatabase
from tests.conftest import make_identity
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


async def _linked_account(env, provider: AuthProvider, claims: dict) -> AccountId:
    """Create an account with one stored identity and a consolidated profile."""
    identity_service = await env.get(IdentityService)
    consolidation = await env.get(ConsolidationService)
    account_id = AccountId(uuid4())
    identity = await identity_service.record_identity(
        make_identity(account_id, provider=provider, claims=claims)
    )
    await consolidation.consolidate(identity)
    return account_id


class TestMerge:
    """Tests for MergeService.merge()."""

    @pytest.mark.asyncio
    async def test_source_is_absorbed(self, unit_env):
        """Should move identities and attributes and delete the source."""
        # Arrange
        service = await unit_env.get(MergeService)
        database = await unit_env.get(InMemoryDatabase)
        directory = await unit_env.get(PrincipalDirectory)
        target = await _linked_account(
            unit_env, AuthProvider.GITHUB, {"name": "Ada", "email": "a@gh.example"}
        )
        source = await _linked_account(
            unit_env,
            AuthProvider.GOOGLE,
            {"name": "Ada Lovelace", "picture": "https://img.example.com/a.png"},
        )
        target_profile_id = database.accounts[target].profile_id
        source_profile_id = database.accounts[source].profile_id

        # Act
        result = await service.merge(target, source)

        # Assert
        assert result.target_account_id == target
        assert result.source_account_deleted == source
        assert result.identities_moved == 1
        assert result.attributes_merged == 2
        assert source not in database.accounts
        assert source_profile_id not in database.profiles
        assert all(i.account_id == target for i in database.identities.values())
        assert len(database.identities) == 2
        assert all(
            a.profile_id == target_profile_id for a in database.attributes.values()
        )
        assert isinstance(directory, MockPrincipalDirectoryClient)
        assert directory.deleted == [source]

    @pytest.mark.asyncio
    async def test_target_preferences_survive(self, unit_env):
        """Should keep target preferences and fill keys only the source had."""
        # Arrange
        service = await unit_env.get(MergeService)
        database = await unit_env.get(InMemoryDatabase)
        target = await _linked_account(unit_env, AuthProvider.GITHUB, {"name": "Ada"})
        source = await _linked_account(
            unit_env,
            AuthProvider.GOOGLE,
            {"name": "Ada Lovelace", "email": "ada@google.example"},
        )

        # Act
        await service.merge(target, source)

        # Assert
        preferred = {
            a.attribute_key: a.attribute_value
            for a in database.attributes.values()
            if a.is_preferred
        }
        assert preferred == {
            AttributeKey.DISPLAY_NAME: "Ada",
            AttributeKey.PRIMARY_EMAIL: "ada@google.example",
        }
        profile = database.profiles[database.accounts[target].profile_id]
        assert profile.display_name == "Ada"
        assert profile.primary_email == "ada@google.example"
        assert profile.merged_account_ids == [source]

    @pytest.mark.asyncio
    async def test_colliding_legacy_rows_are_folded(self, unit_env):
        """Should keep one legacy row per key and provider on the target."""
        # Arrange
        service = await unit_env.get(MergeService)
        consolidation = await unit_env.get(ConsolidationService)
        database = await unit_env.get(InMemoryDatabase)
        target = await _linked_account(unit_env, AuthProvider.GITHUB, {"name": "Ada"})
        source = await _linked_account(unit_env, AuthProvider.GOOGLE, {"name": "A"})
        target_profile_id = database.accounts[target].profile_id
        await consolidation.import_legacy_claims(
            target_profile_id, "orcid", {"name": "Ada Lovelace"}
        )
        await consolidation.import_legacy_claims(
            database.accounts[source].profile_id,
            "orcid",
            {"name": "A. Lovelace", "email": "ada@orcid.example"},
        )

        # Act
        result = await service.merge(target, source)

        # Assert
        legacy = Counter(
            (a.profile_id, a.attribute_key, a.source_provider)
            for a in database.attributes.values()
            if a.identity_id is None
        )
        assert max(legacy.values()) == 1
        assert legacy == Counter(
            {
                (target_profile_id, AttributeKey.DISPLAY_NAME, "orcid"): 1,
                (target_profile_id, AttributeKey.PRIMARY_EMAIL, "orcid"): 1,
            }
        )
        kept = next(
            a
            for a in database.attributes.values()
            if a.identity_id is None and a.attribute_key == AttributeKey.DISPLAY_NAME
        )
        assert kept.attribute_value == "Ada Lovelace"
        assert result.attributes_merged == 3

    @pytest.mark.asyncio
    async def test_directory_failure_rolls_back(self, unit_env):
        """Should leave both accounts intact when the gateway call fails."""
        # Arrange
        service = await unit_env.get(MergeService)
        database = await unit_env.get(InMemoryDatabase)
        directory = await unit_env.get(PrincipalDirectory)
        transaction_manager = await unit_env.get(TransactionManager)
        target = await _linked_account(unit_env, AuthProvider.GITHUB, {"name": "Ada"})
        source = await _linked_account(unit_env, AuthProvider.GOOGLE, {"name": "A"})
        before = database.snapshot()
        directory.fail_with = DirectoryError("gateway down")

        # Act
        with pytest.raises(DirectoryError):
            async with transaction_manager.transaction():
                await service.merge(target, source)

        # Assert
        assert database.snapshot() == before
        assert source in database.accounts

    @pytest.mark.asyncio
    async def test_same_account_is_invalid(self, unit_env):
        """Should refuse to merge an account into itself."""
        service = await unit_env.get(MergeService)
        account_id = await _linked_account(unit_env, AuthProvider.GITHUB, {})

        with pytest.raises(InvalidMergeError):
            await service.merge(account_id, account_id)

    @pytest.mark.asyncio
    async def test_source_without_profile(self, unit_env):
        """Should raise NoProfileError naming the source side."""
        # Arrange
        service = await unit_env.get(MergeService)
        database = await unit_env.get(InMemoryDatabase)
        target = await _linked_account(unit_env, AuthProvider.GITHUB, {})
        bare = Account(id=AccountId(uuid4()))
        database.accounts[bare.id] = bare

        # Act / Assert
        with pytest.raises(NoProfileError) as exc_info:
            await service.merge(target, bare.id)
        assert exc_info.value.side == "source"

    @pytest.mark.asyncio
    async def test_missing_target(self, unit_env):
        """Should raise NoProfileError naming the target side."""
        service = await unit_env.get(MergeService)
        source = await _linked_account(unit_env, AuthProvider.GITHUB, {})

        with pytest.raises(NoProfileError) as exc_info:
            await service.merge(AccountId(uuid4()), source)
        assert exc_info.value.side == "target"

    @pytest.mark.asyncio
    async def test_shared_profile_is_already_merged(self, unit_env):
        """Should raise AlreadyMergedError for accounts on one profile."""
        # Arrange
        service = await unit_env.get(MergeService)
        database = await unit_env.get(InMemoryDatabase)
        target = await _linked_account(unit_env, AuthProvider.GITHUB, {})
        twin = Account(
            id=AccountId(uuid4()), profile_id=database.accounts[target].profile_id
        )
        database.accounts[twin.id] = twin

        # Act / Assert
        with pytest.raises(AlreadyMergedError):
            await service.merge(target, twin.id)


class TestCheckMergeCandidate:
    """Tests for MergeService.check_merge_candidate()."""

    @pytest.mark.asyncio
    async def test_reports_other_owner(self, unit_env):
        """Should describe the account owning the identity."""
        # Arrange
        service = await unit_env.get(MergeService)
        identity_service = await unit_env.get(IdentityService)
        other = await _linked_account(
            unit_env, AuthProvider.GITHUB, {"name": "Ada", "email": "ada@example.com"}
        )
        [identity] = await identity_service.get_identities_for_account(other)

        # Act
        candidate = await service.check_merge_candidate(
            AuthProvider.GITHUB, identity.provider_user_id, AccountId(uuid4())
        )

        # Assert
        assert candidate.can_merge is True
        assert candidate.other_account_id == other
        assert candidate.other_display_name == "Ada"
        assert candidate.other_email == "ada@example.com"

    @pytest.mark.asyncio
    async def test_own_identity_is_already_owned(self, unit_env):
        """Should raise AlreadyOwnedError for the caller's own identity."""
        # Arrange
        service = await unit_env.get(MergeService)
        identity_service = await unit_env.get(IdentityService)
        caller = await _linked_account(unit_env, AuthProvider.GITHUB, {})
        [identity] = await identity_service.get_identities_for_account(caller)

        # Act / Assert
        with pytest.raises(AlreadyOwnedError):
            await service.check_merge_candidate(
                AuthProvider.GITHUB, identity.provider_user_id, caller
            )

    @pytest.mark.asyncio
    async def test_unknown_identity(self, unit_env):
        """Should raise NotFoundError when nobody owns the identity."""
        service = await unit_env.get(MergeService)

        with pytest.raises(NotFoundError):
            await service.check_merge_candidate(
                AuthProvider.GITHUB, "nobody", AccountId(uuid4())
            )
