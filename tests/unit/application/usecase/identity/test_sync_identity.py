"""Unit tests for the identity hook use cases."""

import asyncio
from collections import Counter
from uuid import UUID, uuid4

import pytest

from nomen.application.usecase.identity import (
    EnsureAccountRequest,
    EnsureAccountUseCase,
    RemoveIdentityRequest,
    RemoveIdentityUseCase,
    SyncIdentityUseCase,
)
from nomen.domain.value import AccountId, AttributeKey, AuthProvider, ProfileId
from nomen.persistence.repository.inmemory import InMemoryDatabase
from tests.conftest import make_sync_request
from tests.di import build_test_container
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class TestEnsureAccount:
    """Tests for EnsureAccountUseCase."""

    @pytest.mark.asyncio
    async def test_repeated_principal_event(self, unit_env):
        """Should keep exactly one account per principal."""
        # Arrange
        use_case = await unit_env.get(EnsureAccountUseCase)
        database = await unit_env.get(InMemoryDatabase)
        principal_id = uuid4()

        # Act
        first = await use_case.execute(EnsureAccountRequest(principal_id=principal_id))
        second = await use_case.execute(EnsureAccountRequest(principal_id=principal_id))

        # Assert
        assert first.account_id == second.account_id == str(principal_id)
        assert first.profile_id is None
        assert len(database.accounts) == 1


class TestSyncIdentity:
    """Tests for SyncIdentityUseCase."""

    @pytest.mark.asyncio
    async def test_identity_before_principal_event(self, unit_env):
        """Should create the account itself when the identity arrives first."""
        # Arrange
        use_case = await unit_env.get(SyncIdentityUseCase)
        ensure = await unit_env.get(EnsureAccountUseCase)
        database = await unit_env.get(InMemoryDatabase)
        principal_id = uuid4()

        # Act
        response = await use_case.execute(
            make_sync_request(principal_id, claims={"name": "Ada"})
        )
        late = await ensure.execute(EnsureAccountRequest(principal_id=principal_id))

        # Assert
        assert response.profile_created is True
        assert response.attributes_upserted == [AttributeKey.DISPLAY_NAME]
        assert late.profile_id == response.profile_id
        assert len(database.accounts) == 1

    @pytest.mark.asyncio
    async def test_repeat_event_refreshes_claims_only(self, unit_env):
        """Should keep the stored account binding on a repeated event."""
        # Arrange
        use_case = await unit_env.get(SyncIdentityUseCase)
        database = await unit_env.get(InMemoryDatabase)
        principal_id = uuid4()
        request = make_sync_request(principal_id, claims={"name": "Ada"})
        await use_case.execute(request)

        # Act
        response = await use_case.execute(
            request.model_copy(
                update={"principal_id": uuid4(), "claims": {"name": "Ada L."}}
            )
        )

        # Assert
        identity = database.identities[request.identity_id]
        assert identity.account_id == principal_id
        assert identity.claims == {"name": "Ada L."}
        assert response.account_id == str(principal_id)
        profile = database.profiles[ProfileId(UUID(response.profile_id))]
        assert profile.display_name == "Ada L."

    @pytest.mark.asyncio
    async def test_second_provider_joins_profile(self, unit_env):
        """Should attach a second identity of one principal to the same profile."""
        # Arrange
        use_case = await unit_env.get(SyncIdentityUseCase)
        principal_id = uuid4()
        first = await use_case.execute(
            make_sync_request(principal_id, claims={"email": "ada@example.com"})
        )

        # Act
        second = await use_case.execute(
            make_sync_request(
                principal_id,
                provider=AuthProvider.GOOGLE,
                claims={"email": "ada@gmail.example"},
            )
        )

        # Assert
        assert second.profile_id == first.profile_id
        assert second.profile_created is False
        assert second.preferences_assigned == 0


class TestRemoveIdentity:
    """Tests for RemoveIdentityUseCase."""

    @pytest.mark.asyncio
    async def test_preference_falls_back_to_remaining_value(self, unit_env):
        """Should promote the remaining value when the preferred one goes."""
        # Arrange
        sync = await unit_env.get(SyncIdentityUseCase)
        remove = await unit_env.get(RemoveIdentityUseCase)
        database = await unit_env.get(InMemoryDatabase)
        principal_id = uuid4()
        first_request = make_sync_request(principal_id, claims={"name": "Ada"})
        await sync.execute(first_request)
        await sync.execute(
            make_sync_request(
                principal_id, provider=AuthProvider.GOOGLE, claims={"name": "Ada L."}
            )
        )

        # Act
        response = await remove.execute(
            RemoveIdentityRequest(identity_id=first_request.identity_id)
        )

        # Assert
        assert response.removed is True
        assert response.preferences_assigned == 1
        [attribute] = database.attributes.values()
        assert attribute.attribute_value == "Ada L."
        assert attribute.is_preferred is True
        profile_id = database.accounts[AccountId(principal_id)].profile_id
        assert database.profiles[profile_id].display_name == "Ada L."

    @pytest.mark.asyncio
    async def test_unknown_identity_is_noop(self, unit_env):
        """Should report nothing removed for an unknown identity."""
        remove = await unit_env.get(RemoveIdentityUseCase)

        response = await remove.execute(RemoveIdentityRequest(identity_id=uuid4()))

        assert response.removed is False


class TestConcurrentSync:
    """Duplicate identity events delivered at the same time."""

    @pytest.mark.asyncio
    async def test_duplicate_events_converge(self):
        """Should leave one profile and one attribute per identity and key."""
        # Arrange
        container = build_test_container()
        request = make_sync_request(
            uuid4(), claims={"name": "Ada", "email": "ada@github.example"}
        )

        async def deliver():
            async with container() as env:
                use_case = await env.get(SyncIdentityUseCase)
                return await use_case.execute(request)

        try:
            # Act
            responses = await asyncio.gather(deliver(), deliver(), deliver())
            async with container() as env:
                database = await env.get(InMemoryDatabase)

            # Assert
            assert len({r.profile_id for r in responses}) == 1
            assert sum(r.profile_created for r in responses) == 1
            assert len(database.accounts) == 1
            assert len(database.profiles) == 1
            assert len(database.identities) == 1
            per_key = Counter(
                (a.identity_id, a.attribute_key)
                for a in database.attributes.values()
            )
            assert set(per_key.values()) == {1}
            assert len(per_key) == 2
        finally:
            await container.close()
