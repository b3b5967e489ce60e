"""Unit tests for the profile use cases."""

from uuid import uuid4

import pytest

from nomen.application.usecase.identity import (
    EnsureAccountRequest,
    EnsureAccountUseCase,
    SyncIdentityUseCase,
)
from nomen.application.usecase.profile import (
    GetProfileOverviewRequest,
    GetProfileOverviewUseCase,
    SetPreferredAttributeRequest,
    SetPreferredAttributeUseCase,
)
from nomen.domain.error import NotAuthorizedError, NotFoundError
from nomen.domain.value import AttributeKey, AuthProvider
from tests.conftest import make_sync_request
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class TestGetProfileOverview:
    """Tests for GetProfileOverviewUseCase."""

    @pytest.mark.asyncio
    async def test_lists_attributes_and_providers(self, unit_env):
        """Should show every candidate value and provider counts."""
        # Arrange
        sync = await unit_env.get(SyncIdentityUseCase)
        overview = await unit_env.get(GetProfileOverviewUseCase)
        principal_id = uuid4()
        await sync.execute(
            make_sync_request(
                principal_id, claims={"name": "Ada", "email": "ada@example.com"}
            )
        )
        await sync.execute(
            make_sync_request(
                principal_id, provider=AuthProvider.GOOGLE, claims={"name": "Ada L."}
            )
        )
        await sync.execute(
            make_sync_request(principal_id, provider=AuthProvider.GOOGLE, claims={})
        )

        # Act
        response = await overview.execute(
            GetProfileOverviewRequest(account_id=principal_id)
        )

        # Assert
        assert response.display_name == "Ada"
        assert response.primary_email == "ada@example.com"
        assert len(response.attributes) == 3
        assert [(p.provider, p.count) for p in response.linked_providers] == [
            (AuthProvider.GITHUB, 1),
            (AuthProvider.GOOGLE, 2),
        ]
        assert response.linked_identity_count == 3
        assert response.merged_account_ids == []

    @pytest.mark.asyncio
    async def test_account_without_profile(self, unit_env):
        """Should return an empty overview for an account with no identities."""
        # Arrange
        ensure = await unit_env.get(EnsureAccountUseCase)
        overview = await unit_env.get(GetProfileOverviewUseCase)
        principal_id = uuid4()
        await ensure.execute(EnsureAccountRequest(principal_id=principal_id))

        # Act
        response = await overview.execute(
            GetProfileOverviewRequest(account_id=principal_id)
        )

        # Assert
        assert response.profile_id is None
        assert response.attributes == []
        assert response.linked_identity_count == 0

    @pytest.mark.asyncio
    async def test_unknown_account(self, unit_env):
        """Should raise NotFoundError for an unknown account."""
        overview = await unit_env.get(GetProfileOverviewUseCase)

        with pytest.raises(NotFoundError):
            await overview.execute(GetProfileOverviewRequest(account_id=uuid4()))


class TestSetPreferredAttribute:
    """Tests for SetPreferredAttributeUseCase."""

    @pytest.mark.asyncio
    async def test_choosing_other_email(self, unit_env):
        """Should return the refreshed profile summary."""
        # Arrange
        sync = await unit_env.get(SyncIdentityUseCase)
        overview = await unit_env.get(GetProfileOverviewUseCase)
        set_preferred = await unit_env.get(SetPreferredAttributeUseCase)
        principal_id = uuid4()
        await sync.execute(
            make_sync_request(principal_id, claims={"email": "work@example.com"})
        )
        await sync.execute(
            make_sync_request(
                principal_id,
                provider=AuthProvider.GOOGLE,
                claims={"email": "home@example.com"},
            )
        )
        before = await overview.execute(
            GetProfileOverviewRequest(account_id=principal_id)
        )
        home = next(
            a for a in before.attributes if a.attribute_value == "home@example.com"
        )

        # Act
        response = await set_preferred.execute(
            SetPreferredAttributeRequest(account_id=principal_id, attribute_id=home.id)
        )

        # Assert
        assert response.attribute_key == AttributeKey.PRIMARY_EMAIL
        assert response.primary_email == "home@example.com"
        after = await overview.execute(
            GetProfileOverviewRequest(account_id=principal_id)
        )
        assert [a.attribute_value for a in after.attributes if a.is_preferred] == [
            "home@example.com"
        ]

    @pytest.mark.asyncio
    async def test_someone_elses_attribute(self, unit_env):
        """Should raise NotAuthorizedError for another account's attribute."""
        # Arrange
        sync = await unit_env.get(SyncIdentityUseCase)
        overview = await unit_env.get(GetProfileOverviewUseCase)
        set_preferred = await unit_env.get(SetPreferredAttributeUseCase)
        owner = uuid4()
        intruder = uuid4()
        await sync.execute(make_sync_request(owner, claims={"name": "Ada"}))
        await sync.execute(make_sync_request(intruder, claims={"name": "Eve"}))
        owned = await overview.execute(GetProfileOverviewRequest(account_id=owner))

        # Act / Assert
        with pytest.raises(NotAuthorizedError):
            await set_preferred.execute(
                SetPreferredAttributeRequest(
                    account_id=intruder, attribute_id=owned.attributes[0].id
                )
            )
