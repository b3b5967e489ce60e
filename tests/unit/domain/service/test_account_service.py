"""Unit tests for AccountService."""

from uuid import uuid4

import pytest

from nomen.domain.error import NotFoundError
from nomen.domain.service import AccountService
from nomen.domain.value import AccountId, ProfileId
from nomen.persistence.repository.inmemory import (
    InMemoryAccountRepository,
    InMemoryDatabase,
)


class TestEnsureAccount:
    """Tests for AccountService.ensure_account()."""

    @pytest.mark.asyncio
    async def test_creates_account_for_new_principal(self):
        """Should create an account with the principal's ID and no profile."""
        # Arrange
        database = InMemoryDatabase()
        service = AccountService(InMemoryAccountRepository(database))
        principal_id = AccountId(uuid4())

        # Act
        account = await service.ensure_account(principal_id)

        # Assert
        assert account.id == principal_id
        assert account.profile_id is None
        assert principal_id in database.accounts

    @pytest.mark.asyncio
    async def test_is_idempotent(self):
        """Should return the existing account on repeated calls."""
        # Arrange
        database = InMemoryDatabase()
        repo = InMemoryAccountRepository(database)
        service = AccountService(repo)
        principal_id = AccountId(uuid4())
        first = await service.ensure_account(principal_id)
        profile_id = ProfileId(uuid4())
        await repo.set_profile(principal_id, profile_id)

        # Act
        second = await service.ensure_account(principal_id)

        # Assert
        assert len(database.accounts) == 1
        assert second.created_at == first.created_at
        assert second.profile_id == profile_id


class TestGetById:
    """Tests for AccountService.get_by_id()."""

    @pytest.mark.asyncio
    async def test_missing_account_raises(self):
        """Should raise NotFoundError for an unknown account."""
        service = AccountService(InMemoryAccountRepository(InMemoryDatabase()))

        with pytest.raises(NotFoundError):
            await service.get_by_id(AccountId(uuid4()))
