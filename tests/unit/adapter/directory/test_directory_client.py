"""Unit tests for the principal directory clients."""

from uuid import uuid4

import httpx
import pytest

from nomen.adapter.directory.client import (
    HttpPrincipalDirectoryClient,
    MockPrincipalDirectoryClient,
)
from nomen.adapter.error import DirectoryError
from nomen.domain.service.merge_service import PrincipalDirectory
from nomen.domain.value import AccountId


def _client(handler) -> HttpPrincipalDirectoryClient:
    return HttpPrincipalDirectoryClient(
        base_url="https://auth.example.com/",
        service_key="service-key",
        transport=httpx.MockTransport(handler),
    )


class TestHttpPrincipalDirectoryClient:
    """Tests for HttpPrincipalDirectoryClient.delete_principal()."""

    @pytest.mark.asyncio
    async def test_sends_authorized_delete(self):
        """Should DELETE the principal with the service key."""
        # Arrange
        seen: list[httpx.Request] = []
        principal_id = AccountId(uuid4())

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={})

        # Act
        await _client(handler).delete_principal(principal_id)

        # Assert
        [request] = seen
        assert request.method == "DELETE"
        assert str(request.url) == f"https://auth.example.com/admin/users/{principal_id}"
        assert request.headers["Authorization"] == "Bearer service-key"
        assert request.headers["apikey"] == "service-key"

    @pytest.mark.asyncio
    async def test_already_deleted_is_success(self):
        """Should treat 404 as already deleted."""
        await _client(lambda request: httpx.Response(404)).delete_principal(
            AccountId(uuid4())
        )

    @pytest.mark.asyncio
    async def test_server_error_raises(self):
        """Should raise DirectoryError on other failures."""
        with pytest.raises(DirectoryError):
            await _client(lambda request: httpx.Response(500)).delete_principal(
                AccountId(uuid4())
            )

    @pytest.mark.asyncio
    async def test_transport_error_raises(self):
        """Should wrap connection failures in DirectoryError."""

        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        with pytest.raises(DirectoryError):
            await _client(handler).delete_principal(AccountId(uuid4()))


class TestMockPrincipalDirectoryClient:
    """Tests for MockPrincipalDirectoryClient."""

    @pytest.mark.asyncio
    async def test_records_each_principal_once(self):
        """Should record deletions idempotently."""
        client = MockPrincipalDirectoryClient()
        principal_id = AccountId(uuid4())

        await client.delete_principal(principal_id)
        await client.delete_principal(principal_id)

        assert client.deleted == [principal_id]


class TestPrincipalDirectoryPort:
    """Tests for the PrincipalDirectory port."""

    def test_port_is_abstract(self):
        """Should refuse to build the port or a client missing delete_principal."""

        class Incomplete(PrincipalDirectory):
            pass

        with pytest.raises(TypeError):
            PrincipalDirectory()
        with pytest.raises(TypeError):
            Incomplete()

    def test_clients_implement_port(self):
        """Should accept both clients as a PrincipalDirectory."""
        assert issubclass(HttpPrincipalDirectoryClient, PrincipalDirectory)
        assert isinstance(MockPrincipalDirectoryClient(), PrincipalDirectory)
