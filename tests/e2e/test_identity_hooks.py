"""End-to-end tests for the gateway hook endpoints."""

from uuid import uuid4

import pytest
from fastapi.testclient import TestClient

from nomen.config import Settings
from nomen.interface.api.app import create_app
from tests.di import build_test_container


@pytest.fixture
def client():
    """Create test client with test container."""
    return TestClient(create_app(container=build_test_container()))


@pytest.fixture
def hook_headers():
    """Headers carrying the configured hook secret."""
    return {"X-Hook-Secret": Settings().auth.hook_secret}


class TestIdentityHooks:
    """End-to-end tests for principal and identity hooks."""

    def test_health(self, client):
        """Should report the process as up."""
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "ok"

    def test_missing_secret_is_rejected(self, client):
        """Should return 401 without the hook secret."""
        response = client.post("/hooks/principals", json={"principal_id": str(uuid4())})

        assert response.status_code == 401
        assert response.json()["error"] == "not_authenticated"

    def test_wrong_secret_is_rejected(self, client):
        """Should return 401 with a wrong hook secret."""
        response = client.post(
            "/hooks/principals",
            json={"principal_id": str(uuid4())},
            headers={"X-Hook-Secret": "not-the-secret"},
        )

        assert response.status_code == 401

    def test_principal_then_identity(self, client, hook_headers):
        """Should create the account, then its profile from claims."""
        # Arrange
        principal_id = str(uuid4())

        # Act
        account = client.post(
            "/hooks/principals",
            json={"principal_id": principal_id},
            headers=hook_headers,
        )
        identity = client.post(
            "/hooks/identities",
            json={
                "identity_id": str(uuid4()),
                "principal_id": principal_id,
                "provider": "github",
                "provider_user_id": "583231",
                "claims": {"name": "Ada", "email": "ada@example.com"},
            },
            headers=hook_headers,
        )

        # Assert
        assert account.status_code == 200
        assert account.json() == {"account_id": principal_id, "profile_id": None}
        assert identity.status_code == 200
        body = identity.json()
        assert body["account_id"] == principal_id
        assert body["profile_created"] is True
        assert sorted(body["attributes_upserted"]) == ["display_name", "primary_email"]

    def test_unknown_provider_is_invalid(self, client, hook_headers):
        """Should reject an unsupported provider with 422."""
        response = client.post(
            "/hooks/identities",
            json={
                "identity_id": str(uuid4()),
                "principal_id": str(uuid4()),
                "provider": "myspace",
                "provider_user_id": "tom",
            },
            headers=hook_headers,
        )

        assert response.status_code == 422

    def test_remove_unknown_identity(self, client, hook_headers):
        """Should succeed quietly for an identity that is already gone."""
        identity_id = str(uuid4())

        response = client.delete(f"/hooks/identities/{identity_id}", headers=hook_headers)

        assert response.status_code == 200
        assert response.json()["removed"] is False
