"""End-to-end tests for profile and merge endpoints."""

from uuid import uuid4

import pytest
from fastapi.testclient import TestClient

from nomen.config import Settings
from nomen.interface.api.app import create_app
from nomen.util.jwt import create_token
from tests.di import build_test_container


@pytest.fixture
def client():
    """Create test client with test container."""
    return TestClient(create_app(container=build_test_container()))


def _sign_up(client: TestClient, provider: str, claims: dict) -> str:
    """Run the identity hook for a new principal; return a session token."""
    settings = Settings()
    principal_id = str(uuid4())
    response = client.post(
        "/hooks/identities",
        json={
            "identity_id": str(uuid4()),
            "principal_id": principal_id,
            "provider": provider,
            "provider_user_id": f"{provider}-{uuid4().hex[:8]}",
            "claims": claims,
        },
        headers={"X-Hook-Secret": settings.auth.hook_secret},
    )
    assert response.status_code == 200
    return create_token(principal_id, settings.auth)


def _auth(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


class TestProfileEndpoints:
    """End-to-end tests for /profile."""

    def test_profile_requires_session(self, client):
        """Should return 401 without a session token."""
        response = client.get("/profile/me")

        assert response.status_code == 401

    def test_invalid_session_token(self, client):
        """Should return 401 for a garbage cookie."""
        response = client.get("/profile/me", cookies={"auth_token": "invalid-token"})

        assert response.status_code == 401

    def test_own_profile(self, client):
        """Should return the caller's consolidated profile."""
        token = _sign_up(client, "github", {"name": "Ada", "email": "ada@example.com"})

        response = client.get("/profile/me", headers=_auth(token))

        assert response.status_code == 200
        body = response.json()
        assert body["display_name"] == "Ada"
        assert body["primary_email"] == "ada@example.com"
        assert body["linked_providers"] == [{"provider": "github", "count": 1}]

    def test_prefer_unknown_attribute(self, client):
        """Should return 404 for an unknown attribute."""
        token = _sign_up(client, "github", {"name": "Ada"})

        response = client.post(
            f"/profile/attributes/{uuid4()}/preferred", headers=_auth(token)
        )

        assert response.status_code == 404
        assert response.json()["error"] == "not_found"


class TestMergeFlow:
    """End-to-end tests for the two-party merge handshake."""

    def test_full_merge(self, client):
        """Should fold the second login into the requester's account."""
        # Arrange
        requester = _sign_up(client, "github", {"name": "Ada"})
        other = _sign_up(client, "google", {"name": "Ada L.", "email": "a@g.example"})

        # Act
        created = client.post("/merge/requests", headers=_auth(requester))
        token = created.json()["token"]
        info = client.get(f"/merge/requests/{token}", headers=_auth(other))
        executed = client.post(f"/merge/requests/{token}/execute", headers=_auth(other))
        profile = client.get("/profile/me", headers=_auth(requester))

        # Assert
        assert created.status_code == 201
        assert info.status_code == 200
        assert info.json()["requester_display_name"] == "Ada"
        assert executed.status_code == 200
        assert executed.json()["reauthentication_required"] is True
        body = profile.json()
        assert body["display_name"] == "Ada"
        assert body["primary_email"] == "a@g.example"
        assert body["linked_identity_count"] == 2
        assert len(body["merged_account_ids"]) == 1

    def test_token_cannot_be_replayed(self, client):
        """Should return 404 on a second execute."""
        requester = _sign_up(client, "github", {})
        other = _sign_up(client, "google", {})
        token = client.post("/merge/requests", headers=_auth(requester)).json()["token"]
        client.post(f"/merge/requests/{token}/execute", headers=_auth(other))

        response = client.post(f"/merge/requests/{token}/execute", headers=_auth(other))

        assert response.status_code == 404

    def test_requester_cannot_view_own_request(self, client):
        """Should return 409 when the requester opens their own token."""
        requester = _sign_up(client, "github", {})
        token = client.post("/merge/requests", headers=_auth(requester)).json()["token"]

        response = client.get(f"/merge/requests/{token}", headers=_auth(requester))

        assert response.status_code == 409
        assert response.json()["error"] == "same_account"

    def test_requester_cannot_execute_own_request(self, client):
        """Should return 400 and burn the token."""
        requester = _sign_up(client, "github", {})
        other = _sign_up(client, "google", {})
        token = client.post("/merge/requests", headers=_auth(requester)).json()["token"]

        response = client.post(
            f"/merge/requests/{token}/execute", headers=_auth(requester)
        )
        retry = client.post(f"/merge/requests/{token}/execute", headers=_auth(other))

        assert response.status_code == 400
        assert response.json()["error"] == "invalid_merge"
        assert retry.status_code == 404

    def test_cancel_then_view(self, client):
        """Should make a declined token unusable."""
        requester = _sign_up(client, "github", {})
        other = _sign_up(client, "google", {})
        token = client.post("/merge/requests", headers=_auth(requester)).json()["token"]

        cancelled = client.delete(f"/merge/requests/{token}", headers=_auth(other))
        response = client.get(f"/merge/requests/{token}", headers=_auth(other))

        assert cancelled.status_code == 200
        assert cancelled.json() == {"cancelled": True}
        assert response.status_code == 404

    def test_merge_candidate_lookup(self, client):
        """Should name the account owning another login."""
        caller = _sign_up(client, "github", {})
        settings = Settings()
        other_principal = str(uuid4())
        client.post(
            "/hooks/identities",
            json={
                "identity_id": str(uuid4()),
                "principal_id": other_principal,
                "provider": "google",
                "provider_user_id": "g-42",
                "claims": {"name": "Other Ada"},
            },
            headers={"X-Hook-Secret": settings.auth.hook_secret},
        )

        response = client.get(
            "/merge/candidates",
            params={"provider": "google", "provider_user_id": "g-42"},
            headers=_auth(caller),
        )

        assert response.status_code == 200
        assert response.json()["other_account_id"] == other_principal
        assert response.json()["other_display_name"] == "Other Ada"
