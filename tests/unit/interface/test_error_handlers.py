"""Unit tests for HTTP error mapping."""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from nomen.adapter.error import DirectoryError
from nomen.domain.error import (
    AlreadyMergedError,
    AlreadyOwnedError,
    ConflictError,
    DomainError,
    ExpiredError,
    InvalidMergeError,
    NoProfileError,
    NotAuthenticatedError,
    NotAuthorizedError,
    NotFoundError,
    SameAccountError,
)
from nomen.interface.error import register_error_handlers, status_for


@pytest.mark.parametrize(
    ("error", "expected"),
    [
        (NotAuthenticatedError(), 401),
        (NotAuthorizedError("ProfileAttribute", "a", "b"), 403),
        (NotFoundError("MergeRequest", "abc"), 404),
        (ExpiredError("MergeRequest", "abc"), 410),
        (SameAccountError("a"), 409),
        (AlreadyOwnedError("github", "1"), 409),
        (InvalidMergeError(), 400),
        (NoProfileError("source", "a"), 409),
        (AlreadyMergedError("p"), 409),
        (ConflictError("taken"), 409),
        (DomainError("other"), 400),
    ],
)
def test_status_for(error, expected):
    """Should map each error kind to its HTTP status."""
    assert status_for(error) == expected


@pytest.fixture
def client():
    """App with routes that raise, behind the real handlers."""
    app = FastAPI()
    register_error_handlers(app)

    @app.get("/expired")
    async def expired():
        raise ExpiredError("MergeRequest", "abcdefgh...")

    @app.get("/directory")
    async def directory():
        raise DirectoryError("connection refused")

    return TestClient(app)


class TestErrorResponses:
    """Response bodies produced by the handlers."""

    def test_domain_error_body(self, client):
        """Should return the message and stable error code."""
        response = client.get("/expired")

        assert response.status_code == 410
        assert response.json() == {
            "detail": "MergeRequest has expired: abcdefgh...",
            "error": "expired",
        }

    def test_directory_error_is_bad_gateway(self, client):
        """Should report gateway failures as 502 without internals."""
        response = client.get("/directory")

        assert response.status_code == 502
        assert response.json()["error"] == "directory_unavailable"
        assert "connection refused" not in response.json()["detail"]
