"""Caller authentication helpers for routes.

Callers present the gateway session JWT in the ``auth_token`` cookie or as
``Authorization: Bearer``. Gateway hooks present ``X-Hook-Secret``.
"""

import secrets

import logfire
from fastapi import Cookie, Header

from nomen.config import AuthSettings
from nomen.domain.error import NotAuthenticatedError


def session_token(
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> str | None:
    """Pick the session token from the cookie or the bearer header."""
    if auth_token:
        return auth_token
    if authorization:
        scheme, _, credentials = authorization.partition(" ")
        if scheme.lower() == "bearer" and credentials:
            return credentials.strip()
    return None


def require_hook_secret(provided: str | None, auth_settings: AuthSettings) -> None:
    """Check the shared secret on a gateway hook.

    Raises:
        NotAuthenticatedError: If the secret is missing or wrong
    """
    if not provided or not secrets.compare_digest(
        provided.encode(), auth_settings.hook_secret.encode()
    ):
        logfire.warn("Hook call with bad secret", has_secret=bool(provided))
        raise NotAuthenticatedError("Invalid hook secret")
