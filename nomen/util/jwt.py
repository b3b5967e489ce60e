"""Gateway session tokens.

The gateway signs HS256 tokens whose ``sub`` is the principal id, which
nomen uses as the account id. Minting lives here only so tests and local
tooling can produce tokens the gateway would have issued.
"""

from datetime import datetime, timedelta, timezone
from typing import Any

import jwt
from pydantic import BaseModel

from nomen.config import AuthSettings

GATEWAY_ROLE = "authenticated"


class TokenPayload(BaseModel):
    """Claims nomen reads from a session token."""

    sub: str
    exp: datetime
    email: str | None = None
    role: str | None = None


class JWTError(Exception):
    """A session token could not be trusted."""


def create_token(
    account_id: str, settings: AuthSettings, email: str | None = None
) -> str:
    """Sign a token shaped like the gateway's."""
    claims: dict[str, Any] = {
        "sub": account_id,
        "role": GATEWAY_ROLE,
        "exp": datetime.now(timezone.utc)
        + timedelta(minutes=settings.jwt_expiry_minutes),
    }
    if settings.jwt_audience:
        claims["aud"] = settings.jwt_audience
    if email:
        claims["email"] = email
    return jwt.encode(claims, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def verify_token(token: str, settings: AuthSettings) -> TokenPayload:
    """Check signature, expiry and audience.

    The audience is only enforced when one is configured.

    Raises:
        JWTError: If the token fails any check
    """
    try:
        claims = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            audience=settings.jwt_audience,
            options={"verify_aud": settings.jwt_audience is not None},
        )
    except jwt.ExpiredSignatureError as e:
        raise JWTError("Session token expired") from e
    except jwt.InvalidTokenError as e:
        raise JWTError(f"Session token rejected: {e}") from e
    return TokenPayload(**claims)
