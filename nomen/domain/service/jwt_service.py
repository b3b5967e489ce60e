"""Resolving callers from gateway session tokens."""

from uuid import UUID

import logfire
from pydantic import ValidationError

from nomen.config import AuthSettings
from nomen.domain.error import NotAuthenticatedError
from nomen.domain.value import AccountId
from nomen.util.jwt import JWTError, TokenPayload, create_token, verify_token

from .base import Service


class JWTService(Service):
    """Turns a session token into the calling account.

    Args:
        auth_settings: Secret, algorithm and audience shared with the gateway
    """

    def __init__(self, auth_settings: AuthSettings) -> None:
        self.auth_settings = auth_settings

    def create_token(self, account_id: AccountId, email: str | None = None) -> str:
        """Mint a gateway-shaped token for ``account_id``."""
        return create_token(str(account_id), self.auth_settings, email=email)

    def verify_token(self, token: str) -> TokenPayload:
        """Decode ``token``.

        Raises:
            JWTError: If the token is expired, forged or malformed
        """
        with logfire.span("jwt_service.verify_token"):
            try:
                return verify_token(token, self.auth_settings)
            except ValidationError as e:
                raise JWTError("Session token claims are malformed") from e

    def get_account_id_from_token(self, token: str | None) -> AccountId:
        """Account the caller acts as.

        Raises:
            NotAuthenticatedError: If there is no token, it does not verify,
                or ``sub`` is not a UUID
        """
        if not token:
            raise NotAuthenticatedError()

        try:
            payload = self.verify_token(token)
        except JWTError as e:
            logfire.warn("Session token rejected", reason=str(e))
            raise NotAuthenticatedError(str(e)) from e

        try:
            return AccountId(UUID(payload.sub))
        except ValueError as e:
            logfire.warn("Token subject is not an account ID", sub=payload.sub)
            raise NotAuthenticatedError("Invalid token subject") from e
