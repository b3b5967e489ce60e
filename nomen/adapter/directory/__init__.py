"""Gateway principal directory adapter."""

from .client import (
    HttpPrincipalDirectoryClient,
    MockPrincipalDirectoryClient,
    PrincipalDirectoryClient,
)

__all__ = [
    "PrincipalDirectoryClient",
    "HttpPrincipalDirectoryClient",
    "MockPrincipalDirectoryClient",
]
