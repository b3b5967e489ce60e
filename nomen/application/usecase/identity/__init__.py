"""Identity use cases."""

from nomen.application.usecase.identity.ensure_account import (
    EnsureAccountRequest,
    EnsureAccountResponse,
    EnsureAccountUseCase,
)
from nomen.application.usecase.identity.remove_identity import (
    RemoveIdentityRequest,
    RemoveIdentityResponse,
    RemoveIdentityUseCase,
)
from nomen.application.usecase.identity.sync_identity import (
    SyncIdentityRequest,
    SyncIdentityResponse,
    SyncIdentityUseCase,
)

__all__ = [
    "EnsureAccountRequest",
    "EnsureAccountResponse",
    "EnsureAccountUseCase",
    "RemoveIdentityRequest",
    "RemoveIdentityResponse",
    "RemoveIdentityUseCase",
    "SyncIdentityRequest",
    "SyncIdentityResponse",
    "SyncIdentityUseCase",
]
