"""Gateway hook routes.

The authentication gateway calls these when principals and identities are
created, refreshed or removed. Every call carries ``X-Hook-Secret``.
"""

from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Header

from nomen.application.usecase.identity import (
    EnsureAccountRequest,
    EnsureAccountResponse,
    EnsureAccountUseCase,
    RemoveIdentityRequest,
    RemoveIdentityResponse,
    RemoveIdentityUseCase,
    SyncIdentityRequest,
    SyncIdentityResponse,
    SyncIdentityUseCase,
)
from nomen.config import AuthSettings
from nomen.interface.api.auth import require_hook_secret

router = APIRouter(prefix="/hooks", tags=["hooks"], route_class=DishkaRoute)


@router.post("/principals", response_model=EnsureAccountResponse)
async def principal_created(
    request: EnsureAccountRequest,
    ensure_account_use_case: FromDishka[EnsureAccountUseCase],
    auth_settings: FromDishka[AuthSettings],
    x_hook_secret: str | None = Header(default=None),
) -> EnsureAccountResponse:
    """Bind a new gateway principal to an account.

    Safe to call repeatedly for the same principal.

    Example:
        POST /hooks/principals
        X-Hook-Secret: ...

        Request:
        {"principal_id": "123e4567-e89b-12d3-a456-426614174000"}

        Response:
        {"account_id": "123e4567-...", "profile_id": null}
    """
    require_hook_secret(x_hook_secret, auth_settings)
    return await ensure_account_use_case.execute(request)


@router.post("/identities", response_model=SyncIdentityResponse)
async def identity_upserted(
    request: SyncIdentityRequest,
    sync_identity_use_case: FromDishka[SyncIdentityUseCase],
    auth_settings: FromDishka[AuthSettings],
    x_hook_secret: str | None = Header(default=None),
) -> SyncIdentityResponse:
    """Store an identity and consolidate its claims into the profile.

    Example:
        POST /hooks/identities
        X-Hook-Secret: ...

        Request:
        {
            "identity_id": "...",
            "principal_id": "...",
            "provider": "github",
            "provider_user_id": "583231",
            "claims": {"name": "Ada", "email": "ada@example.com"}
        }
    """
    require_hook_secret(x_hook_secret, auth_settings)
    return await sync_identity_use_case.execute(request)


@router.delete("/identities/{identity_id}", response_model=RemoveIdentityResponse)
async def identity_removed(
    identity_id: UUID,
    remove_identity_use_case: FromDishka[RemoveIdentityUseCase],
    auth_settings: FromDishka[AuthSettings],
    x_hook_secret: str | None = Header(default=None),
) -> RemoveIdentityResponse:
    """Drop an unlinked identity and its attributes."""
    require_hook_secret(x_hook_secret, auth_settings)
    return await remove_identity_use_case.execute(
        RemoveIdentityRequest(identity_id=identity_id)
    )
