"""Profile routes for the signed-in caller."""

from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Depends

from nomen.application.usecase.profile import (
    GetProfileOverviewRequest,
    GetProfileOverviewResponse,
    GetProfileOverviewUseCase,
    SetPreferredAttributeRequest,
    SetPreferredAttributeResponse,
    SetPreferredAttributeUseCase,
)
from nomen.domain.service import JWTService
from nomen.interface.api.auth import session_token

router = APIRouter(prefix="/profile", tags=["profile"], route_class=DishkaRoute)


@router.get("/me", response_model=GetProfileOverviewResponse)
async def get_my_profile(
    get_profile_overview_use_case: FromDishka[GetProfileOverviewUseCase],
    jwt_service: FromDishka[JWTService],
    token: str | None = Depends(session_token),
) -> GetProfileOverviewResponse:
    """Get the caller's profile, attributes and linked providers.

    Example:
        GET /profile/me
        Cookie: auth_token=...

        Response:
        {
            "account_id": "...",
            "profile_id": "...",
            "display_name": "Ada Lovelace",
            "primary_email": "ada@example.com",
            "attributes": [...],
            "linked_providers": [{"provider": "github", "count": 1}],
            "linked_identity_count": 1
        }
    """
    account_id = jwt_service.get_account_id_from_token(token)
    return await get_profile_overview_use_case.execute(
        GetProfileOverviewRequest(account_id=account_id)
    )


@router.post(
    "/attributes/{attribute_id}/preferred",
    response_model=SetPreferredAttributeResponse,
)
async def set_preferred_attribute(
    attribute_id: UUID,
    set_preferred_attribute_use_case: FromDishka[SetPreferredAttributeUseCase],
    jwt_service: FromDishka[JWTService],
    token: str | None = Depends(session_token),
) -> SetPreferredAttributeResponse:
    """Choose which value the caller's profile shows for that key."""
    account_id = jwt_service.get_account_id_from_token(token)
    return await set_preferred_attribute_use_case.execute(
        SetPreferredAttributeRequest(account_id=account_id, attribute_id=attribute_id)
    )
