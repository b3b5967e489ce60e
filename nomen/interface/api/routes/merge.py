"""Account merge routes.

Flow:
1. Signed in as the account to keep, ``POST /merge/requests`` for a token
2. Sign in with the other login, ``GET /merge/requests/{token}`` to see who asked
3. ``POST /merge/requests/{token}/execute`` to fold the current account into
   the requester, or ``DELETE /merge/requests/{token}`` to decline
"""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Depends, Query, status

from nomen.application.usecase.merge import (
    CancelMergeRequestRequest,
    CancelMergeRequestResponse,
    CancelMergeRequestUseCase,
    CheckMergeCandidateRequest,
    CheckMergeCandidateResponse,
    CheckMergeCandidateUseCase,
    CreateMergeRequestRequest,
    CreateMergeRequestResponse,
    CreateMergeRequestUseCase,
    ExecuteMergeRequest,
    ExecuteMergeResponse,
    ExecuteMergeUseCase,
    GetMergeRequesterInfoRequest,
    GetMergeRequesterInfoResponse,
    GetMergeRequesterInfoUseCase,
)
from nomen.domain.service import JWTService
from nomen.domain.value import AuthProvider
from nomen.interface.api.auth import session_token

router = APIRouter(prefix="/merge", tags=["merge"], route_class=DishkaRoute)


@router.post(
    "/requests",
    response_model=CreateMergeRequestResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_merge_request(
    create_merge_request_use_case: FromDishka[CreateMergeRequestUseCase],
    jwt_service: FromDishka[JWTService],
    token: str | None = Depends(session_token),
) -> CreateMergeRequestResponse:
    """Start a merge; any earlier token from the caller stops working."""
    account_id = jwt_service.get_account_id_from_token(token)
    return await create_merge_request_use_case.execute(
        CreateMergeRequestRequest(account_id=account_id)
    )


@router.get("/requests/{merge_token}", response_model=GetMergeRequesterInfoResponse)
async def get_merge_requester_info(
    merge_token: str,
    get_merge_requester_info_use_case: FromDishka[GetMergeRequesterInfoUseCase],
    jwt_service: FromDishka[JWTService],
    token: str | None = Depends(session_token),
) -> GetMergeRequesterInfoResponse:
    """Show who started the merge, for the second party to consent."""
    account_id = jwt_service.get_account_id_from_token(token)
    return await get_merge_requester_info_use_case.execute(
        GetMergeRequesterInfoRequest(token=merge_token, account_id=account_id)
    )


@router.delete("/requests/{merge_token}", response_model=CancelMergeRequestResponse)
async def cancel_merge_request(
    merge_token: str,
    cancel_merge_request_use_case: FromDishka[CancelMergeRequestUseCase],
    jwt_service: FromDishka[JWTService],
    token: str | None = Depends(session_token),
) -> CancelMergeRequestResponse:
    """Decline or abandon a merge."""
    jwt_service.get_account_id_from_token(token)
    return await cancel_merge_request_use_case.execute(
        CancelMergeRequestRequest(token=merge_token)
    )


@router.post(
    "/requests/{merge_token}/execute", response_model=ExecuteMergeResponse
)
async def execute_merge(
    merge_token: str,
    execute_merge_use_case: FromDishka[ExecuteMergeUseCase],
    jwt_service: FromDishka[JWTService],
    token: str | None = Depends(session_token),
) -> ExecuteMergeResponse:
    """Fold the caller's account into the requester's.

    The caller's session belongs to a deleted principal afterwards and must
    be replaced by signing in again.
    """
    account_id = jwt_service.get_account_id_from_token(token)
    return await execute_merge_use_case.execute(
        ExecuteMergeRequest(token=merge_token, account_id=account_id)
    )


@router.get("/candidates", response_model=CheckMergeCandidateResponse)
async def check_merge_candidate(
    check_merge_candidate_use_case: FromDishka[CheckMergeCandidateUseCase],
    jwt_service: FromDishka[JWTService],
    provider: AuthProvider = Query(...),
    provider_user_id: str = Query(..., min_length=1),
    token: str | None = Depends(session_token),
) -> CheckMergeCandidateResponse:
    """Tell the caller whether a login belongs to another account."""
    account_id = jwt_service.get_account_id_from_token(token)
    return await check_merge_candidate_use_case.execute(
        CheckMergeCandidateRequest(
            account_id=account_id,
            provider=provider,
            provider_user_id=provider_user_id,
        )
    )
