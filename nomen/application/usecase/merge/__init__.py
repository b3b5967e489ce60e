"""Merge use cases."""

from nomen.application.usecase.merge.cancel_merge_request import (
    CancelMergeRequestRequest,
    CancelMergeRequestResponse,
    CancelMergeRequestUseCase,
)
from nomen.application.usecase.merge.check_merge_candidate import (
    CheckMergeCandidateRequest,
    CheckMergeCandidateResponse,
    CheckMergeCandidateUseCase,
)
from nomen.application.usecase.merge.create_merge_request import (
    CreateMergeRequestRequest,
    CreateMergeRequestResponse,
    CreateMergeRequestUseCase,
)
from nomen.application.usecase.merge.execute_merge import (
    ExecuteMergeRequest,
    ExecuteMergeResponse,
    ExecuteMergeUseCase,
)
from nomen.application.usecase.merge.get_merge_requester_info import (
    GetMergeRequesterInfoRequest,
    GetMergeRequesterInfoResponse,
    GetMergeRequesterInfoUseCase,
)
from nomen.application.usecase.merge.purge_expired_merge_requests import (
    PurgeExpiredMergeRequestsResponse,
    PurgeExpiredMergeRequestsUseCase,
)

__all__ = [
    "CancelMergeRequestRequest",
    "CancelMergeRequestResponse",
    "CancelMergeRequestUseCase",
    "CheckMergeCandidateRequest",
    "CheckMergeCandidateResponse",
    "CheckMergeCandidateUseCase",
    "CreateMergeRequestRequest",
    "CreateMergeRequestResponse",
    "CreateMergeRequestUseCase",
    "ExecuteMergeRequest",
    "ExecuteMergeResponse",
    "ExecuteMergeUseCase",
    "GetMergeRequesterInfoRequest",
    "GetMergeRequesterInfoResponse",
    "GetMergeRequesterInfoUseCase",
    "PurgeExpiredMergeRequestsResponse",
    "PurgeExpiredMergeRequestsUseCase",
]
