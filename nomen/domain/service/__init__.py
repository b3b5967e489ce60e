"""Domain services."""

from .account_service import AccountService
from .base import Service
from .consolidation_service import ConsolidationService
from .identity_service import IdentityService
from .jwt_service import JWTService
from .merge_request_service import MergeRequestService
from .merge_service import MergeService, PrincipalDirectory
from .preference_service import PreferenceService

__all__ = [
    "AccountService",
    "ConsolidationService",
    "IdentityService",
    "JWTService",
    "MergeRequestService",
    "MergeService",
    "PreferenceService",
    "PrincipalDirectory",
    "Service",
]
