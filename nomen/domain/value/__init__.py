"""Domain value objects for Nomen."""

from nomen.domain.value.identifiers import (
    AccountId,
    IdentityId,
    MergeRequestId,
    ProfileAttributeId,
    ProfileId,
)
from nomen.domain.value.types import (
    AGGREGATE_KEYS,
    AttributeKey,
    AuthProvider,
    ConsolidationResult,
    MergeCandidate,
    MergeResult,
    MergeToken,
    RequesterInfo,
)

__all__ = [
    # Identifiers
    "AccountId",
    "ProfileId",
    "IdentityId",
    "ProfileAttributeId",
    "MergeRequestId",
    # Types
    "AGGREGATE_KEYS",
    "AttributeKey",
    "AuthProvider",
    "ConsolidationResult",
    "MergeCandidate",
    "MergeResult",
    "MergeToken",
    "RequesterInfo",
]
