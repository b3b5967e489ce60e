"""Repository interfaces for Nomen domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the infrastructure layer.
"""

from nomen.domain.repository.account import AccountRepository
from nomen.domain.repository.external_identity import ExternalIdentityRepository
from nomen.domain.repository.merge_request import MergeRequestRepository
from nomen.domain.repository.profile import ProfileRepository
from nomen.domain.repository.profile_attribute import ProfileAttributeRepository
from nomen.domain.repository.transaction import TransactionManager

__all__ = [
    "AccountRepository",
    "ExternalIdentityRepository",
    "MergeRequestRepository",
    "ProfileRepository",
    "ProfileAttributeRepository",
    "TransactionManager",
]
