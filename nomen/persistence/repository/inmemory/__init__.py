"""In-memory repository implementations for testing."""

from .account import InMemoryAccountRepository
from .database import InMemoryDatabase, InMemoryTransactionManager
from .external_identity import InMemoryExternalIdentityRepository
from .merge_request import InMemoryMergeRequestRepository
from .profile import InMemoryProfileRepository
from .profile_attribute import InMemoryProfileAttributeRepository

__all__ = [
    "InMemoryAccountRepository",
    "InMemoryDatabase",
    "InMemoryExternalIdentityRepository",
    "InMemoryMergeRequestRepository",
    "InMemoryProfileRepository",
    "InMemoryProfileAttributeRepository",
    "InMemoryTransactionManager",
]
