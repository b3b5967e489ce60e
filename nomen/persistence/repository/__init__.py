"""PostgreSQL repository implementations."""

from nomen.persistence.repository.account import PostgresAccountRepository
from nomen.persistence.repository.external_identity import (
    PostgresExternalIdentityRepository,
)
from nomen.persistence.repository.merge_request import PostgresMergeRequestRepository
from nomen.persistence.repository.profile import PostgresProfileRepository
from nomen.persistence.repository.profile_attribute import (
    PostgresProfileAttributeRepository,
)
from nomen.persistence.repository.transaction import PostgresTransactionManager

__all__ = [
    "PostgresAccountRepository",
    "PostgresExternalIdentityRepository",
    "PostgresMergeRequestRepository",
    "PostgresProfileRepository",
    "PostgresProfileAttributeRepository",
    "PostgresTransactionManager",
]
