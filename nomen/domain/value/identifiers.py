"""Strongly typed identifiers for Nomen domain entities.

An AccountId is the gateway's principal id: accounts are 1:1 with
principals, so the same UUID names both.
"""

from typing import NewType
from uuid import UUID

AccountId = NewType("AccountId", UUID)
ProfileId = NewType("ProfileId", UUID)
IdentityId = NewType("IdentityId", UUID)
ProfileAttributeId = NewType("ProfileAttributeId", UUID)
MergeRequestId = NewType("MergeRequestId", UUID)
