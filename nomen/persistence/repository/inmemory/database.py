"""Shared in-memory store for testing.

All in-memory repositories of one container read and write the same
``InMemoryDatabase``. It emulates the foreign-key cascades of the real
schema and gives ``InMemoryTransactionManager`` a snapshot to restore.
"""

import asyncio
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Any, AsyncIterator

from nomen.domain.model import (
    Account,
    ExternalIdentity,
    MergeRequest,
    Profile,
    ProfileAttribute,
)
from nomen.domain.repository.transaction import TransactionManager
from nomen.domain.value import (
    AccountId,
    IdentityId,
    MergeRequestId,
    ProfileAttributeId,
    ProfileId,
)


class InMemoryDatabase:
    """Tables as dicts keyed by primary key."""

    def __init__(self) -> None:
        self.accounts: dict[AccountId, Account] = {}
        self.profiles: dict[ProfileId, Profile] = {}
        self.identities: dict[IdentityId, ExternalIdentity] = {}
        self.attributes: dict[ProfileAttributeId, ProfileAttribute] = {}
        self.merge_requests: dict[MergeRequestId, MergeRequest] = {}
        self.lock = asyncio.Lock()

    def snapshot(self) -> dict[str, dict[Any, Any]]:
        """Copy every table. Entities are frozen, so shallow copies suffice."""
        return {
            "accounts": dict(self.accounts),
            "profiles": dict(self.profiles),
            "identities": dict(self.identities),
            "attributes": dict(self.attributes),
            "merge_requests": dict(self.merge_requests),
        }

    def restore(self, snapshot: dict[str, dict[Any, Any]]) -> None:
        """Put every table back as it was in ``snapshot``."""
        self.accounts = snapshot["accounts"]
        self.profiles = snapshot["profiles"]
        self.identities = snapshot["identities"]
        self.attributes = snapshot["attributes"]
        self.merge_requests = snapshot["merge_requests"]

    def delete_profile(self, profile_id: ProfileId) -> None:
        """Delete a profile: attributes cascade, accounts are unlinked."""
        self.profiles.pop(profile_id, None)
        self.attributes = {
            k: a for k, a in self.attributes.items() if a.profile_id != profile_id
        }
        now = datetime.now(timezone.utc)
        for account_id, account in list(self.accounts.items()):
            if account.profile_id == profile_id:
                self.accounts[account_id] = account.model_copy(
                    update={"profile_id": None, "updated_at": now}
                )

    def delete_identity(self, identity_id: IdentityId) -> None:
        """Delete an identity: its attributes cascade."""
        self.identities.pop(identity_id, None)
        self.attributes = {
            k: a for k, a in self.attributes.items() if a.identity_id != identity_id
        }

    def delete_account(self, account_id: AccountId) -> None:
        """Delete an account: identities and merge requests cascade."""
        self.accounts.pop(account_id, None)
        for identity_id in [
            i.id for i in self.identities.values() if i.account_id == account_id
        ]:
            self.delete_identity(identity_id)
        self.merge_requests = {
            k: r
            for k, r in self.merge_requests.items()
            if r.requester_account_id != account_id
        }


class InMemoryTransactionManager(TransactionManager):
    """Transactions over an ``InMemoryDatabase``.

    The outermost block holds the database lock, so transactions from
    different requests run one at a time. Any block that raises restores
    the snapshot taken when it opened.
    """

    def __init__(self, database: InMemoryDatabase) -> None:
        self.database = database
        self._depth = 0

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[None]:
        """Open a transaction, or a savepoint if one is already open."""
        if self._depth == 0:
            async with self.database.lock:
                async with self._savepoint():
                    yield
        else:
            async with self._savepoint():
                yield

    @asynccontextmanager
    async def _savepoint(self) -> AsyncIterator[None]:
        snapshot = self.database.snapshot()
        self._depth += 1
        try:
            yield
        except BaseException:
            self.database.restore(snapshot)
            raise
        finally:
            self._depth -= 1
