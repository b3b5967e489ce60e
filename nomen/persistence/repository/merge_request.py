"""MergeRequest repository implementation using PostgreSQL."""

from datetime import datetime
from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from nomen.domain.model.merge_request import MergeRequest
from nomen.domain.repository.merge_request import MergeRequestRepository
from nomen.domain.value import AccountId, MergeToken
from nomen.persistence.mappers import merge_request_to_dict, row_to_merge_request
from nomen.persistence.tables import merge_requests_table


class PostgresMergeRequestRepository(MergeRequestRepository):
    """PostgreSQL implementation of MergeRequestRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_token(self, token: MergeToken) -> Optional[MergeRequest]:
        """Get merge request by token."""
        stmt = select(merge_requests_table).where(
            merge_requests_table.c.token == token.root
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()

        if not row:
            return None

        return row_to_merge_request(dict(row))

    async def find_all_by_requester(
        self, requester_account_id: AccountId
    ) -> list[MergeRequest]:
        """Get merge requests created by an account, newest first."""
        stmt = (
            select(merge_requests_table)
            .where(merge_requests_table.c.requester_account_id == requester_account_id)
            .order_by(merge_requests_table.c.created_at.desc())
        )
        result = await self.session.execute(stmt)
        rows = result.mappings().all()

        return [row_to_merge_request(dict(row)) for row in rows]

    async def add(self, merge_request: MergeRequest) -> MergeRequest:
        """Insert merge request."""
        stmt = merge_requests_table.insert().values(
            **merge_request_to_dict(merge_request)
        )
        await self.session.execute(stmt)
        await self.session.flush()
        return merge_request

    async def delete_by_token(self, token: MergeToken) -> bool:
        """Delete merge request by token."""
        stmt = merge_requests_table.delete().where(
            merge_requests_table.c.token == token.root
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0

    async def delete_by_requester(self, requester_account_id: AccountId) -> int:
        """Delete all merge requests of a requester."""
        stmt = merge_requests_table.delete().where(
            merge_requests_table.c.requester_account_id == requester_account_id
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount

    async def delete_expired(self, now: datetime) -> int:
        """Delete merge requests past their TTL."""
        stmt = merge_requests_table.delete().where(
            merge_requests_table.c.expires_at <= now
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount
