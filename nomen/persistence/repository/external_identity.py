"""ExternalIdentity repository implementation using PostgreSQL."""

from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from nomen.domain.error import ConflictError
from nomen.domain.model.external_identity import ExternalIdentity
from nomen.domain.repository.external_identity import ExternalIdentityRepository
from nomen.domain.value import AccountId, AuthProvider, IdentityId
from nomen.persistence.mappers import (
    external_identity_to_dict,
    row_to_external_identity,
)
from nomen.persistence.tables import external_identities_table


class PostgresExternalIdentityRepository(ExternalIdentityRepository):
    """PostgreSQL implementation of ExternalIdentityRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, identity_id: IdentityId) -> Optional[ExternalIdentity]:
        """Get identity by ID.

        Args:
            identity_id: Identity ID to look up

        Returns:
            ExternalIdentity if found, None otherwise
        """
        stmt = select(external_identities_table).where(
            external_identities_table.c.id == identity_id
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()

        if not row:
            return None

        return row_to_external_identity(dict(row))

    async def find_by_provider(
        self, provider: AuthProvider, provider_user_id: str
    ) -> Optional[ExternalIdentity]:
        """Get identity by provider and provider user ID."""
        stmt = select(external_identities_table).where(
            external_identities_table.c.provider == provider.value,
            external_identities_table.c.provider_user_id == provider_user_id,
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()

        if not row:
            return None

        return row_to_external_identity(dict(row))

    async def find_all_by_account_id(
        self, account_id: AccountId
    ) -> list[ExternalIdentity]:
        """Find all identities for an account, oldest first."""
        stmt = (
            select(external_identities_table)
            .where(external_identities_table.c.account_id == account_id)
            .order_by(
                external_identities_table.c.created_at,
                external_identities_table.c.id,
            )
        )
        result = await self.session.execute(stmt)
        rows = result.mappings().all()

        return [row_to_external_identity(dict(row)) for row in rows]

    async def upsert(self, identity: ExternalIdentity) -> ExternalIdentity:
        """Insert identity or refresh its claims.

        Args:
            identity: Identity as reported by the gateway

        Returns:
            The stored identity

        Raises:
            ConflictError: If another identity already holds the
                provider and provider user ID
        """
        stmt = insert(external_identities_table).values(
            **external_identity_to_dict(identity)
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=["id"],
            set_={
                "claims": stmt.excluded.claims,
                "updated_at": func.now(),
            },
        ).returning(*external_identities_table.c)

        try:
            result = await self.session.execute(stmt)
        except IntegrityError as e:
            raise ConflictError(
                f"Identity {identity.provider.value}:{identity.provider_user_id} "
                "is already bound"
            ) from e

        row = result.mappings().one()
        await self.session.flush()
        return row_to_external_identity(dict(row))

    async def reassign_account(
        self, source_account_id: AccountId, target_account_id: AccountId
    ) -> int:
        """Move every identity of one account to another."""
        stmt = (
            external_identities_table.update()
            .where(external_identities_table.c.account_id == source_account_id)
            .values(account_id=target_account_id, updated_at=func.now())
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount

    async def delete(self, identity_id: IdentityId) -> None:
        """Delete identity (attributes cascade)."""
        stmt = external_identities_table.delete().where(
            external_identities_table.c.id == identity_id
        )
        await self.session.execute(stmt)
        await self.session.flush()
