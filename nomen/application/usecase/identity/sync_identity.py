"""Sync identity use case (identity created/updated hook)."""

from typing import Any
from uuid import UUID

import logfire
from pydantic import BaseModel, Field

from nomen.application.usecase.base import BaseUseCase
from nomen.domain.model.external_identity import ExternalIdentity
from nomen.domain.repository import TransactionManager
from nomen.domain.service import AccountService, ConsolidationService, IdentityService
from nomen.domain.value import AccountId, AttributeKey, AuthProvider, IdentityId


class SyncIdentityRequest(BaseModel):
    """Identity event as sent by the gateway."""

    identity_id: UUID
    principal_id: UUID
    provider: AuthProvider
    provider_user_id: str = Field(min_length=1)
    claims: dict[str, Any] = Field(default_factory=dict)


class SyncIdentityResponse(BaseModel):
    """Sync identity response."""

    identity_id: str
    account_id: str
    profile_id: str
    profile_created: bool
    attributes_upserted: list[AttributeKey]
    preferences_assigned: int


class SyncIdentityUseCase(BaseUseCase):
    """Use case storing an identity and consolidating it into a profile.

    The identity write and the consolidation commit or roll back together.
    """

    def __init__(
        self,
        account_service: AccountService,
        identity_service: IdentityService,
        consolidation_service: ConsolidationService,
        transaction_manager: TransactionManager,
    ) -> None:
        """Initialize sync identity use case.

        Args:
            account_service: Account domain service
            identity_service: External identity domain service
            consolidation_service: Consolidation domain service
            transaction_manager: Transaction boundary
        """
        self.account_service = account_service
        self.identity_service = identity_service
        self.consolidation_service = consolidation_service
        self.transaction_manager = transaction_manager

    async def execute(self, request: SyncIdentityRequest) -> SyncIdentityResponse:
        """Execute identity sync.

        Steps:
        1. Ensure the principal's account exists (events may arrive out of order)
        2. Upsert the identity (only claims change on a repeat)
        3. Consolidate its claims into the account's profile

        Args:
            request: Identity event

        Returns:
            What changed on the profile
        """
        with logfire.span(
            "sync_identity.execute",
            identity_id=str(request.identity_id),
            provider=request.provider.value,
        ):
            async with self.transaction_manager.transaction():
                await self.account_service.ensure_account(
                    AccountId(request.principal_id)
                )
                identity = await self.identity_service.record_identity(
                    ExternalIdentity(
                        id=IdentityId(request.identity_id),
                        account_id=AccountId(request.principal_id),
                        provider=request.provider,
                        provider_user_id=request.provider_user_id,
                        claims=request.claims,
                    )
                )
                result = await self.consolidation_service.consolidate(identity)

            return SyncIdentityResponse(
                identity_id=str(identity.id),
                account_id=str(result.account_id),
                profile_id=str(result.profile_id),
                profile_created=result.profile_created,
                attributes_upserted=result.attributes_upserted,
                preferences_assigned=result.preferences_assigned,
            )
