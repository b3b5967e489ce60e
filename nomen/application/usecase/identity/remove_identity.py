"""Remove identity use case (identity deleted hook)."""

from uuid import UUID

import logfire
from pydantic import BaseModel

from nomen.application.usecase.base import BaseUseCase
from nomen.domain.repository import AccountRepository, TransactionManager
from nomen.domain.service import ConsolidationService, IdentityService
from nomen.domain.value import IdentityId


class RemoveIdentityRequest(BaseModel):
    """Remove identity request."""

    identity_id: UUID


class RemoveIdentityResponse(BaseModel):
    """Remove identity response."""

    identity_id: str
    removed: bool
    profile_id: str | None = None
    preferences_assigned: int = 0


class RemoveIdentityUseCase(BaseUseCase):
    """Use case run when the gateway unlinks an identity.

    The identity's attributes go with it; if one of them was preferred, the
    oldest remaining value for that key takes over.
    """

    def __init__(
        self,
        identity_service: IdentityService,
        consolidation_service: ConsolidationService,
        account_repository: AccountRepository,
        transaction_manager: TransactionManager,
    ) -> None:
        """Initialize remove identity use case.

        Args:
            identity_service: External identity domain service
            consolidation_service: Consolidation domain service
            account_repository: Account repository
            transaction_manager: Transaction boundary
        """
        self.identity_service = identity_service
        self.consolidation_service = consolidation_service
        self.account_repository = account_repository
        self.transaction_manager = transaction_manager

    async def execute(self, request: RemoveIdentityRequest) -> RemoveIdentityResponse:
        """Remove an identity. Idempotent.

        Args:
            request: Request with identity ID

        Returns:
            Whether anything was removed and the profile that was reconciled
        """
        identity_id = IdentityId(request.identity_id)

        with logfire.span("remove_identity.execute", identity_id=str(identity_id)):
            async with self.transaction_manager.transaction():
                identity = await self.identity_service.get_identity_by_id(identity_id)
                if identity is None:
                    return RemoveIdentityResponse(
                        identity_id=str(identity_id), removed=False
                    )

                account = await self.account_repository.find_by_id(
                    identity.account_id, for_update=True
                )
                await self.identity_service.remove_identity(identity_id)

                if account is None or account.profile_id is None:
                    return RemoveIdentityResponse(
                        identity_id=str(identity_id), removed=True
                    )

                assigned = await self.consolidation_service.reconcile_profile(
                    account.profile_id
                )

            return RemoveIdentityResponse(
                identity_id=str(identity_id),
                removed=True,
                profile_id=str(account.profile_id),
                preferences_assigned=assigned,
            )
