"""Check merge candidate use case."""

from uuid import UUID

import logfire
from pydantic import BaseModel, Field

from nomen.application.usecase.base import BaseUseCase
from nomen.domain.repository import TransactionManager
from nomen.domain.service import MergeService
from nomen.domain.value import AccountId, AuthProvider


class CheckMergeCandidateRequest(BaseModel):
    """Check merge candidate request."""

    account_id: UUID  # From authenticated caller
    provider: AuthProvider
    provider_user_id: str = Field(min_length=1)


class CheckMergeCandidateResponse(BaseModel):
    """Owner of the identity, if it is someone else."""

    can_merge: bool
    other_account_id: str
    other_profile_id: str | None
    other_display_name: str | None
    other_email: str | None


class CheckMergeCandidateUseCase(BaseUseCase):
    """Use case telling a caller whether a login is held by another account."""

    def __init__(
        self,
        merge_service: MergeService,
        transaction_manager: TransactionManager,
    ) -> None:
        """Initialize check merge candidate use case.

        Args:
            merge_service: Merge domain service
            transaction_manager: Transaction boundary
        """
        self.merge_service = merge_service
        self.transaction_manager = transaction_manager

    async def execute(
        self, request: CheckMergeCandidateRequest
    ) -> CheckMergeCandidateResponse:
        """Look up the identity's owner.

        Args:
            request: Caller and identity

        Returns:
            The other account and its profile summary

        Raises:
            NotFoundError: If no identity matches
            AlreadyOwnedError: If the caller already owns it
        """
        with logfire.span(
            "check_merge_candidate.execute",
            account_id=str(request.account_id),
            provider=request.provider.value,
        ):
            async with self.transaction_manager.transaction():
                candidate = await self.merge_service.check_merge_candidate(
                    request.provider,
                    request.provider_user_id,
                    AccountId(request.account_id),
                )

            return CheckMergeCandidateResponse(
                can_merge=candidate.can_merge,
                other_account_id=str(candidate.other_account_id),
                other_profile_id=str(candidate.other_profile_id)
                if candidate.other_profile_id
                else None,
                other_display_name=candidate.other_display_name,
                other_email=candidate.other_email,
            )
