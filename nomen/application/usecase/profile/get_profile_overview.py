"""Get profile overview use case."""

from datetime import datetime
from uuid import UUID

import logfire
from pydantic import BaseModel

from nomen.application.usecase.base import BaseUseCase
from nomen.domain.error import NotFoundError
from nomen.domain.repository import (
    ProfileAttributeRepository,
    ProfileRepository,
    TransactionManager,
)
from nomen.domain.service import AccountService, IdentityService
from nomen.domain.value import AccountId, AttributeKey, AuthProvider


class GetProfileOverviewRequest(BaseModel):
    """Get profile overview request."""

    account_id: UUID  # From authenticated caller


class ProfileAttributeView(BaseModel):
    """One attribute as shown to its owner."""

    id: str
    attribute_key: AttributeKey
    attribute_value: str
    source_provider: str | None
    identity_id: str | None
    is_preferred: bool
    created_at: datetime


class LinkedProviderView(BaseModel):
    """How many identities of one provider the caller has linked."""

    provider: AuthProvider
    count: int


class GetProfileOverviewResponse(BaseModel):
    """Get profile overview response."""

    account_id: str
    profile_id: str | None
    display_name: str | None
    primary_email: str | None
    merged_account_ids: list[str]
    attributes: list[ProfileAttributeView]
    linked_providers: list[LinkedProviderView]
    linked_identity_count: int


class GetProfileOverviewUseCase(BaseUseCase):
    """Use case for the caller's own profile page.

    Shows every candidate value per key, which one is preferred, and how
    many logins of each provider are linked.
    """

    def __init__(
        self,
        account_service: AccountService,
        identity_service: IdentityService,
        profile_repository: ProfileRepository,
        profile_attribute_repository: ProfileAttributeRepository,
        transaction_manager: TransactionManager,
    ) -> None:
        """Initialize get profile overview use case.

        Args:
            account_service: Account domain service
            identity_service: External identity domain service
            profile_repository: Profile repository
            profile_attribute_repository: Profile attribute repository
            transaction_manager: Transaction boundary
        """
        self.account_service = account_service
        self.identity_service = identity_service
        self.profile_repository = profile_repository
        self.profile_attribute_repository = profile_attribute_repository
        self.transaction_manager = transaction_manager

    async def execute(
        self, request: GetProfileOverviewRequest
    ) -> GetProfileOverviewResponse:
        """Build the overview.

        Args:
            request: Request with the caller's account ID

        Returns:
            Profile, attributes and provider counts

        Raises:
            NotFoundError: If the caller has no account
        """
        account_id = AccountId(request.account_id)

        with logfire.span("get_profile_overview.execute", account_id=str(account_id)):
            async with self.transaction_manager.transaction():
                account = await self.account_service.get_by_id(account_id)

                profile = None
                attributes = []
                if account.profile_id is not None:
                    profile = await self.profile_repository.find_by_id(
                        account.profile_id
                    )
                    if profile is None:
                        raise NotFoundError("Profile", str(account.profile_id))
                    attributes = (
                        await self.profile_attribute_repository.find_all_by_profile_id(
                            profile.id
                        )
                    )

                counts = await self.identity_service.count_by_provider(account_id)

            merged_account_ids = profile.merged_account_ids if profile else []

            return GetProfileOverviewResponse(
                account_id=str(account.id),
                profile_id=str(profile.id) if profile else None,
                display_name=profile.display_name if profile else None,
                primary_email=profile.primary_email if profile else None,
                merged_account_ids=[str(merged) for merged in merged_account_ids],
                attributes=[
                    ProfileAttributeView(
                        id=str(attribute.id),
                        attribute_key=attribute.attribute_key,
                        attribute_value=attribute.attribute_value,
                        source_provider=attribute.source_provider,
                        identity_id=str(attribute.identity_id)
                        if attribute.identity_id
                        else None,
                        is_preferred=attribute.is_preferred,
                        created_at=attribute.created_at,
                    )
                    for attribute in attributes
                ],
                linked_providers=[
                    LinkedProviderView(provider=provider, count=count)
                    for provider, count in sorted(
                        counts.items(), key=lambda item: item[0].value
                    )
                ],
                linked_identity_count=sum(counts.values()),
            )
