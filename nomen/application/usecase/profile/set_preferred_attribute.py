"""Set preferred attribute use case."""

from uuid import UUID

import logfire
from pydantic import BaseModel

from nomen.application.usecase.base import BaseUseCase
from nomen.domain.repository import ProfileRepository, TransactionManager
from nomen.domain.service import PreferenceService
from nomen.domain.value import AccountId, AttributeKey, ProfileAttributeId


class SetPreferredAttributeRequest(BaseModel):
    """Set preferred attribute request."""

    account_id: UUID  # From authenticated caller
    attribute_id: UUID


class SetPreferredAttributeResponse(BaseModel):
    """Set preferred attribute response."""

    attribute_id: str
    profile_id: str
    attribute_key: AttributeKey
    attribute_value: str
    display_name: str | None
    primary_email: str | None


class SetPreferredAttributeUseCase(BaseUseCase):
    """Use case for choosing which value a profile shows for a key."""

    def __init__(
        self,
        preference_service: PreferenceService,
        profile_repository: ProfileRepository,
        transaction_manager: TransactionManager,
    ) -> None:
        """Initialize set preferred attribute use case.

        Args:
            preference_service: Preference domain service
            profile_repository: Profile repository
            transaction_manager: Transaction boundary
        """
        self.preference_service = preference_service
        self.profile_repository = profile_repository
        self.transaction_manager = transaction_manager

    async def execute(
        self, request: SetPreferredAttributeRequest
    ) -> SetPreferredAttributeResponse:
        """Prefer one attribute.

        Args:
            request: Caller and attribute

        Returns:
            The preferred attribute and the refreshed profile aggregate

        Raises:
            NotFoundError: If the attribute does not exist
            NotAuthorizedError: If the caller does not own it
        """
        with logfire.span(
            "set_preferred_attribute.execute",
            account_id=str(request.account_id),
            attribute_id=str(request.attribute_id),
        ):
            async with self.transaction_manager.transaction():
                attribute = await self.preference_service.set_preferred_attribute(
                    ProfileAttributeId(request.attribute_id),
                    AccountId(request.account_id),
                )
                profile = await self.profile_repository.find_by_id(
                    attribute.profile_id
                )

            return SetPreferredAttributeResponse(
                attribute_id=str(attribute.id),
                profile_id=str(attribute.profile_id),
                attribute_key=attribute.attribute_key,
                attribute_value=attribute.attribute_value,
                display_name=profile.display_name if profile else None,
                primary_email=profile.primary_email if profile else None,
            )
