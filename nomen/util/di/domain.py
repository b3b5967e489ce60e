"""Domain layer DI providers."""

from dishka import Scope, provide

from nomen.config import AuthSettings, MergeSettings
from nomen.domain.repository import (
    AccountRepository,
    ExternalIdentityRepository,
    MergeRequestRepository,
    ProfileAttributeRepository,
    ProfileRepository,
)
from nomen.domain.service import (
    AccountService,
    ConsolidationService,
    IdentityService,
    JWTService,
    MergeRequestService,
    MergeService,
    PreferenceService,
    PrincipalDirectory,
)
from nomen.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    Each HTTP request gets fresh service instances sharing one transaction.
    """

    scope = Scope.REQUEST

    @provide
    def get_jwt_service(self, auth_settings: AuthSettings) -> JWTService:
        """Provide JWT token domain service."""
        return JWTService(auth_settings=auth_settings)

    @provide
    def get_account_service(
        self, account_repository: AccountRepository
    ) -> AccountService:
        """Provide account domain service."""
        return AccountService(account_repository=account_repository)

    @provide
    def get_identity_service(
        self, identity_repository: ExternalIdentityRepository
    ) -> IdentityService:
        """Provide external identity domain service."""
        return IdentityService(identity_repository=identity_repository)

    @provide
    def get_preference_service(
        self,
        account_repository: AccountRepository,
        profile_repository: ProfileRepository,
        profile_attribute_repository: ProfileAttributeRepository,
    ) -> PreferenceService:
        """Provide preference domain service."""
        return PreferenceService(
            account_repository=account_repository,
            profile_repository=profile_repository,
            profile_attribute_repository=profile_attribute_repository,
        )

    @provide
    def get_consolidation_service(
        self,
        account_service: AccountService,
        preference_service: PreferenceService,
        account_repository: AccountRepository,
        profile_repository: ProfileRepository,
        profile_attribute_repository: ProfileAttributeRepository,
    ) -> ConsolidationService:
        """Provide consolidation domain service."""
        return ConsolidationService(
            account_service=account_service,
            preference_service=preference_service,
            account_repository=account_repository,
            profile_repository=profile_repository,
            profile_attribute_repository=profile_attribute_repository,
        )

    @provide
    def get_merge_request_service(
        self,
        merge_request_repository: MergeRequestRepository,
        account_repository: AccountRepository,
        profile_repository: ProfileRepository,
        merge_settings: MergeSettings,
    ) -> MergeRequestService:
        """Provide merge request domain service."""
        return MergeRequestService(
            merge_request_repository=merge_request_repository,
            account_repository=account_repository,
            profile_repository=profile_repository,
            merge_settings=merge_settings,
        )

    @provide
    def get_merge_service(
        self,
        account_repository: AccountRepository,
        profile_repository: ProfileRepository,
        identity_repository: ExternalIdentityRepository,
        profile_attribute_repository: ProfileAttributeRepository,
        preference_service: PreferenceService,
        principal_directory: PrincipalDirectory,
    ) -> MergeService:
        """Provide merge domain service."""
        return MergeService(
            account_repository=account_repository,
            profile_repository=profile_repository,
            identity_repository=identity_repository,
            profile_attribute_repository=profile_attribute_repository,
            preference_service=preference_service,
            principal_directory=principal_directory,
        )
