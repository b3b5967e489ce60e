"""Application layer DI providers."""

from dishka import Scope, provide

from nomen.application.usecase.identity import (
    EnsureAccountUseCase,
    RemoveIdentityUseCase,
    SyncIdentityUseCase,
)
from nomen.application.usecase.merge import (
    CancelMergeRequestUseCase,
    CheckMergeCandidateUseCase,
    CreateMergeRequestUseCase,
    ExecuteMergeUseCase,
    GetMergeRequesterInfoUseCase,
    PurgeExpiredMergeRequestsUseCase,
)
from nomen.application.usecase.profile import (
    GetProfileOverviewUseCase,
    SetPreferredAttributeUseCase,
)
from nomen.domain.repository import (
    AccountRepository,
    ProfileAttributeRepository,
    ProfileRepository,
    TransactionManager,
)
from nomen.domain.service import (
    AccountService,
    ConsolidationService,
    IdentityService,
    MergeRequestService,
    MergeService,
    PreferenceService,
)
from nomen.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    # Identity use cases
    @provide(scope=Scope.REQUEST)
    def get_ensure_account_use_case(
        self,
        account_service: AccountService,
        transaction_manager: TransactionManager,
    ) -> EnsureAccountUseCase:
        """Provide ensure account use case."""
        return EnsureAccountUseCase(
            account_service=account_service,
            transaction_manager=transaction_manager,
        )

    @provide(scope=Scope.REQUEST)
    def get_sync_identity_use_case(
        self,
        account_service: AccountService,
        identity_service: IdentityService,
        consolidation_service: ConsolidationService,
        transaction_manager: TransactionManager,
    ) -> SyncIdentityUseCase:
        """Provide sync identity use case."""
        return SyncIdentityUseCase(
            account_service=account_service,
            identity_service=identity_service,
            consolidation_service=consolidation_service,
            transaction_manager=transaction_manager,
        )

    @provide(scope=Scope.REQUEST)
    def get_remove_identity_use_case(
        self,
        identity_service: IdentityService,
        consolidation_service: ConsolidationService,
        account_repository: AccountRepository,
        transaction_manager: TransactionManager,
    ) -> RemoveIdentityUseCase:
        """Provide remove identity use case."""
        return RemoveIdentityUseCase(
            identity_service=identity_service,
            consolidation_service=consolidation_service,
            account_repository=account_repository,
            transaction_manager=transaction_manager,
        )

    # Profile use cases
    @provide(scope=Scope.REQUEST)
    def get_profile_overview_use_case(
        self,
        account_service: AccountService,
        identity_service: IdentityService,
        profile_repository: ProfileRepository,
        profile_attribute_repository: ProfileAttributeRepository,
        transaction_manager: TransactionManager,
    ) -> GetProfileOverviewUseCase:
        """Provide get profile overview use case."""
        return GetProfileOverviewUseCase(
            account_service=account_service,
            identity_service=identity_service,
            profile_repository=profile_repository,
            profile_attribute_repository=profile_attribute_repository,
            transaction_manager=transaction_manager,
        )

    @provide(scope=Scope.REQUEST)
    def get_set_preferred_attribute_use_case(
        self,
        preference_service: PreferenceService,
        profile_repository: ProfileRepository,
        transaction_manager: TransactionManager,
    ) -> SetPreferredAttributeUseCase:
        """Provide set preferred attribute use case."""
        return SetPreferredAttributeUseCase(
            preference_service=preference_service,
            profile_repository=profile_repository,
            transaction_manager=transaction_manager,
        )

    # Merge use cases
    @provide(scope=Scope.REQUEST)
    def get_create_merge_request_use_case(
        self,
        account_service: AccountService,
        merge_request_service: MergeRequestService,
        transaction_manager: TransactionManager,
    ) -> CreateMergeRequestUseCase:
        """Provide create merge request use case."""
        return CreateMergeRequestUseCase(
            account_service=account_service,
            merge_request_service=merge_request_service,
            transaction_manager=transaction_manager,
        )

    @provide(scope=Scope.REQUEST)
    def get_merge_requester_info_use_case(
        self,
        merge_request_service: MergeRequestService,
        transaction_manager: TransactionManager,
    ) -> GetMergeRequesterInfoUseCase:
        """Provide get merge requester info use case."""
        return GetMergeRequesterInfoUseCase(
            merge_request_service=merge_request_service,
            transaction_manager=transaction_manager,
        )

    @provide(scope=Scope.REQUEST)
    def get_cancel_merge_request_use_case(
        self,
        merge_request_service: MergeRequestService,
        transaction_manager: TransactionManager,
    ) -> CancelMergeRequestUseCase:
        """Provide cancel merge request use case."""
        return CancelMergeRequestUseCase(
            merge_request_service=merge_request_service,
            transaction_manager=transaction_manager,
        )

    @provide(scope=Scope.REQUEST)
    def get_execute_merge_use_case(
        self,
        merge_request_service: MergeRequestService,
        merge_service: MergeService,
        transaction_manager: TransactionManager,
    ) -> ExecuteMergeUseCase:
        """Provide execute merge use case."""
        return ExecuteMergeUseCase(
            merge_request_service=merge_request_service,
            merge_service=merge_service,
            transaction_manager=transaction_manager,
        )

    @provide(scope=Scope.REQUEST)
    def get_check_merge_candidate_use_case(
        self,
        merge_service: MergeService,
        transaction_manager: TransactionManager,
    ) -> CheckMergeCandidateUseCase:
        """Provide check merge candidate use case."""
        return CheckMergeCandidateUseCase(
            merge_service=merge_service,
            transaction_manager=transaction_manager,
        )

    @provide(scope=Scope.REQUEST)
    def get_purge_expired_merge_requests_use_case(
        self,
        merge_request_service: MergeRequestService,
        transaction_manager: TransactionManager,
    ) -> PurgeExpiredMergeRequestsUseCase:
        """Provide purge expired merge requests use case."""
        return PurgeExpiredMergeRequestsUseCase(
            merge_request_service=merge_request_service,
            transaction_manager=transaction_manager,
        )
