"""Account merge domain service."""

from abc import ABC, abstractmethod

import logfire

from nomen.domain.error import (
    AlreadyMergedError,
    AlreadyOwnedError,
    InvalidMergeError,
    NoProfileError,
    NotFoundError,
)
from nomen.domain.model.account import Account
from nomen.domain.repository import (
    AccountRepository,
    ExternalIdentityRepository,
    ProfileAttributeRepository,
    ProfileRepository,
)
from nomen.domain.value import AccountId, AuthProvider, MergeCandidate, MergeResult

from .base import Service
from .preference_service import PreferenceService


class PrincipalDirectory(ABC):
    """Admin interface of the authentication gateway."""

    @abstractmethod
    async def delete_principal(self, principal_id: AccountId) -> None:
        """Delete a principal from the gateway.

        Must be idempotent: a principal that is already gone counts as
        deleted.

        Args:
            principal_id: Principal to delete
        """
        pass


class MergeService(Service):
    """Domain service folding one account into another.

    The source account's identities and attributes move to the target, then
    the source profile, account and gateway principal are deleted.
    """

    def __init__(
        self,
        account_repository: AccountRepository,
        profile_repository: ProfileRepository,
        identity_repository: ExternalIdentityRepository,
        profile_attribute_repository: ProfileAttributeRepository,
        preference_service: PreferenceService,
        principal_directory: PrincipalDirectory,
    ) -> None:
        """Initialize merge service.

        Args:
            account_repository: Account repository
            profile_repository: Profile repository
            identity_repository: External identity repository
            profile_attribute_repository: Profile attribute repository
            preference_service: Preference domain service
            principal_directory: Gateway admin client
        """
        self.account_repository = account_repository
        self.profile_repository = profile_repository
        self.identity_repository = identity_repository
        self.profile_attribute_repository = profile_attribute_repository
        self.preference_service = preference_service
        self.principal_directory = principal_directory

    async def _lock_accounts(
        self, target_account_id: AccountId, source_account_id: AccountId
    ) -> tuple[Account | None, Account | None]:
        # Fixed lock order so two opposite merges cannot deadlock
        locked: dict[AccountId, Account | None] = {}
        for account_id in sorted((target_account_id, source_account_id), key=str):
            locked[account_id] = await self.account_repository.find_by_id(
                account_id, for_update=True
            )
        return locked[target_account_id], locked[source_account_id]

    async def _lock_profiles(self, target: Account, source: Account) -> None:
        # Same rows set_preferred_attribute locks; accounts are always locked first
        sides = {
            target.profile_id: ("target", target),
            source.profile_id: ("source", source),
        }
        for profile_id in sorted(sides, key=str):
            profile = await self.profile_repository.find_by_id(
                profile_id, for_update=True
            )
            if profile is None:
                side, account = sides[profile_id]
                raise NoProfileError(side, str(account.id))

    async def merge(
        self, target_account_id: AccountId, source_account_id: AccountId
    ) -> MergeResult:
        """Absorb the source account into the target account.

        Must run inside a transaction: a failure at any step, including the
        gateway call at the end, leaves both accounts untouched.

        Args:
            target_account_id: Surviving account
            source_account_id: Account to absorb and delete

        Returns:
            Summary of the merge

        Raises:
            InvalidMergeError: If both IDs are the same account
            NoProfileError: If either account is missing or has no profile
            AlreadyMergedError: If both accounts already share a profile
        """
        with logfire.span(
            "merge_service.merge",
            target_account_id=str(target_account_id),
            source_account_id=str(source_account_id),
        ):
            if target_account_id == source_account_id:
                raise InvalidMergeError()

            target, source = await self._lock_accounts(
                target_account_id, source_account_id
            )
            if target is None or target.profile_id is None:
                raise NoProfileError("target", str(target_account_id))
            if source is None or source.profile_id is None:
                raise NoProfileError("source", str(source_account_id))
            if target.profile_id == source.profile_id:
                raise AlreadyMergedError(str(target.profile_id))

            target_profile_id = target.profile_id
            source_profile_id = source.profile_id
            await self._lock_profiles(target, source)

            identities_moved = await self.identity_repository.reassign_account(
                source.id, target.id
            )
            attributes_merged = await self.profile_attribute_repository.reassign_profile(
                source_profile_id, target_profile_id
            )

            await self.preference_service.bootstrap_preferences(target_profile_id)
            profile = await self.preference_service.refresh_aggregate(
                target_profile_id
            )
            await self.profile_repository.save(profile.with_merged_account(source.id))

            await self.profile_repository.delete(source_profile_id)
            await self.account_repository.delete(source.id)

            await self.principal_directory.delete_principal(source.id)

            logfire.info(
                "Accounts merged",
                target_account_id=str(target.id),
                source_account_id=str(source.id),
                target_profile_id=str(target_profile_id),
                identities_moved=identities_moved,
                attributes_merged=attributes_merged,
            )
            return MergeResult(
                target_account_id=target.id,
                target_profile_id=target_profile_id,
                source_profile_id=source_profile_id,
                source_account_deleted=source.id,
                attributes_merged=attributes_merged,
                identities_moved=identities_moved,
            )

    async def check_merge_candidate(
        self,
        provider: AuthProvider,
        provider_user_id: str,
        caller_account_id: AccountId,
    ) -> MergeCandidate:
        """Look up who owns an identity the caller wants to link.

        Args:
            provider: Authentication provider
            provider_user_id: User ID on that provider
            caller_account_id: Account asking

        Returns:
            The owning account and its profile summary

        Raises:
            NotFoundError: If no identity matches
            AlreadyOwnedError: If the caller already owns the identity
        """
        with logfire.span(
            "merge_service.check_merge_candidate",
            provider=provider.value,
            caller_account_id=str(caller_account_id),
        ):
            identity = await self.identity_repository.find_by_provider(
                provider, provider_user_id
            )
            if identity is None:
                raise NotFoundError(
                    "ExternalIdentity", f"{provider.value}:{provider_user_id}"
                )
            if identity.account_id == caller_account_id:
                raise AlreadyOwnedError(provider.value, provider_user_id)

            account = await self.account_repository.find_by_id(identity.account_id)
            profile = None
            if account is not None and account.profile_id is not None:
                profile = await self.profile_repository.find_by_id(account.profile_id)

            return MergeCandidate(
                other_account_id=identity.account_id,
                other_profile_id=profile.id if profile else None,
                other_display_name=profile.display_name if profile else None,
                other_email=profile.primary_email if profile else None,
            )
