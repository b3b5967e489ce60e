"""Domain model entities for Nomen."""

from nomen.domain.model.account import Account
from nomen.domain.model.external_identity import ExternalIdentity
from nomen.domain.model.merge_request import MergeRequest
from nomen.domain.model.profile import Profile
from nomen.domain.model.profile_attribute import ProfileAttribute

__all__ = [
    "Account",
    "ExternalIdentity",
    "MergeRequest",
    "Profile",
    "ProfileAttribute",
]
