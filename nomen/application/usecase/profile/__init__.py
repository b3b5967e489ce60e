"""Profile use cases."""

from nomen.application.usecase.profile.get_profile_overview import (
    GetProfileOverviewRequest,
    GetProfileOverviewResponse,
    GetProfileOverviewUseCase,
    LinkedProviderView,
    ProfileAttributeView,
)
from nomen.application.usecase.profile.set_preferred_attribute import (
    SetPreferredAttributeRequest,
    SetPreferredAttributeResponse,
    SetPreferredAttributeUseCase,
)

__all__ = [
    "GetProfileOverviewRequest",
    "GetProfileOverviewResponse",
    "GetProfileOverviewUseCase",
    "LinkedProviderView",
    "ProfileAttributeView",
    "SetPreferredAttributeRequest",
    "SetPreferredAttributeResponse",
    "SetPreferredAttributeUseCase",
]
