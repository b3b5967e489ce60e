"""Wiring of nomen's components into dishka providers."""

from typing import Type

from nomen.util.di.application import ProdApplicationProvider
from nomen.util.di.base import Component, ProviderBase
from nomen.util.di.core import ProdConfigProvider
from nomen.util.di.domain import ProdDomainProvider
from nomen.util.di.infrastructure import (
    DirectoryProvider,
    PersistenceProvider,
    ProdDirectoryProvider,
    ProdPersistenceProvider,
)

# Order is irrelevant to dishka; settings first reads better in tracebacks
PROVIDERS: list[Type[ProviderBase]] = [
    ProdConfigProvider,
    ProdDomainProvider,
    ProdApplicationProvider,
    PersistenceProvider,
    DirectoryProvider,
]


def get_provider(
    base: Type[ProviderBase], use_mock: bool = False
) -> Type[ProviderBase]:
    """Resolve a provider entry to the class the container should build.

    Entries without subclasses are concrete. Entries with subclasses are
    swappable components, resolved to the variant whose ``__is_mock__``
    equals ``use_mock``.

    Raises:
        ValueError: If the component has no variant of the requested kind
    """
    variants = base.__subclasses__()
    if not variants:
        return base

    for variant in variants:
        if getattr(variant, "__is_mock__", False) == use_mock:
            return variant

    component = getattr(base, "__mock_component__", None) or base.__name__
    flavour = "in-memory" if use_mock else "production"
    raise ValueError(f"Component {component!r} has no {flavour} provider")


__all__ = [
    "Component",
    "DirectoryProvider",
    "PROVIDERS",
    "PersistenceProvider",
    "ProdApplicationProvider",
    "ProdConfigProvider",
    "ProdDirectoryProvider",
    "ProdDomainProvider",
    "ProdPersistenceProvider",
    "ProviderBase",
    "get_provider",
]
