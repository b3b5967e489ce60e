"""Providers for the swappable components.

The production variants are imported here so that ``get_provider`` finds
them through ``__subclasses__()``.
"""

from .directory import DirectoryProvider, ProdDirectoryProvider
from .persistence import PersistenceProvider, ProdPersistenceProvider

__all__ = [
    "DirectoryProvider",
    "PersistenceProvider",
    "ProdDirectoryProvider",
    "ProdPersistenceProvider",
]
