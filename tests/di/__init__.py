"""In-memory providers and the container tests run against.

The provider modules are imported before the container so that their
classes are registered as subclasses when ``get_provider`` looks.
"""

from .directory import MockDirectoryProvider
from .persistence import MockPersistenceProvider
from .container import build_test_container

__all__ = ["MockDirectoryProvider", "MockPersistenceProvider", "build_test_container"]
