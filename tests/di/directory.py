"""Mock principal directory provider for testing."""

from dishka import Scope, provide

from nomen.adapter.directory.client import MockPrincipalDirectoryClient
from nomen.domain.service.merge_service import PrincipalDirectory
from nomen.util.di.infrastructure.directory import DirectoryProvider


class MockDirectoryProvider(DirectoryProvider):
    """Records principal deletions instead of calling the gateway."""

    __is_mock__ = True

    @provide(scope=Scope.APP)
    def get_principal_directory(self) -> PrincipalDirectory:
        """Provide mock directory client."""
        return MockPrincipalDirectoryClient()
