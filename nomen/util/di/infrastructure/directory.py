"""Principal directory infrastructure providers."""

from dishka import Scope, provide

from nomen.adapter.directory.client import HttpPrincipalDirectoryClient
from nomen.config import Settings
from nomen.domain.service.merge_service import PrincipalDirectory
from nomen.util.di.base import ProviderBase
from nomen.util.error import ConfigurationError


class DirectoryProvider(ProviderBase):
    """Principal directory component base."""

    __mock_component__ = "directory"


class ProdDirectoryProvider(DirectoryProvider):
    """Production principal directory provider (gateway admin API)."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_principal_directory(self, settings: Settings) -> PrincipalDirectory:
        """Provide gateway admin client.

        Raises:
            ConfigurationError: If the service key is not configured
        """
        service_key = settings.directory.service_key
        if not service_key or (
            settings.environment == "production"
            and service_key == "CHANGE_ME_IN_PRODUCTION"
        ):
            raise ConfigurationError("DIRECTORY__SERVICE_KEY")

        return HttpPrincipalDirectoryClient(
            base_url=settings.directory.base_url,
            service_key=service_key,
            timeout_seconds=settings.directory.timeout_seconds,
        )
