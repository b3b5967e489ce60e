"""Settings providers."""

from dishka import Scope, provide

from nomen.config import AuthSettings, MergeSettings, Settings
from nomen.util.di.base import ProviderBase
from nomen.util.error import ConfigurationError

_PLACEHOLDER = "CHANGE_ME_IN_PRODUCTION"


class ProdConfigProvider(ProviderBase):
    """Exposes ``Settings`` and the sections that routes and services inject."""

    @provide(scope=Scope.APP)
    def provide_settings(self) -> Settings:
        return Settings()

    @provide(scope=Scope.APP)
    def provide_auth_settings(self, settings: Settings) -> AuthSettings:
        """Auth section, refusing placeholder secrets in production.

        Raises:
            ConfigurationError: If a secret still holds its placeholder
        """
        if settings.environment == "production":
            for name, value in (
                ("AUTH__JWT_SECRET", settings.auth.jwt_secret),
                ("AUTH__HOOK_SECRET", settings.auth.hook_secret),
            ):
                if value == _PLACEHOLDER:
                    raise ConfigurationError(name, "must be set in production")
        return settings.auth

    @provide(scope=Scope.APP)
    def provide_merge_settings(self, settings: Settings) -> MergeSettings:
        return settings.merge
