"""Core DI providers (non-mockable)."""

from dishka import Scope, provide

from campus.config import (
    AuthSettings,
    IdentityProviderSettings,
    InvitationSettings,
    Settings,
)
from campus.util.di.base import ProviderBase
from campus.util.error import ConfigurationError

DEFAULT_JWT_SECRET = AuthSettings().jwt_secret


class ProdConfigProvider(ProviderBase):
    """Settings provider, shared by production and test containers.

    Settings are loaded from environment variables and .env file automatically.
    """

    @provide(scope=Scope.APP)
    def provide_settings(self) -> Settings:
        """Provide application settings from environment."""
        return Settings()

    @provide(scope=Scope.APP)
    def provide_auth_settings(self, settings: Settings) -> AuthSettings:
        """Caller token settings.

        Raises:
            ConfigurationError: If a deployed environment keeps the default secret
        """
        if settings.is_deployed and settings.auth.jwt_secret == DEFAULT_JWT_SECRET:
            raise ConfigurationError("AUTH__JWT_SECRET must be set outside development")
        return settings.auth

    @provide(scope=Scope.APP)
    def provide_identity_settings(
        self, settings: Settings
    ) -> IdentityProviderSettings:
        return settings.identity

    @provide(scope=Scope.APP)
    def provide_invitation_settings(self, settings: Settings) -> InvitationSettings:
        return settings.invitations
