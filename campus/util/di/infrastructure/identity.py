"""Identity provider infrastructure providers."""

from dishka import Scope, provide

from campus.adapter.supabase import RealSupabaseIdentityClient
from campus.config import IdentityProviderSettings
from campus.domain.service import IdentityProviderClient
from campus.util.di.base import ProviderBase


class IdentityProvider(ProviderBase):
    """Identity provider component base."""

    __mock_component__ = "identity"


class ProdIdentityProvider(IdentityProvider):
    """Production identity provider backed by Supabase."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_identity_client(
        self, settings: IdentityProviderSettings
    ) -> IdentityProviderClient:
        """Provide Supabase identity client."""
        return RealSupabaseIdentityClient(settings)
