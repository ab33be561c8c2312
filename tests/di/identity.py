"""Mock identity provider for testing."""

from dishka import Scope, provide

from campus.adapter.supabase import MockSupabaseIdentityClient
from campus.domain.service import IdentityProviderClient
from campus.util.di.infrastructure.identity import IdentityProvider


class MockIdentityProvider(IdentityProvider):
    """Mock identity provider.

    The mock client is also provided under its own type so tests can inject
    failures and inspect what was written.
    """

    __is_mock__ = True

    @provide(scope=Scope.REQUEST)
    def get_mock_identity_client(self) -> MockSupabaseIdentityClient:
        """Provide in-memory identity client."""
        return MockSupabaseIdentityClient()

    @provide(scope=Scope.REQUEST)
    def get_identity_client(
        self, client: MockSupabaseIdentityClient
    ) -> IdentityProviderClient:
        return client
