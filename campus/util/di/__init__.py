"""Dependency injection wiring.

``PROVIDERS`` lists every provider the containers are built from. Config,
domain and application providers are concrete. Infrastructure providers are
abstract bases with one production and one mock subclass each, so the test
container can swap the identity provider, the notifier and persistence for
in-memory versions.
"""

from typing import Type

from campus.util.di.application import ProdApplicationProvider
from campus.util.di.base import Component, ProviderBase
from campus.util.di.core import ProdConfigProvider
from campus.util.di.domain import ProdDomainProvider
from campus.util.di.infrastructure import (
    IdentityProvider,
    NotifierProvider,
    PersistenceProvider,
    ProdIdentityProvider,
    ProdNotifierProvider,
    ProdPersistenceProvider,
)
from campus.util.error import DependencyInjectionError

PROVIDERS: list[Type[ProviderBase]] = [
    ProdConfigProvider,
    ProdDomainProvider,
    ProdApplicationProvider,
    IdentityProvider,
    NotifierProvider,
    PersistenceProvider,
]


def get_provider(
    base: Type[ProviderBase], use_mock: bool = False
) -> Type[ProviderBase]:
    """Resolve a provider entry to the class to instantiate.

    Raises:
        DependencyInjectionError: If a mockable component lacks the
            requested implementation
    """
    implementations = {
        getattr(sub, "__is_mock__", False): sub for sub in base.__subclasses__()
    }
    if not implementations:
        return base

    try:
        return implementations[use_mock]
    except KeyError:
        component = base.__mock_component__ or base.__name__
        kind = "mock" if use_mock else "production"
        raise DependencyInjectionError(
            f"No {kind} implementation for {component}"
        ) from None


__all__ = [
    "Component",
    "ProviderBase",
    "PROVIDERS",
    "get_provider",
    "IdentityProvider",
    "NotifierProvider",
    "PersistenceProvider",
    "ProdIdentityProvider",
    "ProdNotifierProvider",
    "ProdPersistenceProvider",
]
