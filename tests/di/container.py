"""Container used by unit and API tests."""

from dishka import AsyncContainer, make_async_container
from dishka.integrations.fastapi import FastapiProvider

from campus.util.di import PROVIDERS, Component, get_provider
from campus.util.error import DependencyInjectionError


def mockable_components() -> set[Component]:
    """Names of the components that have a mock implementation."""
    return {
        base.__mock_component__
        for base in PROVIDERS
        if base.__subclasses__() and hasattr(base, "__mock_component__")
    }


def build_test_container(unmock: set[Component] | None = None) -> AsyncContainer:
    """Build a container where every mockable component is mocked.

    Components named in ``unmock`` get their production provider instead,
    e.g. ``{"persistence"}`` to run against a real PostgreSQL. Settings come
    from the environment (ENVIRONMENT=test, see conftest).

    Raises:
        DependencyInjectionError: If ``unmock`` names an unknown component
    """
    unmock = unmock or set()
    unknown = unmock - mockable_components()
    if unknown:
        raise DependencyInjectionError(f"Unknown components: {sorted(unknown)}")

    providers = []
    for base in PROVIDERS:
        component = getattr(base, "__mock_component__", None)
        use_mock = component is not None and component not in unmock
        providers.append(get_provider(base, use_mock=use_mock)())

    # The same container also backs the app in API tests
    return make_async_container(*providers, FastapiProvider())
