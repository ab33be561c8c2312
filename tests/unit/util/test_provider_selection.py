"""Unit tests for DI provider selection."""

import pytest

from campus.util.di import (
    PersistenceProvider,
    ProdConfigProvider,
    ProdPersistenceProvider,
    get_provider,
)
from campus.util.error import DependencyInjectionError
from tests.di import build_test_container
from tests.di.persistence import MockPersistenceProvider


class TestGetProvider:
    """Tests for get_provider."""

    def test_concrete_provider_is_used_as_is(self):
        """Providers without subclasses are not mockable."""
        assert get_provider(ProdConfigProvider) is ProdConfigProvider

    def test_mockable_component_selection(self):
        """The mock flag picks between production and mock subclasses."""
        assert get_provider(PersistenceProvider) is ProdPersistenceProvider
        assert (
            get_provider(PersistenceProvider, use_mock=True) is MockPersistenceProvider
        )

    def test_unknown_unmock_component(self):
        """Naming a component that does not exist fails early."""
        with pytest.raises(DependencyInjectionError):
            build_test_container(unmock={"mailer"})
