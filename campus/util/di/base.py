"""Provider metadata shared by the production and test containers."""

from typing import ClassVar, Literal

from dishka import Provider

# Infrastructure pieces that have an in-memory stand-in for tests
Component = Literal["identity", "notifier", "persistence"]


class ProviderBase(Provider):
    """Provider carrying the flags ``get_provider`` selects on.

    A mockable component is an abstract provider naming itself in
    ``__mock_component__`` with one subclass per ``__is_mock__`` value.
    """

    __mock_component__: ClassVar[Component | None] = None
    __is_mock__: ClassVar[bool] = False
