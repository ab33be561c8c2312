"""Notification infrastructure providers."""

from dishka import Scope, provide

from campus.adapter.notifier import LogfireNotifier
from campus.domain.service import Notifier
from campus.util.di.base import ProviderBase


class NotifierProvider(ProviderBase):
    """Notifier component base."""

    __mock_component__ = "notifier"


class ProdNotifierProvider(NotifierProvider):
    """Production notifier emitting invitation events to Logfire."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_notifier(self) -> Notifier:
        """Provide invitation notifier."""
        return LogfireNotifier()
