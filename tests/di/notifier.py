"""Mock notifier for testing."""

from dishka import Scope, provide

from campus.adapter.notifier import RecordingNotifier
from campus.domain.service import Notifier
from campus.util.di.infrastructure.notifier import NotifierProvider


class MockNotifierProvider(NotifierProvider):
    """Mock notifier provider recording every invitation sent."""

    __is_mock__ = True

    @provide(scope=Scope.REQUEST)
    def get_recording_notifier(self) -> RecordingNotifier:
        return RecordingNotifier()

    @provide(scope=Scope.REQUEST)
    def get_notifier(self, notifier: RecordingNotifier) -> Notifier:
        return notifier
