"""Notifier that records invitations in the log stream.

Email delivery is handled outside this service; downstream mailers consume
the structured ``Invitation issued`` events.
"""

import logfire

from campus.domain.model import Invitation
from campus.domain.service.notification_service import Notifier


class LogfireNotifier(Notifier):
    """Emit one structured event per invitation."""

    async def send_invitation(self, invitation: Invitation, link: str) -> None:
        logfire.info(
            "Invitation issued",
            invitation_id=str(invitation.id),
            email=invitation.email.root,
            user_type=invitation.user_type.value,
            expires_at=invitation.expires_at.isoformat(),
            link=link,
        )


class RecordingNotifier(Notifier):
    """Notifier for tests; keeps every send and can be told to fail."""

    def __init__(self) -> None:
        self.sent: list[tuple[Invitation, str]] = []
        self.fail = False

    async def send_invitation(self, invitation: Invitation, link: str) -> None:
        if self.fail:
            raise ConnectionError("Mail relay unavailable")
        self.sent.append((invitation, link))
