"""Invitation notifications."""

import logfire

from campus.domain.model import Invitation

from .base import Service


class Notifier:
    """Outbound notification channel interface."""

    async def send_invitation(self, invitation: Invitation, link: str) -> None:
        """Deliver an invitation link to the invitee.

        Args:
            invitation: Invitation being announced
            link: URL containing the invitation token
        """
        raise NotImplementedError


class NotificationService(Service):
    """Fire-and-forget wrapper around the notifier.

    Delivery failures are logged and never reach the caller.
    """

    def __init__(self, notifier: Notifier, link_base: str) -> None:
        """Initialize notification service.

        Args:
            notifier: Notification channel
            link_base: Frontend URL invitation tokens are appended to
        """
        self.notifier = notifier
        self.link_base = link_base

    def invitation_link(self, invitation: Invitation) -> str:
        return f"{self.link_base}?token={invitation.token.root}"

    async def notify_invitation(self, invitation: Invitation) -> bool:
        """Send the invitation; returns whether delivery succeeded."""
        with logfire.span(
            "notification_service.notify_invitation",
            invitation_id=str(invitation.id),
            user_type=invitation.user_type.value,
        ):
            try:
                await self.notifier.send_invitation(
                    invitation, self.invitation_link(invitation)
                )
            except Exception as e:
                logfire.error(
                    "Invitation notification failed",
                    invitation_id=str(invitation.id),
                    error=str(e),
                    error_type=type(e).__name__,
                )
                return False
            return True
