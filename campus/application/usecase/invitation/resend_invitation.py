"""Resend invitation use case."""

from uuid import UUID

import logfire
from pydantic import BaseModel

from campus.domain.service import InvitationService, NotificationService
from campus.domain.value import InvitationId

from .invitation_response import InvitationResponse


class ResendInvitationRequest(BaseModel):
    """Resend invitation request."""

    invitation_id: UUID


class ResendInvitationUseCase:
    """Use case for reissuing an invitation link."""

    def __init__(
        self,
        invitation_service: InvitationService,
        notification_service: NotificationService,
    ) -> None:
        self.invitation_service = invitation_service
        self.notification_service = notification_service

    async def execute(self, request: ResendInvitationRequest) -> InvitationResponse:
        """Rotate the token and expiry, then send the new link.

        Raises:
            NotFoundError: If the invitation does not exist
            InvalidStateTransition: If the invitation is no longer PENDING
        """
        invitation_id = InvitationId(request.invitation_id)
        with logfire.span(
            "resend_invitation.execute", invitation_id=str(invitation_id)
        ):
            invitation = await self.invitation_service.resend(invitation_id)
            notified = await self.notification_service.notify_invitation(invitation)
            return InvitationResponse.from_invitation(invitation, notified)
