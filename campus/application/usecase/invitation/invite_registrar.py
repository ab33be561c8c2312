"""Invite registrar use case."""

import logfire
from pydantic import BaseModel

from campus.application.usecase.base import BaseUseCase
from campus.domain.service import (
    InvitationService,
    NotificationService,
    RegistrarService,
)
from campus.domain.value import Email, UserType

from .invitation_response import InvitationResponse


class InviteRegistrarRequest(BaseModel):
    """Invite registrar request."""

    email: str


class InviteRegistrarUseCase(
    BaseUseCase[InviteRegistrarRequest, InvitationResponse]
):
    """Use case for inviting a registrar."""

    def __init__(
        self,
        invitation_service: InvitationService,
        registrar_service: RegistrarService,
        notification_service: NotificationService,
    ) -> None:
        """Initialize invite registrar use case.

        Args:
            invitation_service: Invitation domain service
            registrar_service: Registrar domain service
            notification_service: Invitation delivery
        """
        self.invitation_service = invitation_service
        self.registrar_service = registrar_service
        self.notification_service = notification_service

    async def execute(self, request: InviteRegistrarRequest) -> InvitationResponse:
        """Execute invite registrar flow.

        Raises:
            ValidationError: If the email is invalid
            StateConflictError: If a registrar already uses the email
            DuplicateInvitation: If a pending registrar invitation exists
        """
        email = Email(request.email)
        with logfire.span("invite_registrar.execute", email=email.root):
            await self.registrar_service.ensure_email_available(email)
            invitation = await self.invitation_service.create_invitation(
                email, UserType.REGISTRAR
            )
            notified = await self.notification_service.notify_invitation(invitation)
            return InvitationResponse.from_invitation(invitation, notified)
