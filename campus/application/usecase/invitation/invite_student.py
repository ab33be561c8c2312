"""Invite student use case."""

from uuid import UUID

import logfire
from pydantic import BaseModel

from campus.application.usecase.base import BaseUseCase
from campus.domain.service import (
    CatalogService,
    InvitationService,
    NotificationService,
    StudentService,
)
from campus.domain.value import Email, ProgramId, RegistrationNumber, UserType

from .invitation_response import InvitationResponse


class InviteStudentRequest(BaseModel):
    """Invite student request."""

    email: str
    reg_number: str
    program_id: UUID


class InviteStudentUseCase(BaseUseCase[InviteStudentRequest, InvitationResponse]):
    """Use case for inviting a student and reserving their record."""

    def __init__(
        self,
        invitation_service: InvitationService,
        student_service: StudentService,
        catalog_service: CatalogService,
        notification_service: NotificationService,
    ) -> None:
        """Initialize invite student use case.

        Args:
            invitation_service: Invitation domain service
            student_service: Student domain service
            catalog_service: Program and course lookups
            notification_service: Invitation delivery
        """
        self.invitation_service = invitation_service
        self.student_service = student_service
        self.catalog_service = catalog_service
        self.notification_service = notification_service

    async def execute(self, request: InviteStudentRequest) -> InvitationResponse:
        """Execute invite student flow.

        Steps:
        1. Check the program exists
        2. Create the pending invitation
        3. Create the placeholder student row (invitation removed on failure)
        4. Send the invitation link, failures are only logged

        Raises:
            ValidationError: If the email or registration number is invalid
                or already used
            NotFoundError: If the program does not exist
            DuplicateInvitation: If a pending student invitation exists
        """
        email = Email(request.email)
        reg_number = RegistrationNumber(request.reg_number)
        program_id = ProgramId(request.program_id)

        with logfire.span(
            "invite_student.execute",
            email=email.root,
            reg_number=reg_number.root,
        ):
            await self.catalog_service.get_program(program_id)

            invitation = await self.invitation_service.create_invitation(
                email, UserType.STUDENT
            )
            try:
                await self.student_service.create_placeholder(
                    email, reg_number, program_id
                )
            except Exception:
                await self.invitation_service.delete(invitation.id)
                raise

            notified = await self.notification_service.notify_invitation(invitation)
            return InvitationResponse.from_invitation(invitation, notified)
