"""Claim student use case."""

from uuid import UUID

import logfire
from pydantic import BaseModel

from campus.application.usecase.base import BaseUseCase
from campus.domain.error import ForbiddenError, ValidationError
from campus.domain.service import (
    Actor,
    RegistrarAssignmentService,
    RegistrarService,
)
from campus.domain.value import RegistrarId, StudentId, UserType


class ClaimStudentRequest(BaseModel):
    """Claim student request."""

    actor: Actor
    student_id: UUID
    registrar_id: UUID | None = None  # Target registrar for admin assignments


class ClaimStudentUseCase(BaseUseCase[ClaimStudentRequest, None]):
    """Use case for a registrar taking ownership of a student's decisions
    in the active session."""

    def __init__(
        self,
        assignment_service: RegistrarAssignmentService,
        registrar_service: RegistrarService,
    ) -> None:
        """Initialize claim student use case.

        Args:
            assignment_service: Registrar claim domain service
            registrar_service: Registrar domain service
        """
        self.assignment_service = assignment_service
        self.registrar_service = registrar_service

    async def execute(self, request: ClaimStudentRequest) -> None:
        """Claim the student.

        Registrars claim for themselves. Admins name the registrar and may
        move a student away from another registrar.

        Raises:
            ForbiddenError: If the caller is a student
            ValidationError: If an admin names no registrar
            NoActiveSession: If no session is active
            NotFoundError: If the student or registrar does not exist
            AlreadyClaimed: If the student cannot be claimed by the registrar
        """
        actor = request.actor
        with logfire.span(
            "claim_student.execute",
            student_id=str(request.student_id),
            actor_role=actor.role.value,
        ):
            if actor.role == UserType.REGISTRAR:
                registrar = await self.registrar_service.get_by_identity(
                    actor.identity_id
                )
                registrar_id = registrar.id
            elif actor.role == UserType.ADMIN:
                if request.registrar_id is None:
                    raise ValidationError("registrar_id is required for admin claims")
                registrar_id = RegistrarId(request.registrar_id)
            else:
                raise ForbiddenError(
                    "Student", str(request.student_id), str(actor.identity_id)
                )

            await self.assignment_service.claim(
                StudentId(request.student_id), registrar_id, actor.role
            )
