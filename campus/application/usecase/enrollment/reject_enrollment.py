"""Reject enrollment use case."""

from uuid import UUID

import logfire
from pydantic import BaseModel

from campus.domain.service import Actor, EnrollmentService, RegistrarService
from campus.domain.value import EnrollmentId

from .enrollment_response import EnrollmentResponse, resolve_deciding_registrar


class RejectEnrollmentRequest(BaseModel):
    """Reject enrollment request."""

    actor: Actor
    enrollment_id: UUID
    reason: str
    registrar_id: UUID | None = None  # Required when an admin decides


class RejectEnrollmentUseCase:
    """Use case for a registrar rejecting a pending enrollment."""

    def __init__(
        self,
        enrollment_service: EnrollmentService,
        registrar_service: RegistrarService,
    ) -> None:
        self.enrollment_service = enrollment_service
        self.registrar_service = registrar_service

    async def execute(self, request: RejectEnrollmentRequest) -> EnrollmentResponse:
        """Reject the enrollment with a reason.

        Raises:
            ValidationError: If the reason is empty
            ForbiddenError: If the caller is a student
            NotFoundError: If the enrollment or registrar does not exist
            InvalidStateTransition: If the enrollment is not PENDING
            RegistrarConflict: If another registrar owns the student
        """
        with logfire.span(
            "reject_enrollment.execute", enrollment_id=str(request.enrollment_id)
        ):
            registrar_id = await resolve_deciding_registrar(
                request.actor, request.registrar_id, self.registrar_service
            )
            enrollment = await self.enrollment_service.reject(
                EnrollmentId(request.enrollment_id), registrar_id, request.reason
            )
            return EnrollmentResponse.from_enrollment(enrollment)
