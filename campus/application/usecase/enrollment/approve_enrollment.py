"""Approve enrollment use case."""

from uuid import UUID

import logfire
from pydantic import BaseModel

from campus.domain.service import Actor, EnrollmentService, RegistrarService
from campus.domain.value import EnrollmentId

from .enrollment_response import EnrollmentResponse, resolve_deciding_registrar


class ApproveEnrollmentRequest(BaseModel):
    """Approve enrollment request."""

    actor: Actor
    enrollment_id: UUID
    registrar_id: UUID | None = None  # Required when an admin decides


class ApproveEnrollmentUseCase:
    """Use case for a registrar approving a pending enrollment."""

    def __init__(
        self,
        enrollment_service: EnrollmentService,
        registrar_service: RegistrarService,
    ) -> None:
        """Initialize approve enrollment use case.

        Args:
            enrollment_service: Enrollment domain service
            registrar_service: Registrar domain service
        """
        self.enrollment_service = enrollment_service
        self.registrar_service = registrar_service

    async def execute(self, request: ApproveEnrollmentRequest) -> EnrollmentResponse:
        """Approve the enrollment as the deciding registrar.

        Raises:
            ForbiddenError: If the caller is a student
            NotFoundError: If the enrollment or registrar does not exist
            InvalidStateTransition: If the enrollment is not PENDING
            RegistrarConflict: If another registrar owns the student
        """
        with logfire.span(
            "approve_enrollment.execute", enrollment_id=str(request.enrollment_id)
        ):
            registrar_id = await resolve_deciding_registrar(
                request.actor, request.registrar_id, self.registrar_service
            )
            enrollment = await self.enrollment_service.approve(
                EnrollmentId(request.enrollment_id), registrar_id
            )
            return EnrollmentResponse.from_enrollment(enrollment)
