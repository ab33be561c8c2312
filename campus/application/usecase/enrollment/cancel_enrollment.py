"""Cancel enrollment use case."""

from uuid import UUID

from pydantic import BaseModel

from campus.domain.service import Actor, EnrollmentService
from campus.domain.value import EnrollmentId

from .enrollment_response import EnrollmentResponse


class CancelEnrollmentRequest(BaseModel):
    """Cancel enrollment request."""

    actor: Actor
    enrollment_id: UUID


class CancelEnrollmentUseCase:
    """Use case for withdrawing an enrollment.

    Students may cancel their own enrollments, admins any of them.
    """

    def __init__(self, enrollment_service: EnrollmentService) -> None:
        self.enrollment_service = enrollment_service

    async def execute(self, request: CancelEnrollmentRequest) -> EnrollmentResponse:
        enrollment = await self.enrollment_service.cancel(
            EnrollmentId(request.enrollment_id),
            request.actor.identity_id,
            request.actor.is_admin,
        )
        return EnrollmentResponse.from_enrollment(enrollment)
