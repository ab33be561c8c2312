"""Get enrollment use case."""

from uuid import UUID

from pydantic import BaseModel

from campus.domain.service import EnrollmentService
from campus.domain.value import EnrollmentId

from .enrollment_response import EnrollmentResponse


class GetEnrollmentRequest(BaseModel):
    """Get enrollment request."""

    enrollment_id: UUID


class GetEnrollmentUseCase:
    """Use case for reading a single enrollment."""

    def __init__(self, enrollment_service: EnrollmentService) -> None:
        self.enrollment_service = enrollment_service

    async def execute(self, request: GetEnrollmentRequest) -> EnrollmentResponse:
        enrollment = await self.enrollment_service.get_by_id(
            EnrollmentId(request.enrollment_id)
        )
        return EnrollmentResponse.from_enrollment(enrollment)
