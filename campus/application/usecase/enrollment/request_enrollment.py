"""Request enrollment use case."""

from uuid import UUID

import logfire
from pydantic import BaseModel

from campus.domain.error import ForbiddenError, StateConflictError, ValidationError
from campus.domain.service import (
    AcademicSessionService,
    Actor,
    CatalogService,
    EnrollmentService,
    StudentService,
)
from campus.domain.value import (
    AcademicSessionId,
    CourseId,
    SessionStatus,
    StudentId,
    UserType,
)
from campus.util.clock import as_utc, utcnow

from .enrollment_response import EnrollmentResponse


class RequestEnrollmentRequest(BaseModel):
    """Request enrollment request."""

    actor: Actor
    course_id: UUID
    session_id: UUID
    special_request: bool = False
    student_id: UUID | None = None  # Admins enrol on behalf of a student


class RequestEnrollmentUseCase:
    """Use case for a student asking to take a course in a session."""

    def __init__(
        self,
        enrollment_service: EnrollmentService,
        session_service: AcademicSessionService,
        catalog_service: CatalogService,
        student_service: StudentService,
    ) -> None:
        """Initialize request enrollment use case.

        Args:
            enrollment_service: Enrollment domain service
            session_service: Academic session domain service
            catalog_service: Program and course lookups
            student_service: Student domain service
        """
        self.enrollment_service = enrollment_service
        self.session_service = session_service
        self.catalog_service = catalog_service
        self.student_service = student_service

    async def _resolve_student(self, request: RequestEnrollmentRequest) -> StudentId:
        actor = request.actor
        if actor.role == UserType.STUDENT:
            student = await self.student_service.find_by_identity(actor.identity_id)
            if not student:
                raise ForbiddenError("Student", "profile", str(actor.identity_id))
            return student.id

        if actor.role == UserType.ADMIN:
            if request.student_id is None:
                raise ValidationError("student_id is required for admin requests")
            student = await self.student_service.get_by_id(
                StudentId(request.student_id)
            )
            return student.id

        raise ForbiddenError("Enrollment", "request", str(actor.identity_id))

    async def execute(self, request: RequestEnrollmentRequest) -> EnrollmentResponse:
        """Execute request enrollment flow.

        Steps:
        1. Resolve the student (the caller, or the one an admin names)
        2. Check the session is ACTIVE and its deadline has not passed;
           special requests may come in late
        3. Check the course exists
        4. Create the PENDING enrollment

        Raises:
            ForbiddenError: If the caller may not request for this student
            NotFoundError: If the student, session or course does not exist
            StateConflictError: If the session is not open, the deadline
                passed or the course is already requested
        """
        with logfire.span(
            "request_enrollment.execute",
            course_id=str(request.course_id),
            session_id=str(request.session_id),
            special_request=request.special_request,
        ):
            student_id = await self._resolve_student(request)

            session = await self.session_service.get_by_id(
                AcademicSessionId(request.session_id)
            )
            if session.status != SessionStatus.ACTIVE:
                raise StateConflictError(
                    f"Session {session.name} is not open for enrollment"
                )
            if (
                not request.special_request
                and as_utc(session.enrollment_deadline) < utcnow()
            ):
                raise StateConflictError("The enrollment deadline has passed")

            course = await self.catalog_service.get_course(CourseId(request.course_id))

            enrollment = await self.enrollment_service.create_enrollment(
                student_id, course.id, session.id, request.special_request
            )
            return EnrollmentResponse.from_enrollment(enrollment)
