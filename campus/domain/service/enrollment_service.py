"""Enrollment domain service.

Owns the enrollment state machine:

    PENDING -> APPROVED | REJECTED      registrar decision
    APPROVED -> ACTIVE                  session start cascade
    ACTIVE -> COMPLETED                 session close cascade
    PENDING | APPROVED | ACTIVE -> CANCELLED

and the rule that a single registrar owns all of a student's pending
decisions within a session.
"""

from uuid import uuid4

import logfire

from campus.domain.error import (
    ForbiddenError,
    InvalidStateTransition,
    NotFoundError,
    RegistrarConflict,
    StateConflictError,
    ValidationError,
)
from campus.domain.model import Enrollment, RegistrarAssignment
from campus.domain.repository import (
    EnrollmentRepository,
    RegistrarAssignmentRepository,
    StudentRepository,
)
from campus.domain.value import (
    AcademicSessionId,
    CourseId,
    EnrollmentId,
    EnrollmentStatus,
    IdentityId,
    RegistrarAssignmentId,
    RegistrarId,
    SessionStatus,
    StudentId,
)
from campus.util.clock import utcnow

from .base import Service

# Session transition -> (enrollment status it applies to, resulting status)
CASCADES: dict[SessionStatus, tuple[EnrollmentStatus, EnrollmentStatus]] = {
    SessionStatus.ACTIVE: (EnrollmentStatus.APPROVED, EnrollmentStatus.ACTIVE),
    SessionStatus.CLOSED: (EnrollmentStatus.ACTIVE, EnrollmentStatus.COMPLETED),
}


async def owning_registrars(
    assignment_repository: RegistrarAssignmentRepository,
    enrollment_repository: EnrollmentRepository,
    student_id: StudentId,
    session_id: AcademicSessionId,
) -> set[RegistrarId]:
    """Registrars holding a student in a session.

    The claim row wins; enrollment registrar_ids are the fallback for pairs
    decided before any claim was recorded.
    """
    assignment = await assignment_repository.find(student_id, session_id)
    if assignment:
        return {assignment.registrar_id}

    enrollments = await enrollment_repository.find_by_student_and_session(
        student_id, session_id
    )
    return {e.registrar_id for e in enrollments if e.registrar_id is not None}


class EnrollmentService(Service):
    """Domain service for enrollment decisions and cascades."""

    def __init__(
        self,
        enrollment_repository: EnrollmentRepository,
        assignment_repository: RegistrarAssignmentRepository,
        student_repository: StudentRepository,
    ) -> None:
        """Initialize enrollment service.

        Args:
            enrollment_repository: Enrollment repository
            assignment_repository: Per-session registrar claim repository
            student_repository: Student repository, for ownership checks
        """
        self.enrollment_repository = enrollment_repository
        self.assignment_repository = assignment_repository
        self.student_repository = student_repository

    async def get_by_id(self, enrollment_id: EnrollmentId) -> Enrollment:
        """Get enrollment by ID.

        Raises:
            NotFoundError: If the enrollment does not exist
        """
        enrollment = await self.enrollment_repository.find_by_id(enrollment_id)
        if not enrollment:
            raise NotFoundError("Enrollment", str(enrollment_id))
        return enrollment

    async def create_enrollment(
        self,
        student_id: StudentId,
        course_id: CourseId,
        session_id: AcademicSessionId,
        special_request: bool = False,
    ) -> Enrollment:
        """Create a PENDING enrollment.

        Session and course checks are the caller's job; this only guards
        against a duplicate open enrollment for the same course.

        Raises:
            StateConflictError: If a non-rejected enrollment already exists
        """
        with logfire.span(
            "enrollment_service.create_enrollment",
            student_id=str(student_id),
            course_id=str(course_id),
            session_id=str(session_id),
        ):
            existing = await self.enrollment_repository.find_open_for_course(
                student_id, course_id, session_id
            )
            if existing:
                logfire.warn(
                    "Duplicate enrollment request",
                    enrollment_id=str(existing.id),
                    status=existing.status.value,
                )
                raise StateConflictError(
                    "Student already has an enrollment for this course in this session"
                )

            enrollment = Enrollment(
                id=EnrollmentId(uuid4()),
                student_id=student_id,
                course_id=course_id,
                session_id=session_id,
                status=EnrollmentStatus.PENDING,
                special_request=special_request,
            )

            # A student already claimed in the session keeps their registrar
            assignment = await self.assignment_repository.find(student_id, session_id)
            if assignment:
                enrollment = enrollment.model_copy(
                    update={"registrar_id": assignment.registrar_id}
                )

            saved = await self.enrollment_repository.save(enrollment)
            logfire.info("Enrollment requested", enrollment_id=str(saved.id))
            return saved

    async def approve(
        self, enrollment_id: EnrollmentId, registrar_id: RegistrarId
    ) -> Enrollment:
        """Approve a pending enrollment.

        Args:
            enrollment_id: Enrollment to approve
            registrar_id: Registrar making the decision

        Returns:
            Updated enrollment

        Raises:
            NotFoundError: If the enrollment does not exist
            InvalidStateTransition: If the enrollment is not PENDING
            RegistrarConflict: If another registrar owns the student this session
        """
        with logfire.span(
            "enrollment_service.approve",
            enrollment_id=str(enrollment_id),
            registrar_id=str(registrar_id),
        ):
            return await self._decide(
                enrollment_id, registrar_id, EnrollmentStatus.APPROVED
            )

    async def reject(
        self, enrollment_id: EnrollmentId, registrar_id: RegistrarId, reason: str
    ) -> Enrollment:
        """Reject a pending enrollment with a reason.

        Raises:
            NotFoundError: If the enrollment does not exist
            InvalidStateTransition: If the enrollment is not PENDING
            ValidationError: If the reason is empty
            RegistrarConflict: If another registrar owns the student this session
        """
        with logfire.span(
            "enrollment_service.reject",
            enrollment_id=str(enrollment_id),
            registrar_id=str(registrar_id),
        ):
            return await self._decide(
                enrollment_id, registrar_id, EnrollmentStatus.REJECTED, reason
            )

    async def _decide(
        self,
        enrollment_id: EnrollmentId,
        registrar_id: RegistrarId,
        decision: EnrollmentStatus,
        reason: str | None = None,
    ) -> Enrollment:
        enrollment = await self.get_by_id(enrollment_id)
        if enrollment.status != EnrollmentStatus.PENDING:
            raise InvalidStateTransition(
                "Enrollment",
                str(enrollment.id),
                enrollment.status.value,
                decision.value,
            )

        if decision == EnrollmentStatus.REJECTED:
            reason = (reason or "").strip()
            if not reason:
                raise ValidationError("A rejection reason is required")

        await self._ensure_registrar_owns(enrollment, registrar_id)

        # The claim row is unique per (student, session); a concurrent decision
        # by another registrar loses here instead of writing a second owner.
        claimed = await self.assignment_repository.claim(
            RegistrarAssignment(
                id=RegistrarAssignmentId(uuid4()),
                student_id=enrollment.student_id,
                registrar_id=registrar_id,
                session_id=enrollment.session_id,
            )
        )
        if not claimed:
            logfire.warn(
                "Registrar lost claim race",
                enrollment_id=str(enrollment.id),
                registrar_id=str(registrar_id),
            )
            raise RegistrarConflict(str(enrollment.student_id), str(enrollment.session_id))

        decided = enrollment.model_copy(
            update={
                "status": decision,
                "registrar_id": registrar_id,
                "rejection_reason": reason,
                "updated_at": utcnow(),
            }
        )
        saved = await self.enrollment_repository.save(decided)

        propagated = await self.enrollment_repository.assign_registrar_to_pending(
            enrollment.student_id, enrollment.session_id, registrar_id
        )
        logfire.info(
            "Enrollment decided",
            enrollment_id=str(saved.id),
            status=decision.value,
            registrar_id=str(registrar_id),
            propagated=propagated,
        )
        return saved

    async def _ensure_registrar_owns(
        self, enrollment: Enrollment, registrar_id: RegistrarId
    ) -> None:
        """Raise RegistrarConflict if someone else owns the student this session.

        The claim row decides when there is one, since an admin reassignment
        only rewrites the claim and the pending enrollments. Registrars left
        on already decided siblings count only when nobody holds the claim.
        """
        owners = await owning_registrars(
            self.assignment_repository,
            self.enrollment_repository,
            enrollment.student_id,
            enrollment.session_id,
        )

        others = owners - {registrar_id}
        if others:
            logfire.warn(
                "Registrar conflict",
                enrollment_id=str(enrollment.id),
                registrar_id=str(registrar_id),
                owners=[str(o) for o in others],
            )
            raise RegistrarConflict(str(enrollment.student_id), str(enrollment.session_id))

    async def cancel(
        self, enrollment_id: EnrollmentId, actor_id: IdentityId, is_admin: bool
    ) -> Enrollment:
        """Cancel an enrollment.

        Args:
            enrollment_id: Enrollment to cancel
            actor_id: Identity of the caller
            is_admin: Whether the caller is an administrator

        Returns:
            Updated enrollment

        Raises:
            NotFoundError: If the enrollment does not exist
            InvalidStateTransition: If the enrollment is already terminal
            ForbiddenError: If a non-admin caller does not own the enrollment
        """
        with logfire.span(
            "enrollment_service.cancel",
            enrollment_id=str(enrollment_id),
            actor_id=str(actor_id),
            is_admin=is_admin,
        ):
            enrollment = await self.get_by_id(enrollment_id)
            if enrollment.status.is_terminal:
                raise InvalidStateTransition(
                    "Enrollment",
                    str(enrollment.id),
                    enrollment.status.value,
                    EnrollmentStatus.CANCELLED.value,
                )

            if not is_admin:
                student = await self.student_repository.find_by_id(
                    enrollment.student_id
                )
                if not student or student.identity_id != actor_id:
                    logfire.warn(
                        "Cancellation refused",
                        enrollment_id=str(enrollment.id),
                        actor_id=str(actor_id),
                    )
                    raise ForbiddenError("Enrollment", str(enrollment.id), str(actor_id))

            saved = await self.enrollment_repository.save(
                enrollment.model_copy(
                    update={
                        "status": EnrollmentStatus.CANCELLED,
                        "updated_at": utcnow(),
                    }
                )
            )
            logfire.info("Enrollment cancelled", enrollment_id=str(saved.id))
            return saved

    async def cascade_session_transition(
        self, session_id: AcademicSessionId, new_status: SessionStatus
    ) -> int:
        """Apply a session transition to every affected enrollment.

        This is a bulk update with no per-row checks. Any failure propagates
        and fails the surrounding transaction as a whole.

        Args:
            session_id: Session that changed status
            new_status: Status the session moved to

        Returns:
            Number of enrollments updated
        """
        with logfire.span(
            "enrollment_service.cascade_session_transition",
            session_id=str(session_id),
            new_status=new_status.value,
        ):
            if new_status not in CASCADES:
                return 0

            from_status, to_status = CASCADES[new_status]
            count = await self.enrollment_repository.transition_session_enrollments(
                session_id, from_status, to_status
            )
            logfire.info(
                "Session cascade applied",
                session_id=str(session_id),
                from_status=from_status.value,
                to_status=to_status.value,
                count=count,
            )
            return count
