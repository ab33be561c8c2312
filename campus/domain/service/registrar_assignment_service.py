"""Registrar claim workflow."""

from uuid import uuid4

import logfire

from campus.domain.error import AlreadyClaimed, NoActiveSession, NotFoundError
from campus.domain.model import AcademicSession, RegistrarAssignment
from campus.domain.repository import (
    AcademicSessionRepository,
    EnrollmentRepository,
    RegistrarAssignmentRepository,
    RegistrarRepository,
    StudentRepository,
)
from campus.domain.value import (
    EnrollmentStatus,
    RegistrarAssignmentId,
    RegistrarId,
    SessionStatus,
    StudentId,
    UserType,
)

from .base import Service
from .enrollment_service import owning_registrars

# Statuses that count as "enrolled" when deciding if a student can be claimed
ENROLLED_STATUSES = frozenset(
    {EnrollmentStatus.PENDING, EnrollmentStatus.APPROVED, EnrollmentStatus.ACTIVE}
)


class RegistrarAssignmentService(Service):
    """Lets a registrar or admin become a student's decision-maker for the
    active session."""

    def __init__(
        self,
        assignment_repository: RegistrarAssignmentRepository,
        session_repository: AcademicSessionRepository,
        enrollment_repository: EnrollmentRepository,
        student_repository: StudentRepository,
        registrar_repository: RegistrarRepository,
    ) -> None:
        self.assignment_repository = assignment_repository
        self.session_repository = session_repository
        self.enrollment_repository = enrollment_repository
        self.student_repository = student_repository
        self.registrar_repository = registrar_repository

    async def _active_session(self) -> AcademicSession:
        active = await self.session_repository.find_by_status(SessionStatus.ACTIVE)
        if not active:
            raise NoActiveSession()
        return active[0]

    async def claim(
        self, student_id: StudentId, registrar_id: RegistrarId, actor_role: UserType
    ) -> RegistrarAssignment:
        """Assign a student to a registrar for the active session.

        A registrar may only claim a student who is enrolled in the active
        session and not held by a different registrar. Re-claiming a student
        you already hold is a no-op. An admin may move a student to any
        registrar; the student's pending enrollments follow.

        Args:
            student_id: Student to claim
            registrar_id: Registrar who will own the student
            actor_role: Role of the caller

        Returns:
            The stored assignment

        Raises:
            NoActiveSession: If no session is active
            NotFoundError: If the student or registrar does not exist
            AlreadyClaimed: If a registrar targets a student they cannot claim
        """
        with logfire.span(
            "registrar_assignment_service.claim",
            student_id=str(student_id),
            registrar_id=str(registrar_id),
            actor_role=actor_role.value,
        ):
            session = await self._active_session()

            if not await self.student_repository.find_by_id(student_id):
                raise NotFoundError("Student", str(student_id))
            if not await self.registrar_repository.find_by_id(registrar_id):
                raise NotFoundError("Registrar", str(registrar_id))

            assignment = RegistrarAssignment(
                id=RegistrarAssignmentId(uuid4()),
                student_id=student_id,
                registrar_id=registrar_id,
                session_id=session.id,
            )

            if actor_role == UserType.ADMIN:
                stored = await self.assignment_repository.reassign(assignment)
                moved = await self.enrollment_repository.assign_registrar_to_pending(
                    student_id, session.id, registrar_id, only_unassigned=False
                )
                logfire.info(
                    "Student assigned by admin",
                    student_id=str(student_id),
                    registrar_id=str(registrar_id),
                    session_id=str(session.id),
                    enrollments_moved=moved,
                )
                return stored

            await self._ensure_claimable(student_id, registrar_id, session)

            if not await self.assignment_repository.claim(assignment):
                raise AlreadyClaimed(
                    f"Student {student_id} is already claimed in this session"
                )
            stored = await self.assignment_repository.find(student_id, session.id)
            await self.enrollment_repository.assign_registrar_to_pending(
                student_id, session.id, registrar_id
            )
            logfire.info(
                "Student claimed",
                student_id=str(student_id),
                registrar_id=str(registrar_id),
                session_id=str(session.id),
            )
            return stored or assignment

    async def _ensure_claimable(
        self,
        student_id: StudentId,
        registrar_id: RegistrarId,
        session: AcademicSession,
    ) -> None:
        enrollments = await self.enrollment_repository.find_by_student_and_session(
            student_id, session.id
        )
        if not any(e.status in ENROLLED_STATUSES for e in enrollments):
            raise AlreadyClaimed(
                f"Student {student_id} is not enrolled in the active session"
            )

        holders = await owning_registrars(
            self.assignment_repository,
            self.enrollment_repository,
            student_id,
            session.id,
        )

        if holders - {registrar_id}:
            logfire.warn(
                "Student held by another registrar",
                student_id=str(student_id),
                registrar_id=str(registrar_id),
            )
            raise AlreadyClaimed(
                f"Student {student_id} is already claimed in this session"
            )
