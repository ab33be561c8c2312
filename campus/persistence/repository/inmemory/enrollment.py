"""In-memory enrollment repository for testing."""

from typing import Optional

from campus.domain.model import Enrollment
from campus.domain.repository import EnrollmentRepository
from campus.domain.value import (
    AcademicSessionId,
    CourseId,
    EnrollmentId,
    EnrollmentStatus,
    RegistrarId,
    StudentId,
)
from campus.util.clock import utcnow


class InMemoryEnrollmentRepository(EnrollmentRepository):
    """In-memory implementation of EnrollmentRepository for testing."""

    def __init__(self) -> None:
        self._enrollments: dict[EnrollmentId, Enrollment] = {}

    async def find_by_id(self, enrollment_id: EnrollmentId) -> Optional[Enrollment]:
        return self._enrollments.get(enrollment_id)

    async def find_by_student_and_session(
        self, student_id: StudentId, session_id: AcademicSessionId
    ) -> list[Enrollment]:
        matches = [
            e
            for e in self._enrollments.values()
            if e.student_id == student_id and e.session_id == session_id
        ]
        matches.sort(key=lambda e: e.created_at)
        return matches

    async def find_open_for_course(
        self,
        student_id: StudentId,
        course_id: CourseId,
        session_id: AcademicSessionId,
    ) -> Optional[Enrollment]:
        for e in self._enrollments.values():
            if (
                e.student_id == student_id
                and e.course_id == course_id
                and e.session_id == session_id
                and e.status != EnrollmentStatus.REJECTED
            ):
                return e
        return None

    async def save(self, enrollment: Enrollment) -> Enrollment:
        self._enrollments[enrollment.id] = enrollment
        return enrollment

    async def assign_registrar_to_pending(
        self,
        student_id: StudentId,
        session_id: AcademicSessionId,
        registrar_id: RegistrarId,
        only_unassigned: bool = True,
    ) -> int:
        count = 0
        for e in await self.find_by_student_and_session(student_id, session_id):
            if e.status != EnrollmentStatus.PENDING:
                continue
            if only_unassigned and e.registrar_id is not None:
                continue
            self._enrollments[e.id] = e.model_copy(
                update={"registrar_id": registrar_id, "updated_at": utcnow()}
            )
            count += 1
        return count

    async def transition_session_enrollments(
        self,
        session_id: AcademicSessionId,
        from_status: EnrollmentStatus,
        to_status: EnrollmentStatus,
    ) -> int:
        count = 0
        for e in list(self._enrollments.values()):
            if e.session_id == session_id and e.status == from_status:
                self._enrollments[e.id] = e.model_copy(
                    update={"status": to_status, "updated_at": utcnow()}
                )
                count += 1
        return count
