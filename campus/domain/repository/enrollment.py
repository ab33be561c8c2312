"""Enrollment repository interface."""

from abc import ABC, abstractmethod

from campus.domain.model import Enrollment
from campus.domain.value import (
    AcademicSessionId,
    CourseId,
    EnrollmentId,
    EnrollmentStatus,
    RegistrarId,
    StudentId,
)


class EnrollmentRepository(ABC):
    """Repository for Enrollment entity.

    Besides per-row access, exposes the filtered bulk updates that the
    registrar propagation and session cascades rely on.
    """

    @abstractmethod
    async def find_by_id(self, enrollment_id: EnrollmentId) -> Enrollment | None:
        """Find an enrollment by ID.

        Args:
            enrollment_id: The enrollment's unique identifier

        Returns:
            The enrollment if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_student_and_session(
        self, student_id: StudentId, session_id: AcademicSessionId
    ) -> list[Enrollment]:
        """Find every enrollment of a student in a session.

        Args:
            student_id: Student ID
            session_id: Session ID

        Returns:
            List of enrollments, any status
        """
        pass

    @abstractmethod
    async def find_open_for_course(
        self,
        student_id: StudentId,
        course_id: CourseId,
        session_id: AcademicSessionId,
    ) -> Enrollment | None:
        """Find a non-rejected enrollment for the same student, course and session.

        Args:
            student_id: Student ID
            course_id: Course ID
            session_id: Session ID

        Returns:
            The existing enrollment if any, None otherwise
        """
        pass

    @abstractmethod
    async def save(self, enrollment: Enrollment) -> Enrollment:
        """Save an enrollment (create or update).

        Args:
            enrollment: The enrollment to save

        Returns:
            The saved enrollment
        """
        pass

    @abstractmethod
    async def assign_registrar_to_pending(
        self,
        student_id: StudentId,
        session_id: AcademicSessionId,
        registrar_id: RegistrarId,
        only_unassigned: bool = True,
    ) -> int:
        """Point the student's PENDING enrollments in a session at a registrar.

        Args:
            student_id: Student ID
            session_id: Session ID
            registrar_id: Registrar to assign
            only_unassigned: Leave rows that already carry a registrar untouched

        Returns:
            Number of enrollments updated
        """
        pass

    @abstractmethod
    async def transition_session_enrollments(
        self,
        session_id: AcademicSessionId,
        from_status: EnrollmentStatus,
        to_status: EnrollmentStatus,
    ) -> int:
        """Move every enrollment of a session from one status to another.

        Args:
            session_id: Session ID
            from_status: Status rows must currently have
            to_status: Status to set

        Returns:
            Number of enrollments updated
        """
        pass
