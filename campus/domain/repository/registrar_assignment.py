"""Registrar assignment repository interface."""

from abc import ABC, abstractmethod

from campus.domain.model import RegistrarAssignment
from campus.domain.value import AcademicSessionId, StudentId


class RegistrarAssignmentRepository(ABC):
    """Repository for per-session student claims.

    The store keeps one row per (student_id, session_id); that uniqueness is
    what makes "first registrar wins" hold under concurrent decisions.
    """

    @abstractmethod
    async def find(
        self, student_id: StudentId, session_id: AcademicSessionId
    ) -> RegistrarAssignment | None:
        """Find the claim for a student in a session.

        Args:
            student_id: Student ID
            session_id: Session ID

        Returns:
            The assignment if the student is claimed, None otherwise
        """
        pass

    @abstractmethod
    async def claim(self, assignment: RegistrarAssignment) -> bool:
        """Insert the claim, or touch it if the same registrar already holds it.

        Args:
            assignment: Claim to record

        Returns:
            False if another registrar holds the (student, session) pair
        """
        pass

    @abstractmethod
    async def reassign(self, assignment: RegistrarAssignment) -> RegistrarAssignment:
        """Insert the claim or overwrite the registrar on an existing one.

        Args:
            assignment: Claim to record

        Returns:
            The stored assignment
        """
        pass
