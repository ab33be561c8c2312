"""Academic session repository interface."""

from abc import ABC, abstractmethod

from campus.domain.model import AcademicSession
from campus.domain.value import AcademicSessionId, SessionStatus


class AcademicSessionRepository(ABC):
    """Repository for AcademicSession entity."""

    @abstractmethod
    async def find_by_id(
        self, session_id: AcademicSessionId
    ) -> AcademicSession | None:
        """Find a session by ID.

        Args:
            session_id: The session's unique identifier

        Returns:
            The session if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_status(self, status: SessionStatus) -> list[AcademicSession]:
        """Find all sessions with the given status.

        Args:
            status: Session status to match

        Returns:
            Matching sessions, oldest start date first
        """
        pass

    @abstractmethod
    async def save(self, session: AcademicSession) -> AcademicSession:
        """Save a session (create or update).

        Args:
            session: The session to save

        Returns:
            The saved session

        Raises:
            IntegrityError: If a second session would become ACTIVE
        """
        pass
