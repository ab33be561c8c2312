"""In-memory academic session repository for testing."""

from typing import Optional

from sqlalchemy.exc import IntegrityError

from campus.domain.model import AcademicSession
from campus.domain.repository import AcademicSessionRepository
from campus.domain.value import AcademicSessionId, SessionStatus


class InMemoryAcademicSessionRepository(AcademicSessionRepository):
    """In-memory implementation of AcademicSessionRepository for testing."""

    def __init__(self) -> None:
        self._sessions: dict[AcademicSessionId, AcademicSession] = {}

    async def find_by_id(
        self, session_id: AcademicSessionId
    ) -> Optional[AcademicSession]:
        return self._sessions.get(session_id)

    async def find_by_status(self, status: SessionStatus) -> list[AcademicSession]:
        matches = [s for s in self._sessions.values() if s.status == status]
        matches.sort(key=lambda s: s.start_date)
        return matches

    async def save(self, session: AcademicSession) -> AcademicSession:
        """Save a session (create or update).

        Raises:
            IntegrityError: If a different session is already ACTIVE
        """
        if session.status == SessionStatus.ACTIVE:
            for existing in self._sessions.values():
                if existing.id != session.id and existing.status == SessionStatus.ACTIVE:
                    raise IntegrityError("Second active session", None, Exception())

        self._sessions[session.id] = session
        return session
