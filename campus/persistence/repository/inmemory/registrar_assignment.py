"""In-memory registrar assignment repository for testing."""

from typing import Optional

from campus.domain.model import RegistrarAssignment
from campus.domain.repository import RegistrarAssignmentRepository
from campus.domain.value import AcademicSessionId, StudentId
from campus.util.clock import utcnow


class InMemoryRegistrarAssignmentRepository(RegistrarAssignmentRepository):
    """In-memory implementation keyed by (student_id, session_id)."""

    def __init__(self) -> None:
        self._claims: dict[tuple[StudentId, AcademicSessionId], RegistrarAssignment] = {}

    async def find(
        self, student_id: StudentId, session_id: AcademicSessionId
    ) -> Optional[RegistrarAssignment]:
        return self._claims.get((student_id, session_id))

    async def claim(self, assignment: RegistrarAssignment) -> bool:
        key = (assignment.student_id, assignment.session_id)
        existing = self._claims.get(key)
        if existing is None:
            self._claims[key] = assignment
            return True
        if existing.registrar_id != assignment.registrar_id:
            return False
        self._claims[key] = existing.model_copy(update={"updated_at": utcnow()})
        return True

    async def reassign(self, assignment: RegistrarAssignment) -> RegistrarAssignment:
        key = (assignment.student_id, assignment.session_id)
        existing = self._claims.get(key)
        if existing is None:
            stored = assignment
        else:
            stored = existing.model_copy(
                update={"registrar_id": assignment.registrar_id, "updated_at": utcnow()}
            )
        self._claims[key] = stored
        return stored
