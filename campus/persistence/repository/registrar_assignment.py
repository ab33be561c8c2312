"""PostgreSQL implementation of RegistrarAssignment repository."""

from typing import Optional

from sqlalchemy import and_, select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from campus.domain.model import RegistrarAssignment
from campus.domain.repository import RegistrarAssignmentRepository
from campus.domain.value import AcademicSessionId, StudentId
from campus.persistence.mappers import (
    registrar_assignment_to_dict,
    row_to_registrar_assignment,
)
from campus.persistence.tables import student_registrar_sessions_table as claims
from campus.util.clock import utcnow


class PostgresRegistrarAssignmentRepository(RegistrarAssignmentRepository):
    """PostgreSQL implementation of RegistrarAssignmentRepository.

    Both writes are single INSERT ... ON CONFLICT statements against the
    (student_id, session_id) unique constraint, so concurrent claims are
    serialized by the database.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find(
        self, student_id: StudentId, session_id: AcademicSessionId
    ) -> Optional[RegistrarAssignment]:
        stmt = select(claims).where(
            and_(claims.c.student_id == student_id, claims.c.session_id == session_id)
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_registrar_assignment(dict(row)) if row else None

    async def claim(self, assignment: RegistrarAssignment) -> bool:
        """Insert, or touch only when the stored registrar is the same one."""
        stmt = (
            insert(claims)
            .values(**registrar_assignment_to_dict(assignment))
            .on_conflict_do_update(
                constraint="uq_student_session_registrar",
                set_={"updated_at": utcnow()},
                where=claims.c.registrar_id == assignment.registrar_id,
            )
            .returning(claims.c.id)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.first() is not None

    async def reassign(self, assignment: RegistrarAssignment) -> RegistrarAssignment:
        stmt = (
            insert(claims)
            .values(**registrar_assignment_to_dict(assignment))
            .on_conflict_do_update(
                constraint="uq_student_session_registrar",
                set_={"registrar_id": assignment.registrar_id, "updated_at": utcnow()},
            )
            .returning(claims)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        row = result.mappings().one()
        return row_to_registrar_assignment(dict(row))
