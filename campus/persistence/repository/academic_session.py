"""PostgreSQL implementation of AcademicSession repository."""

from typing import Optional

from sqlalchemy import insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from campus.domain.model import AcademicSession
from campus.domain.repository import AcademicSessionRepository
from campus.domain.value import AcademicSessionId, SessionStatus
from campus.persistence.mappers import (
    academic_session_to_dict,
    row_to_academic_session,
)
from campus.persistence.tables import academic_sessions_table


class PostgresAcademicSessionRepository(AcademicSessionRepository):
    """PostgreSQL implementation of AcademicSessionRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def find_by_id(
        self, session_id: AcademicSessionId
    ) -> Optional[AcademicSession]:
        stmt = select(academic_sessions_table).where(
            academic_sessions_table.c.id == session_id
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_academic_session(dict(row)) if row else None

    async def find_by_status(self, status: SessionStatus) -> list[AcademicSession]:
        stmt = (
            select(academic_sessions_table)
            .where(academic_sessions_table.c.status == status.value)
            .order_by(academic_sessions_table.c.start_date.asc())
        )
        result = await self.session.execute(stmt)
        return [row_to_academic_session(dict(row)) for row in result.mappings().all()]

    async def save(self, session: AcademicSession) -> AcademicSession:
        """Save a session (create or update).

        Flushes immediately so the single-active index is checked inside
        the current transaction.
        """
        data = academic_session_to_dict(session)

        if await self.find_by_id(session.id):
            stmt = (
                update(academic_sessions_table)
                .where(academic_sessions_table.c.id == session.id)
                .values(**data)
            )
        else:
            stmt = insert(academic_sessions_table).values(**data)

        await self.session.execute(stmt)
        await self.session.flush()
        return session
