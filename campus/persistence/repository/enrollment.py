"""PostgreSQL implementation of Enrollment repository."""

from typing import Optional

from sqlalchemy import and_, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

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
from campus.persistence.mappers import enrollment_to_dict, row_to_enrollment
from campus.persistence.tables import enrollments_table
from campus.util.clock import utcnow


class PostgresEnrollmentRepository(EnrollmentRepository):
    """PostgreSQL implementation of EnrollmentRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, enrollment_id: EnrollmentId) -> Optional[Enrollment]:
        stmt = select(enrollments_table).where(enrollments_table.c.id == enrollment_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_enrollment(dict(row)) if row else None

    async def find_by_student_and_session(
        self, student_id: StudentId, session_id: AcademicSessionId
    ) -> list[Enrollment]:
        stmt = (
            select(enrollments_table)
            .where(
                and_(
                    enrollments_table.c.student_id == student_id,
                    enrollments_table.c.session_id == session_id,
                )
            )
            .order_by(enrollments_table.c.created_at.asc())
        )
        result = await self.session.execute(stmt)
        return [row_to_enrollment(dict(row)) for row in result.mappings().all()]

    async def find_open_for_course(
        self,
        student_id: StudentId,
        course_id: CourseId,
        session_id: AcademicSessionId,
    ) -> Optional[Enrollment]:
        stmt = select(enrollments_table).where(
            and_(
                enrollments_table.c.student_id == student_id,
                enrollments_table.c.course_id == course_id,
                enrollments_table.c.session_id == session_id,
                enrollments_table.c.status != EnrollmentStatus.REJECTED.value,
            )
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_enrollment(dict(row)) if row else None

    async def save(self, enrollment: Enrollment) -> Enrollment:
        """Save an enrollment (create or update)."""
        data = enrollment_to_dict(enrollment)

        if await self.find_by_id(enrollment.id):
            stmt = (
                update(enrollments_table)
                .where(enrollments_table.c.id == enrollment.id)
                .values(**data)
            )
        else:
            stmt = insert(enrollments_table).values(**data)

        await self.session.execute(stmt)
        await self.session.flush()
        return enrollment

    async def assign_registrar_to_pending(
        self,
        student_id: StudentId,
        session_id: AcademicSessionId,
        registrar_id: RegistrarId,
        only_unassigned: bool = True,
    ) -> int:
        """Single UPDATE over the student's PENDING rows in the session."""
        conditions = [
            enrollments_table.c.student_id == student_id,
            enrollments_table.c.session_id == session_id,
            enrollments_table.c.status == EnrollmentStatus.PENDING.value,
        ]
        if only_unassigned:
            conditions.append(enrollments_table.c.registrar_id.is_(None))

        stmt = (
            update(enrollments_table)
            .where(and_(*conditions))
            .values(registrar_id=registrar_id, updated_at=utcnow())
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount or 0

    async def transition_session_enrollments(
        self,
        session_id: AcademicSessionId,
        from_status: EnrollmentStatus,
        to_status: EnrollmentStatus,
    ) -> int:
        """Single UPDATE; either every matching row moves or the statement fails."""
        stmt = (
            update(enrollments_table)
            .where(
                and_(
                    enrollments_table.c.session_id == session_id,
                    enrollments_table.c.status == from_status.value,
                )
            )
            .values(status=to_status.value, updated_at=utcnow())
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount or 0
