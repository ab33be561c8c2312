"""PostgreSQL implementations of Program and Course repositories."""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from campus.domain.model import Course, Program
from campus.domain.repository import CourseRepository, ProgramRepository
from campus.domain.value import CourseId, ProgramId
from campus.persistence.mappers import row_to_course, row_to_program
from campus.persistence.tables import courses_table, programs_table


class PostgresProgramRepository(ProgramRepository):
    """PostgreSQL implementation of ProgramRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def find_by_id(self, program_id: ProgramId) -> Optional[Program]:
        stmt = select(programs_table).where(programs_table.c.id == program_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_program(dict(row)) if row else None

    async def save(self, program: Program) -> Program:
        data = program.model_dump()
        stmt = (
            insert(programs_table)
            .values(**data)
            .on_conflict_do_update(index_elements=["id"], set_=data)
        )
        await self.session.execute(stmt)
        await self.session.flush()
        return program


class PostgresCourseRepository(CourseRepository):
    """PostgreSQL implementation of CourseRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def find_by_id(self, course_id: CourseId) -> Optional[Course]:
        stmt = select(courses_table).where(courses_table.c.id == course_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_course(dict(row)) if row else None

    async def save(self, course: Course) -> Course:
        data = course.model_dump()
        stmt = (
            insert(courses_table)
            .values(**data)
            .on_conflict_do_update(index_elements=["id"], set_=data)
        )
        await self.session.execute(stmt)
        await self.session.flush()
        return course
