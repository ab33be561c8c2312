"""PostgreSQL implementation of Student repository."""

from typing import Optional

from sqlalchemy import delete, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from campus.domain.model import Student
from campus.domain.repository import StudentRepository
from campus.domain.value import Email, IdentityId, RegistrationNumber, StudentId
from campus.persistence.mappers import row_to_student, student_to_dict
from campus.persistence.tables import students_table


class PostgresStudentRepository(StudentRepository):
    """PostgreSQL implementation of StudentRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def _first(self, stmt) -> Optional[Student]:
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_student(dict(row)) if row else None

    async def find_by_id(self, student_id: StudentId) -> Optional[Student]:
        return await self._first(
            select(students_table).where(students_table.c.id == student_id)
        )

    async def find_by_reg_number(
        self, reg_number: RegistrationNumber
    ) -> Optional[Student]:
        return await self._first(
            select(students_table).where(
                students_table.c.reg_number == reg_number.root
            )
        )

    async def find_by_identity_id(self, identity_id: IdentityId) -> Optional[Student]:
        return await self._first(
            select(students_table).where(students_table.c.identity_id == identity_id)
        )

    async def find_by_email(self, email: Email) -> Optional[Student]:
        return await self._first(
            select(students_table).where(students_table.c.email == email.root)
        )

    async def find_placeholder(self, email: Email) -> Optional[Student]:
        return await self._first(
            select(students_table).where(
                students_table.c.email == email.root,
                students_table.c.identity_id.is_(None),
            )
        )

    async def save(self, student: Student) -> Student:
        data = student_to_dict(student)

        if await self.find_by_id(student.id):
            stmt = (
                update(students_table)
                .where(students_table.c.id == student.id)
                .values(**data)
            )
        else:
            stmt = insert(students_table).values(**data)

        await self.session.execute(stmt)
        await self.session.flush()
        return student

    async def delete(self, student_id: StudentId) -> None:
        await self.session.execute(
            delete(students_table).where(students_table.c.id == student_id)
        )
        await self.session.flush()
