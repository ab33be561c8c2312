"""In-memory student repository for testing."""

from typing import Optional

from sqlalchemy.exc import IntegrityError

from campus.domain.model import Student
from campus.domain.repository import StudentRepository
from campus.domain.value import Email, IdentityId, RegistrationNumber, StudentId


class InMemoryStudentRepository(StudentRepository):
    """In-memory implementation of StudentRepository for testing."""

    def __init__(self) -> None:
        self._students: dict[StudentId, Student] = {}

    async def find_by_id(self, student_id: StudentId) -> Optional[Student]:
        return self._students.get(student_id)

    async def find_by_reg_number(
        self, reg_number: RegistrationNumber
    ) -> Optional[Student]:
        for student in self._students.values():
            if student.reg_number == reg_number:
                return student
        return None

    async def find_by_identity_id(self, identity_id: IdentityId) -> Optional[Student]:
        for student in self._students.values():
            if student.identity_id == identity_id:
                return student
        return None

    async def find_by_email(self, email: Email) -> Optional[Student]:
        for student in self._students.values():
            if student.email == email:
                return student
        return None

    async def find_placeholder(self, email: Email) -> Optional[Student]:
        student = await self.find_by_email(email)
        if student and student.is_placeholder:
            return student
        return None

    async def save(self, student: Student) -> Student:
        """Save a student (create or update).

        Raises:
            IntegrityError: If the registration number or email is taken
        """
        for existing in self._students.values():
            if existing.id == student.id:
                continue
            if existing.reg_number == student.reg_number or existing.email == student.email:
                raise IntegrityError("Duplicate student", None, Exception())

        self._students[student.id] = student
        return student

    async def delete(self, student_id: StudentId) -> None:
        self._students.pop(student_id, None)
