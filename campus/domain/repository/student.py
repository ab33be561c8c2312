"""Student repository interface."""

from abc import ABC, abstractmethod

from campus.domain.model import Student
from campus.domain.value import Email, IdentityId, RegistrationNumber, StudentId


class StudentRepository(ABC):
    """Repository for Student entity."""

    @abstractmethod
    async def find_by_id(self, student_id: StudentId) -> Student | None:
        """Find a student by ID."""
        pass

    @abstractmethod
    async def find_by_reg_number(self, reg_number: RegistrationNumber) -> Student | None:
        """Find a student by registration number."""
        pass

    @abstractmethod
    async def find_by_identity_id(self, identity_id: IdentityId) -> Student | None:
        """Find the student linked to an identity."""
        pass

    @abstractmethod
    async def find_by_email(self, email: Email) -> Student | None:
        """Find a student by email."""
        pass

    @abstractmethod
    async def find_placeholder(self, email: Email) -> Student | None:
        """Find the unlinked student row reserved for an invited email.

        Returns:
            The student row if found, None otherwise
        """
        pass

    @abstractmethod
    async def save(self, student: Student) -> Student:
        """Save a student (create or update).

        Raises:
            IntegrityError: If the registration number or email is taken
        """
        pass

    @abstractmethod
    async def delete(self, student_id: StudentId) -> None:
        """Delete a student."""
        pass
