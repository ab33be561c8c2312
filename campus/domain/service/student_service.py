"""Student domain service."""

from uuid import uuid4

import logfire
from sqlalchemy.exc import IntegrityError

from campus.domain.error import NotFoundError, ValidationError
from campus.domain.model import Student
from campus.domain.repository import StudentRepository
from campus.domain.value import (
    Email,
    IdentityId,
    ProgramId,
    RegistrationNumber,
    StudentId,
)
from campus.util.clock import utcnow

from .base import Service


def ensure_reg_number_matches(
    student: Student, reg_number: RegistrationNumber | None
) -> None:
    if reg_number is not None and reg_number != student.reg_number:
        logfire.warn(
            "Registration number does not match invitation",
            student_id=str(student.id),
        )
        raise ValidationError("Registration number does not match the invitation")


class StudentService(Service):
    """Domain service for student profiles."""

    def __init__(self, student_repository: StudentRepository) -> None:
        """Initialize student service.

        Args:
            student_repository: Student repository
        """
        self.student_repository = student_repository

    async def get_by_id(self, student_id: StudentId) -> Student:
        """Get student by ID.

        Raises:
            NotFoundError: If the student does not exist
        """
        student = await self.student_repository.find_by_id(student_id)
        if not student:
            raise NotFoundError("Student", str(student_id))
        return student

    async def find_by_identity(self, identity_id: IdentityId) -> Student | None:
        return await self.student_repository.find_by_identity_id(identity_id)

    async def create_placeholder(
        self, email: Email, reg_number: RegistrationNumber, program_id: ProgramId
    ) -> Student:
        """Create the invite-time student row.

        Raises:
            ValidationError: If the email or registration number is already used
        """
        with logfire.span(
            "student_service.create_placeholder",
            reg_number=reg_number.root,
            program_id=str(program_id),
        ):
            if await self.student_repository.find_by_reg_number(reg_number):
                raise ValidationError(
                    f"Registration number {reg_number.root} is already in use"
                )
            # An INSERT hitting the unique email leaves the transaction unusable
            if await self.student_repository.find_by_email(email):
                raise ValidationError(
                    f"A student with email {email.root} already exists"
                )

            student = Student(
                id=StudentId(uuid4()),
                reg_number=reg_number,
                email=email,
                program_id=program_id,
            )
            try:
                saved = await self.student_repository.save(student)
            except IntegrityError as e:
                logfire.warn("Student placeholder conflict", error=str(e))
                raise ValidationError(
                    "A student with this email or registration number already exists"
                ) from e
            logfire.info("Student placeholder created", student_id=str(saved.id))
            return saved

    async def find_placeholder(
        self, email: Email, reg_number: RegistrationNumber | None = None
    ) -> Student:
        """Find the placeholder row reserved for an invited email.

        Raises:
            NotFoundError: If no unlinked row exists for the email
            ValidationError: If a supplied registration number is not the
                one on that row
        """
        student = await self.student_repository.find_placeholder(email)
        if not student:
            raise NotFoundError("Student", email.root)
        ensure_reg_number_matches(student, reg_number)
        return student

    async def check_reg_number(
        self, email: Email, reg_number: RegistrationNumber | None
    ) -> None:
        """Fail early when an invitee supplies someone else's registration number.

        A missing placeholder is left for the profile step to report.

        Raises:
            ValidationError: If the number does not belong to the invited row
        """
        student = await self.student_repository.find_placeholder(email)
        if student:
            ensure_reg_number_matches(student, reg_number)

    async def complete_profile(
        self,
        student: Student,
        first_name: str,
        last_name: str,
        identity_id: IdentityId,
        profile_picture: str | None = None,
    ) -> Student:
        """Fill in names and link the identity on a placeholder row."""
        with logfire.span(
            "student_service.complete_profile",
            student_id=str(student.id),
            identity_id=str(identity_id),
        ):
            completed = student.model_copy(
                update={
                    "first_name": first_name,
                    "last_name": last_name,
                    "identity_id": identity_id,
                    "profile_picture": profile_picture or student.profile_picture,
                    "updated_at": utcnow(),
                }
            )
            saved = await self.student_repository.save(completed)
            logfire.info("Student profile completed", student_id=str(saved.id))
            return saved

    async def restore(self, snapshot: Student) -> Student:
        """Write a previously read version of a student back."""
        with logfire.span("student_service.restore", student_id=str(snapshot.id)):
            return await self.student_repository.save(snapshot)
