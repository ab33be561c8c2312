"""Test configuration and shared builders."""

import os
from datetime import timedelta
from uuid import uuid4

import logfire

from campus.domain.model import (
    AcademicSession,
    Course,
    Enrollment,
    Program,
    Registrar,
    Student,
)
from campus.domain.value import (
    AcademicSessionId,
    CourseId,
    Email,
    EnrollmentId,
    EnrollmentStatus,
    IdentityId,
    ProgramId,
    RegistrarId,
    RegistrationNumber,
    SessionStatus,
    StudentId,
)
from campus.util.clock import utcnow

os.environ.setdefault("ENVIRONMENT", "test")

# Keep telemetry local; spans and logs are still created
logfire.configure(send_to_logfire=False, console=False)


def make_session(
    status: SessionStatus = SessionStatus.UPCOMING,
    starts_in: timedelta = timedelta(days=30),
    name: str = "2026/2027 First Semester",
) -> AcademicSession:
    """Build a session with consistent dates relative to now."""
    start = utcnow() + starts_in
    return AcademicSession(
        id=AcademicSessionId(uuid4()),
        name=name,
        start_date=start,
        end_date=start + timedelta(days=120),
        enrollment_deadline=start - timedelta(days=7),
        status=status,
    )


def make_program() -> Program:
    return Program(
        id=ProgramId(uuid4()),
        name="Computer Science",
        program_type="UNDERGRADUATE",
    )


def make_course(code: str = "CSC101") -> Course:
    return Course(
        id=CourseId(uuid4()),
        code=code,
        title="Introduction to Computing",
        credits=3,
    )


def make_student(
    program_id: ProgramId | None = None,
    email: str | None = None,
    reg_number: str | None = None,
    identity_id: IdentityId | None = None,
) -> Student:
    """Build a student; without an identity it is an unclaimed placeholder."""
    suffix = uuid4().hex[:6]
    return Student(
        id=StudentId(uuid4()),
        reg_number=RegistrationNumber(reg_number or f"2026/CS/{suffix}"),
        email=Email(email or f"student-{suffix}@campus.test"),
        program_id=program_id or ProgramId(uuid4()),
        first_name="Ada" if identity_id else None,
        last_name="Obi" if identity_id else None,
        identity_id=identity_id,
    )


def make_registrar(email: str | None = None) -> Registrar:
    suffix = uuid4().hex[:6]
    return Registrar(
        id=RegistrarId(uuid4()),
        email=Email(email or f"registrar-{suffix}@campus.test"),
        first_name="Grace",
        last_name="Eze",
        identity_id=IdentityId(uuid4()),
    )


def make_enrollment(
    student_id: StudentId,
    session_id: AcademicSessionId,
    status: EnrollmentStatus = EnrollmentStatus.PENDING,
    registrar_id: RegistrarId | None = None,
    course_id: CourseId | None = None,
) -> Enrollment:
    return Enrollment(
        id=EnrollmentId(uuid4()),
        student_id=student_id,
        course_id=course_id or CourseId(uuid4()),
        session_id=session_id,
        status=status,
        registrar_id=registrar_id,
    )
