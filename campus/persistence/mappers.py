"""Mappers for converting between database rows and domain models.

Domain models are immutable pydantic models, so rows are mapped by hand
instead of through SQLAlchemy's ORM.
"""

from typing import Any, Dict
from uuid import UUID

from campus.domain.model import (
    AcademicSession,
    Course,
    Enrollment,
    Invitation,
    Program,
    Registrar,
    RegistrarAssignment,
    Student,
)
from campus.domain.value import (
    AcademicSessionId,
    CourseId,
    Email,
    EnrollmentId,
    EnrollmentStatus,
    IdentityId,
    InvitationId,
    InvitationStatus,
    InvitationToken,
    ProgramId,
    RegistrarAssignmentId,
    RegistrarId,
    RegistrationNumber,
    SessionStatus,
    StudentId,
    UserType,
)


def _uuid(value: Any) -> UUID | None:
    if value is None:
        return None
    return UUID(value) if isinstance(value, str) else value


def row_to_invitation(row: Dict[str, Any]) -> Invitation:
    """Convert database row to Invitation domain model.

    Args:
        row: Database row as dict

    Returns:
        Invitation domain model
    """
    return Invitation(
        id=InvitationId(_uuid(row["id"])),
        email=Email(row["email"]),
        token=InvitationToken(row["token"]),
        user_type=UserType(row["user_type"]),
        status=InvitationStatus(row["status"]),
        expires_at=row["expires_at"],
        created_at=row["created_at"],
        accepted_at=row.get("accepted_at"),
        profile_id=_uuid(row.get("profile_id")),
    )


def invitation_to_dict(invitation: Invitation) -> Dict[str, Any]:
    """Convert Invitation domain model to database dict."""
    return {
        "id": invitation.id,
        "email": invitation.email.root,
        "token": invitation.token.root,
        "user_type": invitation.user_type.value,
        "status": invitation.status.value,
        "expires_at": invitation.expires_at,
        "created_at": invitation.created_at,
        "accepted_at": invitation.accepted_at,
        "profile_id": invitation.profile_id,
    }


def row_to_academic_session(row: Dict[str, Any]) -> AcademicSession:
    """Convert database row to AcademicSession domain model."""
    return AcademicSession(
        id=AcademicSessionId(_uuid(row["id"])),
        name=row["name"],
        start_date=row["start_date"],
        end_date=row["end_date"],
        enrollment_deadline=row["enrollment_deadline"],
        status=SessionStatus(row["status"]),
        created_at=row["created_at"],
    )


def academic_session_to_dict(session: AcademicSession) -> Dict[str, Any]:
    """Convert AcademicSession domain model to database dict."""
    data = session.model_dump()
    data["status"] = session.status.value
    return data


def row_to_enrollment(row: Dict[str, Any]) -> Enrollment:
    """Convert database row to Enrollment domain model."""
    registrar_id = _uuid(row.get("registrar_id"))
    return Enrollment(
        id=EnrollmentId(_uuid(row["id"])),
        student_id=StudentId(_uuid(row["student_id"])),
        course_id=CourseId(_uuid(row["course_id"])),
        session_id=AcademicSessionId(_uuid(row["session_id"])),
        status=EnrollmentStatus(row["status"]),
        registrar_id=RegistrarId(registrar_id) if registrar_id else None,
        rejection_reason=row.get("rejection_reason"),
        special_request=row.get("special_request", False),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def enrollment_to_dict(enrollment: Enrollment) -> Dict[str, Any]:
    """Convert Enrollment domain model to database dict."""
    data = enrollment.model_dump()
    data["status"] = enrollment.status.value
    return data


def row_to_student(row: Dict[str, Any]) -> Student:
    """Convert database row to Student domain model."""
    identity_id = _uuid(row.get("identity_id"))
    return Student(
        id=StudentId(_uuid(row["id"])),
        reg_number=RegistrationNumber(row["reg_number"]),
        email=Email(row["email"]),
        program_id=ProgramId(_uuid(row["program_id"])),
        first_name=row.get("first_name"),
        last_name=row.get("last_name"),
        identity_id=IdentityId(identity_id) if identity_id else None,
        profile_picture=row.get("profile_picture"),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def student_to_dict(student: Student) -> Dict[str, Any]:
    """Convert Student domain model to database dict.

    RootValueObjects dump to their primitive value.
    """
    return student.model_dump()


def row_to_registrar(row: Dict[str, Any]) -> Registrar:
    """Convert database row to Registrar domain model."""
    return Registrar(
        id=RegistrarId(_uuid(row["id"])),
        email=Email(row["email"]),
        first_name=row["first_name"],
        last_name=row["last_name"],
        identity_id=IdentityId(_uuid(row["identity_id"])),
        profile_picture=row.get("profile_picture"),
        created_at=row["created_at"],
    )


def registrar_to_dict(registrar: Registrar) -> Dict[str, Any]:
    """Convert Registrar domain model to database dict."""
    return registrar.model_dump()


def row_to_program(row: Dict[str, Any]) -> Program:
    return Program(
        id=ProgramId(_uuid(row["id"])),
        name=row["name"],
        program_type=row["program_type"],
    )


def row_to_course(row: Dict[str, Any]) -> Course:
    return Course(
        id=CourseId(_uuid(row["id"])),
        code=row["code"],
        title=row["title"],
        credits=row["credits"],
    )


def row_to_registrar_assignment(row: Dict[str, Any]) -> RegistrarAssignment:
    """Convert database row to RegistrarAssignment domain model."""
    return RegistrarAssignment(
        id=RegistrarAssignmentId(_uuid(row["id"])),
        student_id=StudentId(_uuid(row["student_id"])),
        registrar_id=RegistrarId(_uuid(row["registrar_id"])),
        session_id=AcademicSessionId(_uuid(row["session_id"])),
        updated_at=row["updated_at"],
    )


def registrar_assignment_to_dict(assignment: RegistrarAssignment) -> Dict[str, Any]:
    return assignment.model_dump()
