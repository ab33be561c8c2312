"""Domain value objects for the enrollment back office."""

from campus.domain.value.identifiers import (
    AcademicSessionId,
    CourseId,
    EnrollmentId,
    IdentityId,
    InvitationId,
    ProgramId,
    RegistrarAssignmentId,
    RegistrarId,
    StudentId,
)
from campus.domain.value.types import (
    TERMINAL_ENROLLMENT_STATUSES,
    Email,
    EnrollmentStatus,
    IdentitySession,
    InvitationStatus,
    InvitationToken,
    ProvisionedIdentity,
    RegistrationNumber,
    SessionStatus,
    UserType,
)

__all__ = [
    # Identifiers
    "AcademicSessionId",
    "CourseId",
    "EnrollmentId",
    "IdentityId",
    "InvitationId",
    "ProgramId",
    "RegistrarAssignmentId",
    "RegistrarId",
    "StudentId",
    # Types
    "Email",
    "EnrollmentStatus",
    "IdentitySession",
    "InvitationStatus",
    "InvitationToken",
    "ProvisionedIdentity",
    "RegistrationNumber",
    "SessionStatus",
    "TERMINAL_ENROLLMENT_STATUSES",
    "UserType",
]
