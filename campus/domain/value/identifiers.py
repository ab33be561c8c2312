"""Strongly typed identifiers for campus domain entities.

Using NewType for strong typing prevents mixing up different entity IDs
and makes the code more self-documenting.
"""

from typing import NewType
from uuid import UUID

# Core domain entity identifiers
InvitationId = NewType("InvitationId", UUID)
AcademicSessionId = NewType("AcademicSessionId", UUID)
EnrollmentId = NewType("EnrollmentId", UUID)
StudentId = NewType("StudentId", UUID)
RegistrarId = NewType("RegistrarId", UUID)
ProgramId = NewType("ProgramId", UUID)
CourseId = NewType("CourseId", UUID)
RegistrarAssignmentId = NewType("RegistrarAssignmentId", UUID)

# Account identity issued by the identity provider
IdentityId = NewType("IdentityId", UUID)
