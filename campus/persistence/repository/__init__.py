"""PostgreSQL repository implementations."""

from campus.persistence.repository.academic_session import (
    PostgresAcademicSessionRepository,
)
from campus.persistence.repository.catalog import (
    PostgresCourseRepository,
    PostgresProgramRepository,
)
from campus.persistence.repository.enrollment import PostgresEnrollmentRepository
from campus.persistence.repository.invitation import PostgresInvitationRepository
from campus.persistence.repository.registrar import PostgresRegistrarRepository
from campus.persistence.repository.registrar_assignment import (
    PostgresRegistrarAssignmentRepository,
)
from campus.persistence.repository.student import PostgresStudentRepository

__all__ = [
    "PostgresAcademicSessionRepository",
    "PostgresCourseRepository",
    "PostgresEnrollmentRepository",
    "PostgresInvitationRepository",
    "PostgresProgramRepository",
    "PostgresRegistrarAssignmentRepository",
    "PostgresRegistrarRepository",
    "PostgresStudentRepository",
]
