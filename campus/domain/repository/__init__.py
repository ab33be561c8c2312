"""Repository interfaces for the campus domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the infrastructure layer.
"""

from campus.domain.repository.academic_session import AcademicSessionRepository
from campus.domain.repository.catalog import CourseRepository, ProgramRepository
from campus.domain.repository.enrollment import EnrollmentRepository
from campus.domain.repository.invitation import InvitationRepository
from campus.domain.repository.registrar import RegistrarRepository
from campus.domain.repository.registrar_assignment import (
    RegistrarAssignmentRepository,
)
from campus.domain.repository.student import StudentRepository

__all__ = [
    "AcademicSessionRepository",
    "CourseRepository",
    "EnrollmentRepository",
    "InvitationRepository",
    "ProgramRepository",
    "RegistrarAssignmentRepository",
    "RegistrarRepository",
    "StudentRepository",
]
