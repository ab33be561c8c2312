"""In-memory repository implementations for testing."""

from .academic_session import InMemoryAcademicSessionRepository
from .catalog import InMemoryCourseRepository, InMemoryProgramRepository
from .enrollment import InMemoryEnrollmentRepository
from .invitation import InMemoryInvitationRepository
from .registrar import InMemoryRegistrarRepository
from .registrar_assignment import InMemoryRegistrarAssignmentRepository
from .student import InMemoryStudentRepository

__all__ = [
    "InMemoryAcademicSessionRepository",
    "InMemoryCourseRepository",
    "InMemoryEnrollmentRepository",
    "InMemoryInvitationRepository",
    "InMemoryProgramRepository",
    "InMemoryRegistrarAssignmentRepository",
    "InMemoryRegistrarRepository",
    "InMemoryStudentRepository",
]
