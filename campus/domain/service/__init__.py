"""Domain services."""

from .academic_session_service import AcademicSessionService
from .base import Service
from .catalog_service import CatalogService
from .enrollment_service import EnrollmentService
from .identity_service import IdentityProviderClient, IdentityService
from .invitation_service import InvitationService
from .jwt_service import Actor, JWTService
from .notification_service import NotificationService, Notifier
from .registrar_assignment_service import RegistrarAssignmentService
from .registrar_service import RegistrarService
from .student_service import StudentService

__all__ = [
    "AcademicSessionService",
    "Actor",
    "CatalogService",
    "EnrollmentService",
    "IdentityProviderClient",
    "IdentityService",
    "InvitationService",
    "JWTService",
    "NotificationService",
    "Notifier",
    "RegistrarAssignmentService",
    "RegistrarService",
    "Service",
    "StudentService",
]
