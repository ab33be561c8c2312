"""Domain layer DI providers."""

from dishka import Scope, provide

from campus.config import (
    AuthSettings,
    IdentityProviderSettings,
    InvitationSettings,
    Settings,
)
from campus.domain.repository import (
    AcademicSessionRepository,
    CourseRepository,
    EnrollmentRepository,
    InvitationRepository,
    ProgramRepository,
    RegistrarAssignmentRepository,
    RegistrarRepository,
    StudentRepository,
)
from campus.domain.service import (
    AcademicSessionService,
    CatalogService,
    EnrollmentService,
    IdentityProviderClient,
    IdentityService,
    InvitationService,
    JWTService,
    NotificationService,
    Notifier,
    RegistrarAssignmentService,
    RegistrarService,
    StudentService,
)
from campus.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    Each HTTP request gets fresh service instances with their own transaction.
    """

    scope = Scope.REQUEST

    @provide
    def get_jwt_service(self, auth_settings: AuthSettings) -> JWTService:
        """Provide caller token domain service."""
        return JWTService(auth_settings=auth_settings)

    @provide
    def get_invitation_service(
        self,
        invitation_repository: InvitationRepository,
        invitation_settings: InvitationSettings,
    ) -> InvitationService:
        """Provide invitation domain service."""
        return InvitationService(
            invitation_repository=invitation_repository,
            invitation_settings=invitation_settings,
        )

    @provide
    def get_identity_service(
        self,
        client: IdentityProviderClient,
        identity_settings: IdentityProviderSettings,
    ) -> IdentityService:
        """Provide identity provider domain service."""
        return IdentityService(
            client=client, roles_table=identity_settings.roles_table
        )

    @provide
    def get_student_service(
        self, student_repository: StudentRepository
    ) -> StudentService:
        """Provide student domain service."""
        return StudentService(student_repository=student_repository)

    @provide
    def get_registrar_service(
        self, registrar_repository: RegistrarRepository
    ) -> RegistrarService:
        """Provide registrar domain service."""
        return RegistrarService(registrar_repository=registrar_repository)

    @provide
    def get_catalog_service(
        self,
        program_repository: ProgramRepository,
        course_repository: CourseRepository,
    ) -> CatalogService:
        """Provide program and course lookup service."""
        return CatalogService(
            program_repository=program_repository,
            course_repository=course_repository,
        )

    @provide
    def get_enrollment_service(
        self,
        enrollment_repository: EnrollmentRepository,
        assignment_repository: RegistrarAssignmentRepository,
        student_repository: StudentRepository,
    ) -> EnrollmentService:
        """Provide enrollment domain service."""
        return EnrollmentService(
            enrollment_repository=enrollment_repository,
            assignment_repository=assignment_repository,
            student_repository=student_repository,
        )

    @provide
    def get_academic_session_service(
        self,
        session_repository: AcademicSessionRepository,
        enrollment_service: EnrollmentService,
    ) -> AcademicSessionService:
        """Provide academic session domain service."""
        return AcademicSessionService(
            session_repository=session_repository,
            enrollment_service=enrollment_service,
        )

    @provide
    def get_registrar_assignment_service(
        self,
        assignment_repository: RegistrarAssignmentRepository,
        session_repository: AcademicSessionRepository,
        enrollment_repository: EnrollmentRepository,
        student_repository: StudentRepository,
        registrar_repository: RegistrarRepository,
    ) -> RegistrarAssignmentService:
        """Provide registrar claim domain service."""
        return RegistrarAssignmentService(
            assignment_repository=assignment_repository,
            session_repository=session_repository,
            enrollment_repository=enrollment_repository,
            student_repository=student_repository,
            registrar_repository=registrar_repository,
        )

    @provide
    def get_notification_service(
        self, notifier: Notifier, settings: Settings
    ) -> NotificationService:
        """Provide invitation notification service."""
        return NotificationService(
            notifier=notifier, link_base=settings.invitation_link_base
        )
