"""Application layer DI providers."""

from dishka import Scope, provide

from campus.application.usecase.enrollment import (
    ApproveEnrollmentUseCase,
    CancelEnrollmentUseCase,
    GetEnrollmentUseCase,
    RejectEnrollmentUseCase,
    RequestEnrollmentUseCase,
)
from campus.application.usecase.invitation import (
    AcceptInvitationUseCase,
    CancelInvitationUseCase,
    InviteRegistrarUseCase,
    InviteStudentUseCase,
    ResendInvitationUseCase,
    ValidateInvitationUseCase,
)
from campus.application.usecase.session import (
    CloseSessionUseCase,
    CreateSessionUseCase,
    GetSessionUseCase,
    StartSessionUseCase,
    UpdateSessionUseCase,
)
from campus.application.usecase.student import ClaimStudentUseCase
from campus.domain.service import (
    AcademicSessionService,
    CatalogService,
    EnrollmentService,
    IdentityService,
    InvitationService,
    NotificationService,
    RegistrarAssignmentService,
    RegistrarService,
    StudentService,
)
from campus.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Application use cases provider - concrete, no mocks needed."""

    scope = Scope.REQUEST

    # Invitation use cases
    @provide
    def get_accept_invitation_use_case(
        self,
        invitation_service: InvitationService,
        identity_service: IdentityService,
        student_service: StudentService,
        registrar_service: RegistrarService,
    ) -> AcceptInvitationUseCase:
        """Provide accept invitation use case."""
        return AcceptInvitationUseCase(
            invitation_service=invitation_service,
            identity_service=identity_service,
            student_service=student_service,
            registrar_service=registrar_service,
        )

    @provide
    def get_invite_student_use_case(
        self,
        invitation_service: InvitationService,
        student_service: StudentService,
        catalog_service: CatalogService,
        notification_service: NotificationService,
    ) -> InviteStudentUseCase:
        """Provide invite student use case."""
        return InviteStudentUseCase(
            invitation_service=invitation_service,
            student_service=student_service,
            catalog_service=catalog_service,
            notification_service=notification_service,
        )

    @provide
    def get_invite_registrar_use_case(
        self,
        invitation_service: InvitationService,
        registrar_service: RegistrarService,
        notification_service: NotificationService,
    ) -> InviteRegistrarUseCase:
        """Provide invite registrar use case."""
        return InviteRegistrarUseCase(
            invitation_service=invitation_service,
            registrar_service=registrar_service,
            notification_service=notification_service,
        )

    @provide
    def get_validate_invitation_use_case(
        self, invitation_service: InvitationService
    ) -> ValidateInvitationUseCase:
        """Provide validate invitation use case."""
        return ValidateInvitationUseCase(invitation_service=invitation_service)

    @provide
    def get_resend_invitation_use_case(
        self,
        invitation_service: InvitationService,
        notification_service: NotificationService,
    ) -> ResendInvitationUseCase:
        """Provide resend invitation use case."""
        return ResendInvitationUseCase(
            invitation_service=invitation_service,
            notification_service=notification_service,
        )

    @provide
    def get_cancel_invitation_use_case(
        self, invitation_service: InvitationService
    ) -> CancelInvitationUseCase:
        """Provide cancel invitation use case."""
        return CancelInvitationUseCase(invitation_service=invitation_service)

    # Enrollment use cases
    @provide
    def get_request_enrollment_use_case(
        self,
        enrollment_service: EnrollmentService,
        session_service: AcademicSessionService,
        catalog_service: CatalogService,
        student_service: StudentService,
    ) -> RequestEnrollmentUseCase:
        """Provide request enrollment use case."""
        return RequestEnrollmentUseCase(
            enrollment_service=enrollment_service,
            session_service=session_service,
            catalog_service=catalog_service,
            student_service=student_service,
        )

    @provide
    def get_get_enrollment_use_case(
        self, enrollment_service: EnrollmentService
    ) -> GetEnrollmentUseCase:
        """Provide get enrollment use case."""
        return GetEnrollmentUseCase(enrollment_service=enrollment_service)

    @provide
    def get_approve_enrollment_use_case(
        self,
        enrollment_service: EnrollmentService,
        registrar_service: RegistrarService,
    ) -> ApproveEnrollmentUseCase:
        """Provide approve enrollment use case."""
        return ApproveEnrollmentUseCase(
            enrollment_service=enrollment_service,
            registrar_service=registrar_service,
        )

    @provide
    def get_reject_enrollment_use_case(
        self,
        enrollment_service: EnrollmentService,
        registrar_service: RegistrarService,
    ) -> RejectEnrollmentUseCase:
        """Provide reject enrollment use case."""
        return RejectEnrollmentUseCase(
            enrollment_service=enrollment_service,
            registrar_service=registrar_service,
        )

    @provide
    def get_cancel_enrollment_use_case(
        self, enrollment_service: EnrollmentService
    ) -> CancelEnrollmentUseCase:
        """Provide cancel enrollment use case."""
        return CancelEnrollmentUseCase(enrollment_service=enrollment_service)

    # Session use cases
    @provide
    def get_create_session_use_case(
        self, session_service: AcademicSessionService
    ) -> CreateSessionUseCase:
        """Provide create session use case."""
        return CreateSessionUseCase(session_service=session_service)

    @provide
    def get_update_session_use_case(
        self, session_service: AcademicSessionService
    ) -> UpdateSessionUseCase:
        """Provide update session use case."""
        return UpdateSessionUseCase(session_service=session_service)

    @provide
    def get_start_session_use_case(
        self, session_service: AcademicSessionService
    ) -> StartSessionUseCase:
        """Provide start session use case."""
        return StartSessionUseCase(session_service=session_service)

    @provide
    def get_close_session_use_case(
        self, session_service: AcademicSessionService
    ) -> CloseSessionUseCase:
        """Provide close session use case."""
        return CloseSessionUseCase(session_service=session_service)

    @provide
    def get_get_session_use_case(
        self, session_service: AcademicSessionService
    ) -> GetSessionUseCase:
        """Provide get session use case."""
        return GetSessionUseCase(session_service=session_service)

    # Student use cases
    @provide
    def get_claim_student_use_case(
        self,
        assignment_service: RegistrarAssignmentService,
        registrar_service: RegistrarService,
    ) -> ClaimStudentUseCase:
        """Provide claim student use case."""
        return ClaimStudentUseCase(
            assignment_service=assignment_service,
            registrar_service=registrar_service,
        )
