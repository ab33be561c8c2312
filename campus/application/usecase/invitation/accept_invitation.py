"""Accept invitation use case.

Turns a pending invitation into an account across the identity provider and
the profile store:

1. validate the token and, for students, the registration number
2. create the identity
3. assign the role, using the new identity's own session
4. create or complete the domain profile for the invited user type
5. mark the invitation ACCEPTED

Steps 2-4 register compensations. When a later step fails, the completed
ones are undone in reverse before the error is raised.
"""

from collections.abc import Awaitable, Callable
from datetime import datetime
from uuid import UUID

import logfire
from pydantic import BaseModel, Field
from pydantic import ValidationError as PydanticValidationError

from campus.application.usecase.base import BaseUseCase
from campus.application.usecase.saga import Saga
from campus.domain.error import (
    InvalidOrExpiredToken,
    InvitationUpdateError,
    ProfileCreationError,
    RoleAssignmentError,
    SagaFailure,
    ValidationError,
)
from campus.domain.model import Invitation
from campus.domain.service import (
    IdentityService,
    InvitationService,
    RegistrarService,
    StudentService,
)
from campus.domain.value import (
    InvitationToken,
    ProvisionedIdentity,
    RegistrationNumber,
    UserType,
)
from campus.util.observability import mask_token


class AcceptInvitationRequest(BaseModel):
    """Accept invitation request."""

    token: str
    first_name: str = Field(min_length=1, max_length=100)
    last_name: str = Field(min_length=1, max_length=100)
    password: str = Field(min_length=8)
    reg_number: str | None = None  # Students only
    profile_picture: str | None = None  # URL of an already uploaded image


class IdentitySummary(BaseModel):
    id: UUID
    email: str


class SessionTokens(BaseModel):
    access_token: str
    refresh_token: str
    expires_in: int | None = None
    token_type: str = "bearer"


class ProfileSummary(BaseModel):
    """Student or registrar profile created by the acceptance."""

    id: UUID
    user_type: UserType
    email: str
    first_name: str
    last_name: str
    reg_number: str | None = None
    profile_picture: str | None = None
    created_at: datetime


class AcceptInvitationResponse(BaseModel):
    """Accept invitation response."""

    user: IdentitySummary
    session: SessionTokens
    profile: ProfileSummary
    role: UserType


ProfileBuilder = Callable[
    [Invitation, ProvisionedIdentity, AcceptInvitationRequest, Saga],
    Awaitable[ProfileSummary],
]


class AcceptInvitationUseCase(
    BaseUseCase[AcceptInvitationRequest, AcceptInvitationResponse]
):
    """Use case for turning an invitation into an account."""

    def __init__(
        self,
        invitation_service: InvitationService,
        identity_service: IdentityService,
        student_service: StudentService,
        registrar_service: RegistrarService,
    ) -> None:
        """Initialize accept invitation use case.

        Args:
            invitation_service: Invitation domain service
            identity_service: Identity provider domain service
            student_service: Student domain service
            registrar_service: Registrar domain service
        """
        self.invitation_service = invitation_service
        self.identity_service = identity_service
        self.student_service = student_service
        self.registrar_service = registrar_service

        # One profile builder per invitable user type
        self._profile_builders: dict[UserType, ProfileBuilder] = {
            UserType.STUDENT: self._complete_student,
            UserType.REGISTRAR: self._create_registrar,
        }

    async def execute(
        self, request: AcceptInvitationRequest
    ) -> AcceptInvitationResponse:
        """Accept an invitation.

        Args:
            request: Token, profile fields and credential

        Returns:
            Identity, session tokens, profile and role

        Raises:
            InvalidOrExpiredToken: If the token cannot be used
            ValidationError: If a student's registration number is malformed
                or belongs to another record
            EmailExists: If the invited email is already registered
            IdentityProviderError: If the identity could not be created
            RoleAssignmentError: If the role write failed (identity removed)
            ProfileCreationError: If the profile step failed (role, identity removed)
            InvitationUpdateError: If the invitation could not be closed
                (profile, role, identity removed)
        """
        masked = mask_token(request.token)
        with logfire.span("accept_invitation.execute", token=masked):
            # 1. Token and input validation, nothing to undo
            try:
                token = InvitationToken(request.token)
            except PydanticValidationError as e:
                raise InvalidOrExpiredToken() from e
            invitation = await self.invitation_service.get_pending_by_token(token)
            if invitation.user_type == UserType.STUDENT:
                await self._check_student_input(invitation, request)

            # 2. Identity creation, failures here leave nothing behind
            identity = await self.identity_service.create_identity(
                invitation.email.root, request.password
            )

            saga = Saga("accept_invitation")
            saga.record(
                "create_identity",
                lambda: self.identity_service.delete_identity(identity.id),
            )

            # 3. Role assignment
            try:
                await self.identity_service.assign_role(identity, invitation.user_type)
            except Exception as e:
                raise await self._fail(saga, RoleAssignmentError, invitation, e) from e
            saga.record(
                "assign_role", lambda: self.identity_service.revoke_role(identity.id)
            )

            # 4. Domain profile
            try:
                build = self._profile_builders[invitation.user_type]
                profile = await build(invitation, identity, request, saga)
            except Exception as e:
                raise await self._fail(saga, ProfileCreationError, invitation, e) from e

            # 5. Invitation closure
            try:
                await self.invitation_service.mark_accepted(invitation.id, profile.id)
            except Exception as e:
                raise await self._fail(saga, InvitationUpdateError, invitation, e) from e

            logfire.info(
                "Invitation accepted",
                invitation_id=str(invitation.id),
                identity_id=str(identity.id),
                profile_id=str(profile.id),
                user_type=invitation.user_type.value,
            )

            return AcceptInvitationResponse(
                user=IdentitySummary(id=identity.id, email=identity.email),
                session=SessionTokens(
                    access_token=identity.session.access_token,
                    refresh_token=identity.session.refresh_token,
                    expires_in=identity.session.expires_in,
                    token_type=identity.session.token_type,
                ),
                profile=profile,
                role=invitation.user_type,
            )

    async def _check_student_input(
        self, invitation: Invitation, request: AcceptInvitationRequest
    ) -> None:
        """Reject a bad registration number before any identity exists."""
        await self.student_service.check_reg_number(
            invitation.email, self._reg_number(request)
        )

    @staticmethod
    def _reg_number(request: AcceptInvitationRequest) -> RegistrationNumber | None:
        if request.reg_number is None:
            return None
        try:
            return RegistrationNumber(request.reg_number)
        except PydanticValidationError as e:
            raise ValidationError("Invalid registration number") from e

    async def _complete_student(
        self,
        invitation: Invitation,
        identity: ProvisionedIdentity,
        request: AcceptInvitationRequest,
        saga: Saga,
    ) -> ProfileSummary:
        placeholder = await self.student_service.find_placeholder(
            invitation.email, self._reg_number(request)
        )
        student = await self.student_service.complete_profile(
            placeholder,
            request.first_name,
            request.last_name,
            identity.id,
            request.profile_picture,
        )
        saga.record(
            "complete_profile", lambda: self.student_service.restore(placeholder)
        )
        return ProfileSummary(
            id=student.id,
            user_type=UserType.STUDENT,
            email=student.email.root,
            first_name=student.first_name or request.first_name,
            last_name=student.last_name or request.last_name,
            reg_number=student.reg_number.root,
            profile_picture=student.profile_picture,
            created_at=student.created_at,
        )

    async def _create_registrar(
        self,
        invitation: Invitation,
        identity: ProvisionedIdentity,
        request: AcceptInvitationRequest,
        saga: Saga,
    ) -> ProfileSummary:
        registrar = await self.registrar_service.create(
            invitation.email,
            request.first_name,
            request.last_name,
            identity.id,
            request.profile_picture,
        )
        saga.record(
            "complete_profile", lambda: self.registrar_service.delete(registrar.id)
        )
        return ProfileSummary(
            id=registrar.id,
            user_type=UserType.REGISTRAR,
            email=registrar.email.root,
            first_name=registrar.first_name,
            last_name=registrar.last_name,
            profile_picture=registrar.profile_picture,
            created_at=registrar.created_at,
        )

    @staticmethod
    async def _fail(
        saga: Saga,
        error_type: type[SagaFailure],
        invitation: Invitation,
        cause: Exception,
    ) -> SagaFailure:
        """Roll back completed steps and build the error to raise."""
        logfire.error(
            "Invitation acceptance failed",
            step=error_type.step,
            invitation_id=str(invitation.id),
            error=str(cause),
            error_type=type(cause).__name__,
        )
        outcomes = await saga.compensate()
        error = error_type(f"Invitation acceptance failed at {error_type.step}", outcomes)
        if not error.rolled_back:
            logfire.error(
                "Invitation acceptance left partial state",
                invitation_id=str(invitation.id),
                failed_compensations=[o.step for o in outcomes if not o.succeeded],
            )
        return error
