"""Unit tests for AcceptInvitationUseCase."""

from datetime import timedelta

import pytest

from campus.adapter.notifier import RecordingNotifier
from campus.adapter.supabase import MockSupabaseIdentityClient
from campus.application.usecase.invitation import (
    AcceptInvitationRequest,
    AcceptInvitationUseCase,
    InviteRegistrarRequest,
    InviteRegistrarUseCase,
    InviteStudentRequest,
    InviteStudentUseCase,
)
from campus.domain.error import (
    InvalidOrExpiredToken,
    InvitationUpdateError,
    ProfileCreationError,
    RoleAssignmentError,
    ValidationError,
)
from campus.domain.repository import (
    InvitationRepository,
    ProgramRepository,
    RegistrarRepository,
    StudentRepository,
)
from campus.domain.service import InvitationService
from campus.domain.value import (
    Email,
    InvitationStatus,
    InvitationToken,
    RegistrationNumber,
    UserType,
)
from campus.util.clock import utcnow
from tests.conftest import make_program, make_student
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked
unit_env = create_env_fixture()

STUDENT_EMAIL = "ada.obi@campus.test"
REG_NUMBER = "2026/CS/0042"


async def _invite_student(unit_env) -> str:
    """Invite a student and return the token that was sent."""
    program = await (await unit_env.get(ProgramRepository)).save(make_program())
    invite = await unit_env.get(InviteStudentUseCase)
    await invite.execute(
        InviteStudentRequest(
            email=STUDENT_EMAIL, reg_number=REG_NUMBER, program_id=program.id
        )
    )
    notifier = await unit_env.get(RecordingNotifier)
    invitation, _ = notifier.sent[-1]
    return invitation.token.root


async def _invite_registrar(unit_env, email="grace.eze@campus.test") -> str:
    invite = await unit_env.get(InviteRegistrarUseCase)
    await invite.execute(InviteRegistrarRequest(email=email))
    notifier = await unit_env.get(RecordingNotifier)
    invitation, _ = notifier.sent[-1]
    return invitation.token.root


def _accept_request(token: str) -> AcceptInvitationRequest:
    return AcceptInvitationRequest(
        token=token,
        first_name="Ada",
        last_name="Obi",
        password="correct-horse",
    )


class TestAcceptInvitation:
    """Tests for the happy paths."""

    @pytest.mark.asyncio
    async def test_student_acceptance_completes_placeholder(self, unit_env):
        """The placeholder row gains names and the new identity."""
        # Arrange
        token = await _invite_student(unit_env)
        use_case = await unit_env.get(AcceptInvitationUseCase)
        client = await unit_env.get(MockSupabaseIdentityClient)
        student_repo = await unit_env.get(StudentRepository)
        invitation_repo = await unit_env.get(InvitationRepository)

        # Act
        response = await use_case.execute(_accept_request(token))

        # Assert
        assert response.role == UserType.STUDENT
        assert response.user.email == STUDENT_EMAIL
        assert response.profile.reg_number == REG_NUMBER
        assert response.session.access_token == f"access-{response.user.id}"

        student = await student_repo.find_by_reg_number(RegistrationNumber(REG_NUMBER))
        assert student.id == response.profile.id
        assert student.identity_id == response.user.id
        assert student.first_name == "Ada"

        assert client.tables["user_roles"] == [
            {"user_id": str(response.user.id), "role": "STUDENT"}
        ]

        invitation = await invitation_repo.find_by_token(InvitationToken(token))
        assert invitation.status == InvitationStatus.ACCEPTED
        assert invitation.profile_id == student.id

    @pytest.mark.asyncio
    async def test_registrar_acceptance_creates_profile(self, unit_env):
        """Registrars get a new profile row linked to the identity."""
        # Arrange
        token = await _invite_registrar(unit_env)
        use_case = await unit_env.get(AcceptInvitationUseCase)
        registrar_repo = await unit_env.get(RegistrarRepository)

        # Act
        response = await use_case.execute(_accept_request(token))

        # Assert
        assert response.role == UserType.REGISTRAR
        registrar = await registrar_repo.find_by_identity_id(response.user.id)
        assert registrar.id == response.profile.id
        assert registrar.email == Email("grace.eze@campus.test")

    @pytest.mark.asyncio
    async def test_token_is_single_use(self, unit_env):
        """A second acceptance with the same token is refused."""
        token = await _invite_registrar(unit_env)
        use_case = await unit_env.get(AcceptInvitationUseCase)
        await use_case.execute(_accept_request(token))

        with pytest.raises(InvalidOrExpiredToken):
            await use_case.execute(_accept_request(token))


class TestTokenRejection:
    """Invalid tokens never reach the identity provider."""

    @pytest.mark.asyncio
    async def test_cancelled_invitation_makes_no_provider_calls(self, unit_env):
        """Cancelled tokens fail before any identity is created."""
        # Arrange
        token = await _invite_registrar(unit_env)
        invitation_service = await unit_env.get(InvitationService)
        invitation = await invitation_service.get_pending_by_token(
            InvitationToken(token)
        )
        await invitation_service.cancel(invitation.id)
        use_case = await unit_env.get(AcceptInvitationUseCase)
        client = await unit_env.get(MockSupabaseIdentityClient)

        # Act & Assert
        with pytest.raises(InvalidOrExpiredToken):
            await use_case.execute(_accept_request(token))

        assert client.calls == []

    @pytest.mark.asyncio
    async def test_unknown_and_malformed_tokens(self, unit_env):
        """Unknown and empty tokens are both reported as invalid."""
        use_case = await unit_env.get(AcceptInvitationUseCase)
        client = await unit_env.get(MockSupabaseIdentityClient)

        with pytest.raises(InvalidOrExpiredToken):
            await use_case.execute(_accept_request("not-a-real-token"))
        with pytest.raises(InvalidOrExpiredToken):
            await use_case.execute(_accept_request(""))

        assert client.calls == []

    @pytest.mark.asyncio
    async def test_expired_invitation_makes_no_provider_calls(self, unit_env):
        """A token past its expiry fails before step 2 and is marked EXPIRED."""
        # Arrange
        token = await _invite_registrar(unit_env)
        invitation_repo = await unit_env.get(InvitationRepository)
        invitation = await invitation_repo.find_by_token(InvitationToken(token))
        expired_at = utcnow() - timedelta(minutes=1)
        await invitation_repo.save(
            invitation.model_copy(update={"expires_at": expired_at})
        )
        use_case = await unit_env.get(AcceptInvitationUseCase)
        client = await unit_env.get(MockSupabaseIdentityClient)

        # Act & Assert
        with pytest.raises(InvalidOrExpiredToken):
            await use_case.execute(_accept_request(token))

        assert client.calls == []
        stored = await invitation_repo.find_by_token(InvitationToken(token))
        assert stored.status == InvitationStatus.EXPIRED


class TestStudentInput:
    """A student's registration number is checked against their own record."""

    @pytest.mark.asyncio
    async def test_other_students_reg_number_is_refused(self, unit_env):
        """Supplying another placeholder's number cannot take over that row."""
        # Arrange
        token = await _invite_student(unit_env)
        student_repo = await unit_env.get(StudentRepository)
        other = await student_repo.save(
            make_student(email="someone.else@campus.test", reg_number="2026/CS/0099")
        )
        use_case = await unit_env.get(AcceptInvitationUseCase)
        client = await unit_env.get(MockSupabaseIdentityClient)
        request = _accept_request(token).model_copy(
            update={"reg_number": "2026/CS/0099"}
        )

        # Act & Assert
        with pytest.raises(ValidationError):
            await use_case.execute(request)

        assert client.calls == []
        assert (await student_repo.find_by_id(other.id)).identity_id is None
        mine = await student_repo.find_by_reg_number(RegistrationNumber(REG_NUMBER))
        assert mine.is_placeholder

    @pytest.mark.asyncio
    async def test_own_reg_number_is_accepted(self, unit_env):
        """Repeating the number on the invited record is fine."""
        # Arrange
        token = await _invite_student(unit_env)
        use_case = await unit_env.get(AcceptInvitationUseCase)
        request = _accept_request(token).model_copy(update={"reg_number": REG_NUMBER})

        # Act
        response = await use_case.execute(request)

        # Assert
        assert response.profile.reg_number == REG_NUMBER

    @pytest.mark.asyncio
    async def test_blank_reg_number_fails_before_identity_creation(self, unit_env):
        """A whitespace-only number is a validation error, not a saga failure."""
        # Arrange
        token = await _invite_student(unit_env)
        use_case = await unit_env.get(AcceptInvitationUseCase)
        client = await unit_env.get(MockSupabaseIdentityClient)
        request = _accept_request(token).model_copy(update={"reg_number": "   "})

        # Act & Assert
        with pytest.raises(ValidationError):
            await use_case.execute(request)

        assert client.calls == []


class TestCompensation:
    """Failures after identity creation undo the completed steps."""

    @pytest.mark.asyncio
    async def test_role_failure_deletes_identity(self, unit_env):
        """Losing the role write leaves no identity behind."""
        # Arrange
        token = await _invite_registrar(unit_env)
        use_case = await unit_env.get(AcceptInvitationUseCase)
        client = await unit_env.get(MockSupabaseIdentityClient)
        client.fail_on.add("write:user_roles")

        # Act
        with pytest.raises(RoleAssignmentError) as exc_info:
            await use_case.execute(_accept_request(token))

        # Assert
        assert client.identities == {}
        assert exc_info.value.rolled_back
        assert [c.step for c in exc_info.value.compensations] == ["create_identity"]

        invitation_service = await unit_env.get(InvitationService)
        pending = await invitation_service.get_pending_by_token(InvitationToken(token))
        assert pending.status == InvitationStatus.PENDING

    @pytest.mark.asyncio
    async def test_profile_failure_removes_role_and_identity(self, unit_env):
        """A missing placeholder rolls back the role and the identity."""
        # Arrange
        token = await _invite_student(unit_env)
        student_repo = await unit_env.get(StudentRepository)
        placeholder = await student_repo.find_by_reg_number(
            RegistrationNumber(REG_NUMBER)
        )
        await student_repo.delete(placeholder.id)

        use_case = await unit_env.get(AcceptInvitationUseCase)
        client = await unit_env.get(MockSupabaseIdentityClient)

        # Act
        with pytest.raises(ProfileCreationError) as exc_info:
            await use_case.execute(_accept_request(token))

        # Assert
        assert client.identities == {}
        assert client.tables["user_roles"] == []
        assert [c.step for c in exc_info.value.compensations] == [
            "assign_role",
            "create_identity",
        ]

    @pytest.mark.asyncio
    async def test_invitation_update_failure_restores_placeholder(
        self, unit_env, monkeypatch
    ):
        """Failing to close the invitation unwinds every earlier step."""
        # Arrange
        token = await _invite_student(unit_env)
        use_case = await unit_env.get(AcceptInvitationUseCase)
        client = await unit_env.get(MockSupabaseIdentityClient)
        student_repo = await unit_env.get(StudentRepository)
        invitation_service = await unit_env.get(InvitationService)

        async def broken_mark_accepted(invitation_id, profile_id):
            raise ConnectionError("database went away")

        monkeypatch.setattr(invitation_service, "mark_accepted", broken_mark_accepted)

        # Act
        with pytest.raises(InvitationUpdateError) as exc_info:
            await use_case.execute(_accept_request(token))

        # Assert
        student = await student_repo.find_by_reg_number(RegistrationNumber(REG_NUMBER))
        assert student.is_placeholder
        assert student.first_name is None
        assert client.identities == {}
        assert client.tables["user_roles"] == []
        assert [c.step for c in exc_info.value.compensations] == [
            "complete_profile",
            "assign_role",
            "create_identity",
        ]

    @pytest.mark.asyncio
    async def test_registrar_removed_when_invitation_update_fails(
        self, unit_env, monkeypatch
    ):
        """A registrar row created by the acceptance is deleted again."""
        # Arrange
        token = await _invite_registrar(unit_env)
        use_case = await unit_env.get(AcceptInvitationUseCase)
        registrar_repo = await unit_env.get(RegistrarRepository)
        invitation_service = await unit_env.get(InvitationService)

        async def broken_mark_accepted(invitation_id, profile_id):
            raise ConnectionError("database went away")

        monkeypatch.setattr(invitation_service, "mark_accepted", broken_mark_accepted)

        # Act
        with pytest.raises(InvitationUpdateError):
            await use_case.execute(_accept_request(token))

        # Assert
        assert await registrar_repo.find_by_email(Email("grace.eze@campus.test")) is None

    @pytest.mark.asyncio
    async def test_failed_compensation_is_reported(self, unit_env):
        """If the identity cannot be deleted the error says so."""
        # Arrange
        token = await _invite_registrar(unit_env)
        use_case = await unit_env.get(AcceptInvitationUseCase)
        client = await unit_env.get(MockSupabaseIdentityClient)
        client.fail_on.update({"write:user_roles", "delete_identity"})

        # Act
        with pytest.raises(RoleAssignmentError) as exc_info:
            await use_case.execute(_accept_request(token))

        # Assert
        assert not exc_info.value.rolled_back
        assert len(client.identities) == 1
        outcome = exc_info.value.compensations[0]
        assert outcome.step == "create_identity"
        assert not outcome.succeeded
