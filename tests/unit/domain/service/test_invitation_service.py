"""Unit tests for InvitationService."""

from datetime import timedelta
from uuid import uuid4

import pytest

from campus.domain.error import (
    DuplicateInvitation,
    InvalidOrExpiredToken,
    InvalidStateTransition,
)
from campus.domain.model import Invitation
from campus.domain.repository import InvitationRepository
from campus.domain.service import InvitationService
from campus.domain.value import (
    Email,
    InvitationId,
    InvitationStatus,
    InvitationToken,
    UserType,
)
from campus.util.clock import utcnow
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked
unit_env = create_env_fixture()


class TestCreateInvitation:
    """Tests for create_invitation."""

    @pytest.mark.asyncio
    async def test_creates_pending_invitation(self, unit_env):
        """New invitations are PENDING and expire after the configured days."""
        # Arrange
        service = await unit_env.get(InvitationService)

        # Act
        invitation = await service.create_invitation(
            Email("Ada@Campus.Test"), UserType.STUDENT
        )

        # Assert
        assert invitation.status == InvitationStatus.PENDING
        assert invitation.email.root == "ada@campus.test"
        remaining = invitation.expires_at - utcnow()
        assert timedelta(days=6) < remaining <= timedelta(days=7)

    @pytest.mark.asyncio
    async def test_duplicate_pending_invitation_is_rejected(self, unit_env):
        """Only one pending invitation may exist per email and user type."""
        # Arrange
        service = await unit_env.get(InvitationService)
        email = Email("ada@campus.test")
        await service.create_invitation(email, UserType.STUDENT)

        # Act & Assert
        with pytest.raises(DuplicateInvitation):
            await service.create_invitation(email, UserType.STUDENT)

    @pytest.mark.asyncio
    async def test_same_email_other_user_type_is_allowed(self, unit_env):
        """The uniqueness rule is per user type."""
        service = await unit_env.get(InvitationService)
        email = Email("ada@campus.test")

        await service.create_invitation(email, UserType.STUDENT)
        registrar = await service.create_invitation(email, UserType.REGISTRAR)

        assert registrar.user_type == UserType.REGISTRAR


class TestTokenLookup:
    """Tests for get_by_token and get_pending_by_token."""

    @pytest.mark.asyncio
    async def test_lapsed_invitation_is_marked_expired(self, unit_env):
        """A PENDING invitation past its expiry is stored as EXPIRED."""
        # Arrange
        service = await unit_env.get(InvitationService)
        repo = await unit_env.get(InvitationRepository)
        lapsed = await repo.save(
            Invitation(
                id=InvitationId(uuid4()),
                email=Email("late@campus.test"),
                token=InvitationToken(str(uuid4())),
                user_type=UserType.STUDENT,
                expires_at=utcnow() - timedelta(minutes=1),
            )
        )

        # Act
        found = await service.get_by_token(lapsed.token)

        # Assert
        assert found.status == InvitationStatus.EXPIRED
        assert (await repo.find_by_id(lapsed.id)).status == InvitationStatus.EXPIRED
        with pytest.raises(InvalidOrExpiredToken):
            await service.get_pending_by_token(lapsed.token)

    @pytest.mark.asyncio
    async def test_unknown_token(self, unit_env):
        """Unknown tokens return None, or raise for the pending lookup."""
        service = await unit_env.get(InvitationService)
        token = InvitationToken("does-not-exist")

        assert await service.get_by_token(token) is None
        with pytest.raises(InvalidOrExpiredToken):
            await service.get_pending_by_token(token)


class TestLifecycle:
    """Tests for accept, cancel and resend."""

    @pytest.mark.asyncio
    async def test_mark_accepted_records_profile(self, unit_env):
        """Accepting stamps the profile and the acceptance time."""
        # Arrange
        service = await unit_env.get(InvitationService)
        invitation = await service.create_invitation(
            Email("ada@campus.test"), UserType.REGISTRAR
        )
        profile_id = uuid4()

        # Act
        accepted = await service.mark_accepted(invitation.id, profile_id)

        # Assert
        assert accepted.status == InvitationStatus.ACCEPTED
        assert accepted.profile_id == profile_id
        assert accepted.accepted_at is not None

    @pytest.mark.asyncio
    async def test_accepted_token_cannot_be_reused(self, unit_env):
        """Tokens are single-use."""
        service = await unit_env.get(InvitationService)
        invitation = await service.create_invitation(
            Email("ada@campus.test"), UserType.REGISTRAR
        )
        await service.mark_accepted(invitation.id, uuid4())

        with pytest.raises(InvalidOrExpiredToken):
            await service.get_pending_by_token(invitation.token)
        with pytest.raises(InvalidStateTransition):
            await service.mark_accepted(invitation.id, uuid4())

    @pytest.mark.asyncio
    async def test_resend_rotates_token(self, unit_env):
        """Resending invalidates the previous token."""
        # Arrange
        service = await unit_env.get(InvitationService)
        invitation = await service.create_invitation(
            Email("ada@campus.test"), UserType.STUDENT
        )

        # Act
        resent = await service.resend(invitation.id)

        # Assert
        assert resent.token != invitation.token
        assert await service.get_by_token(invitation.token) is None
        assert (await service.get_pending_by_token(resent.token)).id == invitation.id

    @pytest.mark.asyncio
    async def test_cancel_only_pending(self, unit_env):
        """Cancelled invitations cannot be cancelled or resent again."""
        # Arrange
        service = await unit_env.get(InvitationService)
        invitation = await service.create_invitation(
            Email("ada@campus.test"), UserType.STUDENT
        )

        # Act
        cancelled = await service.cancel(invitation.id)

        # Assert
        assert cancelled.status == InvitationStatus.CANCELLED
        with pytest.raises(InvalidStateTransition):
            await service.cancel(invitation.id)
        with pytest.raises(InvalidStateTransition):
            await service.resend(invitation.id)
