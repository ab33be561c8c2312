"""Invitation domain service."""

from datetime import timedelta
from uuid import UUID, uuid4

import logfire

from campus.config import InvitationSettings
from campus.domain.error import (
    DuplicateInvitation,
    InvalidOrExpiredToken,
    InvalidStateTransition,
    NotFoundError,
)
from campus.domain.model import Invitation
from campus.domain.repository import InvitationRepository
from campus.domain.value import (
    Email,
    InvitationId,
    InvitationStatus,
    InvitationToken,
    UserType,
)
from campus.util.clock import utcnow
from campus.util.observability import mask_token

from .base import Service


class InvitationService(Service):
    """Domain service for invitation lifecycle operations."""

    def __init__(
        self,
        invitation_repository: InvitationRepository,
        invitation_settings: InvitationSettings,
    ) -> None:
        """Initialize invitation service.

        Args:
            invitation_repository: Invitation repository
            invitation_settings: Expiry configuration
        """
        self.invitation_repository = invitation_repository
        self.invitation_settings = invitation_settings

    def _new_token_and_expiry(self):
        token = InvitationToken(str(uuid4()))
        expires_at = utcnow() + timedelta(days=self.invitation_settings.expiry_days)
        return token, expires_at

    async def create_invitation(self, email: Email, user_type: UserType) -> Invitation:
        """Create a new pending invitation.

        Args:
            email: Address to invite
            user_type: Role the invitation grants

        Returns:
            Created invitation

        Raises:
            DuplicateInvitation: If a pending invitation already exists
        """
        with logfire.span(
            "invitation_service.create_invitation",
            email=email.root,
            user_type=user_type.value,
        ):
            existing = await self.invitation_repository.find_pending_by_email(
                email, user_type
            )
            if existing:
                logfire.warn(
                    "Pending invitation already exists",
                    email=email.root,
                    user_type=user_type.value,
                    invitation_id=str(existing.id),
                )
                raise DuplicateInvitation(
                    f"A pending {user_type.value.lower()} invitation already "
                    f"exists for {email.root}"
                )

            token, expires_at = self._new_token_and_expiry()
            invitation = Invitation(
                id=InvitationId(uuid4()),
                email=email,
                token=token,
                user_type=user_type,
                status=InvitationStatus.PENDING,
                expires_at=expires_at,
                created_at=utcnow(),
            )

            saved = await self.invitation_repository.save(invitation)
            logfire.info(
                "Invitation created",
                invitation_id=str(saved.id),
                user_type=user_type.value,
                expires_at=saved.expires_at.isoformat(),
            )
            return saved

    async def get_by_id(self, invitation_id: InvitationId) -> Invitation:
        """Get invitation by ID.

        Raises:
            NotFoundError: If the invitation does not exist
        """
        invitation = await self.invitation_repository.find_by_id(invitation_id)
        if not invitation:
            raise NotFoundError("Invitation", str(invitation_id))
        return invitation

    async def get_by_token(self, token: InvitationToken) -> Invitation | None:
        """Get invitation by token, applying expiry if it has lapsed.

        A PENDING invitation whose lifetime has passed is flipped to EXPIRED
        before being returned.

        Args:
            token: Invitation token

        Returns:
            Invitation if found, None otherwise
        """
        with logfire.span("invitation_service.get_by_token", token=mask_token(token)):
            invitation = await self.invitation_repository.find_by_token(token)
            if not invitation:
                logfire.warn("Invitation not found", token=mask_token(token))
                return None

            if invitation.status == InvitationStatus.PENDING and invitation.is_expired(
                utcnow()
            ):
                invitation = await self.invitation_repository.save(
                    invitation.model_copy(update={"status": InvitationStatus.EXPIRED})
                )
                logfire.info("Invitation expired", invitation_id=str(invitation.id))

            return invitation

    async def get_pending_by_token(self, token: InvitationToken) -> Invitation:
        """Get a usable invitation by token.

        Raises:
            InvalidOrExpiredToken: If the token is unknown, not PENDING or expired
        """
        invitation = await self.get_by_token(token)
        if not invitation or invitation.status != InvitationStatus.PENDING:
            raise InvalidOrExpiredToken()
        return invitation

    async def mark_accepted(
        self, invitation_id: InvitationId, profile_id: UUID
    ) -> Invitation:
        """Mark an invitation as accepted and stamp the profile it produced.

        Args:
            invitation_id: ID of the invitation to close
            profile_id: Student or registrar ID created from it

        Returns:
            Updated invitation

        Raises:
            NotFoundError: If invitation not found
            InvalidStateTransition: If the invitation is no longer PENDING
        """
        with logfire.span(
            "invitation_service.mark_accepted",
            invitation_id=str(invitation_id),
            profile_id=str(profile_id),
        ):
            invitation = await self.get_by_id(invitation_id)
            self._require_pending(invitation, InvitationStatus.ACCEPTED)

            accepted = invitation.model_copy(
                update={
                    "status": InvitationStatus.ACCEPTED,
                    "accepted_at": utcnow(),
                    "profile_id": profile_id,
                }
            )
            saved = await self.invitation_repository.save(accepted)
            logfire.info("Invitation accepted", invitation_id=str(invitation_id))
            return saved

    async def cancel(self, invitation_id: InvitationId) -> Invitation:
        """Cancel a pending invitation.

        Raises:
            NotFoundError: If invitation not found
            InvalidStateTransition: If the invitation is no longer PENDING
        """
        with logfire.span(
            "invitation_service.cancel", invitation_id=str(invitation_id)
        ):
            invitation = await self.get_by_id(invitation_id)
            self._require_pending(invitation, InvitationStatus.CANCELLED)

            saved = await self.invitation_repository.save(
                invitation.model_copy(update={"status": InvitationStatus.CANCELLED})
            )
            logfire.info("Invitation cancelled", invitation_id=str(invitation_id))
            return saved

    async def resend(self, invitation_id: InvitationId) -> Invitation:
        """Issue a fresh token and expiry for a pending invitation.

        The previous token stops working immediately.

        Raises:
            NotFoundError: If invitation not found
            InvalidStateTransition: If the invitation is no longer PENDING
        """
        with logfire.span(
            "invitation_service.resend", invitation_id=str(invitation_id)
        ):
            invitation = await self.get_by_id(invitation_id)
            self._require_pending(invitation, InvitationStatus.PENDING)

            token, expires_at = self._new_token_and_expiry()
            saved = await self.invitation_repository.save(
                invitation.model_copy(update={"token": token, "expires_at": expires_at})
            )
            logfire.info(
                "Invitation token reissued",
                invitation_id=str(invitation_id),
                expires_at=expires_at.isoformat(),
            )
            return saved

    async def delete(self, invitation_id: InvitationId) -> None:
        """Remove an invitation that never became usable."""
        with logfire.span(
            "invitation_service.delete", invitation_id=str(invitation_id)
        ):
            await self.invitation_repository.delete(invitation_id)

    @staticmethod
    def _require_pending(invitation: Invitation, target: InvitationStatus) -> None:
        if invitation.status != InvitationStatus.PENDING:
            raise InvalidStateTransition(
                "Invitation",
                str(invitation.id),
                invitation.status.value,
                target.value,
            )
