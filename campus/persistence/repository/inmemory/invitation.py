"""In-memory invitation repository for testing."""

from typing import Optional

from sqlalchemy.exc import IntegrityError

from campus.domain.model import Invitation
from campus.domain.repository import InvitationRepository
from campus.domain.value import (
    Email,
    InvitationId,
    InvitationStatus,
    InvitationToken,
    UserType,
)


class InMemoryInvitationRepository(InvitationRepository):
    """In-memory implementation of InvitationRepository for testing."""

    def __init__(self) -> None:
        self._invitations: dict[InvitationId, Invitation] = {}

    async def find_by_id(self, invitation_id: InvitationId) -> Optional[Invitation]:
        return self._invitations.get(invitation_id)

    async def find_by_token(self, token: InvitationToken) -> Optional[Invitation]:
        for invitation in self._invitations.values():
            if invitation.token == token:
                return invitation
        return None

    async def find_pending_by_email(
        self, email: Email, user_type: UserType
    ) -> Optional[Invitation]:
        for invitation in self._invitations.values():
            if (
                invitation.email == email
                and invitation.user_type == user_type
                and invitation.status == InvitationStatus.PENDING
            ):
                return invitation
        return None

    async def save(self, invitation: Invitation) -> Invitation:
        """Save an invitation (create or update).

        Raises:
            IntegrityError: If another invitation already uses the token
        """
        for existing in self._invitations.values():
            if existing.id != invitation.id and existing.token == invitation.token:
                raise IntegrityError("Duplicate invitation token", None, Exception())

        self._invitations[invitation.id] = invitation
        return invitation

    async def delete(self, invitation_id: InvitationId) -> None:
        self._invitations.pop(invitation_id, None)
