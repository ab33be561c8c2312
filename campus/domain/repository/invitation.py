"""Invitation repository interface."""

from abc import ABC, abstractmethod

from campus.domain.model import Invitation
from campus.domain.value import Email, InvitationId, InvitationToken, UserType


class InvitationRepository(ABC):
    """Repository for Invitation entity.

    Defines the contract for invitation persistence operations.
    Implementations live in the infrastructure layer.
    """

    @abstractmethod
    async def find_by_id(self, invitation_id: InvitationId) -> Invitation | None:
        """Find an invitation by ID.

        Args:
            invitation_id: The invitation's unique identifier

        Returns:
            The invitation if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_token(self, token: InvitationToken) -> Invitation | None:
        """Find an invitation by token, whatever its status.

        Args:
            token: The invitation token

        Returns:
            The invitation if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_pending_by_email(
        self, email: Email, user_type: UserType
    ) -> Invitation | None:
        """Find the pending invitation for an email and user type.

        Used before creating an invitation to keep one pending per pair.

        Args:
            email: Invited email
            user_type: Role the invitation grants

        Returns:
            The pending invitation if found, None otherwise
        """
        pass

    @abstractmethod
    async def save(self, invitation: Invitation) -> Invitation:
        """Save an invitation (create or update).

        Args:
            invitation: The invitation to save

        Returns:
            The saved invitation

        Raises:
            IntegrityError: If the token is already in use
        """
        pass

    @abstractmethod
    async def delete(self, invitation_id: InvitationId) -> None:
        """Delete an invitation.

        Args:
            invitation_id: ID of the invitation to delete
        """
        pass
