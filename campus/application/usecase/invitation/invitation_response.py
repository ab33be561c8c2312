"""Shared invitation response model."""

from datetime import datetime

from pydantic import BaseModel

from campus.domain.model import Invitation
from campus.domain.value import InvitationStatus, UserType


class InvitationResponse(BaseModel):
    """Invitation as returned to administrators."""

    invitation_id: str
    email: str
    user_type: UserType
    status: InvitationStatus
    expires_at: datetime
    created_at: datetime
    notified: bool | None = None  # Set when a notification was attempted

    @classmethod
    def from_invitation(
        cls, invitation: Invitation, notified: bool | None = None
    ) -> "InvitationResponse":
        return cls(
            invitation_id=str(invitation.id),
            email=invitation.email.root,
            user_type=invitation.user_type,
            status=invitation.status,
            expires_at=invitation.expires_at,
            created_at=invitation.created_at,
            notified=notified,
        )
