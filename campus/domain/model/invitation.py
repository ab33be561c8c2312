"""Invitation entity.

Invitations are the only way into the back office: an administrator invites
an email address as a student or registrar, and the invitee turns the
single-use token into an account.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import Field

from campus.domain.model.common import DomainModel
from campus.domain.value import (
    Email,
    InvitationId,
    InvitationStatus,
    InvitationToken,
    UserType,
)
from campus.util.clock import as_utc, utcnow


class Invitation(DomainModel):
    """Invitation entity.

    Business rules:
    - At most one pending invitation per (email, user_type)
    - Tokens are single-use and time-boxed
    - Once accepted, the invitation records the profile it produced
    """

    id: InvitationId
    email: Email
    token: InvitationToken
    user_type: UserType
    status: InvitationStatus = InvitationStatus.PENDING
    expires_at: datetime
    created_at: datetime = Field(default_factory=utcnow)
    accepted_at: Optional[datetime] = None
    profile_id: Optional[UUID] = None  # Student or registrar id once accepted

    def is_expired(self, now: datetime) -> bool:
        """Whether the token lifetime has passed at ``now``."""
        return as_utc(self.expires_at) <= as_utc(now)
