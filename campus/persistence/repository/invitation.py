"""PostgreSQL implementation of Invitation repository."""

from typing import Optional

from sqlalchemy import and_, delete, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from campus.domain.model import Invitation
from campus.domain.repository import InvitationRepository
from campus.domain.value import (
    Email,
    InvitationId,
    InvitationStatus,
    InvitationToken,
    UserType,
)
from campus.persistence.mappers import invitation_to_dict, row_to_invitation
from campus.persistence.tables import invitations_table


class PostgresInvitationRepository(InvitationRepository):
    """PostgreSQL implementation of InvitationRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def _first(self, stmt) -> Optional[Invitation]:
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_invitation(dict(row)) if row else None

    async def find_by_id(self, invitation_id: InvitationId) -> Optional[Invitation]:
        stmt = select(invitations_table).where(invitations_table.c.id == invitation_id)
        return await self._first(stmt)

    async def find_by_token(self, token: InvitationToken) -> Optional[Invitation]:
        stmt = select(invitations_table).where(invitations_table.c.token == token.root)
        return await self._first(stmt)

    async def find_pending_by_email(
        self, email: Email, user_type: UserType
    ) -> Optional[Invitation]:
        stmt = select(invitations_table).where(
            and_(
                invitations_table.c.email == email.root,
                invitations_table.c.user_type == user_type.value,
                invitations_table.c.status == InvitationStatus.PENDING.value,
            )
        )
        return await self._first(stmt)

    async def save(self, invitation: Invitation) -> Invitation:
        """Save an invitation (create or update).

        Args:
            invitation: Invitation to save

        Returns:
            Saved invitation
        """
        data = invitation_to_dict(invitation)

        if await self.find_by_id(invitation.id):
            stmt = (
                update(invitations_table)
                .where(invitations_table.c.id == invitation.id)
                .values(**data)
            )
        else:
            stmt = insert(invitations_table).values(**data)

        await self.session.execute(stmt)
        await self.session.flush()
        return invitation

    async def delete(self, invitation_id: InvitationId) -> None:
        await self.session.execute(
            delete(invitations_table).where(invitations_table.c.id == invitation_id)
        )
        await self.session.flush()
