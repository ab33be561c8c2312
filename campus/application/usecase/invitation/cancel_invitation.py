"""Cancel invitation use case."""

from uuid import UUID

from pydantic import BaseModel

from campus.domain.service import InvitationService
from campus.domain.value import InvitationId

from .invitation_response import InvitationResponse


class CancelInvitationRequest(BaseModel):
    """Cancel invitation request."""

    invitation_id: UUID


class CancelInvitationUseCase:
    """Use case for withdrawing a pending invitation."""

    def __init__(self, invitation_service: InvitationService) -> None:
        self.invitation_service = invitation_service

    async def execute(self, request: CancelInvitationRequest) -> InvitationResponse:
        invitation = await self.invitation_service.cancel(
            InvitationId(request.invitation_id)
        )
        return InvitationResponse.from_invitation(invitation)
