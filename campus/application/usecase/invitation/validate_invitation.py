"""Validate invitation use case."""

from datetime import datetime

import logfire
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from campus.domain.service import InvitationService
from campus.domain.value import InvitationStatus, InvitationToken, UserType

UNKNOWN_TOKEN = "Invitation not found"


class ValidateInvitationRequest(BaseModel):
    """Validate invitation request."""

    token: str


class ValidateInvitationResponse(BaseModel):
    """Validate invitation response.

    Only ``valid`` and ``message`` are set for unknown tokens.
    """

    valid: bool
    message: str
    email: str | None = None
    user_type: UserType | None = None
    status: InvitationStatus | None = None
    expires_at: datetime | None = None


class ValidateInvitationUseCase:
    """Use case for checking an invitation token before the signup form."""

    def __init__(self, invitation_service: InvitationService) -> None:
        """Initialize validate invitation use case.

        Args:
            invitation_service: Invitation domain service
        """
        self.invitation_service = invitation_service

    async def execute(
        self, request: ValidateInvitationRequest
    ) -> ValidateInvitationResponse:
        """Report whether a token can still be accepted.

        Never raises for bad tokens. A lapsed PENDING invitation is recorded
        as EXPIRED on the way.
        """
        with logfire.span("validate_invitation.execute"):
            try:
                token = InvitationToken(request.token)
            except PydanticValidationError:
                return ValidateInvitationResponse(valid=False, message=UNKNOWN_TOKEN)

            invitation = await self.invitation_service.get_by_token(token)
            if not invitation:
                return ValidateInvitationResponse(valid=False, message=UNKNOWN_TOKEN)

            valid = invitation.status == InvitationStatus.PENDING
            return ValidateInvitationResponse(
                valid=valid,
                message=(
                    "Invitation is valid"
                    if valid
                    else f"Invitation is {invitation.status.value.lower()}"
                ),
                email=invitation.email.root,
                user_type=invitation.user_type,
                status=invitation.status,
                expires_at=invitation.expires_at,
            )
