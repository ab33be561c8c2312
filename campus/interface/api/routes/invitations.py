"""Invitation routes."""

from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Header, status
from pydantic import BaseModel

from campus.application.usecase.invitation import (
    AcceptInvitationRequest,
    AcceptInvitationResponse,
    AcceptInvitationUseCase,
    CancelInvitationRequest,
    CancelInvitationUseCase,
    InvitationResponse,
    InviteRegistrarRequest,
    InviteRegistrarUseCase,
    InviteStudentRequest,
    InviteStudentUseCase,
    ResendInvitationRequest,
    ResendInvitationUseCase,
    ValidateInvitationRequest,
    ValidateInvitationResponse,
    ValidateInvitationUseCase,
)
from campus.domain.service import JWTService
from campus.domain.value import UserType
from campus.interface.api.auth import authenticate

router = APIRouter(prefix="/invitations", tags=["invitations"], route_class=DishkaRoute)


class InviteStudentAPIRequest(BaseModel):
    """API request for inviting a student."""

    email: str
    reg_number: str
    program_id: UUID


class InviteRegistrarAPIRequest(BaseModel):
    """API request for inviting a registrar."""

    email: str


@router.post(
    "/accept",
    response_model=AcceptInvitationResponse,
    status_code=status.HTTP_201_CREATED,
)
async def accept_invitation(
    request: AcceptInvitationRequest,
    accept_invitation_use_case: FromDishka[AcceptInvitationUseCase],
) -> AcceptInvitationResponse:
    """Turn an invitation into an account.

    Public: the invitation token is the credential.
    """
    return await accept_invitation_use_case.execute(request)


@router.get("/validate", response_model=ValidateInvitationResponse)
async def validate_invitation(
    validate_invitation_use_case: FromDishka[ValidateInvitationUseCase],
    token: str = "",
) -> ValidateInvitationResponse:
    """Check an invitation token before showing the signup form."""
    return await validate_invitation_use_case.execute(
        ValidateInvitationRequest(token=token)
    )


@router.post(
    "/students",
    response_model=InvitationResponse,
    status_code=status.HTTP_201_CREATED,
)
async def invite_student(
    request: InviteStudentAPIRequest,
    invite_student_use_case: FromDishka[InviteStudentUseCase],
    jwt_service: FromDishka[JWTService],
    authorization: str | None = Header(default=None),
) -> InvitationResponse:
    """Invite a student and reserve their record. Admin only."""
    authenticate(jwt_service, authorization, UserType.ADMIN)
    return await invite_student_use_case.execute(
        InviteStudentRequest(
            email=request.email,
            reg_number=request.reg_number,
            program_id=request.program_id,
        )
    )


@router.post(
    "/registrars",
    response_model=InvitationResponse,
    status_code=status.HTTP_201_CREATED,
)
async def invite_registrar(
    request: InviteRegistrarAPIRequest,
    invite_registrar_use_case: FromDishka[InviteRegistrarUseCase],
    jwt_service: FromDishka[JWTService],
    authorization: str | None = Header(default=None),
) -> InvitationResponse:
    """Invite a registrar. Admin only."""
    authenticate(jwt_service, authorization, UserType.ADMIN)
    return await invite_registrar_use_case.execute(
        InviteRegistrarRequest(email=request.email)
    )


@router.post("/{invitation_id}/resend", response_model=InvitationResponse)
async def resend_invitation(
    invitation_id: UUID,
    resend_invitation_use_case: FromDishka[ResendInvitationUseCase],
    jwt_service: FromDishka[JWTService],
    authorization: str | None = Header(default=None),
) -> InvitationResponse:
    """Reissue an invitation with a fresh token. Admin only."""
    authenticate(jwt_service, authorization, UserType.ADMIN)
    return await resend_invitation_use_case.execute(
        ResendInvitationRequest(invitation_id=invitation_id)
    )


@router.post("/{invitation_id}/cancel", response_model=InvitationResponse)
async def cancel_invitation(
    invitation_id: UUID,
    cancel_invitation_use_case: FromDishka[CancelInvitationUseCase],
    jwt_service: FromDishka[JWTService],
    authorization: str | None = Header(default=None),
) -> InvitationResponse:
    """Withdraw a pending invitation. Admin only."""
    authenticate(jwt_service, authorization, UserType.ADMIN)
    return await cancel_invitation_use_case.execute(
        CancelInvitationRequest(invitation_id=invitation_id)
    )
