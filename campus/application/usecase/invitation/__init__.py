"""Invitation use cases."""

from .accept_invitation import (
    AcceptInvitationRequest,
    AcceptInvitationResponse,
    AcceptInvitationUseCase,
)
from .cancel_invitation import CancelInvitationRequest, CancelInvitationUseCase
from .invitation_response import InvitationResponse
from .invite_registrar import InviteRegistrarRequest, InviteRegistrarUseCase
from .invite_student import InviteStudentRequest, InviteStudentUseCase
from .resend_invitation import ResendInvitationRequest, ResendInvitationUseCase
from .validate_invitation import (
    ValidateInvitationRequest,
    ValidateInvitationResponse,
    ValidateInvitationUseCase,
)

__all__ = [
    "AcceptInvitationRequest",
    "AcceptInvitationResponse",
    "AcceptInvitationUseCase",
    "CancelInvitationRequest",
    "CancelInvitationUseCase",
    "InvitationResponse",
    "InviteRegistrarRequest",
    "InviteRegistrarUseCase",
    "InviteStudentRequest",
    "InviteStudentUseCase",
    "ResendInvitationRequest",
    "ResendInvitationUseCase",
    "ValidateInvitationRequest",
    "ValidateInvitationResponse",
    "ValidateInvitationUseCase",
]
