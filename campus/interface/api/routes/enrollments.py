"""Enrollment routes."""

from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Header, status
from pydantic import BaseModel, Field

from campus.application.usecase.enrollment import (
    ApproveEnrollmentRequest,
    ApproveEnrollmentUseCase,
    CancelEnrollmentRequest,
    CancelEnrollmentUseCase,
    EnrollmentResponse,
    GetEnrollmentRequest,
    GetEnrollmentUseCase,
    RejectEnrollmentRequest,
    RejectEnrollmentUseCase,
    RequestEnrollmentRequest,
    RequestEnrollmentUseCase,
)
from campus.domain.service import JWTService
from campus.domain.value import UserType
from campus.interface.api.auth import authenticate

router = APIRouter(prefix="/enrollments", tags=["enrollments"], route_class=DishkaRoute)


class RequestEnrollmentAPIRequest(BaseModel):
    """API request for asking to take a course."""

    course_id: UUID
    session_id: UUID
    special_request: bool = False
    student_id: UUID | None = None


class DecisionAPIRequest(BaseModel):
    """API request for approving an enrollment."""

    registrar_id: UUID | None = None


class RejectAPIRequest(BaseModel):
    """API request for rejecting an enrollment."""

    reason: str = Field(max_length=2000)
    registrar_id: UUID | None = None


@router.post(
    "", response_model=EnrollmentResponse, status_code=status.HTTP_201_CREATED
)
async def request_enrollment(
    request: RequestEnrollmentAPIRequest,
    request_enrollment_use_case: FromDishka[RequestEnrollmentUseCase],
    jwt_service: FromDishka[JWTService],
    authorization: str | None = Header(default=None),
) -> EnrollmentResponse:
    """Request an enrollment as a student, or for a student as an admin."""
    actor = authenticate(jwt_service, authorization, UserType.STUDENT, UserType.ADMIN)
    return await request_enrollment_use_case.execute(
        RequestEnrollmentRequest(
            actor=actor,
            course_id=request.course_id,
            session_id=request.session_id,
            special_request=request.special_request,
            student_id=request.student_id,
        )
    )


@router.get("/{enrollment_id}", response_model=EnrollmentResponse)
async def get_enrollment(
    enrollment_id: UUID,
    get_enrollment_use_case: FromDishka[GetEnrollmentUseCase],
    jwt_service: FromDishka[JWTService],
    authorization: str | None = Header(default=None),
) -> EnrollmentResponse:
    """Get an enrollment."""
    authenticate(jwt_service, authorization)
    return await get_enrollment_use_case.execute(
        GetEnrollmentRequest(enrollment_id=enrollment_id)
    )


@router.post("/{enrollment_id}/approve", response_model=EnrollmentResponse)
async def approve_enrollment(
    enrollment_id: UUID,
    approve_enrollment_use_case: FromDishka[ApproveEnrollmentUseCase],
    jwt_service: FromDishka[JWTService],
    request: DecisionAPIRequest | None = None,
    authorization: str | None = Header(default=None),
) -> EnrollmentResponse:
    """Approve a pending enrollment. Registrars and admins."""
    actor = authenticate(
        jwt_service, authorization, UserType.REGISTRAR, UserType.ADMIN
    )
    return await approve_enrollment_use_case.execute(
        ApproveEnrollmentRequest(
            actor=actor,
            enrollment_id=enrollment_id,
            registrar_id=request.registrar_id if request else None,
        )
    )


@router.post("/{enrollment_id}/reject", response_model=EnrollmentResponse)
async def reject_enrollment(
    enrollment_id: UUID,
    request: RejectAPIRequest,
    reject_enrollment_use_case: FromDishka[RejectEnrollmentUseCase],
    jwt_service: FromDishka[JWTService],
    authorization: str | None = Header(default=None),
) -> EnrollmentResponse:
    """Reject a pending enrollment with a reason. Registrars and admins."""
    actor = authenticate(
        jwt_service, authorization, UserType.REGISTRAR, UserType.ADMIN
    )
    return await reject_enrollment_use_case.execute(
        RejectEnrollmentRequest(
            actor=actor,
            enrollment_id=enrollment_id,
            reason=request.reason,
            registrar_id=request.registrar_id,
        )
    )


@router.post("/{enrollment_id}/cancel", response_model=EnrollmentResponse)
async def cancel_enrollment(
    enrollment_id: UUID,
    cancel_enrollment_use_case: FromDishka[CancelEnrollmentUseCase],
    jwt_service: FromDishka[JWTService],
    authorization: str | None = Header(default=None),
) -> EnrollmentResponse:
    """Cancel an enrollment. Students cancel their own, admins any."""
    actor = authenticate(jwt_service, authorization, UserType.STUDENT, UserType.ADMIN)
    return await cancel_enrollment_use_case.execute(
        CancelEnrollmentRequest(actor=actor, enrollment_id=enrollment_id)
    )
