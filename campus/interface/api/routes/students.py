"""Student routes."""

from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Header, Response, status
from pydantic import BaseModel

from campus.application.usecase.student import (
    ClaimStudentRequest,
    ClaimStudentUseCase,
)
from campus.domain.service import JWTService
from campus.domain.value import UserType
from campus.interface.api.auth import authenticate

router = APIRouter(prefix="/students", tags=["students"], route_class=DishkaRoute)


class ClaimStudentAPIRequest(BaseModel):
    """API request for claiming a student. Admins name the registrar."""

    registrar_id: UUID | None = None


@router.post("/{student_id}/claim", status_code=status.HTTP_204_NO_CONTENT)
async def claim_student(
    student_id: UUID,
    claim_student_use_case: FromDishka[ClaimStudentUseCase],
    jwt_service: FromDishka[JWTService],
    request: ClaimStudentAPIRequest | None = None,
    authorization: str | None = Header(default=None),
) -> Response:
    """Become the deciding registrar for a student in the active session."""
    actor = authenticate(
        jwt_service, authorization, UserType.REGISTRAR, UserType.ADMIN
    )
    await claim_student_use_case.execute(
        ClaimStudentRequest(
            actor=actor,
            student_id=student_id,
            registrar_id=request.registrar_id if request else None,
        )
    )
    return Response(status_code=status.HTTP_204_NO_CONTENT)
