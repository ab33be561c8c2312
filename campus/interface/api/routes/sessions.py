"""Academic session routes."""

from datetime import datetime
from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Header, status
from pydantic import BaseModel, Field

from campus.application.usecase.session import (
    CloseSessionRequest,
    CloseSessionUseCase,
    CreateSessionRequest,
    CreateSessionUseCase,
    GetSessionRequest,
    GetSessionUseCase,
    SessionResponse,
    StartSessionRequest,
    StartSessionUseCase,
    UpdateSessionRequest,
    UpdateSessionUseCase,
)
from campus.domain.service import JWTService
from campus.domain.value import UserType
from campus.interface.api.auth import authenticate

router = APIRouter(prefix="/sessions", tags=["sessions"], route_class=DishkaRoute)


class UpdateSessionAPIRequest(BaseModel):
    """API request for editing an upcoming session."""

    name: str | None = Field(default=None, min_length=1, max_length=255)
    start_date: datetime | None = None
    end_date: datetime | None = None
    enrollment_deadline: datetime | None = None


@router.post("", response_model=SessionResponse, status_code=status.HTTP_201_CREATED)
async def create_session(
    request: CreateSessionRequest,
    create_session_use_case: FromDishka[CreateSessionUseCase],
    jwt_service: FromDishka[JWTService],
    authorization: str | None = Header(default=None),
) -> SessionResponse:
    """Schedule a new session. Admin only."""
    authenticate(jwt_service, authorization, UserType.ADMIN)
    return await create_session_use_case.execute(request)


@router.get("/active", response_model=SessionResponse)
async def get_active_session(
    get_session_use_case: FromDishka[GetSessionUseCase],
    jwt_service: FromDishka[JWTService],
    authorization: str | None = Header(default=None),
) -> SessionResponse:
    """Get the currently active session."""
    authenticate(jwt_service, authorization)
    return await get_session_use_case.execute(GetSessionRequest())


@router.get("/{session_id}", response_model=SessionResponse)
async def get_session(
    session_id: UUID,
    get_session_use_case: FromDishka[GetSessionUseCase],
    jwt_service: FromDishka[JWTService],
    authorization: str | None = Header(default=None),
) -> SessionResponse:
    """Get a session."""
    authenticate(jwt_service, authorization)
    return await get_session_use_case.execute(GetSessionRequest(session_id=session_id))


@router.patch("/{session_id}", response_model=SessionResponse)
async def update_session(
    session_id: UUID,
    request: UpdateSessionAPIRequest,
    update_session_use_case: FromDishka[UpdateSessionUseCase],
    jwt_service: FromDishka[JWTService],
    authorization: str | None = Header(default=None),
) -> SessionResponse:
    """Edit a session that has not started. Admin only."""
    authenticate(jwt_service, authorization, UserType.ADMIN)
    return await update_session_use_case.execute(
        UpdateSessionRequest(session_id=session_id, **request.model_dump())
    )


@router.post("/{session_id}/start", response_model=SessionResponse)
async def start_session(
    session_id: UUID,
    start_session_use_case: FromDishka[StartSessionUseCase],
    jwt_service: FromDishka[JWTService],
    authorization: str | None = Header(default=None),
) -> SessionResponse:
    """Start a session, closing any other active one. Admin only."""
    authenticate(jwt_service, authorization, UserType.ADMIN)
    return await start_session_use_case.execute(
        StartSessionRequest(session_id=session_id)
    )


@router.post("/{session_id}/close", response_model=SessionResponse)
async def close_session(
    session_id: UUID,
    close_session_use_case: FromDishka[CloseSessionUseCase],
    jwt_service: FromDishka[JWTService],
    authorization: str | None = Header(default=None),
) -> SessionResponse:
    """Close the active session. Admin only."""
    authenticate(jwt_service, authorization, UserType.ADMIN)
    return await close_session_use_case.execute(
        CloseSessionRequest(session_id=session_id)
    )
