"""Create academic session use case."""

from datetime import datetime

from pydantic import BaseModel, Field

from campus.domain.service import AcademicSessionService

from .session_response import SessionResponse


class CreateSessionRequest(BaseModel):
    """Create session request."""

    name: str = Field(min_length=1, max_length=255)
    start_date: datetime
    end_date: datetime
    enrollment_deadline: datetime


class CreateSessionUseCase:
    """Use case for scheduling a new academic session."""

    def __init__(self, session_service: AcademicSessionService) -> None:
        """Initialize create session use case.

        Args:
            session_service: Academic session domain service
        """
        self.session_service = session_service

    async def execute(self, request: CreateSessionRequest) -> SessionResponse:
        """Create an UPCOMING session.

        Raises:
            InvalidDateRange: If the start is not in the future or the dates
                are out of order
        """
        session = await self.session_service.create(
            request.name,
            request.start_date,
            request.end_date,
            request.enrollment_deadline,
        )
        return SessionResponse.from_session(session)
