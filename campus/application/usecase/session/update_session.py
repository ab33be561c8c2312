"""Update academic session use case."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from campus.domain.service import AcademicSessionService
from campus.domain.value import AcademicSessionId

from .session_response import SessionResponse


class UpdateSessionRequest(BaseModel):
    """Update session request. Omitted fields keep their stored value."""

    session_id: UUID
    name: str | None = Field(default=None, min_length=1, max_length=255)
    start_date: datetime | None = None
    end_date: datetime | None = None
    enrollment_deadline: datetime | None = None


class UpdateSessionUseCase:
    """Use case for editing a session before it starts."""

    def __init__(self, session_service: AcademicSessionService) -> None:
        self.session_service = session_service

    async def execute(self, request: UpdateSessionRequest) -> SessionResponse:
        """Apply the supplied fields to an UPCOMING session.

        Raises:
            NotFoundError: If the session does not exist
            InvalidStateTransition: If the session has started
            InvalidDateRange: If the merged dates are out of order
        """
        session = await self.session_service.update(
            AcademicSessionId(request.session_id),
            name=request.name,
            start_date=request.start_date,
            end_date=request.end_date,
            enrollment_deadline=request.enrollment_deadline,
        )
        return SessionResponse.from_session(session)
