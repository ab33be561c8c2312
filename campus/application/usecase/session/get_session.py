"""Get academic session use case."""

from uuid import UUID

from pydantic import BaseModel

from campus.domain.error import NotFoundError
from campus.domain.service import AcademicSessionService
from campus.domain.value import AcademicSessionId

from .session_response import SessionResponse


class GetSessionRequest(BaseModel):
    """Get session request. Without an ID the active session is returned."""

    session_id: UUID | None = None


class GetSessionUseCase:
    """Use case for reading a session."""

    def __init__(self, session_service: AcademicSessionService) -> None:
        self.session_service = session_service

    async def execute(self, request: GetSessionRequest) -> SessionResponse:
        """Get a session by ID, or the active one.

        Raises:
            NotFoundError: If the session does not exist or none is active
        """
        if request.session_id is not None:
            session = await self.session_service.get_by_id(
                AcademicSessionId(request.session_id)
            )
        else:
            session = await self.session_service.get_active()
            if not session:
                raise NotFoundError("Session", "active")
        return SessionResponse.from_session(session)
