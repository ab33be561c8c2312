"""Close academic session use case."""

from uuid import UUID

import logfire
from pydantic import BaseModel

from campus.domain.service import AcademicSessionService
from campus.domain.value import AcademicSessionId

from .session_response import SessionResponse


class CloseSessionRequest(BaseModel):
    """Close session request."""

    session_id: UUID


class CloseSessionUseCase:
    """Use case for closing a session and completing its active enrollments."""

    def __init__(self, session_service: AcademicSessionService) -> None:
        self.session_service = session_service

    async def execute(self, request: CloseSessionRequest) -> SessionResponse:
        """Close the session.

        Raises:
            NotFoundError: If the session does not exist
            InvalidStateTransition: If the session is not ACTIVE
        """
        session_id = AcademicSessionId(request.session_id)
        with logfire.span("close_session.execute", session_id=str(session_id)):
            session = await self.session_service.close(session_id)
            return SessionResponse.from_session(session)
