"""Start academic session use case."""

from uuid import UUID

import logfire
from pydantic import BaseModel

from campus.domain.service import AcademicSessionService
from campus.domain.value import AcademicSessionId

from .session_response import SessionResponse


class StartSessionRequest(BaseModel):
    """Start session request."""

    session_id: UUID


class StartSessionUseCase:
    """Use case for opening a session.

    Any other ACTIVE session is closed first, and the session's approved
    enrollments become ACTIVE in the same transaction.
    """

    def __init__(self, session_service: AcademicSessionService) -> None:
        self.session_service = session_service

    async def execute(self, request: StartSessionRequest) -> SessionResponse:
        """Start the session.

        Raises:
            NotFoundError: If the session does not exist
            InvalidStateTransition: If the session is not UPCOMING
        """
        session_id = AcademicSessionId(request.session_id)
        with logfire.span("start_session.execute", session_id=str(session_id)):
            session = await self.session_service.start(session_id)
            return SessionResponse.from_session(session)
