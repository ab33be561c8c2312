"""Shared academic session response model."""

from datetime import datetime

from pydantic import BaseModel

from campus.domain.model import AcademicSession
from campus.domain.value import SessionStatus


class SessionResponse(BaseModel):
    """Academic session as returned by the session use cases."""

    session_id: str
    name: str
    start_date: datetime
    end_date: datetime
    enrollment_deadline: datetime
    status: SessionStatus
    created_at: datetime

    @classmethod
    def from_session(cls, session: AcademicSession) -> "SessionResponse":
        return cls(
            session_id=str(session.id),
            name=session.name,
            start_date=session.start_date,
            end_date=session.end_date,
            enrollment_deadline=session.enrollment_deadline,
            status=session.status,
            created_at=session.created_at,
        )
