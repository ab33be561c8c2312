"""Academic session (term) entity."""

from datetime import datetime

from pydantic import Field

from campus.domain.model.common import DomainModel
from campus.domain.value import AcademicSessionId, SessionStatus
from campus.util.clock import utcnow


class AcademicSession(DomainModel):
    """An academic term that enrollments belong to.

    Only one session may be ACTIVE at a time. Dates are mutable only while
    the session is UPCOMING.
    """

    id: AcademicSessionId
    name: str
    start_date: datetime
    end_date: datetime
    enrollment_deadline: datetime
    status: SessionStatus = SessionStatus.UPCOMING
    created_at: datetime = Field(default_factory=utcnow)
