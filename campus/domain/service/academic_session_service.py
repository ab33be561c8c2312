"""Academic session lifecycle service."""

from datetime import datetime
from uuid import uuid4

import logfire

from campus.domain.error import InvalidDateRange, InvalidStateTransition, NotFoundError
from campus.domain.model import AcademicSession
from campus.domain.repository import AcademicSessionRepository
from campus.domain.value import AcademicSessionId, SessionStatus
from campus.util.clock import as_utc, utcnow

from .base import Service
from .enrollment_service import EnrollmentService


class AcademicSessionService(Service):
    """Domain service for session transitions.

    UPCOMING -> ACTIVE -> CLOSED, with at most one ACTIVE session. Every
    transition triggers the enrollment cascade for that session.
    """

    def __init__(
        self,
        session_repository: AcademicSessionRepository,
        enrollment_service: EnrollmentService,
    ) -> None:
        """Initialize session service.

        Args:
            session_repository: Academic session repository
            enrollment_service: Enrollment service, for cascades
        """
        self.session_repository = session_repository
        self.enrollment_service = enrollment_service

    @staticmethod
    def validate_dates(
        start_date: datetime,
        end_date: datetime,
        enrollment_deadline: datetime,
        require_future_start: bool = True,
    ) -> None:
        """Check session date ordering.

        Raises:
            InvalidDateRange: If any ordering rule is broken
        """
        start, end, deadline = (
            as_utc(start_date),
            as_utc(end_date),
            as_utc(enrollment_deadline),
        )
        if require_future_start and start <= utcnow():
            raise InvalidDateRange("Start date must be in the future")
        if end <= start:
            raise InvalidDateRange("End date must be after start date")
        if deadline >= start:
            raise InvalidDateRange("Enrollment deadline must be before start date")

    async def get_by_id(self, session_id: AcademicSessionId) -> AcademicSession:
        """Get session by ID.

        Raises:
            NotFoundError: If the session does not exist
        """
        session = await self.session_repository.find_by_id(session_id)
        if not session:
            raise NotFoundError("Session", str(session_id))
        return session

    async def get_active(self) -> AcademicSession | None:
        """Get the currently active session, if any."""
        active = await self.session_repository.find_by_status(SessionStatus.ACTIVE)
        return active[0] if active else None

    async def create(
        self,
        name: str,
        start_date: datetime,
        end_date: datetime,
        enrollment_deadline: datetime,
    ) -> AcademicSession:
        """Create an UPCOMING session.

        Raises:
            InvalidDateRange: If the dates are not in order or start is past
        """
        with logfire.span("academic_session_service.create", name=name):
            self.validate_dates(start_date, end_date, enrollment_deadline)

            session = AcademicSession(
                id=AcademicSessionId(uuid4()),
                name=name,
                start_date=as_utc(start_date),
                end_date=as_utc(end_date),
                enrollment_deadline=as_utc(enrollment_deadline),
                status=SessionStatus.UPCOMING,
            )
            saved = await self.session_repository.save(session)
            logfire.info("Session created", session_id=str(saved.id), name=name)
            return saved

    async def update(
        self,
        session_id: AcademicSessionId,
        name: str | None = None,
        start_date: datetime | None = None,
        end_date: datetime | None = None,
        enrollment_deadline: datetime | None = None,
    ) -> AcademicSession:
        """Update an UPCOMING session.

        Dates are re-validated using supplied values merged over stored ones.
        The future-start rule only applies when a new start date is supplied.

        Raises:
            NotFoundError: If the session does not exist
            InvalidStateTransition: If the session is no longer UPCOMING
            InvalidDateRange: If the merged dates are not in order
        """
        with logfire.span(
            "academic_session_service.update", session_id=str(session_id)
        ):
            session = await self.get_by_id(session_id)
            if session.status != SessionStatus.UPCOMING:
                raise InvalidStateTransition(
                    "Session", str(session.id), session.status.value, "UPDATED"
                )

            merged_start = start_date or session.start_date
            merged_end = end_date or session.end_date
            merged_deadline = enrollment_deadline or session.enrollment_deadline
            self.validate_dates(
                merged_start,
                merged_end,
                merged_deadline,
                require_future_start=start_date is not None,
            )

            updated = session.model_copy(
                update={
                    "name": name or session.name,
                    "start_date": as_utc(merged_start),
                    "end_date": as_utc(merged_end),
                    "enrollment_deadline": as_utc(merged_deadline),
                }
            )
            saved = await self.session_repository.save(updated)
            logfire.info("Session updated", session_id=str(saved.id))
            return saved

    async def start(self, session_id: AcademicSessionId) -> AcademicSession:
        """Activate an UPCOMING session.

        Any other ACTIVE session is closed first, with its own cascade.

        Raises:
            NotFoundError: If the session does not exist
            InvalidStateTransition: If the session is not UPCOMING
        """
        with logfire.span(
            "academic_session_service.start", session_id=str(session_id)
        ):
            session = await self.get_by_id(session_id)
            if session.status != SessionStatus.UPCOMING:
                raise InvalidStateTransition(
                    "Session",
                    str(session.id),
                    session.status.value,
                    SessionStatus.ACTIVE.value,
                )

            for other in await self.session_repository.find_by_status(
                SessionStatus.ACTIVE
            ):
                if other.id != session.id:
                    logfire.info(
                        "Closing previously active session",
                        session_id=str(other.id),
                    )
                    await self.close(other.id)

            started = await self.session_repository.save(
                session.model_copy(update={"status": SessionStatus.ACTIVE})
            )
            await self.enrollment_service.cascade_session_transition(
                started.id, SessionStatus.ACTIVE
            )
            logfire.info("Session started", session_id=str(started.id))
            return started

    async def close(self, session_id: AcademicSessionId) -> AcademicSession:
        """Close an ACTIVE session.

        Raises:
            NotFoundError: If the session does not exist
            InvalidStateTransition: If the session is not ACTIVE
        """
        with logfire.span(
            "academic_session_service.close", session_id=str(session_id)
        ):
            session = await self.get_by_id(session_id)
            if session.status != SessionStatus.ACTIVE:
                raise InvalidStateTransition(
                    "Session",
                    str(session.id),
                    session.status.value,
                    SessionStatus.CLOSED.value,
                )

            closed = await self.session_repository.save(
                session.model_copy(update={"status": SessionStatus.CLOSED})
            )
            await self.enrollment_service.cascade_session_transition(
                closed.id, SessionStatus.CLOSED
            )
            logfire.info("Session closed", session_id=str(closed.id))
            return closed
