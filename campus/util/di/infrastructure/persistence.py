"""Persistence infrastructure providers."""

from collections.abc import AsyncIterator, Callable
from contextlib import asynccontextmanager

from dishka import Scope, provide
import logfire
from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from campus.config import Settings
from campus.domain.error import DomainError
from campus.domain.repository import (
    AcademicSessionRepository,
    CourseRepository,
    EnrollmentRepository,
    InvitationRepository,
    ProgramRepository,
    RegistrarAssignmentRepository,
    RegistrarRepository,
    StudentRepository,
)
from campus.interface.api.errors import handled_error
from campus.persistence.database import create_engine, create_session_factory
from campus.persistence.repository import (
    PostgresAcademicSessionRepository,
    PostgresCourseRepository,
    PostgresEnrollmentRepository,
    PostgresInvitationRepository,
    PostgresProgramRepository,
    PostgresRegistrarAssignmentRepository,
    PostgresRegistrarRepository,
    PostgresStudentRepository,
)
from campus.util.di.base import ProviderBase
from campus.util.observability import instrument_sqlalchemy


async def finish(session: AsyncSession, error: Exception | None) -> None:
    """Commit, or roll back for an error without ``commit_on_raise``."""
    if error is None or (isinstance(error, DomainError) and error.commit_on_raise):
        await session.commit()
        logfire.info(
            "Session committed",
            error_type=type(error).__name__ if error else None,
        )
    else:
        logfire.warn("Session rollback", error=str(error))
        await session.rollback()


@asynccontextmanager
async def unit_of_work(
    session_factory: Callable[[], AsyncSession], request: Request
) -> AsyncIterator[AsyncSession]:
    """Request-scoped session that commits only when the request succeeded.

    Errors raised through the scope are seen directly. Errors the API
    already turned into responses are read back from the request.
    """
    async with session_factory() as session:
        try:
            yield session
        except Exception as e:
            await finish(session, e)
            raise
        await finish(session, handled_error(request))


class PersistenceProvider(ProviderBase):
    """Persistence component base."""

    __mock_component__ = "persistence"


class ProdPersistenceProvider(PersistenceProvider):
    """Production persistence provider using PostgreSQL."""

    __is_mock__ = False

    scope = Scope.APP

    @provide(scope=Scope.APP)
    async def get_engine(self, settings: Settings) -> AsyncIterator[AsyncEngine]:
        """Provide database engine, disposed when the container closes."""
        engine = create_engine(settings)
        instrument_sqlalchemy(engine)
        yield engine
        await engine.dispose()

    @provide(scope=Scope.APP)
    def get_session_factory(
        self, engine: AsyncEngine
    ) -> async_sessionmaker[AsyncSession]:
        """Provide session factory."""
        return create_session_factory(engine)

    @provide(scope=Scope.REQUEST)
    async def get_session(
        self, request: Request, session_factory: async_sessionmaker[AsyncSession]
    ) -> AsyncIterator[AsyncSession]:
        """One session and transaction per HTTP request."""
        async with unit_of_work(session_factory, request) as session:
            yield session

    @provide(scope=Scope.REQUEST)
    def get_invitation_repository(self, session: AsyncSession) -> InvitationRepository:
        """Provide Invitation repository."""
        return PostgresInvitationRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_academic_session_repository(
        self, session: AsyncSession
    ) -> AcademicSessionRepository:
        """Provide AcademicSession repository."""
        return PostgresAcademicSessionRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_enrollment_repository(self, session: AsyncSession) -> EnrollmentRepository:
        """Provide Enrollment repository."""
        return PostgresEnrollmentRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_student_repository(self, session: AsyncSession) -> StudentRepository:
        """Provide Student repository."""
        return PostgresStudentRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_registrar_repository(self, session: AsyncSession) -> RegistrarRepository:
        """Provide Registrar repository."""
        return PostgresRegistrarRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_registrar_assignment_repository(
        self, session: AsyncSession
    ) -> RegistrarAssignmentRepository:
        """Provide per-session registrar claim repository."""
        return PostgresRegistrarAssignmentRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_program_repository(self, session: AsyncSession) -> ProgramRepository:
        """Provide Program repository."""
        return PostgresProgramRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_course_repository(self, session: AsyncSession) -> CourseRepository:
        """Provide Course repository."""
        return PostgresCourseRepository(session)
