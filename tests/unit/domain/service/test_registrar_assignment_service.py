"""Unit tests for RegistrarAssignmentService."""

from uuid import uuid4

import pytest

from campus.domain.error import (
    AlreadyClaimed,
    NoActiveSession,
    NotFoundError,
    RegistrarConflict,
)
from campus.domain.repository import (
    AcademicSessionRepository,
    EnrollmentRepository,
    RegistrarAssignmentRepository,
    RegistrarRepository,
    StudentRepository,
)
from campus.domain.service import EnrollmentService, RegistrarAssignmentService
from campus.domain.value import (
    EnrollmentStatus,
    RegistrarId,
    SessionStatus,
    StudentId,
    UserType,
)
from tests.conftest import make_enrollment, make_registrar, make_session, make_student
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked
unit_env = create_env_fixture()


async def _seed(unit_env, enrollment_status=EnrollmentStatus.PENDING):
    """Active session with one enrolled student and two registrars."""
    session_repo = await unit_env.get(AcademicSessionRepository)
    student_repo = await unit_env.get(StudentRepository)
    registrar_repo = await unit_env.get(RegistrarRepository)
    enrollment_repo = await unit_env.get(EnrollmentRepository)

    session = await session_repo.save(make_session(SessionStatus.ACTIVE))
    student = await student_repo.save(make_student())
    r1 = await registrar_repo.save(make_registrar())
    r2 = await registrar_repo.save(make_registrar())
    enrollment = await enrollment_repo.save(
        make_enrollment(student.id, session.id, enrollment_status)
    )
    return session, student, r1, r2, enrollment


class TestClaim:
    """Tests for claim."""

    @pytest.mark.asyncio
    async def test_registrar_claims_enrolled_student(self, unit_env):
        """Claiming records the pair and assigns pending enrollments."""
        # Arrange
        service = await unit_env.get(RegistrarAssignmentService)
        enrollment_repo = await unit_env.get(EnrollmentRepository)
        session, student, r1, _, enrollment = await _seed(unit_env)

        # Act
        assignment = await service.claim(student.id, r1.id, UserType.REGISTRAR)

        # Assert
        assert assignment.registrar_id == r1.id
        assert assignment.session_id == session.id
        assert (await enrollment_repo.find_by_id(enrollment.id)).registrar_id == r1.id

    @pytest.mark.asyncio
    async def test_reclaim_by_same_registrar_is_noop(self, unit_env):
        """Claiming a student you already hold succeeds and keeps one record."""
        # Arrange
        service = await unit_env.get(RegistrarAssignmentService)
        assignment_repo = await unit_env.get(RegistrarAssignmentRepository)
        session, student, r1, _, _ = await _seed(unit_env)
        first = await service.claim(student.id, r1.id, UserType.REGISTRAR)

        # Act
        second = await service.claim(student.id, r1.id, UserType.REGISTRAR)

        # Assert
        assert second.id == first.id
        assert (await assignment_repo.find(student.id, session.id)).registrar_id == (
            r1.id
        )

    @pytest.mark.asyncio
    async def test_other_registrar_cannot_claim(self, unit_env):
        """A student held by R1 is not claimable by R2."""
        # Arrange
        service = await unit_env.get(RegistrarAssignmentService)
        assignment_repo = await unit_env.get(RegistrarAssignmentRepository)
        session, student, r1, r2, _ = await _seed(unit_env)
        await service.claim(student.id, r1.id, UserType.REGISTRAR)

        # Act & Assert
        with pytest.raises(AlreadyClaimed):
            await service.claim(student.id, r2.id, UserType.REGISTRAR)

        assert (await assignment_repo.find(student.id, session.id)).registrar_id == (
            r1.id
        )

    @pytest.mark.asyncio
    async def test_unenrolled_student_is_not_claimable(self, unit_env):
        """Students without an open enrollment in the session cannot be claimed."""
        # Arrange
        service = await unit_env.get(RegistrarAssignmentService)
        _, student, r1, _, _ = await _seed(unit_env, EnrollmentStatus.REJECTED)

        # Act & Assert
        with pytest.raises(AlreadyClaimed):
            await service.claim(student.id, r1.id, UserType.REGISTRAR)

    @pytest.mark.asyncio
    async def test_no_active_session(self, unit_env):
        """Claims need an ACTIVE session."""
        service = await unit_env.get(RegistrarAssignmentService)

        with pytest.raises(NoActiveSession):
            await service.claim(
                StudentId(uuid4()), RegistrarId(uuid4()), UserType.REGISTRAR
            )

    @pytest.mark.asyncio
    async def test_unknown_student_or_registrar(self, unit_env):
        """Both parties must exist."""
        # Arrange
        service = await unit_env.get(RegistrarAssignmentService)
        _, student, r1, _, _ = await _seed(unit_env)

        # Act & Assert
        with pytest.raises(NotFoundError):
            await service.claim(StudentId(uuid4()), r1.id, UserType.REGISTRAR)
        with pytest.raises(NotFoundError):
            await service.claim(student.id, RegistrarId(uuid4()), UserType.REGISTRAR)

    @pytest.mark.asyncio
    async def test_admin_reassigns_held_student(self, unit_env):
        """An admin moves the claim and the pending enrollments to R2."""
        # Arrange
        service = await unit_env.get(RegistrarAssignmentService)
        assignment_repo = await unit_env.get(RegistrarAssignmentRepository)
        enrollment_repo = await unit_env.get(EnrollmentRepository)
        session, student, r1, r2, enrollment = await _seed(unit_env)
        await service.claim(student.id, r1.id, UserType.REGISTRAR)

        # Act
        assignment = await service.claim(student.id, r2.id, UserType.ADMIN)

        # Assert
        assert assignment.registrar_id == r2.id
        assert (await assignment_repo.find(student.id, session.id)).registrar_id == (
            r2.id
        )
        assert (await enrollment_repo.find_by_id(enrollment.id)).registrar_id == r2.id


class TestDecisionsAfterReassignment:
    """The claim row decides ownership once an admin has moved a student."""

    @pytest.mark.asyncio
    async def test_new_registrar_decides_remaining_enrollments(self, unit_env):
        """R1 decided E1, the admin moved the student to R2, R2 decides E2."""
        # Arrange
        service = await unit_env.get(RegistrarAssignmentService)
        enrollment_service = await unit_env.get(EnrollmentService)
        enrollment_repo = await unit_env.get(EnrollmentRepository)
        session, student, r1, r2, first = await _seed(unit_env)
        second = await enrollment_repo.save(make_enrollment(student.id, session.id))

        await enrollment_service.approve(first.id, r1.id)
        await service.claim(student.id, r2.id, UserType.ADMIN)

        # Act
        decided = await enrollment_service.approve(second.id, r2.id)

        # Assert
        assert decided.status == EnrollmentStatus.APPROVED
        assert decided.registrar_id == r2.id
        assert (await enrollment_repo.find_by_id(first.id)).registrar_id == r1.id

    @pytest.mark.asyncio
    async def test_previous_registrar_is_locked_out(self, unit_env):
        """After the move R1 can no longer decide for the student."""
        # Arrange
        service = await unit_env.get(RegistrarAssignmentService)
        enrollment_service = await unit_env.get(EnrollmentService)
        enrollment_repo = await unit_env.get(EnrollmentRepository)
        session, student, r1, r2, first = await _seed(unit_env)
        second = await enrollment_repo.save(make_enrollment(student.id, session.id))

        await enrollment_service.approve(first.id, r1.id)
        await service.claim(student.id, r2.id, UserType.ADMIN)

        # Act & Assert
        with pytest.raises(RegistrarConflict):
            await enrollment_service.approve(second.id, r1.id)

    @pytest.mark.asyncio
    async def test_new_registrar_can_reclaim(self, unit_env):
        """R2 re-claiming the moved student is a no-op, not a conflict."""
        # Arrange
        service = await unit_env.get(RegistrarAssignmentService)
        enrollment_service = await unit_env.get(EnrollmentService)
        enrollment_repo = await unit_env.get(EnrollmentRepository)
        session, student, r1, r2, first = await _seed(unit_env)
        await enrollment_repo.save(make_enrollment(student.id, session.id))

        await enrollment_service.approve(first.id, r1.id)
        await service.claim(student.id, r2.id, UserType.ADMIN)

        # Act
        assignment = await service.claim(student.id, r2.id, UserType.REGISTRAR)

        # Assert
        assert assignment.registrar_id == r2.id
