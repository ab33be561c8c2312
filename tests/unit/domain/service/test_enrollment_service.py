"""Unit tests for EnrollmentService."""

from uuid import uuid4

import pytest

from campus.domain.error import (
    ForbiddenError,
    InvalidStateTransition,
    NotFoundError,
    RegistrarConflict,
    StateConflictError,
    ValidationError,
)
from campus.domain.model import RegistrarAssignment
from campus.domain.repository import (
    EnrollmentRepository,
    RegistrarAssignmentRepository,
    StudentRepository,
)
from campus.domain.service import EnrollmentService
from campus.domain.value import (
    CourseId,
    EnrollmentId,
    EnrollmentStatus,
    IdentityId,
    RegistrarAssignmentId,
    RegistrarId,
    SessionStatus,
)
from tests.conftest import make_enrollment, make_session, make_student
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked
unit_env = create_env_fixture()


class TestDecisions:
    """Tests for approve and reject."""

    @pytest.mark.asyncio
    async def test_approve_pending_enrollment(self, unit_env):
        """Approving records the registrar and claims the student."""
        # Arrange
        service = await unit_env.get(EnrollmentService)
        enrollment_repo = await unit_env.get(EnrollmentRepository)
        assignment_repo = await unit_env.get(RegistrarAssignmentRepository)

        session = make_session(SessionStatus.ACTIVE)
        student = make_student()
        enrollment = await enrollment_repo.save(make_enrollment(student.id, session.id))
        registrar_id = RegistrarId(uuid4())

        # Act
        approved = await service.approve(enrollment.id, registrar_id)

        # Assert
        assert approved.status == EnrollmentStatus.APPROVED
        assert approved.registrar_id == registrar_id
        claim = await assignment_repo.find(student.id, session.id)
        assert claim is not None
        assert claim.registrar_id == registrar_id

    @pytest.mark.asyncio
    async def test_approve_propagates_registrar_to_pending_siblings(self, unit_env):
        """Other unassigned pending enrollments of the pair get the registrar."""
        # Arrange
        service = await unit_env.get(EnrollmentService)
        enrollment_repo = await unit_env.get(EnrollmentRepository)

        session = make_session(SessionStatus.ACTIVE)
        student = make_student()
        e1 = await enrollment_repo.save(make_enrollment(student.id, session.id))
        e2 = await enrollment_repo.save(make_enrollment(student.id, session.id))
        registrar_id = RegistrarId(uuid4())

        # Act
        await service.approve(e1.id, registrar_id)

        # Assert
        sibling = await enrollment_repo.find_by_id(e2.id)
        assert sibling.status == EnrollmentStatus.PENDING
        assert sibling.registrar_id == registrar_id

    @pytest.mark.asyncio
    async def test_second_registrar_conflicts_on_sibling(self, unit_env):
        """Once R1 approved E1, R2 deciding E2 fails and E2 is unchanged."""
        # Arrange
        service = await unit_env.get(EnrollmentService)
        enrollment_repo = await unit_env.get(EnrollmentRepository)

        session = make_session(SessionStatus.ACTIVE)
        student = make_student()
        e1 = await enrollment_repo.save(make_enrollment(student.id, session.id))
        e2 = await enrollment_repo.save(make_enrollment(student.id, session.id))
        r1, r2 = RegistrarId(uuid4()), RegistrarId(uuid4())
        await service.approve(e1.id, r1)

        # Act & Assert
        with pytest.raises(RegistrarConflict):
            await service.reject(e2.id, r2, "Prerequisite missing")

        unchanged = await enrollment_repo.find_by_id(e2.id)
        assert unchanged.status == EnrollmentStatus.PENDING
        assert unchanged.registrar_id == r1

    @pytest.mark.asyncio
    async def test_single_registrar_per_student_and_session(self, unit_env):
        """Any sequence of decisions leaves at most one registrar for the pair."""
        # Arrange
        service = await unit_env.get(EnrollmentService)
        enrollment_repo = await unit_env.get(EnrollmentRepository)

        session = make_session(SessionStatus.ACTIVE)
        student = make_student()
        enrollments = [
            await enrollment_repo.save(make_enrollment(student.id, session.id))
            for _ in range(4)
        ]
        registrars = [RegistrarId(uuid4()) for _ in range(2)]

        # Act - registrars alternate; conflicts are expected
        for index, enrollment in enumerate(enrollments):
            registrar_id = registrars[index % 2]
            try:
                await service.approve(enrollment.id, registrar_id)
            except RegistrarConflict:
                pass

        # Assert
        stored = await enrollment_repo.find_by_student_and_session(
            student.id, session.id
        )
        owners = {e.registrar_id for e in stored if e.registrar_id is not None}
        assert owners == {registrars[0]}

    @pytest.mark.asyncio
    async def test_existing_claim_blocks_other_registrar(self, unit_env):
        """A claim made through the claim workflow also guards decisions."""
        # Arrange
        service = await unit_env.get(EnrollmentService)
        enrollment_repo = await unit_env.get(EnrollmentRepository)
        assignment_repo = await unit_env.get(RegistrarAssignmentRepository)

        session = make_session(SessionStatus.ACTIVE)
        student = make_student()
        enrollment = await enrollment_repo.save(make_enrollment(student.id, session.id))
        holder = RegistrarId(uuid4())
        await assignment_repo.claim(
            RegistrarAssignment(
                id=RegistrarAssignmentId(uuid4()),
                student_id=student.id,
                registrar_id=holder,
                session_id=session.id,
            )
        )

        # Act & Assert
        with pytest.raises(RegistrarConflict):
            await service.approve(enrollment.id, RegistrarId(uuid4()))

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "status",
        [
            EnrollmentStatus.APPROVED,
            EnrollmentStatus.REJECTED,
            EnrollmentStatus.ACTIVE,
            EnrollmentStatus.COMPLETED,
            EnrollmentStatus.CANCELLED,
        ],
    )
    async def test_decision_requires_pending(self, unit_env, status):
        """Deciding a non-PENDING enrollment fails and leaves it unchanged."""
        # Arrange
        service = await unit_env.get(EnrollmentService)
        enrollment_repo = await unit_env.get(EnrollmentRepository)

        session = make_session(SessionStatus.ACTIVE)
        enrollment = await enrollment_repo.save(
            make_enrollment(make_student().id, session.id, status=status)
        )

        # Act & Assert
        with pytest.raises(InvalidStateTransition):
            await service.approve(enrollment.id, RegistrarId(uuid4()))

        assert (await enrollment_repo.find_by_id(enrollment.id)) == enrollment

    @pytest.mark.asyncio
    async def test_reject_requires_reason(self, unit_env):
        """Rejecting without a reason fails before anything is written."""
        # Arrange
        service = await unit_env.get(EnrollmentService)
        enrollment_repo = await unit_env.get(EnrollmentRepository)
        assignment_repo = await unit_env.get(RegistrarAssignmentRepository)

        session = make_session(SessionStatus.ACTIVE)
        student = make_student()
        enrollment = await enrollment_repo.save(make_enrollment(student.id, session.id))

        # Act & Assert
        with pytest.raises(ValidationError):
            await service.reject(enrollment.id, RegistrarId(uuid4()), "   ")

        assert await assignment_repo.find(student.id, session.id) is None

    @pytest.mark.asyncio
    async def test_state_is_checked_before_reason(self, unit_env):
        """A decided enrollment reports the state conflict, not the empty reason."""
        # Arrange
        service = await unit_env.get(EnrollmentService)
        enrollment_repo = await unit_env.get(EnrollmentRepository)

        session = make_session(SessionStatus.ACTIVE)
        enrollment = await enrollment_repo.save(
            make_enrollment(
                make_student().id, session.id, status=EnrollmentStatus.APPROVED
            )
        )

        # Act & Assert
        with pytest.raises(InvalidStateTransition):
            await service.reject(enrollment.id, RegistrarId(uuid4()), "")

    @pytest.mark.asyncio
    async def test_reject_stores_reason(self, unit_env):
        """Rejecting keeps the reason on the enrollment."""
        # Arrange
        service = await unit_env.get(EnrollmentService)
        enrollment_repo = await unit_env.get(EnrollmentRepository)

        session = make_session(SessionStatus.ACTIVE)
        enrollment = await enrollment_repo.save(
            make_enrollment(make_student().id, session.id)
        )

        # Act
        rejected = await service.reject(
            enrollment.id, RegistrarId(uuid4()), "Course is full"
        )

        # Assert
        assert rejected.status == EnrollmentStatus.REJECTED
        assert rejected.rejection_reason == "Course is full"

    @pytest.mark.asyncio
    async def test_unknown_enrollment(self, unit_env):
        """Deciding an unknown enrollment raises NotFoundError."""
        service = await unit_env.get(EnrollmentService)

        with pytest.raises(NotFoundError):
            await service.approve(EnrollmentId(uuid4()), RegistrarId(uuid4()))


class TestCancel:
    """Tests for cancel."""

    @pytest.mark.asyncio
    async def test_student_cancels_own_enrollment(self, unit_env):
        """The student linked to the enrollment may cancel it."""
        # Arrange
        service = await unit_env.get(EnrollmentService)
        enrollment_repo = await unit_env.get(EnrollmentRepository)
        student_repo = await unit_env.get(StudentRepository)

        identity_id = IdentityId(uuid4())
        student = await student_repo.save(make_student(identity_id=identity_id))
        enrollment = await enrollment_repo.save(
            make_enrollment(student.id, make_session().id, EnrollmentStatus.APPROVED)
        )

        # Act
        cancelled = await service.cancel(enrollment.id, identity_id, is_admin=False)

        # Assert
        assert cancelled.status == EnrollmentStatus.CANCELLED

    @pytest.mark.asyncio
    async def test_other_student_is_forbidden(self, unit_env):
        """A non-admin who does not own the enrollment is refused."""
        # Arrange
        service = await unit_env.get(EnrollmentService)
        enrollment_repo = await unit_env.get(EnrollmentRepository)
        student_repo = await unit_env.get(StudentRepository)

        student = await student_repo.save(make_student(identity_id=IdentityId(uuid4())))
        enrollment = await enrollment_repo.save(
            make_enrollment(student.id, make_session().id)
        )

        # Act & Assert
        with pytest.raises(ForbiddenError):
            await service.cancel(enrollment.id, IdentityId(uuid4()), is_admin=False)

    @pytest.mark.asyncio
    async def test_admin_cancels_any_enrollment(self, unit_env):
        """Admins skip the ownership check."""
        # Arrange
        service = await unit_env.get(EnrollmentService)
        enrollment_repo = await unit_env.get(EnrollmentRepository)

        enrollment = await enrollment_repo.save(
            make_enrollment(make_student().id, make_session().id, EnrollmentStatus.ACTIVE)
        )

        # Act
        cancelled = await service.cancel(enrollment.id, IdentityId(uuid4()), is_admin=True)

        # Assert
        assert cancelled.status == EnrollmentStatus.CANCELLED

    @pytest.mark.asyncio
    async def test_terminal_enrollment_cannot_be_cancelled(self, unit_env):
        """Cancelling a COMPLETED enrollment is an invalid transition."""
        # Arrange
        service = await unit_env.get(EnrollmentService)
        enrollment_repo = await unit_env.get(EnrollmentRepository)

        enrollment = await enrollment_repo.save(
            make_enrollment(
                make_student().id, make_session().id, EnrollmentStatus.COMPLETED
            )
        )

        # Act & Assert
        with pytest.raises(InvalidStateTransition):
            await service.cancel(enrollment.id, IdentityId(uuid4()), is_admin=True)


class TestCreateEnrollment:
    """Tests for create_enrollment."""

    @pytest.mark.asyncio
    async def test_duplicate_open_enrollment_conflicts(self, unit_env):
        """A second request for the same course in the session is refused."""
        # Arrange
        service = await unit_env.get(EnrollmentService)
        session = make_session(SessionStatus.ACTIVE)
        student = make_student()
        course_id = CourseId(uuid4())
        await service.create_enrollment(student.id, course_id, session.id)

        # Act & Assert
        with pytest.raises(StateConflictError):
            await service.create_enrollment(student.id, course_id, session.id)

    @pytest.mark.asyncio
    async def test_rejected_course_can_be_requested_again(self, unit_env):
        """Rejected enrollments do not block a new request."""
        # Arrange
        service = await unit_env.get(EnrollmentService)
        session = make_session(SessionStatus.ACTIVE)
        student = make_student()
        course_id = CourseId(uuid4())
        first = await service.create_enrollment(student.id, course_id, session.id)
        await service.reject(first.id, RegistrarId(uuid4()), "Timetable clash")

        # Act
        second = await service.create_enrollment(student.id, course_id, session.id)

        # Assert
        assert second.status == EnrollmentStatus.PENDING
        assert second.id != first.id

    @pytest.mark.asyncio
    async def test_new_enrollment_inherits_claiming_registrar(self, unit_env):
        """A student already claimed this session keeps their registrar."""
        # Arrange
        service = await unit_env.get(EnrollmentService)
        assignment_repo = await unit_env.get(RegistrarAssignmentRepository)
        session = make_session(SessionStatus.ACTIVE)
        student = make_student()
        registrar_id = RegistrarId(uuid4())
        await assignment_repo.claim(
            RegistrarAssignment(
                id=RegistrarAssignmentId(uuid4()),
                student_id=student.id,
                registrar_id=registrar_id,
                session_id=session.id,
            )
        )

        # Act
        enrollment = await service.create_enrollment(
            student.id, CourseId(uuid4()), session.id
        )

        # Assert
        assert enrollment.registrar_id == registrar_id


class TestCascade:
    """Tests for cascade_session_transition."""

    @pytest.mark.asyncio
    async def test_start_activates_approved(self, unit_env):
        """Starting a session moves APPROVED enrollments to ACTIVE only."""
        # Arrange
        service = await unit_env.get(EnrollmentService)
        enrollment_repo = await unit_env.get(EnrollmentRepository)
        session = make_session()
        approved = await enrollment_repo.save(
            make_enrollment(make_student().id, session.id, EnrollmentStatus.APPROVED)
        )
        pending = await enrollment_repo.save(
            make_enrollment(make_student().id, session.id, EnrollmentStatus.PENDING)
        )

        # Act
        count = await service.cascade_session_transition(
            session.id, SessionStatus.ACTIVE
        )

        # Assert
        assert count == 1
        assert (await enrollment_repo.find_by_id(approved.id)).status == (
            EnrollmentStatus.ACTIVE
        )
        assert (await enrollment_repo.find_by_id(pending.id)).status == (
            EnrollmentStatus.PENDING
        )

    @pytest.mark.asyncio
    async def test_upcoming_has_no_cascade(self, unit_env):
        """Transitions without a cascade touch nothing."""
        service = await unit_env.get(EnrollmentService)

        count = await service.cascade_session_transition(
            make_session().id, SessionStatus.UPCOMING
        )

        assert count == 0
