"""Unit tests for ApproveEnrollmentUseCase and RejectEnrollmentUseCase."""

from uuid import uuid4

import pytest

from campus.application.usecase.enrollment import (
    ApproveEnrollmentRequest,
    ApproveEnrollmentUseCase,
    RejectEnrollmentRequest,
    RejectEnrollmentUseCase,
)
from campus.domain.error import ForbiddenError, RegistrarConflict, ValidationError
from campus.domain.repository import (
    AcademicSessionRepository,
    EnrollmentRepository,
    RegistrarRepository,
)
from campus.domain.service import Actor
from campus.domain.value import (
    EnrollmentStatus,
    IdentityId,
    SessionStatus,
    StudentId,
    UserType,
)
from tests.conftest import make_enrollment, make_registrar, make_session
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked
unit_env = create_env_fixture()


async def _seed(unit_env):
    """Two pending enrollments for one student and two registrars."""
    session = await (await unit_env.get(AcademicSessionRepository)).save(
        make_session(SessionStatus.ACTIVE)
    )
    registrar_repo = await unit_env.get(RegistrarRepository)
    r1 = await registrar_repo.save(make_registrar())
    r2 = await registrar_repo.save(make_registrar())
    enrollment_repo = await unit_env.get(EnrollmentRepository)
    student_id = StudentId(uuid4())
    e1 = await enrollment_repo.save(make_enrollment(student_id, session.id))
    e2 = await enrollment_repo.save(make_enrollment(student_id, session.id))
    return r1, r2, e1, e2


def _as_registrar(registrar) -> Actor:
    return Actor(identity_id=registrar.identity_id, role=UserType.REGISTRAR)


class TestDecideEnrollment:
    """Tests for the decision use cases."""

    @pytest.mark.asyncio
    async def test_registrar_approves_as_themselves(self, unit_env):
        """The caller's own registrar profile is recorded."""
        # Arrange
        r1, _, e1, _ = await _seed(unit_env)
        use_case = await unit_env.get(ApproveEnrollmentUseCase)

        # Act
        response = await use_case.execute(
            ApproveEnrollmentRequest(actor=_as_registrar(r1), enrollment_id=e1.id)
        )

        # Assert
        assert response.status == EnrollmentStatus.APPROVED
        assert response.registrar_id == str(r1.id)

    @pytest.mark.asyncio
    async def test_second_registrar_is_refused(self, unit_env):
        """Once R1 decided, R2 cannot decide on the student's other course."""
        # Arrange
        r1, r2, e1, e2 = await _seed(unit_env)
        approve = await unit_env.get(ApproveEnrollmentUseCase)
        reject = await unit_env.get(RejectEnrollmentUseCase)
        await approve.execute(
            ApproveEnrollmentRequest(actor=_as_registrar(r1), enrollment_id=e1.id)
        )

        # Act & Assert
        with pytest.raises(RegistrarConflict):
            await reject.execute(
                RejectEnrollmentRequest(
                    actor=_as_registrar(r2), enrollment_id=e2.id, reason="Full"
                )
            )

    @pytest.mark.asyncio
    async def test_admin_decides_for_named_registrar(self, unit_env):
        """Admins must name the registrar the decision belongs to."""
        # Arrange
        r1, _, e1, _ = await _seed(unit_env)
        use_case = await unit_env.get(RejectEnrollmentUseCase)
        admin = Actor(identity_id=IdentityId(uuid4()), role=UserType.ADMIN)

        # Act & Assert
        with pytest.raises(ValidationError):
            await use_case.execute(
                RejectEnrollmentRequest(
                    actor=admin, enrollment_id=e1.id, reason="Prerequisite missing"
                )
            )

        response = await use_case.execute(
            RejectEnrollmentRequest(
                actor=admin,
                enrollment_id=e1.id,
                reason="Prerequisite missing",
                registrar_id=r1.id,
            )
        )
        assert response.status == EnrollmentStatus.REJECTED
        assert response.rejection_reason == "Prerequisite missing"

    @pytest.mark.asyncio
    async def test_students_cannot_decide(self, unit_env):
        """Students are never deciding registrars."""
        _, _, e1, _ = await _seed(unit_env)
        use_case = await unit_env.get(ApproveEnrollmentUseCase)
        student = Actor(identity_id=IdentityId(uuid4()), role=UserType.STUDENT)

        with pytest.raises(ForbiddenError):
            await use_case.execute(
                ApproveEnrollmentRequest(actor=student, enrollment_id=e1.id)
            )
