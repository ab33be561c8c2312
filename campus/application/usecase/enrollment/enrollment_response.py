"""Shared enrollment response model and caller resolution."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from campus.domain.error import ForbiddenError, ValidationError
from campus.domain.model import Enrollment
from campus.domain.service import Actor, RegistrarService
from campus.domain.value import EnrollmentStatus, RegistrarId, UserType


class EnrollmentResponse(BaseModel):
    """Enrollment as returned by every enrollment use case."""

    enrollment_id: str
    student_id: str
    course_id: str
    session_id: str
    status: EnrollmentStatus
    registrar_id: str | None
    rejection_reason: str | None
    special_request: bool
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_enrollment(cls, enrollment: Enrollment) -> "EnrollmentResponse":
        return cls(
            enrollment_id=str(enrollment.id),
            student_id=str(enrollment.student_id),
            course_id=str(enrollment.course_id),
            session_id=str(enrollment.session_id),
            status=enrollment.status,
            registrar_id=str(enrollment.registrar_id)
            if enrollment.registrar_id
            else None,
            rejection_reason=enrollment.rejection_reason,
            special_request=enrollment.special_request,
            created_at=enrollment.created_at,
            updated_at=enrollment.updated_at,
        )


async def resolve_deciding_registrar(
    actor: Actor,
    registrar_id: UUID | None,
    registrar_service: RegistrarService,
) -> RegistrarId:
    """Work out which registrar a decision is recorded against.

    Registrars always decide as themselves. Admins decide on behalf of a
    registrar they name.

    Raises:
        ForbiddenError: If the caller is a student
        ValidationError: If an admin names no registrar
        NotFoundError: If the registrar does not exist
    """
    if actor.role == UserType.REGISTRAR:
        registrar = await registrar_service.get_by_identity(actor.identity_id)
        return registrar.id

    if actor.role == UserType.ADMIN:
        if registrar_id is None:
            raise ValidationError("registrar_id is required for admin decisions")
        registrar = await registrar_service.get_by_id(RegistrarId(registrar_id))
        return registrar.id

    raise ForbiddenError("Enrollment", "decision", str(actor.identity_id))
