"""Registrar assignment (claim) entity."""

from datetime import datetime

from pydantic import Field

from campus.domain.model.common import DomainModel
from campus.domain.value import (
    AcademicSessionId,
    RegistrarAssignmentId,
    RegistrarId,
    StudentId,
)
from campus.util.clock import utcnow


class RegistrarAssignment(DomainModel):
    """Which registrar owns a student's decisions within a session.

    Unique per (student_id, session_id).
    """

    id: RegistrarAssignmentId
    student_id: StudentId
    registrar_id: RegistrarId
    session_id: AcademicSessionId
    updated_at: datetime = Field(default_factory=utcnow)
