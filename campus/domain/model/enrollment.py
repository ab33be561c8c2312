"""Enrollment entity."""

from datetime import datetime
from typing import Optional

from pydantic import Field

from campus.domain.model.common import DomainModel
from campus.domain.value import (
    AcademicSessionId,
    CourseId,
    EnrollmentId,
    EnrollmentStatus,
    RegistrarId,
    StudentId,
)
from campus.util.clock import utcnow


class Enrollment(DomainModel):
    """A student's enrollment in a course for one session.

    Transitions:
    - PENDING -> APPROVED | REJECTED (registrar decision)
    - APPROVED -> ACTIVE (session start)
    - ACTIVE -> COMPLETED (session close)
    - PENDING | APPROVED | ACTIVE -> CANCELLED
    """

    id: EnrollmentId
    student_id: StudentId
    course_id: CourseId
    session_id: AcademicSessionId
    status: EnrollmentStatus = EnrollmentStatus.PENDING
    registrar_id: Optional[RegistrarId] = None
    rejection_reason: Optional[str] = None
    special_request: bool = False
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)
