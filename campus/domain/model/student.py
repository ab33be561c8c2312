"""Student entity."""

from datetime import datetime
from typing import Optional

from pydantic import Field

from campus.domain.model.common import DomainModel
from campus.domain.value import (
    Email,
    IdentityId,
    ProgramId,
    RegistrationNumber,
    StudentId,
)
from campus.util.clock import utcnow


class Student(DomainModel):
    """Student profile.

    A placeholder (reg_number, email, program) is created when the student is
    invited; names and the identity link are filled in on acceptance.
    """

    id: StudentId
    reg_number: RegistrationNumber
    email: Email
    program_id: ProgramId
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    identity_id: Optional[IdentityId] = None
    profile_picture: Optional[str] = None
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    @property
    def is_placeholder(self) -> bool:
        return self.identity_id is None
