"""Registrar entity."""

from datetime import datetime
from typing import Optional

from pydantic import Field

from campus.domain.model.common import DomainModel
from campus.domain.value import Email, IdentityId, RegistrarId
from campus.util.clock import utcnow


class Registrar(DomainModel):
    """Staff member who decides on student enrollments."""

    id: RegistrarId
    email: Email
    first_name: str
    last_name: str
    identity_id: IdentityId
    profile_picture: Optional[str] = None
    created_at: datetime = Field(default_factory=utcnow)
