"""Domain value objects for the enrollment back office.

Value objects are immutable and defined by their values, not identity.
They encapsulate validation rules and business logic.
"""

import re
from enum import Enum

from pydantic import field_validator

from campus.domain.value.common import RootValueObject, ValueObject
from campus.domain.value.identifiers import IdentityId


class UserType(str, Enum):
    """Role a person holds in the back office."""

    STUDENT = "STUDENT"
    REGISTRAR = "REGISTRAR"
    ADMIN = "ADMIN"


class InvitationStatus(str, Enum):
    """Status of an invitation."""

    PENDING = "PENDING"
    ACCEPTED = "ACCEPTED"
    EXPIRED = "EXPIRED"
    CANCELLED = "CANCELLED"


class SessionStatus(str, Enum):
    """Status of an academic session.

    Sessions only move forward: UPCOMING -> ACTIVE -> CLOSED.
    """

    UPCOMING = "UPCOMING"
    ACTIVE = "ACTIVE"
    CLOSED = "CLOSED"


class EnrollmentStatus(str, Enum):
    """Status of an enrollment."""

    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"
    ACTIVE = "ACTIVE"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"

    @property
    def is_terminal(self) -> bool:
        return self in TERMINAL_ENROLLMENT_STATUSES


TERMINAL_ENROLLMENT_STATUSES = frozenset(
    {
        EnrollmentStatus.REJECTED,
        EnrollmentStatus.COMPLETED,
        EnrollmentStatus.CANCELLED,
    }
)


class Email(RootValueObject[str]):
    """Email address, stored lowercase."""

    @field_validator("root")
    @classmethod
    def validate_email(cls, v: str) -> str:
        """Validate basic email shape and normalize case."""
        v = v.strip().lower()
        if not re.match(r"^[^@\s]+@[^@\s]+\.[^@\s]+$", v):
            raise ValueError("Invalid email address")
        if len(v) > 255:
            raise ValueError("Email must be at most 255 characters")
        return v


class InvitationToken(RootValueObject[str]):
    """Opaque single-use invitation token."""

    @field_validator("root")
    @classmethod
    def validate_token_format(cls, v: str) -> str:
        """Validate token is not empty."""
        if len(v) < 1 or len(v) > 255:
            raise ValueError("Token must be 1-255 characters")
        return v


class RegistrationNumber(RootValueObject[str]):
    """Student registration number, e.g. '2021/CS/0042'."""

    @field_validator("root")
    @classmethod
    def validate_reg_number(cls, v: str) -> str:
        v = v.strip()
        if len(v) < 1 or len(v) > 50:
            raise ValueError("Registration number must be 1-50 characters")
        return v


class IdentitySession(ValueObject):
    """Session tokens issued by the identity provider for one identity."""

    access_token: str
    refresh_token: str
    expires_in: int | None = None
    token_type: str = "bearer"


class ProvisionedIdentity(ValueObject):
    """Account identity created by the identity provider."""

    id: IdentityId
    email: str
    session: IdentitySession
