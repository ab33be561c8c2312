"""Caller token domain service."""

from uuid import UUID

import logfire

from campus.config import AuthSettings
from campus.domain.error import UnauthorizedError
from campus.domain.value import IdentityId, UserType
from campus.domain.value.common import ValueObject
from campus.util.jwt import JWTError, create_token, verify_token

from .base import Service


class Actor(ValueObject):
    """Authenticated caller."""

    identity_id: IdentityId
    role: UserType

    @property
    def is_admin(self) -> bool:
        return self.role == UserType.ADMIN


class JWTService(Service):
    """Issues and verifies caller tokens."""

    def __init__(self, auth_settings: AuthSettings) -> None:
        """Initialize JWT service.

        Args:
            auth_settings: Authentication settings
        """
        self.auth_settings = auth_settings

    def create_token(self, identity_id: IdentityId, role: UserType) -> str:
        return create_token(str(identity_id), role.value, self.auth_settings)

    def authenticate(self, token: str | None) -> Actor:
        """Resolve the caller from a bearer token.

        Raises:
            UnauthorizedError: If the token is missing, invalid or expired
        """
        if not token:
            raise UnauthorizedError("Not authenticated")

        with logfire.span("jwt_service.authenticate"):
            try:
                payload = verify_token(token, self.auth_settings)
                actor = Actor(
                    identity_id=IdentityId(UUID(payload.sub)),
                    role=UserType(payload.role),
                )
            except (JWTError, ValueError) as e:
                logfire.warn("Token verification failed", error=str(e))
                raise UnauthorizedError(str(e)) from e

            return actor
