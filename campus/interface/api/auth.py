"""Caller authentication for API routes."""

from campus.domain.error import ForbiddenError
from campus.domain.service import Actor, JWTService
from campus.domain.value import UserType


def bearer_token(authorization: str | None) -> str | None:
    """Extract the token from an ``Authorization: Bearer ...`` header."""
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token:
        return None
    return token.strip()


def authenticate(
    jwt_service: JWTService, authorization: str | None, *roles: UserType
) -> Actor:
    """Resolve the caller and check their role.

    Args:
        jwt_service: Token verification service
        authorization: Raw Authorization header
        roles: Roles allowed to call the route; empty allows any role

    Raises:
        UnauthorizedError: If the token is missing or invalid
        ForbiddenError: If the caller's role is not allowed
    """
    actor = jwt_service.authenticate(bearer_token(authorization))
    if roles and actor.role not in roles:
        raise ForbiddenError("Route", "access", str(actor.identity_id))
    return actor
