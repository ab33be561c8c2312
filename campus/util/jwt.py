"""Signing and verification of API caller tokens (HS256 by default)."""

from datetime import datetime, timedelta

import jwt
from pydantic import BaseModel

from campus.config import AuthSettings
from campus.util.clock import utcnow
from campus.util.error import UtilError

REQUIRED_CLAIMS = ["sub", "role", "exp"]


class TokenPayload(BaseModel):
    sub: str  # Identity ID
    role: str  # STUDENT, REGISTRAR or ADMIN
    exp: datetime


class JWTError(UtilError):
    """Token could not be verified."""


def create_token(identity_id: str, role: str, settings: AuthSettings) -> str:
    """Sign a token for ``identity_id`` acting as ``role``."""
    issued_at = utcnow()
    claims = {
        "sub": identity_id,
        "role": role,
        "iat": issued_at,
        "exp": issued_at + timedelta(days=settings.jwt_expiry_days),
    }
    return jwt.encode(claims, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def verify_token(token: str, settings: AuthSettings) -> TokenPayload:
    """Check signature, expiry and required claims.

    Raises:
        JWTError: If token is invalid or expired
    """
    try:
        claims = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            options={"require": REQUIRED_CLAIMS},
        )
    except jwt.ExpiredSignatureError as e:
        raise JWTError("Token has expired") from e
    except jwt.InvalidTokenError as e:
        raise JWTError("Invalid token") from e
    return TokenPayload(**claims)
