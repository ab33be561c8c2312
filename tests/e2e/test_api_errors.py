"""End-to-end tests for authentication and error mapping over HTTP.

Each HTTP request gets a fresh request scope, so these tests only cover
single-request scenarios against the mocked container.
"""

from datetime import timedelta
from uuid import uuid4

import pytest
from fastapi.testclient import TestClient

from campus.config import AuthSettings
from campus.domain.service import JWTService
from campus.domain.value import IdentityId, UserType
from campus.interface.api.app import create_app
from campus.util.clock import utcnow
from tests.di import build_test_container


@pytest.fixture
def client():
    """Create test client backed by the mocked container."""
    with TestClient(create_app(build_test_container())) as test_client:
        yield test_client


def _auth(role: UserType) -> dict[str, str]:
    token = JWTService(AuthSettings()).create_token(IdentityId(uuid4()), role)
    return {"Authorization": f"Bearer {token}"}


class TestPublicRoutes:
    """Routes that need no caller token."""

    def test_health(self, client):
        """Should report healthy."""
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_validate_unknown_token(self, client):
        """Unknown tokens are reported as invalid, not as an error."""
        # Act
        response = client.get("/invitations/validate", params={"token": "nope"})

        # Assert
        assert response.status_code == 200
        data = response.json()
        assert data["valid"] is False
        assert data["email"] is None

    def test_accept_unknown_token(self, client):
        """Accepting an unknown token is unauthorized."""
        # Act
        response = client.post(
            "/invitations/accept",
            json={
                "token": "nope",
                "first_name": "Ada",
                "last_name": "Obi",
                "password": "correct-horse",
            },
        )

        # Assert
        assert response.status_code == 401
        assert response.json()["error"] == "InvalidOrExpiredToken"

    def test_accept_short_password(self, client):
        """Request validation rejects weak credentials."""
        response = client.post(
            "/invitations/accept",
            json={
                "token": "nope",
                "first_name": "Ada",
                "last_name": "Obi",
                "password": "short",
            },
        )

        assert response.status_code == 422


class TestAuthorization:
    """Caller tokens and roles."""

    def test_missing_token(self, client):
        """Protected routes need a bearer token."""
        response = client.get("/sessions/active")

        assert response.status_code == 401

    def test_garbage_token(self, client):
        """Tokens that do not verify are unauthorized."""
        response = client.get(
            "/sessions/active", headers={"Authorization": "Bearer not-a-jwt"}
        )

        assert response.status_code == 401

    def test_student_cannot_invite(self, client):
        """Invitations are admin only."""
        response = client.post(
            "/invitations/registrars",
            json={"email": "grace.eze@campus.test"},
            headers=_auth(UserType.STUDENT),
        )

        assert response.status_code == 403


class TestDomainErrors:
    """Domain errors map to client status codes."""

    def test_no_active_session(self, client):
        """Looking up the active session when none exists is a 404."""
        response = client.get("/sessions/active", headers=_auth(UserType.REGISTRAR))

        assert response.status_code == 404

    def test_session_in_the_past(self, client):
        """Dates that fail validation are a 422."""
        # Arrange
        start = utcnow() - timedelta(days=1)

        # Act
        response = client.post(
            "/sessions",
            json={
                "name": "Backdated",
                "start_date": start.isoformat(),
                "end_date": (start + timedelta(days=90)).isoformat(),
                "enrollment_deadline": (start - timedelta(days=7)).isoformat(),
            },
            headers=_auth(UserType.ADMIN),
        )

        # Assert
        assert response.status_code == 422
        assert response.json()["error"] == "InvalidDateRange"

    def test_claim_without_active_session(self, client):
        """Claims outside an active session are a conflict."""
        response = client.post(
            f"/students/{uuid4()}/claim",
            json={"registrar_id": str(uuid4())},
            headers=_auth(UserType.ADMIN),
        )

        assert response.status_code == 409
        assert response.json()["error"] == "NoActiveSession"

    def test_unknown_enrollment(self, client):
        """Reading an enrollment that does not exist is a 404."""
        response = client.get(
            f"/enrollments/{uuid4()}", headers=_auth(UserType.ADMIN)
        )

        assert response.status_code == 404
