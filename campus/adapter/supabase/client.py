"""Supabase identity provider client.

Talks to the GoTrue auth API for identities and to PostgREST for
identity-scoped table writes.
"""

from typing import Any
from uuid import UUID, uuid4

import httpx
import logfire

from campus.adapter.error import ProviderError
from campus.config import IdentityProviderSettings
from campus.domain.error import EmailExists, IdentityProviderError
from campus.domain.service.identity_service import IdentityProviderClient
from campus.domain.value import IdentityId, IdentitySession, ProvisionedIdentity

# GoTrue error codes meaning the address is taken
ALREADY_REGISTERED_CODES = frozenset({"user_already_exists", "email_exists"})


def is_already_registered(error: ProviderError) -> bool:
    """Whether a provider error means the email is already registered."""
    if error.code in ALREADY_REGISTERED_CODES:
        return True
    return "already registered" in str(error).lower()


class SupabaseIdentityClient(IdentityProviderClient):
    """Base class for Supabase identity clients.

    Provides type distinction for dependency injection.
    """

    pass


class RealSupabaseIdentityClient(SupabaseIdentityClient):
    """Identity client backed by a Supabase project."""

    def __init__(self, settings: IdentityProviderSettings) -> None:
        """Initialize Supabase client.

        Args:
            settings: Project URL, keys and timeout
        """
        self.base_url = settings.url.rstrip("/")
        self.anon_key = settings.anon_key
        self.service_role_key = settings.service_role_key
        self.timeout = settings.timeout_seconds

    def _admin_headers(self) -> dict[str, str]:
        return {
            "apikey": self.service_role_key,
            "Authorization": f"Bearer {self.service_role_key}",
        }

    def _session_headers(self, session: IdentitySession) -> dict[str, str]:
        return {
            "apikey": self.anon_key,
            "Authorization": f"Bearer {session.access_token}",
        }

    async def _request(
        self,
        method: str,
        path: str,
        headers: dict[str, str],
        **kwargs: Any,
    ) -> httpx.Response:
        """Send a request and raise ProviderError on any non-2xx response.

        Raises:
            ProviderError: On transport failure or error status
        """
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.request(
                    method, f"{self.base_url}{path}", headers=headers, **kwargs
                )
        except httpx.HTTPError as e:
            logfire.error("Identity provider HTTP error", path=path, error=str(e))
            raise ProviderError(f"HTTP error calling identity provider: {e}")

        if response.status_code >= 400:
            code = None
            message = response.text
            try:
                body = response.json()
                code = body.get("error_code") or body.get("code")
                message = body.get("msg") or body.get("message") or message
            except ValueError:
                pass
            logfire.error(
                "Identity provider request failed",
                path=path,
                status_code=response.status_code,
                code=code,
            )
            raise ProviderError(str(message), response.status_code, code)

        return response

    @staticmethod
    def _to_session(body: dict[str, Any]) -> IdentitySession | None:
        if not body.get("access_token"):
            return None
        return IdentitySession(
            access_token=body["access_token"],
            refresh_token=body.get("refresh_token", ""),
            expires_in=body.get("expires_in"),
            token_type=body.get("token_type", "bearer"),
        )

    async def create_identity(self, email: str, credential: str) -> ProvisionedIdentity:
        """Sign up a new identity and return it with its session.

        Projects that require email confirmation return no session on signup;
        in that case the identity signs in with the same credential.

        Raises:
            EmailExists: If the address is already registered
            IdentityProviderError: For any other failure
        """
        try:
            response = await self._request(
                "POST",
                "/auth/v1/signup",
                headers={"apikey": self.anon_key},
                json={"email": email, "password": credential},
            )
            body = response.json()
            user = body.get("user") or body
            session = self._to_session(body)

            if session is None:
                token_response = await self._request(
                    "POST",
                    "/auth/v1/token",
                    headers={"apikey": self.anon_key},
                    params={"grant_type": "password"},
                    json={"email": email, "password": credential},
                )
                session = self._to_session(token_response.json())
        except ProviderError as e:
            if is_already_registered(e):
                raise EmailExists(f"{email} is already registered") from e
            raise IdentityProviderError("Identity creation failed") from e

        if session is None or not user.get("id"):
            raise IdentityProviderError("Identity provider returned no session")

        return ProvisionedIdentity(
            id=IdentityId(UUID(user["id"])),
            email=user.get("email", email),
            session=session,
        )

    async def delete_identity(self, identity_id: IdentityId) -> None:
        try:
            await self._request(
                "DELETE",
                f"/auth/v1/admin/users/{identity_id}",
                headers=self._admin_headers(),
            )
        except ProviderError as e:
            raise IdentityProviderError("Identity deletion failed") from e

    async def authenticated_write(
        self, table: str, row: dict[str, Any], session: IdentitySession
    ) -> dict[str, Any]:
        headers = self._session_headers(session)
        headers["Prefer"] = "return=representation"
        try:
            response = await self._request(
                "POST", f"/rest/v1/{table}", headers=headers, json=row
            )
        except ProviderError as e:
            raise IdentityProviderError(f"Write to {table} failed") from e

        body = response.json()
        return body[0] if isinstance(body, list) and body else row

    async def admin_delete(self, table: str, match: dict[str, Any]) -> None:
        params = {column: f"eq.{value}" for column, value in match.items()}
        try:
            await self._request(
                "DELETE",
                f"/rest/v1/{table}",
                headers=self._admin_headers(),
                params=params,
            )
        except ProviderError as e:
            raise IdentityProviderError(f"Delete from {table} failed") from e


class MockSupabaseIdentityClient(SupabaseIdentityClient):
    """In-memory identity client for testing.

    Keeps identities and table rows in dicts. Operations named in ``fail_on``
    raise ``IdentityProviderError``; writes are keyed as ``"write:<table>"``
    and admin deletes as ``"delete:<table>"``.
    """

    def __init__(self) -> None:
        self.identities: dict[IdentityId, str] = {}
        self.tables: dict[str, list[dict[str, Any]]] = {}
        self.fail_on: set[str] = set()
        self.calls: list[str] = []

    def _maybe_fail(self, operation: str) -> None:
        self.calls.append(operation)
        if operation in self.fail_on:
            raise IdentityProviderError(f"Injected failure: {operation}")

    async def create_identity(self, email: str, credential: str) -> ProvisionedIdentity:
        self._maybe_fail("create_identity")
        if email in self.identities.values():
            raise EmailExists(f"{email} is already registered")

        identity_id = IdentityId(uuid4())
        self.identities[identity_id] = email
        return ProvisionedIdentity(
            id=identity_id,
            email=email,
            session=IdentitySession(
                access_token=f"access-{identity_id}",
                refresh_token=f"refresh-{identity_id}",
                expires_in=3600,
            ),
        )

    async def delete_identity(self, identity_id: IdentityId) -> None:
        self._maybe_fail("delete_identity")
        self.identities.pop(identity_id, None)

    async def authenticated_write(
        self, table: str, row: dict[str, Any], session: IdentitySession
    ) -> dict[str, Any]:
        self._maybe_fail(f"write:{table}")
        if session.access_token not in {
            f"access-{identity_id}" for identity_id in self.identities
        }:
            raise IdentityProviderError("Session does not belong to a live identity")
        self.tables.setdefault(table, []).append(dict(row))
        return dict(row)

    async def admin_delete(self, table: str, match: dict[str, Any]) -> None:
        self._maybe_fail(f"delete:{table}")
        rows = self.tables.get(table, [])
        self.tables[table] = [
            r for r in rows if any(r.get(k) != v for k, v in match.items())
        ]
