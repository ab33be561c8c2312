"""Identity provider domain service."""

from typing import Any

import logfire

from campus.domain.error import EmailExists, IdentityProviderError
from campus.domain.value import IdentityId, IdentitySession, ProvisionedIdentity, UserType

from .base import Service


class IdentityProviderClient:
    """Identity provider interface.

    Implementations raise ``EmailExists`` when the address is already
    registered and ``IdentityProviderError`` for any other provider failure.
    """

    async def create_identity(self, email: str, credential: str) -> ProvisionedIdentity:
        """Register a new account identity.

        Args:
            email: Account email
            credential: Account password

        Returns:
            The created identity with its own session tokens
        """
        raise NotImplementedError

    async def delete_identity(self, identity_id: IdentityId) -> None:
        """Delete an account identity with administrative rights."""
        raise NotImplementedError

    async def authenticated_write(
        self, table: str, row: dict[str, Any], session: IdentitySession
    ) -> dict[str, Any]:
        """Insert a row as the identity that owns ``session``.

        Args:
            table: Target table
            row: Column values
            session: Session of the identity performing the write

        Returns:
            The stored row
        """
        raise NotImplementedError

    async def admin_delete(self, table: str, match: dict[str, Any]) -> None:
        """Delete rows matching every column in ``match`` with admin rights."""
        raise NotImplementedError


class IdentityService(Service):
    """Domain service for account identities and their roles."""

    def __init__(self, client: IdentityProviderClient, roles_table: str) -> None:
        """Initialize identity service.

        Args:
            client: Identity provider client
            roles_table: Table role records are written to
        """
        self.client = client
        self.roles_table = roles_table

    async def create_identity(self, email: str, credential: str) -> ProvisionedIdentity:
        """Create an account identity.

        Raises:
            EmailExists: If the email is already registered
            IdentityProviderError: For any other provider failure
        """
        with logfire.span("identity_service.create_identity", email=email):
            try:
                identity = await self.client.create_identity(email, credential)
            except (EmailExists, IdentityProviderError):
                raise
            except Exception as e:
                logfire.error(
                    "Unexpected identity provider failure",
                    error=str(e),
                    error_type=type(e).__name__,
                )
                raise IdentityProviderError("Identity creation failed") from e

            logfire.info("Identity created", identity_id=str(identity.id))
            return identity

    async def delete_identity(self, identity_id: IdentityId) -> None:
        """Delete an account identity."""
        with logfire.span(
            "identity_service.delete_identity", identity_id=str(identity_id)
        ):
            await self.client.delete_identity(identity_id)
            logfire.info("Identity deleted", identity_id=str(identity_id))

    async def assign_role(
        self, identity: ProvisionedIdentity, role: UserType
    ) -> dict[str, Any]:
        """Write the role record using the identity's own session.

        Role writes are authorized for the identity doing its own onboarding,
        not for an administrative key.
        """
        with logfire.span(
            "identity_service.assign_role",
            identity_id=str(identity.id),
            role=role.value,
        ):
            row = await self.client.authenticated_write(
                self.roles_table,
                {"user_id": str(identity.id), "role": role.value},
                identity.session,
            )
            logfire.info("Role assigned", identity_id=str(identity.id), role=role.value)
            return row

    async def revoke_role(self, identity_id: IdentityId) -> None:
        """Delete every role record of an identity."""
        with logfire.span("identity_service.revoke_role", identity_id=str(identity_id)):
            await self.client.admin_delete(
                self.roles_table, {"user_id": str(identity_id)}
            )
            logfire.info("Role revoked", identity_id=str(identity_id))
