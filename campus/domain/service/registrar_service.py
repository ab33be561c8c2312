"""Registrar domain service."""

from uuid import uuid4

import logfire

from campus.domain.error import NotFoundError, StateConflictError
from campus.domain.model import Registrar
from campus.domain.repository import RegistrarRepository
from campus.domain.value import Email, IdentityId, RegistrarId

from .base import Service


class RegistrarService(Service):
    """Domain service for registrar profiles."""

    def __init__(self, registrar_repository: RegistrarRepository) -> None:
        """Initialize registrar service.

        Args:
            registrar_repository: Registrar repository
        """
        self.registrar_repository = registrar_repository

    async def get_by_id(self, registrar_id: RegistrarId) -> Registrar:
        """Get registrar by ID.

        Raises:
            NotFoundError: If the registrar does not exist
        """
        registrar = await self.registrar_repository.find_by_id(registrar_id)
        if not registrar:
            raise NotFoundError("Registrar", str(registrar_id))
        return registrar

    async def get_by_identity(self, identity_id: IdentityId) -> Registrar:
        """Get the registrar linked to an identity.

        Raises:
            NotFoundError: If no registrar is linked
        """
        registrar = await self.registrar_repository.find_by_identity_id(identity_id)
        if not registrar:
            raise NotFoundError("Registrar", str(identity_id))
        return registrar

    async def ensure_email_available(self, email: Email) -> None:
        """Raise StateConflictError if a registrar already uses the email."""
        if await self.registrar_repository.find_by_email(email):
            raise StateConflictError(f"A registrar with email {email.root} exists")

    async def create(
        self,
        email: Email,
        first_name: str,
        last_name: str,
        identity_id: IdentityId,
        profile_picture: str | None = None,
    ) -> Registrar:
        """Create a registrar profile."""
        with logfire.span(
            "registrar_service.create", identity_id=str(identity_id)
        ):
            registrar = Registrar(
                id=RegistrarId(uuid4()),
                email=email,
                first_name=first_name,
                last_name=last_name,
                identity_id=identity_id,
                profile_picture=profile_picture,
            )
            saved = await self.registrar_repository.save(registrar)
            logfire.info("Registrar created", registrar_id=str(saved.id))
            return saved

    async def delete(self, registrar_id: RegistrarId) -> None:
        with logfire.span("registrar_service.delete", registrar_id=str(registrar_id)):
            await self.registrar_repository.delete(registrar_id)
