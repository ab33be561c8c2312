"""Registrar repository interface."""

from abc import ABC, abstractmethod

from campus.domain.model import Registrar
from campus.domain.value import Email, IdentityId, RegistrarId


class RegistrarRepository(ABC):
    """Repository for Registrar entity."""

    @abstractmethod
    async def find_by_id(self, registrar_id: RegistrarId) -> Registrar | None:
        """Find a registrar by ID."""
        pass

    @abstractmethod
    async def find_by_email(self, email: Email) -> Registrar | None:
        """Find a registrar by email."""
        pass

    @abstractmethod
    async def find_by_identity_id(self, identity_id: IdentityId) -> Registrar | None:
        """Find the registrar linked to an identity."""
        pass

    @abstractmethod
    async def save(self, registrar: Registrar) -> Registrar:
        """Save a registrar (create or update).

        Raises:
            IntegrityError: If the email is already taken
        """
        pass

    @abstractmethod
    async def delete(self, registrar_id: RegistrarId) -> None:
        """Delete a registrar."""
        pass
