"""In-memory registrar repository for testing."""

from typing import Optional

from sqlalchemy.exc import IntegrityError

from campus.domain.model import Registrar
from campus.domain.repository import RegistrarRepository
from campus.domain.value import Email, IdentityId, RegistrarId


class InMemoryRegistrarRepository(RegistrarRepository):
    """In-memory implementation of RegistrarRepository for testing."""

    def __init__(self) -> None:
        self._registrars: dict[RegistrarId, Registrar] = {}

    async def find_by_id(self, registrar_id: RegistrarId) -> Optional[Registrar]:
        return self._registrars.get(registrar_id)

    async def find_by_email(self, email: Email) -> Optional[Registrar]:
        for registrar in self._registrars.values():
            if registrar.email == email:
                return registrar
        return None

    async def find_by_identity_id(
        self, identity_id: IdentityId
    ) -> Optional[Registrar]:
        for registrar in self._registrars.values():
            if registrar.identity_id == identity_id:
                return registrar
        return None

    async def save(self, registrar: Registrar) -> Registrar:
        """Save a registrar (create or update).

        Raises:
            IntegrityError: If the email is already taken
        """
        for existing in self._registrars.values():
            if existing.id != registrar.id and existing.email == registrar.email:
                raise IntegrityError("Duplicate registrar email", None, Exception())

        self._registrars[registrar.id] = registrar
        return registrar

    async def delete(self, registrar_id: RegistrarId) -> None:
        self._registrars.pop(registrar_id, None)
