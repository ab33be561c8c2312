"""PostgreSQL implementation of Registrar repository."""

from typing import Optional

from sqlalchemy import delete, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from campus.domain.model import Registrar
from campus.domain.repository import RegistrarRepository
from campus.domain.value import Email, IdentityId, RegistrarId
from campus.persistence.mappers import registrar_to_dict, row_to_registrar
from campus.persistence.tables import registrars_table


class PostgresRegistrarRepository(RegistrarRepository):
    """PostgreSQL implementation of RegistrarRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def _first(self, stmt) -> Optional[Registrar]:
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_registrar(dict(row)) if row else None

    async def find_by_id(self, registrar_id: RegistrarId) -> Optional[Registrar]:
        return await self._first(
            select(registrars_table).where(registrars_table.c.id == registrar_id)
        )

    async def find_by_email(self, email: Email) -> Optional[Registrar]:
        return await self._first(
            select(registrars_table).where(registrars_table.c.email == email.root)
        )

    async def find_by_identity_id(
        self, identity_id: IdentityId
    ) -> Optional[Registrar]:
        return await self._first(
            select(registrars_table).where(
                registrars_table.c.identity_id == identity_id
            )
        )

    async def save(self, registrar: Registrar) -> Registrar:
        data = registrar_to_dict(registrar)

        if await self.find_by_id(registrar.id):
            stmt = (
                update(registrars_table)
                .where(registrars_table.c.id == registrar.id)
                .values(**data)
            )
        else:
            stmt = insert(registrars_table).values(**data)

        await self.session.execute(stmt)
        await self.session.flush()
        return registrar

    async def delete(self, registrar_id: RegistrarId) -> None:
        await self.session.execute(
            delete(registrars_table).where(registrars_table.c.id == registrar_id)
        )
        await self.session.flush()
