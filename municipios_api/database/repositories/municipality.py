"""Repository for municipality operations."""

from typing import Iterable, List, Optional, Set

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from municipios_api.database.models.municipality import MunicipalityRecord
from municipios_api.database.repositories.base import BaseRepository


class MunicipalityRepository(BaseRepository[MunicipalityRecord]):
    """Repository for municipality CRUD operations."""

    def __init__(self, session: AsyncSession):
        super().__init__(session, MunicipalityRecord)

    async def existing_ids(self, ids: Iterable[int]) -> Set[int]:
        """Return which of the given ids are already stored."""
        ids = list(ids)
        if not ids:
            return set()
        result = await self.session.execute(
            select(MunicipalityRecord.id).where(MunicipalityRecord.id.in_(ids))
        )
        return set(result.scalars().all())

    async def insert_new(self, records: List[MunicipalityRecord]) -> List[MunicipalityRecord]:
        """
        Insert the records whose id is not stored yet.

        Ids already present, and ids repeated later in the same batch,
        are skipped. The first occurrence of an id wins.
        """
        existing = await self.existing_ids(r.id for r in records)
        to_insert: List[MunicipalityRecord] = []
        for record in records:
            if record.id in existing:
                continue
            existing.add(record.id)
            to_insert.append(record)

        if to_insert:
            await self.create_many(to_insert)
        return to_insert

    async def replace_nome(self, id: int, nome: str) -> Optional[MunicipalityRecord]:
        """Overwrite the mutable fields of a stored municipality."""
        record = await self.get_by_id(id)
        if not record:
            return None

        record.nome = nome
        return await self.update(record)
