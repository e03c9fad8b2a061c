"""
Process-wide record store for municipalities.

`MunicipalityStore` is built once at startup and handed to the request
handlers. Each operation opens its own short-lived session, commits or
rolls back, and closes it before returning. A single `asyncio.Lock`
serializes the operations so an ingest and a delete never interleave.
"""
import asyncio
import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Iterable, List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine

from municipios_api.database.connection import (
    create_engine,
    create_session_maker,
    create_tables,
    session_scope,
)
from municipios_api.database.models.municipality import MunicipalityRecord
from municipios_api.database.repositories.municipality import MunicipalityRepository
from municipios_api.models.municipality_models import Municipality

logger = logging.getLogger(__name__)


class StoreError(RuntimeError):
    """Raised when the backing database fails."""


def _to_model(record: MunicipalityRecord) -> Municipality:
    return Municipality(id=record.id, nome=record.nome)


class MunicipalityStore:
    """In-memory (by default) store of municipalities keyed by IBGE id."""

    def __init__(self, engine: AsyncEngine):
        self.engine = engine
        self._session_maker = create_session_maker(engine)
        self._lock = asyncio.Lock()

    @classmethod
    def from_settings(cls, database_url: Optional[str] = None) -> "MunicipalityStore":
        return cls(create_engine(database_url))

    async def init(self) -> None:
        """Create the `municipios` table."""
        try:
            await create_tables(self.engine)
        except SQLAlchemyError as e:
            raise StoreError(f"Failed to initialize store: {e}") from e
        logger.info("Store 'municipios' initialized")

    async def close(self) -> None:
        await self.engine.dispose()

    @asynccontextmanager
    async def _repository(self, operation: str) -> AsyncGenerator[MunicipalityRepository, None]:
        async with self._lock:
            try:
                async with session_scope(self._session_maker) as session:
                    yield MunicipalityRepository(session)
            except SQLAlchemyError as e:
                logger.error(f"Store failure during {operation}: {e}")
                raise StoreError(f"{operation} failed: {e}") from e

    async def insert_many(self, records: Iterable[Municipality]) -> int:
        """
        Insert records, skipping ids that are already stored.

        Returns:
            Number of records actually inserted
        """
        rows = [MunicipalityRecord(id=m.id, nome=m.nome) for m in records]
        async with self._repository("insert_many") as repo:
            inserted = await repo.insert_new(rows)

        skipped = len(rows) - len(inserted)
        if skipped:
            logger.info(f"Skipped {skipped} municipalities already stored")
        return len(inserted)

    async def list_all(self) -> List[Municipality]:
        async with self._repository("list_all") as repo:
            records = await repo.get_all()
            return [_to_model(r) for r in records]

    async def find_by_id(self, id: int) -> Optional[Municipality]:
        async with self._repository("find_by_id") as repo:
            record = await repo.get_by_id(id)
            return _to_model(record) if record else None

    async def replace(self, id: int, nome: str) -> Optional[Municipality]:
        """
        Overwrite the mutable fields of the record with `id`.

        The id itself is never changed.

        Returns:
            The updated municipality, or None if `id` is not stored
        """
        async with self._repository("replace") as repo:
            record = await repo.replace_nome(id, nome)
            return _to_model(record) if record else None

    async def delete_all(self) -> bool:
        """
        Remove every record.

        Returns:
            True if the store held any record beforehand
        """
        async with self._repository("delete_all") as repo:
            if await repo.count() == 0:
                return False
            removed = await repo.delete_all()

        logger.info(f"Removed {removed} municipalities")
        return True

    async def delete_by_id(self, id: int) -> bool:
        async with self._repository("delete_by_id") as repo:
            return await repo.delete_by_id(id)

    async def count(self) -> int:
        async with self._repository("count") as repo:
            return await repo.count()
