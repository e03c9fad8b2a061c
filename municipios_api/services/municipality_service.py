"""
Municipality resource handling.

Composes the IBGE client and the record store into the six resource
operations. Every operation returns an `OperationResult`:

- found: the operation succeeded (with data for reads and updates)
- empty: nothing to return, a normal outcome
- failed: upstream, store or payload failure, with the raw error text
"""

import logging
from typing import Any

from pydantic import ValidationError

from municipios_api.database.store import MunicipalityStore, StoreError
from municipios_api.models.municipality_models import MunicipalityUpdate
from municipios_api.services.ibge_client import FetchError, IBGEClient
from municipios_api.services.operation_result import OperationResult

logger = logging.getLogger(__name__)


class MunicipalityService:
    """Request handling for the /municipios resource."""

    def __init__(self, store: MunicipalityStore, client: IBGEClient):
        self.store = store
        self.client = client

    def _failure(self, operation: str, exc: Exception) -> OperationResult:
        if isinstance(exc, (FetchError, StoreError, ValidationError)):
            logger.error(f"Erro em {operation}: {exc}")
        else:
            logger.exception(f"Erro inesperado em {operation}: {exc}")
        return OperationResult.failed(str(exc))

    async def ingest(self) -> OperationResult:
        """Fetch from IBGE and store every municipality not stored yet."""
        try:
            municipalities = await self.client.fetch()
            if not municipalities:
                logger.info("Nenhum município encontrado no IBGE")
                return OperationResult.empty()

            inserted = await self.store.insert_many(municipalities)
            logger.info(
                f"Ingestão concluída: {inserted} de {len(municipalities)} municípios inseridos"
            )
            return OperationResult.found()
        except Exception as e:
            return self._failure("ingest", e)

    async def list_all(self) -> OperationResult:
        try:
            municipalities = await self.store.list_all()
            if not municipalities:
                logger.info("Nenhum município armazenado")
                return OperationResult.empty()

            logger.info(f"Sucesso em buscar municípios, total de: {len(municipalities)}")
            return OperationResult.found(municipalities)
        except Exception as e:
            return self._failure("list_all", e)

    async def get_by_id(self, id: int) -> OperationResult:
        try:
            municipality = await self.store.find_by_id(id)
            if municipality is None:
                logger.info(f"Município {id} não encontrado")
                return OperationResult.empty()
            return OperationResult.found(municipality)
        except Exception as e:
            return self._failure("get_by_id", e)

    async def update(self, id: int, payload: Any) -> OperationResult:
        """
        Replace every mutable field of municipality `id` with `payload`.

        The id is looked up before the payload is validated, so a missing
        id is reported as empty whatever the body holds. The stored id is
        kept even when the payload carries a different one.
        """
        try:
            if await self.store.find_by_id(id) is None:
                logger.info(f"Município {id} não encontrado para atualização")
                return OperationResult.empty()

            changes = MunicipalityUpdate.model_validate(payload)
            if changes.id is not None and changes.id != id:
                logger.warning(f"Ignorando id {changes.id} do corpo; mantendo {id}")

            updated = await self.store.replace(id, **changes.mutable_fields())
            if updated is None:
                # Removed between the lookup and the replace
                return OperationResult.empty()

            logger.info(f"Município {id} atualizado")
            return OperationResult.found(updated)
        except Exception as e:
            return self._failure("update", e)

    async def delete_all(self) -> OperationResult:
        try:
            if not await self.store.delete_all():
                logger.info("Nenhum município para remover")
                return OperationResult.empty()
            return OperationResult.found()
        except Exception as e:
            return self._failure("delete_all", e)

    async def delete_by_id(self, id: int) -> OperationResult:
        try:
            if not await self.store.delete_by_id(id):
                logger.info(f"Município {id} não encontrado para remoção")
                return OperationResult.empty()

            logger.info(f"Município {id} removido")
            return OperationResult.found()
        except Exception as e:
            return self._failure("delete_by_id", e)
