"""
Tests for MunicipalityService.

The service is exercised with a real in-memory store and a fake IBGE
upstream; failures are injected with AsyncMock.
"""

from unittest.mock import AsyncMock

import pytest

from municipios_api.database.store import StoreError
from municipios_api.models.municipality_models import Municipality
from municipios_api.services.municipality_service import MunicipalityService
from municipios_api.services.operation_result import OperationResult, ResultStatus


@pytest.fixture
def service(store, upstream):
    return MunicipalityService(store, upstream.client())


async def _seed(store, *pairs):
    await store.insert_many([Municipality(id=i, nome=n) for i, n in pairs])


class TestOperationResult:
    def test_variants(self):
        assert OperationResult.found([1]).is_found
        assert OperationResult.found([1]).data == [1]
        assert OperationResult.empty().is_empty
        failed = OperationResult.failed("boom")
        assert failed.is_failed
        assert failed.reason == "boom"
        assert failed.status is ResultStatus.FAILED


class TestIngest:
    """Tests for ingest."""

    @pytest.mark.asyncio
    async def test_ingest_stores_every_record(self, service, store, ibge_payload):
        result = await service.ingest()

        assert result.is_found
        assert result.data is None
        assert await store.count() == len(ibge_payload)
        for item in ibge_payload:
            assert (await store.find_by_id(item["id"])).nome == item["nome"]

    @pytest.mark.asyncio
    async def test_ingest_empty_upstream_leaves_store_unchanged(self, service, store, upstream):
        await _seed(store, (3136702, "Juiz de Fora"))
        upstream.payload = []

        result = await service.ingest()

        assert result.is_empty
        assert await store.list_all() == [Municipality(id=3136702, nome="Juiz de Fora")]

    @pytest.mark.asyncio
    async def test_ingest_upstream_error_fails_and_leaves_store_unchanged(self, service, store, upstream):
        upstream.status_code = 503

        result = await service.ingest()

        assert result.is_failed
        assert "503" in result.reason
        assert await store.count() == 0

    @pytest.mark.asyncio
    async def test_ingest_twice_does_not_duplicate(self, service, store, ibge_payload):
        first = await service.ingest()
        second = await service.ingest()

        assert first.is_found
        assert second.is_found
        assert await store.count() == len(ibge_payload)

    @pytest.mark.asyncio
    async def test_ingest_store_failure(self, upstream):
        failing_store = AsyncMock()
        failing_store.insert_many.side_effect = StoreError("insert_many failed: locked")
        service = MunicipalityService(failing_store, upstream.client())

        result = await service.ingest()

        assert result.is_failed
        assert result.reason == "insert_many failed: locked"

    @pytest.mark.asyncio
    async def test_ingest_unexpected_error(self, store):
        client = AsyncMock()
        client.fetch.side_effect = ValueError("unexpected")
        service = MunicipalityService(store, client)

        result = await service.ingest()

        assert result.is_failed
        assert result.reason == "unexpected"


class TestReads:
    """Tests for list_all and get_by_id."""

    @pytest.mark.asyncio
    async def test_list_all_empty(self, service):
        assert (await service.list_all()).is_empty

    @pytest.mark.asyncio
    async def test_list_all_found(self, service, store):
        await _seed(store, (3106200, "Belo Horizonte"), (3118601, "Contagem"))

        result = await service.list_all()

        assert result.is_found
        assert len(result.data) == 2

    @pytest.mark.asyncio
    async def test_get_by_id(self, service, store):
        await _seed(store, (3106200, "Belo Horizonte"))

        result = await service.get_by_id(3106200)

        assert result.data == Municipality(id=3106200, nome="Belo Horizonte")

    @pytest.mark.asyncio
    async def test_get_by_id_missing(self, service):
        assert (await service.get_by_id(3106200)).is_empty

    @pytest.mark.asyncio
    async def test_list_all_store_failure(self, upstream):
        failing_store = AsyncMock()
        failing_store.list_all.side_effect = StoreError("list_all failed")
        service = MunicipalityService(failing_store, upstream.client())

        assert (await service.list_all()).is_failed


class TestUpdate:
    """Tests for update."""

    @pytest.mark.asyncio
    async def test_update_replaces_nome_and_keeps_id(self, service, store):
        await _seed(store, (3106200, "Belo Horizonte"))

        result = await service.update(3106200, {"id": 1, "nome": "BH"})

        assert result.data == Municipality(id=3106200, nome="BH")
        assert await store.find_by_id(1) is None
        assert (await store.find_by_id(3106200)).nome == "BH"

    @pytest.mark.asyncio
    async def test_update_accepts_case_insensitive_fields(self, service, store):
        await _seed(store, (3106200, "Belo Horizonte"))

        result = await service.update(3106200, {"NOME": "Belo Horizonte - MG"})

        assert result.data.nome == "Belo Horizonte - MG"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("payload", [None, {}, {"nome": ""}, {"id": 1}, "texto"])
    async def test_update_missing_id_is_empty_for_any_body(self, service, payload):
        assert (await service.update(9999, payload)).is_empty

    @pytest.mark.asyncio
    @pytest.mark.parametrize("payload", [None, {}, {"nome": ""}, {"id": 1}, "texto"])
    async def test_update_invalid_body_fails(self, service, store, payload):
        await _seed(store, (3106200, "Belo Horizonte"))

        result = await service.update(3106200, payload)

        assert result.is_failed
        assert (await store.find_by_id(3106200)).nome == "Belo Horizonte"

    @pytest.mark.asyncio
    async def test_update_record_removed_before_replace(self, upstream):
        racing_store = AsyncMock()
        racing_store.find_by_id.return_value = Municipality(id=3106200, nome="Belo Horizonte")
        racing_store.replace.return_value = None
        service = MunicipalityService(racing_store, upstream.client())

        assert (await service.update(3106200, {"nome": "BH"})).is_empty


class TestDeletes:
    """Tests for delete_all and delete_by_id."""

    @pytest.mark.asyncio
    async def test_delete_all(self, service, store):
        await _seed(store, (3106200, "Belo Horizonte"))

        assert (await service.delete_all()).is_found
        assert (await service.list_all()).is_empty

    @pytest.mark.asyncio
    async def test_delete_all_empty(self, service):
        assert (await service.delete_all()).is_empty

    @pytest.mark.asyncio
    async def test_delete_by_id_then_get_is_empty(self, service, store):
        await _seed(store, (3106200, "Belo Horizonte"))

        assert (await service.delete_by_id(3106200)).is_found
        assert (await service.get_by_id(3106200)).is_empty

    @pytest.mark.asyncio
    async def test_delete_by_id_missing(self, service):
        assert (await service.delete_by_id(3106200)).is_empty

    @pytest.mark.asyncio
    async def test_delete_store_failure(self, upstream):
        failing_store = AsyncMock()
        failing_store.delete_by_id.side_effect = StoreError("delete_by_id failed")
        service = MunicipalityService(failing_store, upstream.client())

        assert (await service.delete_by_id(3106200)).is_failed
