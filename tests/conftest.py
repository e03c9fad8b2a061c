"""
Pytest configuration and shared fixtures.

This module provides common fixtures for all tests of the municipios API:
sample IBGE payloads, a fake IBGE upstream served through
`httpx.MockTransport`, a fresh in-memory store and an API test client.
"""

import pytest
import pytest_asyncio
from typing import Any, Callable, List, Optional

import httpx
from fastapi.testclient import TestClient

# Add the project root to Python path
import sys
from pathlib import Path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from municipios_api.database.store import MunicipalityStore
from municipios_api.dependencies import get_ibge_client
from municipios_api.services.ibge_client import IBGEClient

TEST_IBGE_URL = "https://ibge.test/api/v1/localidades/estados/MG/municipios"
IN_MEMORY_URL = "sqlite+aiosqlite:///:memory:"


def ibge_item(id: int, nome: str) -> dict:
    """Build an item shaped like the IBGE localities response."""
    return {
        "id": id,
        "nome": nome,
        "microrregiao": {
            "id": 31030,
            "nome": "Belo Horizonte",
            "mesorregiao": {
                "id": 3107,
                "nome": "Metropolitana de Belo Horizonte",
                "UF": {
                    "id": 31,
                    "sigla": "MG",
                    "nome": "Minas Gerais",
                    "regiao": {"id": 3, "sigla": "SE", "nome": "Sudeste"},
                },
            },
        },
        "regiao-imediata": {
            "id": 310001,
            "nome": "Belo Horizonte",
        },
    }


@pytest.fixture
def ibge_payload() -> List[dict]:
    """Provide a small IBGE response for Minas Gerais."""
    return [
        ibge_item(3106200, "Belo Horizonte"),
        ibge_item(3170206, "Uberlândia"),
        ibge_item(3118601, "Contagem"),
    ]


class FakeUpstream:
    """
    Fake IBGE endpoint for `httpx.MockTransport`.

    Answers with `status_code` and `payload` (or `body` as raw text), or
    raises `error` to simulate a transport failure.
    """

    def __init__(self, payload: Any = None):
        self.payload = payload if payload is not None else []
        self.status_code = 200
        self.body: Optional[str] = None
        self.error: Optional[Callable[[httpx.Request], Exception]] = None
        self.calls = 0

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.calls += 1
        if self.error is not None:
            raise self.error(request)
        if self.body is not None:
            return httpx.Response(self.status_code, text=self.body)
        return httpx.Response(self.status_code, json=self.payload)

    def client(self) -> IBGEClient:
        return IBGEClient(url=TEST_IBGE_URL, timeout=5.0, transport=httpx.MockTransport(self))


@pytest.fixture
def ibge_url() -> str:
    return TEST_IBGE_URL


@pytest.fixture
def make_upstream() -> Callable[..., FakeUpstream]:
    """Factory for fake upstreams with a custom payload."""
    return FakeUpstream


@pytest.fixture
def upstream(ibge_payload) -> FakeUpstream:
    return FakeUpstream(payload=ibge_payload)


@pytest_asyncio.fixture
async def store():
    """Provide a fresh, empty in-memory store."""
    store = MunicipalityStore.from_settings(IN_MEMORY_URL)
    await store.init()
    yield store
    await store.close()


@pytest.fixture
def api_client(upstream):
    """Create a test client whose IBGE calls hit the fake upstream."""
    from municipios_api.config.settings import reset_settings
    from municipios_api.main import app

    reset_settings()

    app.dependency_overrides[get_ibge_client] = upstream.client

    with TestClient(app) as client:
        yield client

    app.dependency_overrides.clear()
