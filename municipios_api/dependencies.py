"""
FastAPI dependencies wiring the process-wide collaborators.

The store and the IBGE client are created once in the application
lifespan and kept on `app.state`.
"""
from fastapi import Depends, Request

from municipios_api.database.store import MunicipalityStore
from municipios_api.services.ibge_client import IBGEClient
from municipios_api.services.municipality_service import MunicipalityService


def get_store(request: Request) -> MunicipalityStore:
    return request.app.state.store


def get_ibge_client(request: Request) -> IBGEClient:
    return request.app.state.ibge_client


def get_municipality_service(
    store: MunicipalityStore = Depends(get_store),
    client: IBGEClient = Depends(get_ibge_client),
) -> MunicipalityService:
    return MunicipalityService(store, client)
