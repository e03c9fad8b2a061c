"""
Router for the /municipios resource.

Endpoints:
- POST /municipios - Ingest municipalities from IBGE into the store
- GET /municipios - List stored municipalities
- GET /municipios/{id} - Get a stored municipality
- PUT /municipios/{id} - Replace a stored municipality
- DELETE /municipios - Remove every stored municipality
- DELETE /municipios/{id} - Remove a stored municipality

Found results map to 200 (with data) or 204, empty results to 404 and
failures to 400 with the raw error text.
"""

import logging
from typing import Any, List

from fastapi import APIRouter, Body, Depends, HTTPException, Path, status
from fastapi.responses import Response

from municipios_api.dependencies import get_municipality_service
from municipios_api.models.municipality_models import Municipality
from municipios_api.services.municipality_service import MunicipalityService
from municipios_api.services.operation_result import OperationResult, ResultStatus

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/municipios", tags=["Municípios"])

NOT_FOUND_DETAIL = "Nenhum município encontrado"


def _raise_unless_found(result: OperationResult) -> None:
    if result.status is ResultStatus.EMPTY:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND_DETAIL)
    if result.status is ResultStatus.FAILED:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=result.reason)


def _no_content(result: OperationResult) -> Response:
    _raise_unless_found(result)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
async def ingest_municipalities(
    service: MunicipalityService = Depends(get_municipality_service),
):
    """
    Fetch municipalities from IBGE and store the ones not stored yet.

    Re-running the ingest never duplicates ids.
    """
    return _no_content(await service.ingest())


@router.get("", response_model=List[Municipality])
async def list_municipalities(
    service: MunicipalityService = Depends(get_municipality_service),
):
    result = await service.list_all()
    _raise_unless_found(result)
    return result.data


@router.get("/{id}", response_model=Municipality)
async def get_municipality(
    id: int = Path(..., description="IBGE municipality code"),
    service: MunicipalityService = Depends(get_municipality_service),
):
    result = await service.get_by_id(id)
    _raise_unless_found(result)
    return result.data


@router.put("/{id}", response_model=Municipality)
async def update_municipality(
    id: int = Path(..., description="IBGE municipality code"),
    payload: Any = Body(None, examples=[{"id": 3170206, "nome": "Uberlândia"}]),
    service: MunicipalityService = Depends(get_municipality_service),
):
    """
    Replace the stored municipality `id` with the body.

    The stored id is kept even if the body carries another one.
    """
    result = await service.update(id, payload)
    _raise_unless_found(result)
    return result.data


@router.delete("", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
async def delete_all_municipalities(
    service: MunicipalityService = Depends(get_municipality_service),
):
    return _no_content(await service.delete_all())


@router.delete("/{id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
async def delete_municipality(
    id: int = Path(..., description="IBGE municipality code"),
    service: MunicipalityService = Depends(get_municipality_service),
):
    return _no_content(await service.delete_by_id(id))
