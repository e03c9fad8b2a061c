"""Services module."""
from municipios_api.services.ibge_client import (
    FetchError,
    IBGEClient,
    MalformedPayload,
    TransportFailure,
    UpstreamUnavailable,
)
from municipios_api.services.municipality_service import MunicipalityService
from municipios_api.services.operation_result import OperationResult, ResultStatus

__all__ = [
    "FetchError",
    "IBGEClient",
    "MalformedPayload",
    "TransportFailure",
    "UpstreamUnavailable",
    "MunicipalityService",
    "OperationResult",
    "ResultStatus",
]
