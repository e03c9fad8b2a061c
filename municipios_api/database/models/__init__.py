"""
SQLAlchemy models for the municipios API.
"""
from municipios_api.database.models.municipality import MunicipalityRecord

__all__ = [
    "MunicipalityRecord",
]
