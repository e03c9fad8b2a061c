"""
Repository classes for database operations.
"""
from municipios_api.database.repositories.base import BaseRepository
from municipios_api.database.repositories.municipality import MunicipalityRepository

__all__ = [
    "BaseRepository",
    "MunicipalityRepository",
]
