"""
Database module for the municipios API.

Provides the SQLAlchemy async connection, the municipality model and
repository, and the process-wide `MunicipalityStore`.
"""
from municipios_api.database.connection import (
    Base,
    create_engine,
    create_session_maker,
    create_tables,
    session_scope,
)
from municipios_api.database.repositories import (
    BaseRepository,
    MunicipalityRepository,
)
from municipios_api.database.store import MunicipalityStore, StoreError

__all__ = [
    # Connection
    "Base",
    "create_engine",
    "create_session_maker",
    "create_tables",
    "session_scope",
    # Repositories
    "BaseRepository",
    "MunicipalityRepository",
    # Store
    "MunicipalityStore",
    "StoreError",
]
