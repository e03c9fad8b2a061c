"""
Configuration settings for the municipios API using Pydantic Settings.

This module centralizes the configuration for the upstream IBGE endpoint,
the record store and the HTTP server, loaded from environment variables
(or a `.env` file) with proper type checking and defaults.
"""

from pydantic import Field
from pydantic_settings import BaseSettings
from typing import Optional, Dict, Any


class MunicipiosSettings(BaseSettings):
    """
    Settings for the municipios API.

    Uses Pydantic Settings to load and validate configuration from
    environment variables with proper type checking and defaults.
    """

    # Upstream IBGE API
    ibge_municipios_url: str = Field(
        default="https://servicodados.ibge.gov.br/api/v1/localidades/estados/MG/municipios",
        alias="IBGE_MUNICIPIOS_URL",
        description="IBGE endpoint returning the municipality list"
    )
    ibge_timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        alias="IBGE_TIMEOUT_SECONDS",
        description="Timeout for the outbound IBGE request in seconds"
    )

    # Record store
    database_url: str = Field(
        default="sqlite+aiosqlite:///:memory:",
        alias="MUNICIPIOS_DATABASE_URL",
        description="SQLAlchemy async URL of the record store (in-memory by default)"
    )

    # API server
    host: str = Field(
        default="127.0.0.1",
        alias="MUNICIPIOS_HOST",
        description="API server host"
    )
    port: int = Field(
        default=8000,
        alias="MUNICIPIOS_PORT",
        description="API server port"
    )
    log_config: Optional[str] = Field(
        default=None,
        alias="MUNICIPIOS_LOG_CONFIG",
        description="Path to a YAML logging configuration"
    )

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "env_prefix": "",
        "extra": "ignore",  # Allow extra fields from .env but ignore them
    }

    def to_dict(self) -> Dict[str, Any]:
        """Convert settings to dictionary."""
        return self.model_dump()


# Global settings instance
_settings: Optional[MunicipiosSettings] = None


def get_settings() -> MunicipiosSettings:
    """
    Get global settings instance (singleton pattern).

    Returns:
        Validated MunicipiosSettings instance
    """
    global _settings
    if _settings is None:
        _settings = MunicipiosSettings()
    return _settings


def reset_settings() -> None:
    """Reset global settings (useful for testing)."""
    global _settings
    _settings = None
