"""IBGE municipalities ingestion and maintenance API."""

__version__ = "0.1.0"
