"""
IBGE API client.

Fetches the municipality list from the IBGE localities service. Every call
performs one GET; nothing is cached and nothing is retried.
"""

import json
import logging
from typing import Any, List, Optional

import httpx
from pydantic import ValidationError

from municipios_api.config.settings import get_settings
from municipios_api.models.municipality_models import Municipality

logger = logging.getLogger(__name__)


class FetchError(Exception):
    """Base class for failures reaching or reading the IBGE API."""


class UpstreamUnavailable(FetchError):
    """IBGE answered with a non-success status."""

    def __init__(self, status_code: int):
        self.status_code = status_code
        super().__init__(f"IBGE API returned status {status_code}")


class TransportFailure(FetchError):
    """The request never got an HTTP answer (timeout, DNS, refused connection)."""


class MalformedPayload(FetchError):
    """The response body is not a JSON array of municipalities."""


def parse_municipalities(data: Any) -> List[Municipality]:
    """
    Parse a decoded IBGE payload.

    Field names are matched case-insensitively and unknown fields such as
    `microrregiao` are ignored. Any element missing `id` or `nome` rejects
    the whole payload.

    Raises:
        MalformedPayload: if the payload shape does not match
    """
    if not isinstance(data, list):
        raise MalformedPayload(f"Expected a JSON array, got {type(data).__name__}")

    municipalities = []
    for index, item in enumerate(data):
        if not isinstance(item, dict):
            raise MalformedPayload(f"Item {index} is not a JSON object")
        try:
            municipalities.append(Municipality.model_validate(item))
        except ValidationError as e:
            raise MalformedPayload(f"Item {index} is not a valid municipality: {e}") from e

    return municipalities


class IBGEClient:
    """Client for the IBGE municipalities endpoint."""

    def __init__(
        self,
        url: str,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Args:
            url: Endpoint returning the municipality list
            timeout: Request timeout in seconds
            transport: Optional httpx transport (used by tests)
        """
        self.url = url
        self.timeout = timeout
        self._transport = transport

    @classmethod
    def from_settings(cls) -> "IBGEClient":
        settings = get_settings()
        return cls(url=settings.ibge_municipios_url, timeout=settings.ibge_timeout_seconds)

    async def fetch(self) -> List[Municipality]:
        """
        Fetch all municipalities from the IBGE API.

        Returns:
            List of Municipality objects, possibly empty

        Raises:
            UpstreamUnavailable: non-2xx response
            TransportFailure: network-level failure
            MalformedPayload: body is not a list of municipalities
        """
        logger.info(f"Fetching municipalities from IBGE: {self.url}")

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.get(self.url)
        except httpx.TransportError as e:
            logger.error(f"Failed to reach IBGE API: {e!r}")
            raise TransportFailure(str(e) or e.__class__.__name__) from e

        if not response.is_success:
            logger.error(f"IBGE API error: {response.status_code} - {response.text[:300]}")
            raise UpstreamUnavailable(response.status_code)

        try:
            data = response.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise MalformedPayload(f"Response is not valid JSON: {e}") from e

        municipalities = parse_municipalities(data)
        logger.info(f"Fetched {len(municipalities)} municipalities from IBGE")
        return municipalities
