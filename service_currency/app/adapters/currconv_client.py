"""
Currency converter API client.
"""

from dataclasses import dataclass
from typing import Optional
import time

import httpx

from shared.logging import get_logger
from shared.errors import ExternalServiceError

CONVERT_PATH = "/api/v7/convert"


@dataclass(frozen=True)
class ProviderResponse:
    """Raw upstream response."""

    status_code: int
    body: bytes

    @property
    def ok(self) -> bool:
        return self.status_code == 200

    @property
    def text(self) -> str:
        return self.body.decode("utf-8", errors="replace").rstrip("\n")


class CurrencyConverterClient:
    """Client for the upstream currency conversion API."""

    def __init__(
        self,
        base_url: str,
        api_key: str,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.timeout = timeout
        self.logger = get_logger("currency.currconv_client")
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    def _get_client(self) -> httpx.AsyncClient:
        """Get the pooled HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                transport=self._transport,
            )
        return self._client

    async def close(self):
        """Close the pooled HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def fetch(self, pair_key: str) -> ProviderResponse:
        """Look up a pair key such as "USD_EUR".

        Returns the raw status and body. Raises ExternalServiceError when the
        request cannot be completed.
        """
        params = {
            "q": pair_key,
            "compact": "ultra",
            "apiKey": self.api_key,
        }

        start = time.perf_counter()
        try:
            response = await self._get_client().get(CONVERT_PATH, params=params)
        except httpx.HTTPError as e:
            message = str(e) or e.__class__.__name__
            self.logger.error(
                "Currency converter request failed",
                query=pair_key,
                error=message,
            )
            raise ExternalServiceError(
                service="currconv",
                message=message,
                details={"query": pair_key},
            )

        self.logger.debug(
            "Currency converter responded",
            query=pair_key,
            status_code=response.status_code,
            duration_ms=round((time.perf_counter() - start) * 1000, 2),
        )
        return ProviderResponse(status_code=response.status_code, body=response.content)
