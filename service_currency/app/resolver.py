"""
Cache-aside resolution of currency pairs.

A lookup first asks the rate cache. On a miss the upstream provider is
queried once, its response is interpreted, and a successful rate is written
back to the cache. The provider answers either

    200: {"<FROM>_<TO>": <rate>}
    4xx: {"status": <status_code>, "error": "<message>"}
"""

import time
from typing import TYPE_CHECKING, Dict, Optional

from pydantic import ConfigDict, TypeAdapter, ValidationError as PydanticValidationError

from shared.errors import MissingResultError, ProviderError, ResponseParseError, ServiceException
from shared.logging import get_logger

from .adapters.currconv_client import CurrencyConverterClient, ProviderResponse
from .cache.redis_cache import RateCache
from .models import CurrencyPair, ExchangeRate, ProviderErrorBody

if TYPE_CHECKING:  # pragma: no cover - imported for typing only
    from shared.metrics import MetricsCollector


# Rates must be finite JSON numbers; no coercion from other JSON types.
_RATES_ADAPTER = TypeAdapter(Dict[str, float], config=ConfigDict(strict=True, allow_inf_nan=False))


class ConversionResolver:
    """Answers a single currency-pair query."""

    def __init__(
        self,
        provider: CurrencyConverterClient,
        cache: Optional[RateCache] = None,
        *,
        metrics: Optional["MetricsCollector"] = None,
    ):
        self.provider = provider
        self.cache = cache
        self.metrics = metrics
        self.logger = get_logger("currency.resolver")

    async def resolve(self, pair: CurrencyPair) -> ExchangeRate:
        """Resolve the exchange rate for a pair.

        Raises a ServiceException subclass when the provider cannot supply a
        rate. Cache failures never surface here.
        """
        pair_key = pair.pair_key

        cached_rate = await self._read_cache(pair_key)
        if cached_rate is not None:
            self.logger.info("Serving rate", api="GetCurrency", action="UsingRedisCache", query=pair_key)
            return ExchangeRate.for_pair(pair, cached_rate)

        self.logger.info("Fetching rate", api="GetCurrency", action="UsingCurrConv", query=pair_key)
        rate = await self._fetch_rate(pair_key)

        if self.cache is not None and not await self.cache.set_rate(pair_key, rate):
            self._count("cache_write_failures_total", cache_type="rate")

        return ExchangeRate.for_pair(pair, rate)

    async def _read_cache(self, pair_key: str) -> Optional[float]:
        if self.cache is None:
            return None

        cached_rate = await self.cache.get_rate(pair_key)
        if cached_rate is None:
            self._count("cache_misses_total", cache_type="rate")
        else:
            self._count("cache_hits_total", cache_type="rate")
        return cached_rate

    async def _fetch_rate(self, pair_key: str) -> float:
        start = time.perf_counter()
        outcome = "transport_error"
        try:
            response = await self.provider.fetch(pair_key)
            outcome = "success" if response.ok else "provider_error"
            rate = self._interpret(pair_key, response)
        except ServiceException as e:
            if outcome == "success":
                outcome = "invalid_response"
            self.logger.warning("Rate lookup failed", query=pair_key, code=e.code, error=e.message)
            raise
        finally:
            self._count("provider_requests_total", outcome=outcome)
            if self.metrics:
                self.metrics.observe_histogram("provider_request_duration_seconds", time.perf_counter() - start)

        return rate

    def _interpret(self, pair_key: str, response: ProviderResponse) -> float:
        """Turn a raw provider response into a rate or raise."""
        if not response.ok:
            try:
                error_body = ProviderErrorBody.model_validate_json(response.body)
            except PydanticValidationError as e:
                self.logger.error(
                    "Unknown provider error format",
                    status_code=response.status_code,
                    body=response.text,
                )
                raise ResponseParseError(_describe(e), details={"status_code": response.status_code})

            self.logger.warning(
                "Provider reported an error",
                status_code=response.status_code,
                body=response.text,
            )
            raise ProviderError(
                error_body.error,
                details={"status_code": response.status_code, "provider_status": error_body.status},
            )

        try:
            rates = _RATES_ADAPTER.validate_json(response.body)
        except PydanticValidationError as e:
            self.logger.error("Unparseable provider result", body=response.text)
            raise ResponseParseError(_describe(e))

        if pair_key not in rates:
            raise MissingResultError(pair_key, details={"keys": sorted(rates)})

        return rates[pair_key]

    def _count(self, metric_name: str, **labels):
        if self.metrics:
            self.metrics.increment_counter(metric_name, **labels)


def _describe(error: PydanticValidationError) -> str:
    """First validation failure, without the offending input."""
    return error.errors()[0]["msg"]
