"""
Currency service for exchange-rate lookups.
"""

from typing import Dict, Optional

from fastapi import Path
from pydantic import ValidationError as PydanticValidationError

from shared.base_service import BaseService
from shared.errors import ValidationError

from .adapters.currconv_client import CurrencyConverterClient
from .cache.redis_cache import RateCache
from .config import CurrencyServiceConfig, get_config, load_api_key, mask_secret
from .models import CurrencyPair, ExchangeRate
from .resolver import ConversionResolver


class CurrencyService(BaseService):
    """Currency service implementation."""

    def __init__(
        self,
        config: Optional[CurrencyServiceConfig] = None,
        *,
        api_key: Optional[str] = None,
        provider: Optional[CurrencyConverterClient] = None,
        cache: Optional[RateCache] = None,
    ):
        config = config or get_config()
        super().__init__("currency", config)

        # The credential is read once; a missing or unreadable file stops startup
        if provider is None:
            api_key = api_key or load_api_key(config.api_key_file)
            provider = CurrencyConverterClient(
                config.provider_base_url,
                api_key,
                timeout=config.provider_timeout_seconds,
            )
        self.provider = provider

        if cache is None and config.redis_url:
            cache = RateCache(
                config.redis_url,
                ttl_seconds=config.cache_ttl_seconds,
                timeout_seconds=config.cache_timeout_seconds,
            )
        self.cache = cache

        self.resolver = ConversionResolver(self.provider, self.cache, metrics=self.metrics)

        self.logger.info(
            "Currency service configured",
            api_key=mask_secret(self.provider.api_key),
            cache_enabled=self.cache is not None,
            **config.describe()
        )

        self._setup_currency_routes()

    def _setup_currency_routes(self):
        """Set up currency-specific routes."""

        @self.app.on_event("startup")
        async def _startup():
            await self.start()

        @self.app.on_event("shutdown")
        async def _shutdown():
            await self.stop()

        @self.app.get("/")
        async def root():
            """Root endpoint."""
            return {
                "service": "currency",
                "message": "Currency conversion lookup service",
                "version": "1.0.0",
                "capabilities": ["conversion", "caching"] if self.cache else ["conversion"]
            }

        @self.app.get(
            "/api/v1/currency/{from_currency}/{to_currency}",
            response_model=ExchangeRate,
        )
        async def get_currency(
            from_currency: str = Path(..., description="Currency to convert from, e.g. USD"),
            to_currency: str = Path(..., description="Currency to convert to, e.g. EUR"),
        ):
            """Get the exchange rate from one currency to another."""
            try:
                pair = CurrencyPair(from_currency=from_currency, to_currency=to_currency)
            except PydanticValidationError as e:
                raise ValidationError(str(e))

            return await self.resolver.resolve(pair)

    async def _check_dependencies(self) -> Dict[str, str]:
        """Check service dependencies."""
        if self.cache is None:
            return {"redis": "disabled"}
        return {"redis": "ok" if await self.cache.health_check() else "error"}

    async def start(self):
        """Start currency service components."""
        if self.cache is not None:
            await self.cache.start()
        self.logger.info("Currency service started")

    async def stop(self):
        """Stop currency service components."""
        await self.provider.close()
        if self.cache is not None:
            await self.cache.stop()
        self.logger.info("Currency service stopped")


def create_app(config: Optional[CurrencyServiceConfig] = None):
    """Create currency service application."""
    service = CurrencyService(config)
    return service.app


def main():
    """Console entry point."""
    service = CurrencyService()
    service.run()


if __name__ == "__main__":
    main()
