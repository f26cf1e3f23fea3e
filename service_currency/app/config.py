"""
Configuration for the currency service.

Settings are read once at startup from the environment (or `.env`) and the
resulting object is passed explicitly to the components that need it.
"""

from pathlib import Path
from typing import Any, Dict, Optional, Union

from pydantic import Field, field_validator

from shared.config import BaseConfig
from shared.errors import ConfigurationError
from shared.logging import get_logger

DEFAULT_CACHE_DURATION_MINUTES = 15
DEFAULT_PROVIDER_BASE_URL = "https://free.currconv.com"
MAX_API_KEY_LENGTH = 4096

logger = get_logger("currency.config")


class CurrencyServiceConfig(BaseConfig):
    """Currency service configuration."""

    # Upstream provider
    api_key_file: Optional[str] = Field(default=None, validation_alias="FREE_CURRCONV_API_KEY_FILE")
    provider_base_url: str = Field(default=DEFAULT_PROVIDER_BASE_URL, validation_alias="CURRCONV_BASE_URL")
    provider_timeout_seconds: float = Field(default=10.0, validation_alias="CURRCONV_TIMEOUT_SECONDS")

    # Cache; an empty server address disables caching
    redis_server: str = Field(default="", validation_alias="REDIS_SERVER_AND_PORT")
    cache_duration_minutes: int = Field(
        default=DEFAULT_CACHE_DURATION_MINUTES,
        validation_alias="REDIS_CACHE_DURATION_IN_MINUTES",
    )
    cache_timeout_seconds: float = Field(default=2.0, validation_alias="REDIS_TIMEOUT_SECONDS")

    @field_validator("cache_duration_minutes", mode="before")
    @classmethod
    def _fallback_cache_duration(cls, value: Any) -> int:
        try:
            minutes = int(str(value).strip())
        except (TypeError, ValueError):
            minutes = 0

        if minutes <= 0:
            logger.warning(
                "Invalid cache duration, using default",
                value=value,
                default_minutes=DEFAULT_CACHE_DURATION_MINUTES,
            )
            return DEFAULT_CACHE_DURATION_MINUTES
        return minutes

    @property
    def cache_ttl_seconds(self) -> int:
        return self.cache_duration_minutes * 60

    @property
    def redis_url(self) -> Optional[str]:
        """Redis URL, or None when caching is disabled."""
        server = self.redis_server.strip()
        if not server:
            return None
        if "://" in server:
            return server
        return f"redis://{server}"

    def describe(self) -> Dict[str, Any]:
        """Effective settings for the startup log."""
        return {
            "env": self.env,
            "host": self.host,
            "port": self.port,
            "api_key_file": self.api_key_file,
            "provider_base_url": self.provider_base_url,
            "provider_timeout_seconds": self.provider_timeout_seconds,
            "redis_server": self.redis_server or None,
            "cache_duration_minutes": self.cache_duration_minutes,
            "cache_timeout_seconds": self.cache_timeout_seconds,
        }


def load_api_key(path: Optional[Union[str, Path]]) -> str:
    """Read the provider credential from the first line of a file."""
    if not path:
        raise ConfigurationError("FREE_CURRCONV_API_KEY_FILE is not set")

    try:
        with open(path, "r", encoding="utf-8") as handle:
            first_line = handle.readline()
    except OSError as e:
        raise ConfigurationError(
            f"Can't read file ({path}) where api key should be stored",
            details={"error": str(e)},
        )

    api_key = first_line.strip()
    if not api_key:
        raise ConfigurationError(f"API key file ({path}) is empty")
    if len(api_key) > MAX_API_KEY_LENGTH:
        raise ConfigurationError("API key is longer than expected")

    return api_key


def mask_secret(secret: str) -> str:
    """Mask all but the last four characters."""
    if len(secret) <= 4:
        return "*" * len(secret)
    return "*" * (len(secret) - 4) + secret[-4:]


def get_config(**overrides: Any) -> CurrencyServiceConfig:
    """Build the service configuration from the environment."""
    return CurrencyServiceConfig(**overrides)
