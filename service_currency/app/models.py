"""
Data models for the currency service.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class CurrencyPair(BaseModel):
    """Ordered pair of currency codes, normalized to upper case."""

    model_config = ConfigDict(frozen=True)

    from_currency: str = Field(min_length=1)
    to_currency: str = Field(min_length=1)

    @field_validator("from_currency", "to_currency", mode="before")
    @classmethod
    def _upper(cls, value):
        if isinstance(value, str):
            return value.upper()
        return value

    @property
    def pair_key(self) -> str:
        """Key used for both the provider query and the cache entry."""
        return f"{self.from_currency}_{self.to_currency}"


class ExchangeRate(BaseModel):
    """Conversion rate returned to callers."""

    model_config = ConfigDict(populate_by_name=True)

    from_currency: str = Field(alias="From")
    to_currency: str = Field(alias="To")
    rate: float = Field(alias="Rate")

    @classmethod
    def for_pair(cls, pair: CurrencyPair, rate: float) -> "ExchangeRate":
        return cls(from_currency=pair.from_currency, to_currency=pair.to_currency, rate=rate)


class ProviderErrorBody(BaseModel):
    """Error body returned by the provider on a non-success status.

    Shape: {"status": <int>, "error": "<message>"}
    """

    model_config = ConfigDict(extra="ignore", strict=True)

    status: Optional[int] = None
    error: str = ""
