"""
Adapters package for the Currency Service.

Contains HTTP client wrappers for external dependencies. Adapters return
raw upstream responses; interpreting them is the resolver's job.
"""

from .currconv_client import CurrencyConverterClient, ProviderResponse

__all__ = [
    "CurrencyConverterClient",
    "ProviderResponse",
]
