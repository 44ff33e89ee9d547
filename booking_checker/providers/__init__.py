"""Carrier providers that check a single booking against the airline."""

from .azul import AzulProvider  # noqa: F401
from .base import (  # noqa: F401
    BrowserProviderConfig,
    CarrierProvider,
    HttpProvider,
    ProviderError,
    UnsupportedCarrierError,
)
from .gol import GolProvider  # noqa: F401
from .latam import LatamConfig, LatamProvider  # noqa: F401
from .registry import ProviderRegistry, UnsupportedHandler  # noqa: F401

__all__ = [
    "AzulProvider",
    "BrowserProviderConfig",
    "CarrierProvider",
    "GolProvider",
    "HttpProvider",
    "LatamConfig",
    "LatamProvider",
    "ProviderError",
    "ProviderRegistry",
    "UnsupportedCarrierError",
    "UnsupportedHandler",
]
