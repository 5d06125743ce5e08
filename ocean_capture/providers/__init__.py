"""Imagery provider adapters.

- ImageryProvider: Abstract base class defining the interface
- SentinelHubAdapter: Sentinel Hub Process API (OAuth2 + render endpoint)
- get_provider: Builds the adapter named in configuration
"""

from ocean_capture.providers.base import (
    ImageryProvider,
    ProviderAuthError,
    ProviderError,
    ProviderRequestFailed,
)
from ocean_capture.providers.factory import SENTINEL_HUB, get_provider
from ocean_capture.providers.sentinel_hub import SentinelHubAdapter

__all__ = [
    "SENTINEL_HUB",
    "ImageryProvider",
    "ProviderAuthError",
    "ProviderError",
    "ProviderRequestFailed",
    "SentinelHubAdapter",
    "get_provider",
]
