"""Shared helper functions used across activity modules."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING

from ocean_capture.models.imagery import ProviderConfig

if TYPE_CHECKING:
    from ocean_capture.core.config import CaptureConfig


def build_provider_config(config: CaptureConfig) -> ProviderConfig:
    """Build the ``ProviderConfig`` for the provider named in *config*."""
    return ProviderConfig(
        name=config.imagery_provider,
        api_base_url=config.base_url,
        token_url=config.resolved_token_url,
        transport=config.transport,
    )


def utc_now() -> datetime:
    """Return the current time as a timezone-aware UTC ``datetime``.

    Module-level so tests can patch the clock in one place.
    """
    return datetime.now(UTC)
