"""Provider selection by configured name.

``CaptureConfig.imagery_provider`` (``IMAGERY_PROVIDER``) names the
adapter; Sentinel Hub is the only one shipped.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ocean_capture.providers.base import ProviderError
from ocean_capture.providers.sentinel_hub import SentinelHubAdapter

if TYPE_CHECKING:
    from ocean_capture.models.imagery import ProviderConfig
    from ocean_capture.providers.base import ImageryProvider

logger = logging.getLogger(__name__)

SENTINEL_HUB = "sentinel_hub"

_ADAPTERS: dict[str, type[ImageryProvider]] = {SENTINEL_HUB: SentinelHubAdapter}


def get_provider(config: ProviderConfig) -> ImageryProvider:
    """Return the adapter named by ``config.name``, built from *config*.

    Raises:
        ProviderError: If no adapter has that name.
    """
    adapter_cls = _ADAPTERS.get(config.name)
    if adapter_cls is None:
        msg = f"Unknown imagery provider: {config.name!r}. Available: {', '.join(_ADAPTERS)}"
        raise ProviderError(provider=config.name, message=msg)

    logger.debug(
        "Creating imagery provider | name=%s | transport=%s",
        config.name,
        config.transport,
    )
    return adapter_cls(config)
