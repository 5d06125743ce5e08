"""Tests for provider selection by configured name."""

from __future__ import annotations

import unittest

from ocean_capture.core.config import CaptureConfig
from ocean_capture.models.imagery import ProviderConfig
from ocean_capture.providers.base import ProviderError
from ocean_capture.providers.factory import SENTINEL_HUB, get_provider
from ocean_capture.providers.sentinel_hub import SentinelHubAdapter
from ocean_capture.utils.helpers import build_provider_config


class TestGetProvider(unittest.TestCase):
    def test_sentinel_hub(self) -> None:
        provider = get_provider(ProviderConfig(name=SENTINEL_HUB))
        assert isinstance(provider, SentinelHubAdapter)
        assert provider.name == SENTINEL_HUB

    def test_passes_config_through(self) -> None:
        config = ProviderConfig(
            name=SENTINEL_HUB,
            api_base_url="https://sh.example.test",
            transport="streamed",
        )
        provider = get_provider(config)
        assert provider.config is config
        assert isinstance(provider, SentinelHubAdapter)
        assert provider.process_url == "https://sh.example.test/api/v1/process"

    def test_default_configuration_selects_sentinel_hub(self) -> None:
        provider = get_provider(build_provider_config(CaptureConfig()))
        assert isinstance(provider, SentinelHubAdapter)

    def test_unknown_provider(self) -> None:
        with self.assertRaises(ProviderError) as ctx:
            get_provider(ProviderConfig(name="landsat_direct"))
        assert "Unknown imagery provider" in str(ctx.exception)
        assert SENTINEL_HUB in str(ctx.exception)
        assert ctx.exception.provider == "landsat_direct"
