"""Tests for shared constants and helper functions."""

from __future__ import annotations

import unittest
from datetime import UTC, datetime

from ocean_capture.core.config import CaptureConfig
from ocean_capture.core.constants import (
    DEFAULT_OUTPUT_PATH,
    DEFAULT_REGION_BBOX,
    OUTPUT_HEIGHT_PX,
    OUTPUT_WIDTH_PX,
    TRANSPORTS,
)
from ocean_capture.utils.helpers import build_provider_config, utc_now


class TestConstants(unittest.TestCase):
    def test_default_region(self) -> None:
        assert DEFAULT_REGION_BBOX == (-50.0, -10.0, -49.0, -9.0)

    def test_output_size(self) -> None:
        assert (OUTPUT_WIDTH_PX, OUTPUT_HEIGHT_PX) == (512, 512)

    def test_default_output_path(self) -> None:
        assert DEFAULT_OUTPUT_PATH == "./oceano.png"

    def test_transports(self) -> None:
        assert set(TRANSPORTS) == {"buffered", "streamed", "async"}


class TestBuildProviderConfig(unittest.TestCase):
    def test_defaults(self) -> None:
        config = build_provider_config(CaptureConfig())
        assert config.name == "sentinel_hub"
        assert config.api_base_url == "https://services.sentinel-hub.com"
        assert config.token_url.endswith("/protocol/openid-connect/token")
        assert config.transport == "buffered"

    def test_carries_overrides(self) -> None:
        config = build_provider_config(
            CaptureConfig(
                imagery_provider="custom",
                base_url="https://sh.example.test",
                token_url="https://auth.example.test/token",
                transport="async",
            )
        )
        assert config.name == "custom"
        assert config.api_base_url == "https://sh.example.test"
        assert config.token_url == "https://auth.example.test/token"
        assert config.transport == "async"


class TestUtcNow(unittest.TestCase):
    def test_is_aware_utc(self) -> None:
        now = utc_now()
        assert now.tzinfo is UTC

    def test_is_current(self) -> None:
        before = datetime.now(UTC)
        now = utc_now()
        after = datetime.now(UTC)
        assert before <= now <= after
