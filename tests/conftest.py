"""Shared pytest fixtures for the ocean capture test suite."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

import pytest

from ocean_capture.models.imagery import ProviderConfig
from ocean_capture.providers.base import ImageryProvider

# ---------------------------------------------------------------------------
# Clock
# ---------------------------------------------------------------------------

FIXED_NOW = datetime(2026, 3, 15, 12, 0, 0, tzinfo=UTC)

PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"
FAKE_PNG = PNG_SIGNATURE + b"\x00" * 120


@pytest.fixture()
def fixed_now() -> datetime:
    """Invocation time pinned for deterministic temporal windows."""
    return FIXED_NOW


# ---------------------------------------------------------------------------
# Provider double
# ---------------------------------------------------------------------------


class FakeProvider(ImageryProvider):
    """In-memory provider recording every call.

    ``image`` is returned verbatim from ``request_image`` so tests can
    exercise each response shape.
    """

    def __init__(
        self,
        image: object = FAKE_PNG,
        token: str = "exchanged-token",
        *,
        image_error: Exception | None = None,
        token_error: Exception | None = None,
    ) -> None:
        super().__init__(ProviderConfig(name="fake"))
        self.image = image
        self.token = token
        self.image_error = image_error
        self.token_error = token_error
        self.token_calls: list[tuple[str, str]] = []
        self.image_calls: list[tuple[Any, Any]] = []

    def request_token(self, client_id: str, client_secret: str) -> str:
        self.token_calls.append((client_id, client_secret))
        if self.token_error is not None:
            raise self.token_error
        return self.token

    def request_image(self, request: Any, credential: Any) -> object:
        self.image_calls.append((request, credential))
        if self.image_error is not None:
            raise self.image_error
        return self.image


@pytest.fixture()
def fake_provider() -> FakeProvider:
    return FakeProvider()
