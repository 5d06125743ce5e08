"""Capture configuration loaded from environment variables.

The CLI loads a ``.env`` file (if present) before calling
``CaptureConfig.from_env()``; the process environment is otherwise the
source of truth.

Fail-fast validation:
    ``from_env()`` raises ``ConfigValidationError`` if a value is out of
    its valid range, so bad configuration is caught before any network
    activity.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field, replace

from ocean_capture.core.constants import (
    DEFAULT_LOOKBACK_DAYS,
    DEFAULT_SENTINELHUB_BASE_URL,
    ENV_ACCESS_TOKEN,
    ENV_CLIENT_ID,
    ENV_CLIENT_SECRET,
    ENV_MODE,
    TOKEN_PATH,
    TRANSPORT_BUFFERED,
    TRANSPORTS,
)
from ocean_capture.core.exceptions import ValidationError


class ConfigValidationError(ValidationError):
    """Raised when configuration values are out of valid range.

    Attributes:
        key: The configuration key that failed validation.
        value: The invalid value.
        message: Human-readable description of the valid range.
    """

    default_stage = "config"
    default_code = "CONFIG_VALIDATION_FAILED"

    def __init__(self, key: str, value: object, message: str) -> None:
        self.key = key
        self.value = value
        super().__init__(f"Invalid configuration {key}={value!r}: {message}")


@dataclass(frozen=True, slots=True)
class CaptureConfig:
    """Immutable capture configuration.

    Loaded once per run and threaded through the pipeline.

    Attributes:
        access_token: Explicit bearer token (empty when not supplied).
        client_id: OAuth2 client identifier for the token exchange.
        client_secret: OAuth2 client secret for the token exchange.
        mode: Raw acquisition mode flag (``"oil"`` or ``"plastic"``).
        lookback_days: Length of the temporal window in days.
        imagery_provider: Registered provider adapter name.
        base_url: Sentinel Hub services root URL.
        token_url: OAuth2 token endpoint (derived from ``base_url`` if empty).
        transport: Response transport (``buffered``, ``streamed`` or ``async``).
    """

    access_token: str = field(default="", repr=False)
    client_id: str = ""
    client_secret: str = field(default="", repr=False)
    mode: str = ""
    lookback_days: int = DEFAULT_LOOKBACK_DAYS
    imagery_provider: str = "sentinel_hub"
    base_url: str = DEFAULT_SENTINELHUB_BASE_URL
    token_url: str = ""
    transport: str = TRANSPORT_BUFFERED

    @property
    def resolved_token_url(self) -> str:
        """Return the token endpoint, defaulting to the Sentinel Hub realm."""
        return self.token_url or f"{self.base_url.rstrip('/')}{TOKEN_PATH}"

    @property
    def has_client_credentials(self) -> bool:
        """True when both halves of the client-credential pair are present."""
        return bool(self.client_id and self.client_secret)

    @classmethod
    def from_env(cls) -> CaptureConfig:
        """Load and validate configuration from environment variables.

        Raises:
            ConfigValidationError: If a value is out of range.
            ValueError: If ``IMAGERY_LOOKBACK_DAYS`` is not an integer.
        """
        config = cls(
            access_token=os.getenv(ENV_ACCESS_TOKEN, ""),
            client_id=_first_env(ENV_CLIENT_ID),
            client_secret=_first_env(ENV_CLIENT_SECRET),
            mode=os.getenv(ENV_MODE, ""),
            lookback_days=int(os.getenv("IMAGERY_LOOKBACK_DAYS", str(DEFAULT_LOOKBACK_DAYS))),
            imagery_provider=os.getenv("IMAGERY_PROVIDER", "sentinel_hub"),
            base_url=os.getenv("SENTINELHUB_BASE_URL", DEFAULT_SENTINELHUB_BASE_URL),
            token_url=os.getenv("SENTINELHUB_TOKEN_URL", ""),
            transport=os.getenv("SENTINELHUB_TRANSPORT", TRANSPORT_BUFFERED).strip().lower(),
        )
        _validate(config)
        return config

    def with_overrides(
        self,
        *,
        access_token: str | None = None,
        mode: str | None = None,
    ) -> CaptureConfig:
        """Return a copy with invocation-argument overrides applied.

        An empty token or a ``None`` mode leaves the field untouched.
        """
        changes: dict[str, str] = {}
        if access_token:
            changes["access_token"] = access_token
        if mode is not None:
            changes["mode"] = mode
        return replace(self, **changes) if changes else self


def _first_env(names: tuple[str, ...]) -> str:
    """Return the first non-empty environment value among *names*."""
    for name in names:
        value = os.getenv(name, "")
        if value:
            return value
    return ""


def _validate(config: CaptureConfig) -> None:
    """Validate configuration ranges.  Raises ``ConfigValidationError``."""
    if config.lookback_days <= 0:
        raise ConfigValidationError(
            "IMAGERY_LOOKBACK_DAYS",
            config.lookback_days,
            "must be > 0 (days)",
        )

    if config.transport not in TRANSPORTS:
        raise ConfigValidationError(
            "SENTINELHUB_TRANSPORT",
            config.transport,
            f"must be one of {', '.join(TRANSPORTS)}",
        )

    if not config.base_url:
        raise ConfigValidationError(
            "SENTINELHUB_BASE_URL",
            config.base_url,
            "must not be empty",
        )

    if not config.imagery_provider:
        raise ConfigValidationError(
            "IMAGERY_PROVIDER",
            config.imagery_provider,
            "must not be empty",
        )
