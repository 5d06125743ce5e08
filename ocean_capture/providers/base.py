"""ImageryProvider abstract base class.

Defines the contract every imagery provider adapter implements.  The
pipeline interacts exclusively with this interface.

Lifecycle (one run):
    1. ``request_token(client_id, client_secret)``: only when no explicit
       access token was supplied.
    2. ``request_image(request, credential)``: submit the render request
       and return the provider's byte-bearing response object.

The response of ``request_image`` is deliberately loosely typed: the
shape depends on the negotiated transport and is normalised by
``ocean_capture.activities.fetch_imagery``.
"""

from __future__ import annotations

import abc
from typing import TYPE_CHECKING

from ocean_capture.core.exceptions import CaptureError

if TYPE_CHECKING:
    from ocean_capture.models.imagery import Credential, ImageRequest, ProviderConfig


class ImageryProvider(abc.ABC):
    """Abstract base class for imagery provider adapters.

    Concrete implementations must override ``request_token`` and
    ``request_image``.

    Example usage::

        provider = get_provider(config)
        token = provider.request_token(client_id, client_secret)
        raw = provider.request_image(request, Credential(token, "client_credentials"))
    """

    def __init__(self, config: ProviderConfig) -> None:
        self._config = config

    @property
    def name(self) -> str:
        """Return the provider name from configuration."""
        return self._config.name

    @property
    def config(self) -> ProviderConfig:
        """Return the provider configuration (read-only)."""
        return self._config

    # ------------------------------------------------------------------
    # Abstract methods: every adapter must implement these
    # ------------------------------------------------------------------

    @abc.abstractmethod
    def request_token(self, client_id: str, client_secret: str) -> str:
        """Exchange client credentials for a bearer token.

        Exactly one network exchange; no retry.

        Returns:
            The bearer token string.

        Raises:
            ProviderAuthError: If the exchange fails or the reply has no token.
        """

    @abc.abstractmethod
    def request_image(self, request: ImageRequest, credential: Credential) -> object:
        """Submit *request* using *credential* and return the raw response.

        Returns:
            ``bytes``, a binary buffer (``bytearray``/``memoryview``), or an
            object exposing an ``async aread()`` coroutine.

        Raises:
            ProviderRequestFailed: On network or provider-side errors.
        """


# ---------------------------------------------------------------------------
# Provider exceptions
# ---------------------------------------------------------------------------


class ProviderError(CaptureError):
    """Base exception for provider adapter errors.

    Attributes:
        provider: Name of the provider that raised the error.
        message: Human-readable error description.
        retryable: Whether the failure is transient in nature.
    """

    default_stage = "provider"
    default_code = "PROVIDER_ERROR"

    def __init__(
        self,
        provider: str,
        message: str,
        *,
        retryable: bool = False,
    ) -> None:
        self.provider = provider
        super().__init__(
            message,
            retryable=retryable,
            code=self.default_code,
            stage=self.default_stage,
        )

    def __str__(self) -> str:
        return f"[{self.provider}] {self.message}"


class ProviderRequestFailed(ProviderError):
    """A remote exchange with the provider failed (network or HTTP error)."""

    default_code = "PROVIDER_REQUEST_FAILED"


class ProviderAuthError(ProviderRequestFailed):
    """The client-credential token exchange failed."""

    default_code = "PROVIDER_AUTH_FAILED"

    def __init__(self, provider: str, message: str) -> None:
        super().__init__(provider, message, retryable=False)
