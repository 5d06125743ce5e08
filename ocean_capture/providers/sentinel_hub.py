"""Sentinel Hub Process API adapter.

Concrete ``ImageryProvider`` using ``httpx`` against the Sentinel Hub
services endpoint:

- ``request_token``: OAuth2 client-credentials exchange.
- ``request_image``: ``POST /api/v1/process`` with a JSON body rendered
  from the ``ImageRequest``; the reply is the encoded raster itself.

The response shape depends on ``ProviderConfig.transport``:

==============  ==============================================
``buffered``    ``bytes`` (whole body read by httpx)
``streamed``    ``bytearray`` accumulated from ``iter_bytes()``
``async``       ``DeferredImage`` whose ``aread()`` performs the
                exchange on an ``httpx.AsyncClient``
==============  ==============================================

No client-side timeout is configured and nothing is retried; transport
failures surface as ``ProviderRequestFailed``.

References:
    https://docs.sentinel-hub.com/api/latest/api/process/
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import httpx
from pydantic import ValidationError as PydanticValidationError

from ocean_capture.core.constants import (
    DEFAULT_SENTINELHUB_BASE_URL,
    PROCESS_API_PATH,
    TOKEN_PATH,
    TRANSPORT_ASYNC,
    TRANSPORT_STREAMED,
)
from ocean_capture.models.process_api import TokenResponse
from ocean_capture.providers.base import (
    ImageryProvider,
    ProviderAuthError,
    ProviderRequestFailed,
)

if TYPE_CHECKING:
    from ocean_capture.models.imagery import Credential, ImageRequest, ProviderConfig

logger = logging.getLogger(__name__)

# Maximum characters of an error body quoted in exception messages.
_ERROR_BODY_LIMIT = 300


class SentinelHubAdapter(ImageryProvider):
    """Sentinel Hub adapter.

    Args:
        config: Provider configuration.
        transport: Optional sync ``httpx`` transport (tests inject
            ``httpx.MockTransport``).
        async_transport: Optional async transport for the ``async`` mode.
    """

    def __init__(
        self,
        config: ProviderConfig,
        *,
        transport: httpx.BaseTransport | None = None,
        async_transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        super().__init__(config)
        self._base_url = (config.api_base_url or DEFAULT_SENTINELHUB_BASE_URL).rstrip("/")
        self._token_url = config.token_url or f"{self._base_url}{TOKEN_PATH}"
        self._transport = transport
        self._async_transport = async_transport

    @property
    def process_url(self) -> str:
        return f"{self._base_url}{PROCESS_API_PATH}"

    @property
    def token_url(self) -> str:
        return self._token_url

    # ------------------------------------------------------------------
    # request_token
    # ------------------------------------------------------------------

    def request_token(self, client_id: str, client_secret: str) -> str:
        """Exchange *client_id* / *client_secret* for a bearer token.

        Raises:
            ProviderAuthError: On HTTP errors, transport errors, or a
                reply without ``access_token``.
        """
        logger.info("Requesting access token | provider=%s | url=%s", self.name, self._token_url)
        try:
            with self._client() as client:
                response = client.post(
                    self._token_url,
                    data={
                        "grant_type": "client_credentials",
                        "client_id": client_id,
                        "client_secret": client_secret,
                    },
                    headers={"Accept": "application/json"},
                )
        except httpx.HTTPError as exc:
            msg = f"Token exchange failed: {exc}"
            raise ProviderAuthError(self.name, msg) from exc

        if response.is_error:
            msg = f"Token exchange failed: HTTP {response.status_code}: {_error_detail(response)}"
            raise ProviderAuthError(self.name, msg)

        try:
            token = TokenResponse.model_validate(response.json())
        except (ValueError, PydanticValidationError) as exc:
            msg = f"Token exchange returned an unusable reply: {exc}"
            raise ProviderAuthError(self.name, msg) from exc

        logger.info(
            "Access token obtained | provider=%s | expires_in=%s",
            self.name,
            token.expires_in,
        )
        return token.access_token

    # ------------------------------------------------------------------
    # request_image
    # ------------------------------------------------------------------

    def request_image(self, request: ImageRequest, credential: Credential) -> object:
        """Submit the Process API request and return the raw response.

        Raises:
            ProviderRequestFailed: On HTTP or transport errors.
        """
        body = request.to_process_payload()
        headers = {
            "Authorization": credential.authorization_header,
            "Accept": request.output_format,
            "Content-Type": "application/json",
        }
        transport = self.config.transport

        logger.info(
            "Submitting process request | provider=%s | mode=%s | sensor=%s | transport=%s",
            self.name,
            request.mode.value,
            request.descriptor.sensor.value,
            transport,
        )

        if transport == TRANSPORT_ASYNC:
            return DeferredImage(
                self.name,
                self.process_url,
                body,
                headers,
                transport=self._async_transport,
            )
        if transport == TRANSPORT_STREAMED:
            return self._post_streamed(body, headers)
        return self._post_buffered(body, headers)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _client(self) -> httpx.Client:
        return httpx.Client(timeout=None, transport=self._transport)

    def _post_buffered(self, body: dict[str, Any], headers: dict[str, str]) -> bytes:
        try:
            with self._client() as client:
                response = client.post(self.process_url, json=body, headers=headers)
        except httpx.HTTPError as exc:
            msg = f"Process request failed: {exc}"
            raise ProviderRequestFailed(self.name, msg, retryable=True) from exc

        _raise_for_status(self.name, response)
        return response.content

    def _post_streamed(self, body: dict[str, Any], headers: dict[str, str]) -> bytearray:
        buffer = bytearray()
        try:
            with (
                self._client() as client,
                client.stream("POST", self.process_url, json=body, headers=headers) as response,
            ):
                if response.is_error:
                    response.read()
                    _raise_for_status(self.name, response)
                for chunk in response.iter_bytes():
                    buffer.extend(chunk)
        except httpx.HTTPError as exc:
            msg = f"Process request failed: {exc}"
            raise ProviderRequestFailed(self.name, msg, retryable=True) from exc

        logger.debug("Streamed %d bytes from %s", len(buffer), self.process_url)
        return buffer


class DeferredImage:
    """Process API reply that is fetched when ``aread()`` is awaited."""

    def __init__(
        self,
        provider: str,
        url: str,
        body: dict[str, Any],
        headers: dict[str, str],
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._provider = provider
        self._url = url
        self._body = body
        self._headers = headers
        self._transport = transport

    async def aread(self) -> bytes:
        """Perform the exchange and return the response body.

        Raises:
            ProviderRequestFailed: On HTTP or transport errors.
        """
        try:
            async with httpx.AsyncClient(timeout=None, transport=self._transport) as client:
                response = await client.post(self._url, json=self._body, headers=self._headers)
        except httpx.HTTPError as exc:
            msg = f"Process request failed: {exc}"
            raise ProviderRequestFailed(self._provider, msg, retryable=True) from exc

        _raise_for_status(self._provider, response)
        return response.content


# ---------------------------------------------------------------------------
# Module-level helpers
# ---------------------------------------------------------------------------


def _raise_for_status(provider: str, response: httpx.Response) -> None:
    """Raise ``ProviderRequestFailed`` for 4xx/5xx replies."""
    if not response.is_error:
        return
    retryable = response.status_code == 429 or response.status_code >= 500
    msg = f"Process request failed: HTTP {response.status_code}: {_error_detail(response)}"
    raise ProviderRequestFailed(provider, msg, retryable=retryable)


def _error_detail(response: httpx.Response) -> str:
    """Extract a short error description from a provider error reply.

    Sentinel Hub errors look like
    ``{"error": {"status": 400, "reason": "...", "message": "..."}}``.
    """
    try:
        payload = response.json()
    except ValueError:
        return response.text[:_ERROR_BODY_LIMIT]

    if isinstance(payload, dict):
        error = payload.get("error")
        if isinstance(error, dict) and error.get("message"):
            return str(error["message"])[:_ERROR_BODY_LIMIT]
        for key in ("error_description", "error", "message"):
            if payload.get(key):
                return str(payload[key])[:_ERROR_BODY_LIMIT]
    return response.text[:_ERROR_BODY_LIMIT]
