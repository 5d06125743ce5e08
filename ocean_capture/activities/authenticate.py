"""Authenticate activity: resolve the bearer credential for the run.

Strategy, in order:

1. An explicit access token (``--token`` or ``SENTINEL_HUB_ACCESS_TOKEN``)
   is adopted as-is; it is not validated locally and no network call is made.
2. Otherwise a client id + secret pair is exchanged for a token with
   exactly one call to the provider's token endpoint.
3. Otherwise ``AuthenticationRequired`` is raised before any network
   activity.

The resulting ``Credential`` is returned to the caller and passed
explicitly to the fetch stage.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ocean_capture.core.constants import ENV_ACCESS_TOKEN, ENV_CLIENT_ID, ENV_CLIENT_SECRET
from ocean_capture.core.exceptions import ValidationError
from ocean_capture.models.imagery import Credential

if TYPE_CHECKING:
    from ocean_capture.core.config import CaptureConfig
    from ocean_capture.providers.base import ImageryProvider

logger = logging.getLogger("ocean_capture.activities.authenticate")

SOURCE_ACCESS_TOKEN = "access_token"
SOURCE_CLIENT_CREDENTIALS = "client_credentials"


class AuthenticationRequired(ValidationError):
    """No usable credential configuration was supplied."""

    default_stage = "authenticate"
    default_code = "AUTH_REQUIRED"

    def __init__(self, message: str = "") -> None:
        super().__init__(
            message
            or (
                f"Authentication required: provide {ENV_ACCESS_TOKEN} or "
                f"{ENV_CLIENT_ID[0]} and {ENV_CLIENT_SECRET[0]}"
            )
        )


def resolve_credential(config: CaptureConfig, provider: ImageryProvider) -> Credential:
    """Resolve exactly one bearer credential.

    Args:
        config: Capture configuration (token and/or client credentials).
        provider: Adapter used for the client-credential exchange.

    Returns:
        The ``Credential`` to use for every subsequent request.

    Raises:
        AuthenticationRequired: Neither a token nor a complete
            client-credential pair is configured.
        ProviderAuthError: The token exchange failed.
    """
    if config.access_token:
        logger.info("Using supplied access token | source=%s", SOURCE_ACCESS_TOKEN)
        return Credential(token=config.access_token, source=SOURCE_ACCESS_TOKEN)

    if config.has_client_credentials:
        logger.info(
            "Exchanging client credentials | provider=%s | client_id=%s",
            provider.name,
            config.client_id,
        )
        token = provider.request_token(config.client_id, config.client_secret)
        return Credential(token=token, source=SOURCE_CLIENT_CREDENTIALS)

    raise AuthenticationRequired
