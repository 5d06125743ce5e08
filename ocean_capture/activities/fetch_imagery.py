"""Fetch imagery activity: submit the request and collapse the reply to bytes.

The provider may hand back one of several byte-bearing shapes depending
on the transport negotiated for the request.  They are first tagged
into a closed union and then resolved by exhaustive dispatch:

- ``RawBytes``         : an already materialised ``bytes`` buffer
- ``ConvertibleBinary``: a ``bytearray`` / ``memoryview`` converted in one step
- ``AsyncExtractable`` : an object with an ``async aread()`` accessor

Any other shape raises ``UnsupportedResponseType``.  Provider errors
propagate unchanged; nothing is retried.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from ocean_capture.core.exceptions import ContractError

if TYPE_CHECKING:
    from ocean_capture.models.imagery import Credential, ImageRequest
    from ocean_capture.providers.base import ImageryProvider

logger = logging.getLogger("ocean_capture.activities.fetch_imagery")


class UnsupportedResponseType(ContractError):
    """The provider returned a shape that cannot be turned into image bytes.

    Attributes:
        type_name: Qualified name of the offending type.
    """

    default_stage = "fetch_imagery"
    default_code = "UNSUPPORTED_RESPONSE_TYPE"

    def __init__(self, type_name: str, message: str = "") -> None:
        self.type_name = type_name
        super().__init__(message or f"Unsupported image type returned by provider: {type_name}")


# ---------------------------------------------------------------------------
# Response shapes
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class RawBytes:
    data: bytes


@dataclass(frozen=True, slots=True)
class ConvertibleBinary:
    buffer: bytearray | memoryview


@dataclass(frozen=True, slots=True)
class AsyncExtractable:
    source: Any


ImagePayload = RawBytes | ConvertibleBinary | AsyncExtractable


def classify_response(response: object) -> ImagePayload:
    """Tag *response* with its shape.

    Raises:
        UnsupportedResponseType: For any other shape.
    """
    if isinstance(response, bytes):
        return RawBytes(response)
    if isinstance(response, (bytearray, memoryview)):
        return ConvertibleBinary(response)
    if callable(getattr(response, "aread", None)):
        return AsyncExtractable(response)
    raise UnsupportedResponseType(_type_name(response))


def payload_to_bytes(payload: ImagePayload) -> bytes:
    """Resolve a tagged payload to one canonical ``bytes`` value."""
    if isinstance(payload, RawBytes):
        return payload.data
    if isinstance(payload, ConvertibleBinary):
        return bytes(payload.buffer)
    if isinstance(payload, AsyncExtractable):
        return _extract_async(payload.source)
    raise UnsupportedResponseType(_type_name(payload))


def fetch_imagery(
    request: ImageRequest,
    credential: Credential,
    provider: ImageryProvider,
) -> bytes:
    """Submit *request* with *credential* and return the image bytes.

    Raises:
        ProviderRequestFailed: Propagated from the provider.
        UnsupportedResponseType: The reply shape is unknown or it carried
            no bytes.
    """
    logger.info(
        "fetch_imagery started | provider=%s | mode=%s | credential=%s",
        provider.name,
        request.mode.value,
        credential.source,
    )

    response = provider.request_image(request, credential)
    payload = classify_response(response)
    data = payload_to_bytes(payload)

    if not data:
        msg = f"Provider returned an empty image ({type(payload).__name__})"
        raise UnsupportedResponseType(_type_name(response), msg)

    logger.info(
        "fetch_imagery completed | mode=%s | shape=%s | size=%d bytes",
        request.mode.value,
        type(payload).__name__,
        len(data),
    )
    return data


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _extract_async(source: Any) -> bytes:
    """Drive ``source.aread()`` to completion and coerce the result to bytes."""
    result = source.aread()
    if inspect.isawaitable(result):
        result = asyncio.run(_await(result))
    if isinstance(result, bytes):
        return result
    if isinstance(result, (bytearray, memoryview)):
        return bytes(result)
    raise UnsupportedResponseType(
        _type_name(result),
        f"aread() of {_type_name(source)} produced unsupported type {_type_name(result)}",
    )


async def _await(awaitable: Any) -> Any:
    return await awaitable


def _type_name(value: object) -> str:
    cls = type(value)
    return f"{cls.__module__}.{cls.__qualname__}"
