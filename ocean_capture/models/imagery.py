"""Typed models for a single capture run.

Defines the values exchanged between the pipeline stages:

- ``AcquisitionMode``: Which pollutant the run targets (oil or plastic)
- ``SensorFamily``: Which Sentinel Hub collection is queried
- ``SpatialWindow``: Bounding box of the region of interest
- ``TemporalWindow``: Sliding ``[from, to)`` acquisition interval
- ``Credential``: Bearer token adopted for the run
- ``AcquisitionDescriptor``: Mode + algorithm + modality-specific filters
- ``ImageRequest``: The complete, immutable imagery request
- ``ProviderConfig``: Configuration for the imagery provider adapter

Design notes:
- All models are frozen dataclasses; a built request is never mutated.
- Wire serialisation lives in ``ocean_capture.models.process_api``.
"""

from __future__ import annotations

import enum
import math
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from ocean_capture.core.constants import (
    DEFAULT_CRS,
    KM_PER_DEGREE_LAT,
    OUTPUT_FORMAT,
    OUTPUT_HEIGHT_PX,
    OUTPUT_WIDTH_PX,
    TRANSPORT_BUFFERED,
    TRANSPORTS,
)
from ocean_capture.core.exceptions import CaptureError, ValidationError

if TYPE_CHECKING:
    from collections.abc import Mapping

    from ocean_capture.algorithms.base import PixelAlgorithm


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------


class ModelValidationError(ValueError, ValidationError):
    """Raised when a domain model is constructed with invalid field values.

    Attributes:
        model: Name of the model class that failed validation.
        field_name: The field that violated the invariant.
        value: The invalid value.
    """

    default_stage = "model_validation"
    default_code = "MODEL_VALIDATION_FAILED"

    def __init__(self, model: str, field_name: str, value: object, message: str) -> None:
        self.model = model
        self.field_name = field_name
        self.value = value
        formatted = f"{model}.{field_name}={value!r}: {message}"
        CaptureError.__init__(self, formatted)


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------


class AcquisitionMode(enum.Enum):
    """Pollutant targeted by a capture run.

    Values:
        OIL:     Sentinel-1 radar backscatter, oil-slick detection.
        PLASTIC: Sentinel-2 optical floating debris index.
    """

    OIL = "oil"
    PLASTIC = "plastic"


class SensorFamily(enum.Enum):
    """Sentinel Hub data collection identifiers."""

    SENTINEL_1_GRD = "sentinel-1-grd"
    SENTINEL_2_L2A = "sentinel-2-l2a"


# ---------------------------------------------------------------------------
# Spatial / temporal windows
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class SpatialWindow:
    """Axis-aligned bounding box in geographic coordinates.

    Attributes:
        west: Minimum longitude (degrees).
        south: Minimum latitude (degrees).
        east: Maximum longitude (degrees).
        north: Maximum latitude (degrees).
        crs: Coordinate reference system of the corners.
    """

    west: float
    south: float
    east: float
    north: float
    crs: str = DEFAULT_CRS

    def __post_init__(self) -> None:
        _check_range("SpatialWindow", "west", self.west, -180, 180)
        _check_range("SpatialWindow", "east", self.east, -180, 180)
        _check_range("SpatialWindow", "south", self.south, -90, 90)
        _check_range("SpatialWindow", "north", self.north, -90, 90)
        if self.west >= self.east:
            raise ModelValidationError(
                "SpatialWindow", "west", self.west, f"must be < east ({self.east})"
            )
        if self.south >= self.north:
            raise ModelValidationError(
                "SpatialWindow", "south", self.south, f"must be < north ({self.north})"
            )

    @property
    def bbox(self) -> tuple[float, float, float, float]:
        """Return ``(west, south, east, north)``."""
        return (self.west, self.south, self.east, self.north)

    @classmethod
    def from_bbox(cls, bbox: tuple[float, float, float, float]) -> SpatialWindow:
        west, south, east, north = bbox
        return cls(west=west, south=south, east=east, north=north)

    @classmethod
    def around(cls, lat: float, lon: float, radius_km: float) -> SpatialWindow:
        """Build a window centred on ``(lat, lon)`` extending *radius_km* each way.

        Longitude extent is widened by ``1 / cos(lat)`` so the window stays
        roughly square on the ground.  The result is clamped to valid
        coordinate ranges.

        Raises:
            ModelValidationError: If *radius_km* is not a finite positive
                number or the centre is out of range.
        """
        if not math.isfinite(radius_km) or radius_km <= 0:
            raise ModelValidationError(
                "SpatialWindow", "radius_km", radius_km, "must be a finite value > 0"
            )
        _check_range("SpatialWindow", "lat", lat, -90, 90)
        _check_range("SpatialWindow", "lon", lon, -180, 180)

        km_per_degree_lon = KM_PER_DEGREE_LAT * math.cos(math.radians(lat))
        delta_lat = radius_km / KM_PER_DEGREE_LAT
        delta_lon = radius_km / km_per_degree_lon if km_per_degree_lon > 0 else 180.0

        return cls(
            west=max(-180.0, lon - delta_lon),
            south=max(-90.0, lat - delta_lat),
            east=min(180.0, lon + delta_lon),
            north=min(90.0, lat + delta_lat),
        )


@dataclass(frozen=True, slots=True)
class TemporalWindow:
    """Acquisition interval ``[from_time, to_time)`` in UTC.

    Attributes:
        from_time: Earliest acquisition time (inclusive).
        to_time: Latest acquisition time (exclusive); the invocation time.
    """

    from_time: datetime
    to_time: datetime

    def __post_init__(self) -> None:
        if self.from_time >= self.to_time:
            raise ModelValidationError(
                "TemporalWindow",
                "from_time",
                self.from_time,
                f"must be < to_time ({self.to_time})",
            )

    @classmethod
    def lookback(cls, now: datetime, days: int) -> TemporalWindow:
        """Return the window spanning the *days* preceding *now*.

        A naive *now* is interpreted as UTC.
        """
        if days <= 0:
            raise ModelValidationError("TemporalWindow", "days", days, "must be > 0")
        if now.tzinfo is None:
            now = now.replace(tzinfo=UTC)
        return cls(from_time=now - timedelta(days=days), to_time=now)

    @property
    def days(self) -> float:
        return (self.to_time - self.from_time) / timedelta(days=1)


# ---------------------------------------------------------------------------
# Credential
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Credential:
    """Bearer credential adopted for a single run.

    Attributes:
        token: Opaque bearer token (excluded from ``repr``).
        source: ``"access_token"`` or ``"client_credentials"``.
    """

    token: str = field(repr=False)
    source: str

    def __post_init__(self) -> None:
        _check_non_empty("Credential", "token", self.token)
        _check_non_empty("Credential", "source", self.source)

    @property
    def authorization_header(self) -> str:
        return f"Bearer {self.token}"


# ---------------------------------------------------------------------------
# Request models
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class AcquisitionDescriptor:
    """Fully parameterised acquisition for one mode.

    Attributes:
        mode: The selected acquisition mode.
        algorithm: Pixel algorithm rendered by the provider.
        sensor: Sentinel Hub collection to query.
        data_filter: Modality-specific ``dataFilter`` entries
            (mosaicking order, cloud cover, polarisation, ...).
        processing: Modality-specific ``processing`` entries.

    ``data_filter`` and ``processing`` are copied into read-only mappings,
    so a built descriptor cannot be changed through them.
    """

    mode: AcquisitionMode
    algorithm: PixelAlgorithm
    sensor: SensorFamily
    data_filter: Mapping[str, Any] = field(default_factory=dict)
    processing: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "data_filter", MappingProxyType(dict(self.data_filter)))
        object.__setattr__(self, "processing", MappingProxyType(dict(self.processing)))


@dataclass(frozen=True, slots=True)
class ImageRequest:
    """Complete imagery request, built once per run.

    Attributes:
        descriptor: Mode, algorithm and modality filters.
        spatial: Region of interest.
        temporal: Acquisition interval.
        width: Output width in pixels.
        height: Output height in pixels.
        output_format: Output MIME type.
    """

    descriptor: AcquisitionDescriptor
    spatial: SpatialWindow
    temporal: TemporalWindow
    width: int = OUTPUT_WIDTH_PX
    height: int = OUTPUT_HEIGHT_PX
    output_format: str = OUTPUT_FORMAT

    def __post_init__(self) -> None:
        _check_min("ImageRequest", "width", self.width, 1)
        _check_min("ImageRequest", "height", self.height, 1)
        _check_non_empty("ImageRequest", "output_format", self.output_format)

    @property
    def mode(self) -> AcquisitionMode:
        return self.descriptor.mode

    def to_process_payload(self) -> dict[str, Any]:
        """Render the Sentinel Hub Process API request body.

        Returns a fresh dict on every call.
        """
        from ocean_capture.models.process_api import ProcessRequest

        return ProcessRequest.from_image_request(self).to_payload()


# ---------------------------------------------------------------------------
# Provider configuration
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class ProviderConfig:
    """Configuration for a specific imagery provider.

    Attributes:
        name: Provider identifier (must match the adapter registry key).
        api_base_url: Base URL for the provider's API.
        token_url: OAuth2 token endpoint (empty to derive from the base URL).
        transport: Response transport (``buffered``, ``streamed`` or ``async``).
    """

    name: str
    api_base_url: str = ""
    token_url: str = ""
    transport: str = TRANSPORT_BUFFERED

    def __post_init__(self) -> None:
        _check_non_empty("ProviderConfig", "name", self.name)
        if self.transport not in TRANSPORTS:
            raise ModelValidationError(
                "ProviderConfig",
                "transport",
                self.transport,
                f"must be one of {', '.join(TRANSPORTS)}",
            )


# ---------------------------------------------------------------------------
# Validation helpers (module-private)
# ---------------------------------------------------------------------------


def _check_range(model: str, field_name: str, value: float, lo: float, hi: float) -> None:
    """Raise `ModelValidationError` if *value* is not finite or falls outside [lo, hi]."""
    if not math.isfinite(value) or value < lo or value > hi:
        raise ModelValidationError(model, field_name, value, f"must be between {lo} and {hi}")


def _check_min(model: str, field_name: str, value: float | int, lo: float | int) -> None:
    """Raise `ModelValidationError` if *value* is below *lo*."""
    if value < lo:
        raise ModelValidationError(model, field_name, value, f"must be >= {lo}")


def _check_non_empty(model: str, field_name: str, value: str) -> None:
    """Raise `ModelValidationError` if *value* is empty or blank."""
    if not value or not value.strip():
        raise ModelValidationError(model, field_name, value, "must not be empty")
