"""Pydantic wire models for the Sentinel Hub Process API.

``ProcessRequest`` is the JSON body POSTed to ``/api/v1/process``;
``TokenResponse`` is the OAuth2 client-credentials reply.  Field names
are snake_case in Python and dumped by alias to the provider's
camelCase keys.

References:
    https://docs.sentinel-hub.com/api/latest/api/process/
    https://docs.sentinel-hub.com/api/latest/api/overview/authentication/
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, Field

if TYPE_CHECKING:
    from ocean_capture.models.imagery import ImageRequest

_OGC_CRS_PREFIX = "http://www.opengis.net/def/crs/EPSG/0/"


class _WireModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)


# ---------------------------------------------------------------------------
# input
# ---------------------------------------------------------------------------


class BoundsProperties(_WireModel):
    crs: str


class Bounds(_WireModel):
    bbox: list[float]
    properties: BoundsProperties


class TimeRange(_WireModel):
    from_time: str = Field(alias="from")
    to_time: str = Field(alias="to")


class DataFilter(_WireModel):
    """Collection filter; only the keys relevant to the sensor are set."""

    time_range: TimeRange = Field(alias="timeRange")
    mosaicking_order: str | None = Field(default=None, alias="mosaickingOrder")
    max_cloud_coverage: float | None = Field(default=None, alias="maxCloudCoverage", ge=0, le=100)
    acquisition_mode: str | None = Field(default=None, alias="acquisitionMode")
    polarization: str | None = None
    resolution: str | None = None


class Processing(_WireModel):
    orthorectify: bool | None = None


class DataSource(_WireModel):
    type: str
    data_filter: DataFilter = Field(alias="dataFilter")
    processing: Processing | None = None


class ProcessInput(_WireModel):
    bounds: Bounds
    data: list[DataSource]


# ---------------------------------------------------------------------------
# output
# ---------------------------------------------------------------------------


class ResponseFormat(_WireModel):
    type: str


class OutputResponse(_WireModel):
    identifier: str
    format: ResponseFormat


class ProcessOutput(_WireModel):
    width: int = Field(gt=0)
    height: int = Field(gt=0)
    responses: list[OutputResponse]


# ---------------------------------------------------------------------------
# request / token
# ---------------------------------------------------------------------------


class ProcessRequest(_WireModel):
    """Body of a Process API request."""

    input: ProcessInput
    output: ProcessOutput
    evalscript: str

    @classmethod
    def from_image_request(cls, request: ImageRequest) -> ProcessRequest:
        """Build the wire body from a domain ``ImageRequest``."""
        from ocean_capture.core.constants import OUTPUT_RESPONSE_ID

        descriptor = request.descriptor
        data_filter = DataFilter.model_validate(
            {
                **descriptor.data_filter,
                "timeRange": {
                    "from": format_timestamp(request.temporal.from_time),
                    "to": format_timestamp(request.temporal.to_time),
                },
            }
        )
        processing = (
            Processing.model_validate(dict(descriptor.processing))
            if descriptor.processing
            else None
        )

        return cls(
            input=ProcessInput(
                bounds=Bounds(
                    bbox=list(request.spatial.bbox),
                    properties=BoundsProperties(crs=crs_to_ogc_uri(request.spatial.crs)),
                ),
                data=[
                    DataSource(
                        type=descriptor.sensor.value,
                        data_filter=data_filter,
                        processing=processing,
                    )
                ],
            ),
            output=ProcessOutput(
                width=request.width,
                height=request.height,
                responses=[
                    OutputResponse(
                        identifier=OUTPUT_RESPONSE_ID,
                        format=ResponseFormat(type=request.output_format),
                    )
                ],
            ),
            evalscript=descriptor.algorithm.evalscript,
        )

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


class TokenResponse(BaseModel):
    """OAuth2 client-credentials token reply (unknown keys ignored)."""

    access_token: str = Field(min_length=1)
    token_type: str = "Bearer"
    expires_in: int | None = None


# ---------------------------------------------------------------------------
# helpers
# ---------------------------------------------------------------------------


def format_timestamp(value: datetime) -> str:
    """Format *value* as ``YYYY-MM-DDTHH:MM:SSZ`` (naive values are UTC)."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    return value.astimezone(UTC).strftime("%Y-%m-%dT%H:%M:%SZ")


def crs_to_ogc_uri(crs: str) -> str:
    """Convert ``"EPSG:4326"`` to the OGC URI form the Process API expects."""
    if crs.startswith("http"):
        return crs
    code = crs.split(":")[-1]
    return f"{_OGC_CRS_PREFIX}{code}"
