"""Build request activity: assemble the immutable ``ImageRequest``.

A pure function of the acquisition descriptor and the invocation time.
The temporal window always covers the ``lookback_days`` preceding *now*,
so two runs on different days request different imagery; tests pin
*now* for determinism.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ocean_capture.core.constants import (
    DEFAULT_LOOKBACK_DAYS,
    DEFAULT_REGION_BBOX,
    OUTPUT_FORMAT,
    OUTPUT_HEIGHT_PX,
    OUTPUT_WIDTH_PX,
)
from ocean_capture.models.imagery import ImageRequest, SpatialWindow, TemporalWindow
from ocean_capture.utils.helpers import utc_now

if TYPE_CHECKING:
    from datetime import datetime

    from ocean_capture.models.imagery import AcquisitionDescriptor

logger = logging.getLogger("ocean_capture.activities.build_request")

DEFAULT_REGION = SpatialWindow.from_bbox(DEFAULT_REGION_BBOX)


def build_request(
    descriptor: AcquisitionDescriptor,
    now: datetime | None = None,
    *,
    window: SpatialWindow = DEFAULT_REGION,
    lookback_days: int = DEFAULT_LOOKBACK_DAYS,
) -> ImageRequest:
    """Return the ``ImageRequest`` for *descriptor* at time *now*.

    Args:
        descriptor: Output of ``select_mode``.
        now: Invocation time; defaults to the current UTC time.  Naive
            values are treated as UTC.
        window: Region of interest (defaults to the fixed region).
        lookback_days: Length of the temporal window.

    Raises:
        ModelValidationError: If *lookback_days* is not positive.
    """
    temporal = TemporalWindow.lookback(now or utc_now(), lookback_days)
    request = ImageRequest(
        descriptor=descriptor,
        spatial=window,
        temporal=temporal,
        width=OUTPUT_WIDTH_PX,
        height=OUTPUT_HEIGHT_PX,
        output_format=OUTPUT_FORMAT,
    )

    logger.info(
        "Image request built | mode=%s | bbox=%s | from=%s | to=%s | size=%dx%d",
        request.mode.value,
        window.bbox,
        temporal.from_time.isoformat(),
        temporal.to_time.isoformat(),
        request.width,
        request.height,
    )
    return request
