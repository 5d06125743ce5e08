"""Select mode activity: map the mode flag to an acquisition descriptor.

``"plastic"`` (case-insensitive) selects Sentinel-2 L2A with the floating
debris algorithm; every other value, including an empty or missing flag,
selects Sentinel-1 GRD with the radar oil algorithm.  Both modes ask the
provider for the most recent scene in the window.
"""

from __future__ import annotations

import logging

from ocean_capture.algorithms import FloatingDebrisAlgorithm, RadarOilAlgorithm
from ocean_capture.models.imagery import AcquisitionDescriptor, AcquisitionMode, SensorFamily

logger = logging.getLogger("ocean_capture.activities.select_mode")

MOSAICKING_MOST_RECENT = "mostRecent"
MAX_CLOUD_COVER_PCT = 40.0


def parse_mode(flag: str | None) -> AcquisitionMode:
    """Return ``PLASTIC`` for ``"plastic"`` (any case), ``OIL`` otherwise.

    Unrecognised values fall back to ``OIL`` without raising; a warning is
    logged so typos are visible.
    """
    normalized = (flag or "").strip().lower()
    if normalized == AcquisitionMode.PLASTIC.value:
        return AcquisitionMode.PLASTIC
    if normalized and normalized != AcquisitionMode.OIL.value:
        logger.warning("Unrecognised capture mode %r, falling back to oil", flag)
    return AcquisitionMode.OIL


def select_mode(flag: str | None) -> AcquisitionDescriptor:
    """Return the fully parameterised descriptor for *flag*."""
    mode = parse_mode(flag)
    descriptor = _plastic_descriptor() if mode is AcquisitionMode.PLASTIC else _oil_descriptor()
    logger.info(
        "Acquisition mode selected | mode=%s | sensor=%s | algorithm=%s",
        descriptor.mode.value,
        descriptor.sensor.value,
        descriptor.algorithm.name,
    )
    return descriptor


def _oil_descriptor() -> AcquisitionDescriptor:
    return AcquisitionDescriptor(
        mode=AcquisitionMode.OIL,
        algorithm=RadarOilAlgorithm(),
        sensor=SensorFamily.SENTINEL_1_GRD,
        data_filter={
            "mosaickingOrder": MOSAICKING_MOST_RECENT,
            "acquisitionMode": "IW",
            "polarization": "DV",
            "resolution": "HIGH",
        },
        processing={"orthorectify": True},
    )


def _plastic_descriptor() -> AcquisitionDescriptor:
    return AcquisitionDescriptor(
        mode=AcquisitionMode.PLASTIC,
        algorithm=FloatingDebrisAlgorithm(),
        sensor=SensorFamily.SENTINEL_2_L2A,
        data_filter={
            "mosaickingOrder": MOSAICKING_MOST_RECENT,
            "maxCloudCoverage": MAX_CLOUD_COVER_PCT,
        },
    )
