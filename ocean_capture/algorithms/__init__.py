"""Pixel algorithms rendered by the imagery provider.

Each algorithm exists in two renditions built from the same constants:
an evalscript sent to Sentinel Hub, and a numpy ``evaluate`` used to
reason about (and test) the transform locally.

- RadarOilAlgorithm: Sentinel-1 VV/VH backscatter to a clamped dB scale
- FloatingDebrisAlgorithm: Sentinel-2 floating debris index (FDI)
"""

from ocean_capture.algorithms.base import PixelAlgorithm
from ocean_capture.algorithms.optical import FloatingDebrisAlgorithm
from ocean_capture.algorithms.radar import RadarOilAlgorithm

__all__ = [
    "FloatingDebrisAlgorithm",
    "PixelAlgorithm",
    "RadarOilAlgorithm",
]
