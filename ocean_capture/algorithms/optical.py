"""Sentinel-2 floating debris index (FDI).

NIR reflectance is compared against a baseline interpolated linearly
between Red (B04, 665 nm) and SWIR (B11, 1610 nm) at the NIR wavelength
(B08, 842 nm).  Positive anomalies are rendered cyan, everything else
black.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

from ocean_capture.algorithms.base import PixelAlgorithm

if TYPE_CHECKING:
    from numpy.typing import ArrayLike, NDArray

RED_WAVELENGTH_UM = 0.665
NIR_WAVELENGTH_UM = 0.842
SWIR_WAVELENGTH_UM = 1.610

BASELINE_FACTOR = (NIR_WAVELENGTH_UM - RED_WAVELENGTH_UM) / (SWIR_WAVELENGTH_UM - RED_WAVELENGTH_UM)

VISIBILITY_GAIN = 5.0
"""Display gain only; not physically calibrated."""


def nir_baseline(red: ArrayLike, swir: ArrayLike) -> NDArray[np.float64]:
    """Interpolate the expected NIR reflectance between Red and SWIR."""
    red_arr = np.asarray(red, dtype=np.float64)
    swir_arr = np.asarray(swir, dtype=np.float64)
    return red_arr + (swir_arr - red_arr) * BASELINE_FACTOR


def floating_debris_index(red: ArrayLike, nir: ArrayLike, swir: ArrayLike) -> NDArray[np.float64]:
    """Return ``nir - nir_baseline(red, swir)``."""
    return np.asarray(nir, dtype=np.float64) - nir_baseline(red, swir)


def fdi_visual(fdi: ArrayLike) -> NDArray[np.float64]:
    """Scale FDI for display; non-positive values render as 0."""
    return np.fmax(np.asarray(fdi, dtype=np.float64) * VISIBILITY_GAIN, 0.0)


class FloatingDebrisAlgorithm(PixelAlgorithm):
    """FDI rendered as ``[0, v, v]``."""

    name = "s2_fdi"
    input_bands = ("B04", "B08", "B11")

    @property
    def evalscript(self) -> str:
        return self._setup_block() + (
            "function evaluatePixel(s) {\n"
            "  const red = s.B04;\n"
            "  const nir = s.B08;\n"
            "  const swir = s.B11;\n"
            f"  const factor = ({NIR_WAVELENGTH_UM} - {RED_WAVELENGTH_UM}) / "
            f"({SWIR_WAVELENGTH_UM} - {RED_WAVELENGTH_UM});\n"
            "  const nirBaseline = red + (swir - red) * factor;\n"
            "  const fdi = nir - nirBaseline;\n"
            f"  const v = Math.max(0, fdi * {VISIBILITY_GAIN});\n"
            "  return [0, v, v];\n"
            "}"
        )

    def evaluate(self, **bands: ArrayLike) -> NDArray[np.float64]:
        red, nir, swir = self._bands(bands)
        v = fdi_visual(floating_debris_index(red, nir, swir))
        return np.stack(np.broadcast_arrays(np.zeros_like(v), v, v), axis=-1)
