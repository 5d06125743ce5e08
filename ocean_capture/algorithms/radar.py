"""Sentinel-1 dual-polarisation backscatter for oil-slick detection.

Linear backscatter is mapped to a bounded decibel-like scale::

    db(x) = max(0, ln(x) * DB_SCALE + 1)

and rendered as ``[db(VV), db(VH), db(VV) / (db(VH) + RATIO_EPSILON)]``.
Oil dampens capillary waves, so slicks show up dark in VV and in the
VV/VH ratio.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

from ocean_capture.algorithms.base import PixelAlgorithm

if TYPE_CHECKING:
    from numpy.typing import ArrayLike, NDArray

DB_SCALE = 0.21714724095
"""10 / ln(10) divided by the display normalisation (20)."""

RATIO_EPSILON = 0.0001


def to_db(linear: ArrayLike) -> NDArray[np.float64]:
    """Convert linear backscatter to the clamped dB scale.

    Non-positive and NaN inputs map to 0.
    """
    values = np.asarray(linear, dtype=np.float64)
    with np.errstate(divide="ignore", invalid="ignore"):
        db = np.log(values) * DB_SCALE + 1.0
    # fmax drops NaN in favour of the other operand.
    return np.fmax(db, 0.0)


class RadarOilAlgorithm(PixelAlgorithm):
    """VV/VH dB composite with a co/cross-polarisation ratio channel."""

    name = "s1_oil_db"
    input_bands = ("VV", "VH")

    @property
    def evalscript(self) -> str:
        return self._setup_block() + (
            "function evaluatePixel(sample) {\n"
            "  function toDb(linear) {\n"
            f"    return Math.max(0, Math.log(linear) * {DB_SCALE} + 1);\n"
            "  }\n"
            "  let vvDb = toDb(sample.VV);\n"
            "  let vhDb = toDb(sample.VH);\n"
            f"  return [vvDb, vhDb, vvDb / (vhDb + {RATIO_EPSILON})];\n"
            "}"
        )

    def evaluate(self, **bands: ArrayLike) -> NDArray[np.float64]:
        vv, vh = self._bands(bands)
        vv_db = to_db(vv)
        vh_db = to_db(vh)
        ratio = vv_db / (vh_db + RATIO_EPSILON)
        return np.stack(np.broadcast_arrays(vv_db, vh_db, ratio), axis=-1)
