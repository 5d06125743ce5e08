"""PixelAlgorithm abstract base class.

A pixel algorithm maps raw sensor bands to displayable output bands.
The provider evaluates the ``evalscript`` rendition server-side; the
``evaluate`` rendition applies the identical formula to numpy arrays.
"""

from __future__ import annotations

import abc
from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from numpy.typing import ArrayLike, NDArray


class PixelAlgorithm(abc.ABC):
    """Abstract per-pixel transform.

    Subclasses declare ``name`` and ``input_bands`` and implement
    ``evalscript`` and ``evaluate``.
    """

    name: str = ""
    input_bands: tuple[str, ...] = ()
    output_bands: int = 3

    @property
    @abc.abstractmethod
    def evalscript(self) -> str:
        """Return the ``//VERSION=3`` evalscript for the provider."""

    @abc.abstractmethod
    def evaluate(self, **bands: ArrayLike) -> NDArray[np.float64]:
        """Apply the transform to co-registered band arrays.

        Args:
            **bands: One array (or scalar) per name in ``input_bands``.

        Returns:
            Array shaped ``(*broadcast_shape, output_bands)``.

        Raises:
            KeyError: If a required band is missing.
        """

    def _bands(self, bands: dict[str, ArrayLike]) -> list[NDArray[np.float64]]:
        """Return the declared input bands as float arrays, in order."""
        missing = [b for b in self.input_bands if b not in bands]
        if missing:
            msg = f"{self.name}: missing input band(s): {', '.join(missing)}"
            raise KeyError(msg)
        return [np.asarray(bands[b], dtype=np.float64) for b in self.input_bands]

    def _setup_block(self) -> str:
        inputs = ", ".join(f'"{b}"' for b in self.input_bands)
        return (
            "//VERSION=3\n"
            "function setup() {\n"
            "  return {\n"
            f"    input: [{inputs}],\n"
            f"    output: {{ bands: {self.output_bands} }}\n"
            "  };\n"
            "}\n"
        )

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"
