"""Ocean pollution satellite capture.

Acquires a Sentinel-1 or Sentinel-2 image over a region of interest from
the Sentinel Hub Process API, rendered through an oil-slick (radar
backscatter) or floating-debris (optical FDI) pixel algorithm, and writes
the resulting PNG to local storage.
"""

__version__ = "0.1.0"
