"""Command-line entry point: ``ocean-capture [output_path]``.

Loads ``.env`` (if present), resolves configuration from the environment
and invocation arguments, runs one capture, and maps the outcome to a
process exit status (0 success, 1 any failure).
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import TYPE_CHECKING

from dotenv import find_dotenv, load_dotenv

from ocean_capture.activities.authenticate import AuthenticationRequired
from ocean_capture.activities.build_request import DEFAULT_REGION
from ocean_capture.core.config import CaptureConfig
from ocean_capture.core.constants import DEFAULT_OUTPUT_PATH
from ocean_capture.core.exceptions import CaptureError
from ocean_capture.models.imagery import SpatialWindow
from ocean_capture.orchestrators.capture_pipeline import CapturePipeline, CaptureState

if TYPE_CHECKING:
    from collections.abc import Sequence

    from ocean_capture.providers.base import ImageryProvider

logger = logging.getLogger("ocean_capture.cli")

EXIT_OK = 0
EXIT_FAILURE = 1

DEFAULT_RADIUS_KM = 10.0

USAGE = """Usage:
  SENTINEL_HUB_ACCESS_TOKEN=... ocean-capture [outputPath]
    or
  SENTINELHUB_CLIENT_ID=... SENTINELHUB_CLIENT_SECRET=... ocean-capture [outputPath]"""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ocean-capture",
        description="Download a Sentinel Hub oil-slick or floating-debris image for a region",
    )
    parser.add_argument(
        "output_path",
        nargs="?",
        default=DEFAULT_OUTPUT_PATH,
        help=f"Where to write the PNG (default: {DEFAULT_OUTPUT_PATH})",
    )
    parser.add_argument(
        "--token",
        default=None,
        help="Sentinel Hub access token (overrides SENTINEL_HUB_ACCESS_TOKEN)",
    )
    parser.add_argument(
        "--mode",
        default=None,
        help="Acquisition mode: oil (default) or plastic (overrides CAPTURE_MODE)",
    )
    parser.add_argument(
        "--center",
        nargs=2,
        type=float,
        metavar=("LAT", "LON"),
        default=None,
        help="Centre the region of interest on this point instead of the default region",
    )
    parser.add_argument(
        "--radius-km",
        type=float,
        default=DEFAULT_RADIUS_KM,
        help=f"Half-width of the region around --center in km (default: {DEFAULT_RADIUS_KM})",
    )
    return parser


def main(
    argv: Sequence[str] | None = None,
    *,
    provider: ImageryProvider | None = None,
) -> int:
    """Run one capture and return the process exit status."""
    # Search from the working directory, not from this module.
    load_dotenv(find_dotenv(usecwd=True))
    _configure_logging()
    args = build_parser().parse_args(argv)

    try:
        config = CaptureConfig.from_env().with_overrides(access_token=args.token, mode=args.mode)
        window = (
            SpatialWindow.around(args.center[0], args.center[1], args.radius_km)
            if args.center
            else DEFAULT_REGION
        )
        pipeline = CapturePipeline(
            config,
            args.output_path,
            provider=provider,
            window=window,
            on_transition=_announce,
        )
        result = pipeline.run()
    except AuthenticationRequired as exc:
        print(str(exc), file=sys.stderr)
        print(USAGE)
        return EXIT_FAILURE
    except (CaptureError, ValueError) as exc:
        print(f"Error downloading image: {exc}", file=sys.stderr)
        return EXIT_FAILURE

    print(f"Image saved successfully to: {result.output_path}")
    print(f"Image size: {result.size_bytes} bytes")
    return EXIT_OK


def _announce(state: CaptureState) -> None:
    if state is CaptureState.REQUESTED:
        print("Fetching image from Sentinel Hub...")


def _configure_logging() -> None:
    logging.basicConfig(
        level=getattr(logging, os.getenv("LOG_LEVEL", "INFO").upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s | %(message)s",
    )


if __name__ == "__main__":
    sys.exit(main())
