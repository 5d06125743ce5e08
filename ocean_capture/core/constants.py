"""Shared capture constants: single source of truth.

Centralises the region of interest, output raster geometry, provider
endpoints, and environment variable names used across activities,
providers, and the CLI.
"""

from __future__ import annotations

# ---------------------------------------------------------------------------
# Region of interest (EPSG:4326, west/south/east/north)
# ---------------------------------------------------------------------------

DEFAULT_REGION_BBOX: tuple[float, float, float, float] = (-50.0, -10.0, -49.0, -9.0)
"""Fixed region of interest queried on every run."""

DEFAULT_CRS: str = "EPSG:4326"

KM_PER_DEGREE_LAT: float = 111.32
"""Approximate kilometres per degree of latitude (and of longitude at the equator)."""

# ---------------------------------------------------------------------------
# Request geometry
# ---------------------------------------------------------------------------

DEFAULT_LOOKBACK_DAYS: int = 90
"""Length of the sliding temporal window ending at invocation time."""

OUTPUT_WIDTH_PX: int = 512
OUTPUT_HEIGHT_PX: int = 512
OUTPUT_FORMAT: str = "image/png"
OUTPUT_RESPONSE_ID: str = "default"

DEFAULT_OUTPUT_PATH: str = "./oceano.png"

# ---------------------------------------------------------------------------
# Sentinel Hub endpoints
# ---------------------------------------------------------------------------

DEFAULT_SENTINELHUB_BASE_URL: str = "https://services.sentinel-hub.com"
PROCESS_API_PATH: str = "/api/v1/process"
TOKEN_PATH: str = "/auth/realms/main/protocol/openid-connect/token"

# ---------------------------------------------------------------------------
# Transports the provider may negotiate (see fetch_imagery)
# ---------------------------------------------------------------------------

TRANSPORT_BUFFERED: str = "buffered"
TRANSPORT_STREAMED: str = "streamed"
TRANSPORT_ASYNC: str = "async"
TRANSPORTS: tuple[str, ...] = (TRANSPORT_BUFFERED, TRANSPORT_STREAMED, TRANSPORT_ASYNC)

# ---------------------------------------------------------------------------
# Environment variable names
# ---------------------------------------------------------------------------

ENV_ACCESS_TOKEN: str = "SENTINEL_HUB_ACCESS_TOKEN"
ENV_CLIENT_ID: tuple[str, ...] = ("SENTINELHUB_CLIENT_ID", "CLIENT_ID")
ENV_CLIENT_SECRET: tuple[str, ...] = ("SENTINELHUB_CLIENT_SECRET", "CLIENT_SECRET")
ENV_MODE: str = "CAPTURE_MODE"
