"""Persist imagery activity: write the image bytes to a local path.

The destination is overwritten in a single write call.  The parent
directory must already exist.  There is no partial-write recovery and
no post-write validation of the image content.
"""

from __future__ import annotations

import logging
from pathlib import Path

from ocean_capture.core.exceptions import PermanentError

logger = logging.getLogger("ocean_capture.activities.persist_imagery")


class PersistenceFailed(PermanentError):
    """Raised when the image cannot be written.

    Attributes:
        path: Destination that could not be written.
    """

    default_stage = "persist_imagery"
    default_code = "PERSISTENCE_FAILED"

    def __init__(self, path: str, message: str) -> None:
        self.path = path
        super().__init__(message)


def persist_imagery(data: bytes, path: str | Path) -> int:
    """Write *data* to *path*, overwriting any existing file.

    Returns:
        Number of bytes written.

    Raises:
        PersistenceFailed: On any ``OSError`` (missing directory,
            permissions, path is a directory, ...).
    """
    destination = Path(path)
    try:
        written = destination.write_bytes(data)
    except OSError as exc:
        msg = f"Failed to write image to {destination}: {exc}"
        raise PersistenceFailed(str(destination), msg) from exc

    logger.info("persist_imagery completed | path=%s | size=%d bytes", destination, written)
    return written
