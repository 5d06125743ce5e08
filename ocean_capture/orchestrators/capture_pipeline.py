"""Linear orchestrator for a single capture run.

State machine (no branching back)::

    UNAUTHENTICATED → AUTHENTICATED → REQUESTED → FETCHED → PERSISTED → DONE

Any exception moves the pipeline to ``ERRORED`` (absorbing) and is
re-raised unchanged for the CLI to report.  Each stage completes before
the next begins; there is no retry and no partial output.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from ocean_capture.activities.authenticate import resolve_credential
from ocean_capture.activities.build_request import DEFAULT_REGION, build_request
from ocean_capture.activities.fetch_imagery import fetch_imagery
from ocean_capture.activities.persist_imagery import persist_imagery
from ocean_capture.activities.select_mode import select_mode
from ocean_capture.core.constants import DEFAULT_OUTPUT_PATH
from ocean_capture.providers.factory import get_provider
from ocean_capture.utils.helpers import build_provider_config, utc_now

if TYPE_CHECKING:
    from collections.abc import Callable
    from datetime import datetime

    from ocean_capture.core.config import CaptureConfig
    from ocean_capture.models.imagery import AcquisitionMode, ImageRequest, SpatialWindow
    from ocean_capture.providers.base import ImageryProvider

logger = logging.getLogger("ocean_capture.orchestrators.capture_pipeline")


class CaptureState(enum.Enum):
    """Lifecycle state of a capture run."""

    UNAUTHENTICATED = "unauthenticated"
    AUTHENTICATED = "authenticated"
    REQUESTED = "requested"
    FETCHED = "fetched"
    PERSISTED = "persisted"
    DONE = "done"
    ERRORED = "errored"


_TERMINAL_STATES = frozenset({CaptureState.DONE, CaptureState.ERRORED})


@dataclass(frozen=True, slots=True)
class CaptureResult:
    """Outcome of a successful run.

    Attributes:
        output_path: Where the image was written.
        size_bytes: Number of bytes written.
        mode: Acquisition mode used.
        request: The request that was submitted.
        states: Every state visited, in order.
    """

    output_path: Path
    size_bytes: int
    mode: AcquisitionMode
    request: ImageRequest
    states: tuple[CaptureState, ...]


class CapturePipeline:
    """Sequences authenticate → select mode → build → fetch → persist.

    Args:
        config: Capture configuration.
        output_path: Destination file.
        provider: Adapter to use; built from *config* when ``None``.
        window: Region of interest.
        clock: Zero-argument callable returning the invocation time
            (defaults to ``utc_now``).
        on_transition: Called with each state entered on the way to ``DONE``
            (not with ``ERRORED``).  Exceptions it raises fail the run.
    """

    def __init__(
        self,
        config: CaptureConfig,
        output_path: str | Path = DEFAULT_OUTPUT_PATH,
        *,
        provider: ImageryProvider | None = None,
        window: SpatialWindow = DEFAULT_REGION,
        clock: Callable[[], datetime] | None = None,
        on_transition: Callable[[CaptureState], None] | None = None,
    ) -> None:
        self._config = config
        self._output_path = Path(output_path)
        self._provider = provider
        self._window = window
        self._clock = clock or utc_now
        self._on_transition = on_transition
        self._history: list[CaptureState] = [CaptureState.UNAUTHENTICATED]

    @property
    def state(self) -> CaptureState:
        return self._history[-1]

    @property
    def history(self) -> tuple[CaptureState, ...]:
        return tuple(self._history)

    def run(self) -> CaptureResult:
        """Execute the run once.

        Raises:
            RuntimeError: If the pipeline already finished.
            CaptureError: Any stage failure (after entering ``ERRORED``).
        """
        if self.state in _TERMINAL_STATES:
            msg = f"CapturePipeline already finished (state={self.state.value})"
            raise RuntimeError(msg)

        try:
            return self._run()
        except Exception as exc:
            self._history.append(CaptureState.ERRORED)
            logger.error(
                "Capture failed | last_state=%s | error=%s",
                self._history[-2].value,
                exc,
            )
            raise

    def _run(self) -> CaptureResult:
        provider = self._provider or get_provider(build_provider_config(self._config))

        credential = resolve_credential(self._config, provider)
        self._transition(CaptureState.AUTHENTICATED)

        descriptor = select_mode(self._config.mode)
        request = build_request(
            descriptor,
            self._clock(),
            window=self._window,
            lookback_days=self._config.lookback_days,
        )
        self._transition(CaptureState.REQUESTED)

        data = fetch_imagery(request, credential, provider)
        self._transition(CaptureState.FETCHED)

        size = persist_imagery(data, self._output_path)
        self._transition(CaptureState.PERSISTED)

        self._transition(CaptureState.DONE)
        return CaptureResult(
            output_path=self._output_path,
            size_bytes=size,
            mode=request.mode,
            request=request,
            states=self.history,
        )

    def _transition(self, new_state: CaptureState) -> None:
        logger.debug("Capture state | %s -> %s", self.state.value, new_state.value)
        self._history.append(new_state)
        if self._on_transition is not None:
            self._on_transition(new_state)
