"""Tests for the capture orchestrator.

Covers the happy path state sequence, stage ordering, the ERRORED
absorbing state and the run-once guard.
"""

from __future__ import annotations

from datetime import timedelta
from pathlib import Path
from unittest.mock import patch

import pytest

from ocean_capture.activities.authenticate import AuthenticationRequired
from ocean_capture.activities.fetch_imagery import UnsupportedResponseType
from ocean_capture.activities.persist_imagery import PersistenceFailed
from ocean_capture.core.config import CaptureConfig
from ocean_capture.models.imagery import AcquisitionMode, SensorFamily, SpatialWindow
from ocean_capture.orchestrators.capture_pipeline import CapturePipeline, CaptureState
from ocean_capture.providers.base import ProviderAuthError, ProviderRequestFailed
from ocean_capture.providers.sentinel_hub import SentinelHubAdapter
from tests.conftest import FAKE_PNG, FIXED_NOW, FakeProvider

_HAPPY_PATH = (
    CaptureState.UNAUTHENTICATED,
    CaptureState.AUTHENTICATED,
    CaptureState.REQUESTED,
    CaptureState.FETCHED,
    CaptureState.PERSISTED,
    CaptureState.DONE,
)


def _pipeline(
    tmp_path: Path,
    provider: FakeProvider,
    config: CaptureConfig | None = None,
    **kwargs: object,
) -> CapturePipeline:
    return CapturePipeline(
        config or CaptureConfig(access_token="tok"),
        tmp_path / "oceano.png",
        provider=provider,
        clock=lambda: FIXED_NOW,
        **kwargs,  # type: ignore[arg-type]
    )


class TestHappyPath:
    def test_writes_image_and_reports(self, tmp_path: Path, fake_provider: FakeProvider) -> None:
        pipeline = _pipeline(tmp_path, fake_provider)

        result = pipeline.run()

        assert result.output_path == tmp_path / "oceano.png"
        assert result.output_path.read_bytes() == FAKE_PNG
        assert result.size_bytes == len(FAKE_PNG)
        assert result.mode is AcquisitionMode.OIL

    def test_state_sequence(self, tmp_path: Path) -> None:
        pipeline = _pipeline(tmp_path, FakeProvider())
        assert pipeline.state is CaptureState.UNAUTHENTICATED

        result = pipeline.run()

        assert result.states == _HAPPY_PATH
        assert pipeline.history == _HAPPY_PATH
        assert pipeline.state is CaptureState.DONE

    def test_supplied_token_skips_exchange(self, tmp_path: Path) -> None:
        provider = FakeProvider()
        _pipeline(tmp_path, provider).run()

        assert provider.token_calls == []
        ((_, credential),) = provider.image_calls
        assert credential.token == "tok"
        assert credential.source == "access_token"

    def test_client_credentials_exchange(self, tmp_path: Path) -> None:
        provider = FakeProvider(token="from-exchange")
        config = CaptureConfig(client_id="id", client_secret="secret")

        _pipeline(tmp_path, provider, config).run()

        assert provider.token_calls == [("id", "secret")]
        ((_, credential),) = provider.image_calls
        assert credential.token == "from-exchange"

    def test_plastic_mode(self, tmp_path: Path) -> None:
        provider = FakeProvider()
        config = CaptureConfig(access_token="tok", mode="plastic")

        result = _pipeline(tmp_path, provider, config).run()

        assert result.mode is AcquisitionMode.PLASTIC
        assert result.request.descriptor.sensor is SensorFamily.SENTINEL_2_L2A

    def test_clock_and_lookback_drive_window(self, tmp_path: Path) -> None:
        config = CaptureConfig(access_token="tok", lookback_days=30)
        result = _pipeline(tmp_path, FakeProvider(), config).run()

        assert result.request.temporal.to_time == FIXED_NOW
        assert result.request.temporal.from_time == FIXED_NOW - timedelta(days=30)

    def test_custom_window(self, tmp_path: Path) -> None:
        window = SpatialWindow(west=10, south=20, east=11, north=21)
        result = _pipeline(tmp_path, FakeProvider(), window=window).run()
        assert result.request.spatial is window

    def test_builds_provider_from_config(self, tmp_path: Path) -> None:
        config = CaptureConfig(access_token="tok", transport="streamed")
        pipeline = CapturePipeline(config, tmp_path / "out.png", clock=lambda: FIXED_NOW)

        with patch.object(SentinelHubAdapter, "request_image", return_value=FAKE_PNG) as mocked:
            result = pipeline.run()

        assert result.size_bytes == len(FAKE_PNG)
        mocked.assert_called_once()


class TestFailures:
    def test_missing_credentials(self, tmp_path: Path) -> None:
        provider = FakeProvider()
        pipeline = _pipeline(tmp_path, provider, CaptureConfig())

        with pytest.raises(AuthenticationRequired):
            pipeline.run()

        assert pipeline.history == (CaptureState.UNAUTHENTICATED, CaptureState.ERRORED)
        assert provider.token_calls == []
        assert provider.image_calls == []
        assert not (tmp_path / "oceano.png").exists()

    def test_token_exchange_failure(self, tmp_path: Path) -> None:
        provider = FakeProvider(token_error=ProviderAuthError("fake", "HTTP 401"))
        config = CaptureConfig(client_id="id", client_secret="bad")

        with pytest.raises(ProviderAuthError):
            _pipeline(tmp_path, provider, config).run()

        assert provider.image_calls == []

    def test_fetch_failure_leaves_no_file(self, tmp_path: Path) -> None:
        provider = FakeProvider(image_error=ProviderRequestFailed("fake", "HTTP 500"))
        pipeline = _pipeline(tmp_path, provider)

        with pytest.raises(ProviderRequestFailed):
            pipeline.run()

        assert pipeline.history[-2:] == (CaptureState.REQUESTED, CaptureState.ERRORED)
        assert not (tmp_path / "oceano.png").exists()

    def test_unsupported_shape(self, tmp_path: Path) -> None:
        pipeline = _pipeline(tmp_path, FakeProvider(image=12345))

        with pytest.raises(UnsupportedResponseType):
            pipeline.run()
        assert pipeline.state is CaptureState.ERRORED

    def test_persist_failure(self, tmp_path: Path) -> None:
        pipeline = CapturePipeline(
            CaptureConfig(access_token="tok"),
            tmp_path / "missing" / "oceano.png",
            provider=FakeProvider(),
            clock=lambda: FIXED_NOW,
        )

        with pytest.raises(PersistenceFailed):
            pipeline.run()
        assert pipeline.history[-2:] == (CaptureState.FETCHED, CaptureState.ERRORED)

    def test_failure_is_logged(self, tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
        pipeline = _pipeline(tmp_path, FakeProvider(), CaptureConfig())
        with caplog.at_level("ERROR"), pytest.raises(AuthenticationRequired):
            pipeline.run()
        assert "Capture failed | last_state=unauthenticated" in caplog.text


class TestRunOnce:
    def test_cannot_rerun_after_success(self, tmp_path: Path) -> None:
        pipeline = _pipeline(tmp_path, FakeProvider())
        pipeline.run()
        with pytest.raises(RuntimeError, match="already finished"):
            pipeline.run()

    def test_cannot_rerun_after_error(self, tmp_path: Path) -> None:
        pipeline = _pipeline(tmp_path, FakeProvider(), CaptureConfig())
        with pytest.raises(AuthenticationRequired):
            pipeline.run()
        with pytest.raises(RuntimeError):
            pipeline.run()


class TestOnTransition:
    def test_reports_each_state_in_order(self, tmp_path: Path) -> None:
        seen: list[CaptureState] = []
        _pipeline(tmp_path, FakeProvider(), on_transition=seen.append).run()
        assert tuple(seen) == _HAPPY_PATH[1:]

    def test_not_called_before_authentication_succeeds(self, tmp_path: Path) -> None:
        seen: list[CaptureState] = []
        pipeline = _pipeline(tmp_path, FakeProvider(), CaptureConfig(), on_transition=seen.append)

        with pytest.raises(AuthenticationRequired):
            pipeline.run()

        assert seen == []
        assert pipeline.state is CaptureState.ERRORED

    def test_requested_reported_before_fetch(self, tmp_path: Path) -> None:
        provider = FakeProvider()
        image_calls_at_request: list[int] = []

        def record(state: CaptureState) -> None:
            if state is CaptureState.REQUESTED:
                image_calls_at_request.append(len(provider.image_calls))

        _pipeline(tmp_path, provider, on_transition=record).run()

        assert image_calls_at_request == [0]
        assert len(provider.image_calls) == 1
