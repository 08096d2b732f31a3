from __future__ import annotations

import json

import pytest

from trackbuddy.config import TelemetryConfig
from trackbuddy.core import AccelerationSample, ExtremaState, Point2D, build_telemetry
from trackbuddy.sensors import (
    LineSampleSource,
    SensorDeliveryError,
    SensorUnavailable,
    SyntheticSampleSource,
    parse_line,
)
from trackbuddy.tools.replay import replay_lines


def test_parse_json_line_accepts_both_key_styles() -> None:
    assert parse_line(json.dumps({"timestamp_ns": 1, "ax": 0.1, "ay": 0.2, "az": 0.3})) == AccelerationSample(
        0.1, 0.2, 0.3
    )
    assert parse_line('{"x": -1, "y": 0, "z": 2.5}') == AccelerationSample(-1.0, 0.0, 2.5)


def test_parse_csv_line() -> None:
    assert parse_line("123456,0.5,-0.25,1.0,9,9,9") == AccelerationSample(0.5, -0.25, 1.0)


@pytest.mark.parametrize(
    "line",
    ["", "   ", "not-json", "{bad json", '{"ax": 1, "ay": 2}', '{"ax": "a", "ay": 0, "az": 0}', "1,2", "1,a,b,c",
     '{"ax": NaN, "ay": 0, "az": 0}', "[1, 2, 3]"],
)
def test_parse_line_rejects_invalid_input(line: str) -> None:
    assert parse_line(line) is None


def _collect(source) -> list:
    received: list = []

    def _callback(sample, error) -> None:
        received.append((sample, error))

    source.start(_callback)
    source.join(2.0)
    return received


def test_line_source_delivers_samples_and_errors() -> None:
    lines = ["# header", "0,0.1,0.0,0.2", "garbage", "", '{"ax": 0.3, "ay": 0, "az": -0.4}']
    received = _collect(LineSampleSource(lines, rate_hz=100.0, realtime=False))

    assert len(received) == 3
    assert received[0] == (AccelerationSample(0.1, 0.0, 0.2), None)
    sample, error = received[1]
    assert sample is None
    assert isinstance(error, SensorDeliveryError)
    assert received[2] == (AccelerationSample(0.3, 0.0, -0.4), None)


def test_line_source_missing_file_is_unavailable(tmp_path) -> None:
    source = LineSampleSource(tmp_path / "missing.csv")
    assert not source.is_available()
    with pytest.raises(SensorUnavailable):
        source.start(lambda sample, error: None)


def test_line_source_reads_file(tmp_path) -> None:
    path = tmp_path / "log.csv"
    path.write_text("0,0.0,0.0,1.0\n1,0.5,0.0,0.0\n", encoding="utf-8")
    received = _collect(LineSampleSource(path, realtime=False))
    assert [s for s, _ in received] == [AccelerationSample(0.0, 0.0, 1.0), AccelerationSample(0.5, 0.0, 0.0)]


def test_synthetic_source_is_reproducible_and_bounded() -> None:
    a = list(SyntheticSampleSource(seed=7, noise_g=0.05).generate(50))
    b = list(SyntheticSampleSource(seed=7, noise_g=0.05).generate(50))
    assert a == b
    assert len(a) == 50
    assert all(abs(s.x) < 1.5 and abs(s.z) < 1.5 for s in a)


def test_synthetic_source_without_noise_traces_a_circle() -> None:
    source = SyntheticSampleSource(rate_hz=100.0, amplitude_g=1.0, lap_hz=1.0, noise_g=0.0)
    first = source.sample_at(0.0)
    quarter = source.sample_at(0.25)
    assert (first.x, first.z) == pytest.approx((0.0, 1.0))
    assert (quarter.x, quarter.z) == pytest.approx((1.0, 0.0), abs=1e-12)


def test_synthetic_source_feeds_telemetry_state() -> None:
    state = build_telemetry()
    source = SyntheticSampleSource(noise_g=0.0, duration_s=0.2, realtime=False)
    assert state.start(source)
    source.join(2.0)
    assert state.extrema.max_acceleration == pytest.approx(1.0)
    assert state.current_sample != AccelerationSample(0.0, 0.0, 0.0)


def test_replay_lines_ticks_at_render_rate() -> None:
    cfg = TelemetryConfig(sensor_rate_hz=100.0, render_rate_hz=10.0, retention_seconds=1.0)
    state = build_telemetry(cfg)
    lines = [f"{i},0.0,0.0,1.0" for i in range(200)] + ["broken"]
    ticks = replay_lines(lines, state, cfg)

    assert ticks == 20
    assert state.extrema == ExtremaState(max_acceleration=1.0)
    assert state.history() == [Point2D(0.0, 1.0)] * 10
    assert state.dropped_samples == 1
