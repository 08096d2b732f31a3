"""Headless replay of a sample log through the telemetry pipeline.

Offline mode (default) walks the log deterministically, issuing one render
tick per ``sensor_rate / render_rate`` samples. ``--realtime`` instead plays
the file at sensor rate on a background thread with a threaded tick driver,
the same way a live session runs without a GUI.
"""

from __future__ import annotations

import argparse
import logging
import sys
import time
from pathlib import Path
from typing import Iterable

from ..config import TelemetryConfig, load_config
from ..core import TelemetryState, ThreadTickDriver, build_telemetry
from ..sensors import LineSampleSource, SensorDeliveryError, parse_line

logger = logging.getLogger(__name__)


def replay_lines(lines: Iterable[str], state: TelemetryState, cfg: TelemetryConfig) -> int:
    """
    Feed ``lines`` into ``state`` offline; return the number of ticks issued.

    Render ticks fall on the sample boundaries where simulated time crosses a
    multiple of the render period.
    """
    sample_dt = 1.0 / cfg.sensor_rate_hz
    tick_period = cfg.render_tick_period
    ticks = 0
    count = 0
    for raw_line in lines:
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        sample = parse_line(line)
        if sample is None:
            state.on_sample(None, SensorDeliveryError(f"unparseable sample line: {line!r}"))
        else:
            state.on_sample(sample)
        count += 1
        # small epsilon keeps 0.1 + 0.1 + ... from missing a boundary
        while (ticks + 1) * tick_period <= count * sample_dt + 1e-9:
            state.tick()
            ticks += 1
    return ticks


def _build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Replay a sample log headlessly")
    parser.add_argument("log", type=Path, help="JSON/CSV sample log")
    parser.add_argument("--config", type=Path, help="Optional TelemetryConfig YAML")
    parser.add_argument(
        "--realtime",
        action="store_true",
        help="Play the log at sensor rate with background threads",
    )
    parser.add_argument("--log-level", default="WARNING", help="Python logging level")
    return parser


def _print_summary(state: TelemetryState) -> None:
    ext = state.extrema
    print(f"max accel   {abs(ext.max_acceleration):.2f} G")
    print(f"max braking {abs(ext.max_braking):.2f} G")
    print(f"max left    {abs(ext.max_left):.2f} G")
    print(f"max right   {abs(ext.max_right):.2f} G")
    print(f"history     {len(state.history())}/{state.history_capacity} points")
    print(f"trace       {len(state.trace_path())} points")
    if state.dropped_samples:
        print(f"dropped     {state.dropped_samples} deliveries")


def main(argv: list[str] | None = None) -> int:
    args = _build_arg_parser().parse_args(argv)
    logging.basicConfig(level=getattr(logging, str(args.log_level).upper(), logging.WARNING))
    cfg = load_config(args.config).sanitized()
    state = build_telemetry(cfg)

    if not args.realtime:
        if not args.log.is_file():
            print(f"No such log file: {args.log}", file=sys.stderr)
            return 1
        with args.log.open("r", encoding="utf-8") as fh:
            replay_lines(fh, state, cfg)
        _print_summary(state)
        return 0

    source = LineSampleSource(args.log, rate_hz=cfg.sensor_rate_hz)
    if not state.start(source):
        print(f"Sensor unavailable: {args.log}", file=sys.stderr)
        return 1
    driver = ThreadTickDriver(state.tick, state.render_tick_period)
    driver.start()
    try:
        while source.is_alive():
            time.sleep(state.render_tick_period)
    except KeyboardInterrupt:
        pass
    finally:
        driver.stop()
        state.stop()
    _print_summary(state)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
