"""Qt application entry point for the trackbuddy trace viewer.

This module wires up argument parsing and logging, builds a
:class:`~trackbuddy.core.TelemetryState` from configuration, starts the chosen
sample source and drives render ticks with a :class:`QtTickDriver`. Launches
through ``python main.py`` or ``python -m trackbuddy.gui.application`` both
flow through ``main()`` here.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Tuple

from PySide6.QtWidgets import QApplication

from ..config import TelemetryConfig, load_config
from ..core import TelemetryState, build_telemetry
from ..sensors import LineSampleSource, SampleSource, SyntheticSampleSource
from .tick_driver import QtTickDriver
from .trace_view import TraceView

logger = logging.getLogger(__name__)


def _build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="trackbuddy G-force trace viewer")
    parser.add_argument(
        "--config",
        type=Path,
        help="Optional YAML file describing TelemetryConfig overrides",
    )
    parser.add_argument(
        "--source",
        choices=("synthetic", "file"),
        default="synthetic",
        help="Where samples come from (default: synthetic)",
    )
    parser.add_argument(
        "--file",
        type=Path,
        help="JSON/CSV sample log replayed when --source=file",
    )
    parser.add_argument(
        "--render-rate",
        type=float,
        help="Override render_rate_hz without editing the YAML",
    )
    parser.add_argument(
        "--retention",
        type=float,
        help="Override retention_seconds without editing the YAML",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Python logging level (default: INFO)",
    )
    return parser


def _parse_cli_args(argv: list[str]) -> tuple[argparse.Namespace, list[str]]:
    parser = _build_arg_parser()
    args, qt_args = parser.parse_known_args(argv[1:])
    qt_argv = [argv[0], *qt_args]
    return args, qt_argv


def _resolve_config(args: argparse.Namespace) -> TelemetryConfig:
    cfg = load_config(args.config) if args.config else TelemetryConfig()
    if args.render_rate is not None:
        cfg.render_rate_hz = float(args.render_rate)
    if args.retention is not None:
        cfg.retention_seconds = float(args.retention)
    return cfg.sanitized()


def _build_source(args: argparse.Namespace, cfg: TelemetryConfig) -> SampleSource:
    if args.source == "file":
        if args.file is None:
            raise SystemExit("--source=file requires --file")
        return LineSampleSource(args.file, rate_hz=cfg.sensor_rate_hz)
    return SyntheticSampleSource(rate_hz=cfg.sensor_rate_hz)


def create_app(
    argv: list[str],
    cfg: TelemetryConfig,
) -> Tuple[QApplication, TelemetryState, TraceView, QtTickDriver]:
    """Create the QApplication, the telemetry state and its viewer."""
    app = QApplication.instance() or QApplication(argv)
    state = build_telemetry(cfg)
    view = TraceView(state, outer_edge_g=cfg.outer_edge_g)
    view.setWindowTitle("trackbuddy")
    state.subscribe(lambda _state: view.refresh())
    driver = QtTickDriver(state.tick, state.render_tick_period, parent=view)
    return app, state, view, driver


def main(argv: list[str] | None = None) -> None:
    raw_argv = argv if argv is not None else sys.argv
    args, qt_argv = _parse_cli_args(raw_argv)
    logging.basicConfig(
        level=getattr(logging, str(args.log_level).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    cfg = _resolve_config(args)
    app, state, view, driver = create_app(qt_argv, cfg)

    source = _build_source(args, cfg)
    if not state.start(source):
        # Frozen, zeroed graph rather than an error dialog.
        logger.warning("No sensor data; showing an idle graph")

    view.resize(480, 520)
    view.show()
    driver.start()
    try:
        code = app.exec()
    finally:
        driver.stop()
        state.stop()
    raise SystemExit(code)


if __name__ == "__main__":
    main()
