"""Runtime configuration helpers for the telemetry pipeline."""

from __future__ import annotations

import math
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Mapping, MutableMapping

import yaml

from .axes import AxisMapping


@dataclass(slots=True)
class TelemetryConfig:
    """
    Tuning knobs for how samples are throttled, retained and interpolated.

    The defaults assume a ~100 Hz motion sensor feeding a ~15 Hz render loop
    with a two second trailing trace.
    """

    sensor_rate_hz: float = 100.0
    render_rate_hz: float = 15.0
    retention_seconds: float = 2.0

    # Full-scale G value at the edge of the graph
    outer_edge_g: float = 3.0

    axes: AxisMapping = field(default_factory=AxisMapping)

    def sanitized(self) -> TelemetryConfig:
        """Return a copy with derived limits applied."""
        sensor_rate = max(1.0, float(self.sensor_rate_hz))
        # Rendering faster than the sensor only repeats samples.
        render_rate = min(sensor_rate, max(1.0, float(self.render_rate_hz)))
        return TelemetryConfig(
            sensor_rate_hz=sensor_rate,
            render_rate_hz=render_rate,
            retention_seconds=max(0.1, float(self.retention_seconds)),
            outer_edge_g=max(0.1, float(self.outer_edge_g)),
            axes=self.axes,
        )

    @property
    def history_capacity(self) -> int:
        """Number of throttled points that cover ``retention_seconds``."""
        return max(1, int(math.ceil(self.render_rate_hz * self.retention_seconds)))

    @property
    def render_tick_period(self) -> float:
        """Seconds between two render ticks."""
        return 1.0 / float(self.render_rate_hz)

    @property
    def density_ratio(self) -> float:
        """Interpolated points generated per throttled point."""
        return float(self.sensor_rate_hz) / float(self.render_rate_hz)

    def to_mapping(self) -> dict:
        return {
            "telemetry": {
                "sensor_rate_hz": float(self.sensor_rate_hz),
                "render_rate_hz": float(self.render_rate_hz),
                "retention_seconds": float(self.retention_seconds),
                "outer_edge_g": float(self.outer_edge_g),
                "axes": self.axes.to_mapping(),
            }
        }


def _recognized_fields() -> set[str]:
    """Return the dataclass field names accepted by :class:`TelemetryConfig`."""
    return {f.name for f in fields(TelemetryConfig)}


def _normalize_mapping(data: Mapping[str, Any]) -> MutableMapping[str, Any]:
    """Flatten known nesting patterns (e.g. top-level ``telemetry`` key)."""
    if "telemetry" in data and isinstance(data["telemetry"], Mapping):
        merged: MutableMapping[str, Any] = {}
        for key, value in data.items():
            if key == "telemetry":
                merged.update(value)
            else:
                merged[key] = value
        return merged
    return dict(data)


def config_from_mapping(data: Mapping[str, Any] | None) -> TelemetryConfig:
    """Build :class:`TelemetryConfig` from ``data`` (ignoring unknown keys)."""
    if not data:
        return TelemetryConfig()
    normalized = _normalize_mapping(data)
    known = _recognized_fields()
    payload = {key: normalized[key] for key in normalized.keys() & known}
    if "axes" in payload:
        payload["axes"] = AxisMapping.from_mapping(payload["axes"])
    return TelemetryConfig(**payload).sanitized()


def load_config(path: str | Path | None) -> TelemetryConfig:
    """
    Load configuration from ``path``.

    Missing files fall back to default :class:`TelemetryConfig`.
    """
    if path is None:
        return TelemetryConfig()
    cfg_path = Path(path)
    if not cfg_path.exists():
        return TelemetryConfig()
    with cfg_path.open("r", encoding="utf-8") as fh:
        raw = yaml.safe_load(fh) or {}
    if not isinstance(raw, Mapping):
        raise ValueError(f"Expected mapping in {cfg_path}, got {type(raw).__name__}")
    return config_from_mapping(raw)


__all__ = ["TelemetryConfig", "config_from_mapping", "load_config"]
