"""Factory helpers that wire a :class:`TelemetryState` from configuration."""

from __future__ import annotations

from typing import Optional

from ..config import TelemetryConfig
from .extrema import ExtremaTracker
from .history import HistoryBuffer
from .interpolation import TraceInterpolator
from .telemetry_state import TelemetryState
from .throttle import RenderSignalThrottle


def build_telemetry(cfg: Optional[TelemetryConfig] = None) -> TelemetryState:
    """
    Build a :class:`TelemetryState` whose pieces share one set of rates.

    Parameters
    ----------
    cfg:
        Runtime configuration (usually loaded from YAML). Defaults are used
        when omitted. The history capacity is computed once here; build a new
        state to change rates or retention.
    """
    normalized = (cfg or TelemetryConfig()).sanitized()
    return TelemetryState(
        extrema=ExtremaTracker(normalized.axes),
        throttle=RenderSignalThrottle(normalized.render_rate_hz),
        history=HistoryBuffer(normalized.history_capacity),
        interpolator=TraceInterpolator(normalized.sensor_rate_hz, normalized.render_rate_hz),
    )


__all__ = ["build_telemetry"]
