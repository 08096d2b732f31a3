"""Core telemetry pipeline: extrema, throttling, history and trace.

Raw samples from a sensor thread update the extrema tracker and the throttle
register; render ticks move throttled points into the history buffer, from
which the interpolator builds the smoothed trace the UI draws.
"""

# Plain data shared by every stage (import first)
from .models import AccelerationSample, ExtremaState, Point2D
from .ringbuffer import RingBuffer
from .history import HistoryBuffer, calculate_capacity
from .extrema import ExtremaTracker
from .throttle import RenderSignalThrottle, ThreadTickDriver, TickDriver
from .interpolation import TraceInterpolator, display_scale, smoothstep

# Aggregate state and wiring helpers
from .telemetry_state import TelemetryState, TelemetryStatus
from .pipeline_wiring import build_telemetry

__all__ = [
    "AccelerationSample",
    "ExtremaState",
    "Point2D",
    "RingBuffer",
    "HistoryBuffer",
    "calculate_capacity",
    "ExtremaTracker",
    "RenderSignalThrottle",
    "ThreadTickDriver",
    "TickDriver",
    "TraceInterpolator",
    "display_scale",
    "smoothstep",
    "TelemetryState",
    "TelemetryStatus",
    "build_telemetry",
]
