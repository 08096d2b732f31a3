"""Sample sources feeding the telemetry pipeline.

Every source delivers :class:`~trackbuddy.core.models.AccelerationSample`
objects to a callback on its own background thread, mirroring how a motion
sensor driver hands samples to an app. :mod:`lines` replays logged JSON/CSV
lines, :mod:`synthetic` generates a cornering pattern for demos and tests.
"""

from .lines import LineSampleSource, parse_line
from .source import SampleCallback, SampleSource, SensorDeliveryError, SensorError, SensorUnavailable
from .synthetic import SyntheticSampleSource

__all__ = [
    "LineSampleSource",
    "parse_line",
    "SampleCallback",
    "SampleSource",
    "SensorDeliveryError",
    "SensorError",
    "SensorUnavailable",
    "SyntheticSampleSource",
]
