"""Configuration objects and helpers for trackbuddy.

A single YAML file (or mapping) describes the sensor rate, the render cadence,
the retention window of the trace and the axis sign convention. The resulting
typed dataclasses are used everywhere else to size buffers and throttles
consistently.
"""

from .axes import AxisMapping
from .runtime import TelemetryConfig, config_from_mapping, load_config

__all__ = ["AxisMapping", "TelemetryConfig", "config_from_mapping", "load_config"]
