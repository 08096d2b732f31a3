"""Shared dataclasses for acceleration samples, graph points and extrema."""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class AccelerationSample:
    x: float
    y: float
    z: float


@dataclass(frozen=True, slots=True)
class Point2D:
    """Sample projected onto the graph plane: x = lateral, y = longitudinal."""

    x: float
    y: float


@dataclass(frozen=True, slots=True)
class ExtremaState:
    """Immutable snapshot of the four running G-force extrema."""

    max_acceleration: float = 0.0
    max_braking: float = 0.0
    max_left: float = 0.0
    max_right: float = 0.0
