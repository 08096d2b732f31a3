"""Dense trace reconstruction from the throttled point history.

The history only holds points at the render rate (~15 Hz). Drawing straight
lines between them makes the trailing trace visibly lag and kink compared to
the live dot, so the trace is resampled back to sensor-rate density:

1. ``round(sensor_rate / render_rate * n)`` output positions are spread evenly
   over index space ``[0, n - 1]``.
2. The fractional part of each position is eased with smoothstep, so the path
   slows into and out of every knot instead of turning sharply.
3. x and y are each evaluated on a quadratic spline through the knots
   (linear for two knots) and multiplied by the display scale.
"""

from __future__ import annotations

import logging
import math
from typing import List, Sequence

import numpy as np
from scipy.interpolate import make_interp_spline

from .models import Point2D
from ..tools.debug import time_block

logger = logging.getLogger(__name__)

__all__ = ["TraceInterpolator", "display_scale", "eased_positions", "smoothstep"]


def smoothstep(t: np.ndarray) -> np.ndarray:
    """Cubic ease-in/ease-out of ``t`` clamped to ``[0, 1]``."""
    t = np.clip(np.asarray(t, dtype=np.float64), 0.0, 1.0)
    return t * t * (3.0 - 2.0 * t)


def eased_positions(knot_count: int, target_count: int) -> np.ndarray:
    """
    Return ``target_count`` monotonically increasing positions in
    ``[0, knot_count - 1]`` with smoothstep applied to their fractional part.
    """
    if knot_count <= 0 or target_count <= 0:
        return np.empty(0, dtype=np.float64)
    linear = np.linspace(0.0, float(knot_count - 1), int(target_count))
    whole = np.floor(linear)
    return whole + smoothstep(linear - whole)


def display_scale(bounds: float, outer_edge_g: float = 3.0) -> float:
    """
    Pixels per G for a square graph of ``bounds`` pixels whose edge is
    ``outer_edge_g``.
    """
    if outer_edge_g <= 0.0:
        raise ValueError(f"outer_edge_g must be > 0, got {outer_edge_g}")
    return float(bounds) / float(outer_edge_g)


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _evaluate_channel(values: np.ndarray, positions: np.ndarray) -> np.ndarray:
    knots = np.arange(values.size, dtype=np.float64)
    degree = min(2, values.size - 1)
    spline = make_interp_spline(knots, values, k=degree)
    return np.asarray(spline(positions), dtype=np.float64)


class TraceInterpolator:
    """
    Resample a sparse point history to sensor-rate density.

    Instances are stateless apart from the two rates, so one interpolator can
    be shared between threads.
    """

    def __init__(self, sensor_rate_hz: float, render_rate_hz: float) -> None:
        if sensor_rate_hz <= 0.0 or render_rate_hz <= 0.0:
            raise ValueError("sensor_rate_hz and render_rate_hz must be positive.")
        self.sensor_rate_hz = float(sensor_rate_hz)
        self.render_rate_hz = float(render_rate_hz)

    @property
    def density_ratio(self) -> float:
        return self.sensor_rate_hz / self.render_rate_hz

    def target_count(self, knot_count: int) -> int:
        """Number of output points produced for ``knot_count`` history points."""
        if knot_count <= 1:
            return max(0, knot_count)
        return _round_half_up(self.density_ratio * knot_count)

    def interpolate_array(self, history: Sequence[Point2D], scale: float = 1.0) -> np.ndarray:
        """
        Return the dense trace as an ``(m, 2)`` float array (x, y columns).

        An empty ``(0, 2)`` array is returned for empty history or whenever
        the channels cannot be evaluated consistently.
        """
        n = len(history)
        if n == 0:
            return np.empty((0, 2), dtype=np.float64)

        xs = np.fromiter((p.x for p in history), dtype=np.float64, count=n)
        ys = np.fromiter((p.y for p in history), dtype=np.float64, count=n)
        if n == 1:
            return np.array([[xs[0] * scale, ys[0] * scale]], dtype=np.float64)

        positions = eased_positions(n, self.target_count(n))
        with time_block(f"interpolate n={n} m={positions.size}", log=logger):
            try:
                x_out = _evaluate_channel(xs, positions)
                y_out = _evaluate_channel(ys, positions)
            except ValueError as exc:
                logger.warning("Could not interpolate trace of %d points (%s)", n, exc)
                return np.empty((0, 2), dtype=np.float64)

        if x_out.shape != y_out.shape:
            logger.warning(
                "Interpolated channel length mismatch (%d vs %d), dropping trace",
                x_out.size,
                y_out.size,
            )
            return np.empty((0, 2), dtype=np.float64)

        return np.column_stack((x_out, y_out)) * float(scale)

    def interpolate(self, history: Sequence[Point2D], scale: float = 1.0) -> List[Point2D]:
        """Return the dense trace as a list of :class:`Point2D`, oldest first."""
        dense = self.interpolate_array(history, scale)
        return [Point2D(float(x), float(y)) for x, y in dense]
