"""Running G-force extrema in the four graph directions."""

from __future__ import annotations

import threading

from ..config.axes import AxisMapping
from .models import AccelerationSample, ExtremaState


class ExtremaTracker:
    """
    Track max acceleration/braking and max left/right G until reset.

    ``observe`` is called from the sensor thread for every raw sample while
    the UI reads :attr:`state` from its own thread; both sides go through a
    small lock and the UI only ever sees immutable :class:`ExtremaState`
    snapshots.
    """

    def __init__(self, axes: AxisMapping | None = None) -> None:
        self._axes = axes or AxisMapping()
        self._lock = threading.Lock()
        self._max_acceleration = 0.0
        self._max_braking = 0.0
        self._max_left = 0.0
        self._max_right = 0.0

    @property
    def axes(self) -> AxisMapping:
        return self._axes

    def observe(self, sample: AccelerationSample) -> ExtremaState:
        """Fold ``sample`` into the extrema and return the updated snapshot."""
        longitudinal = self._axes.longitudinal(sample)
        lateral = self._axes.lateral(sample)
        with self._lock:
            if longitudinal > self._max_acceleration:
                self._max_acceleration = longitudinal
            elif longitudinal < self._max_braking:
                self._max_braking = longitudinal

            if lateral > self._max_left:
                self._max_left = lateral
            elif lateral < self._max_right:
                self._max_right = lateral
            return self._snapshot_locked()

    def reset(self) -> None:
        with self._lock:
            self._max_acceleration = 0.0
            self._max_braking = 0.0
            self._max_left = 0.0
            self._max_right = 0.0

    @property
    def state(self) -> ExtremaState:
        with self._lock:
            return self._snapshot_locked()

    def _snapshot_locked(self) -> ExtremaState:
        return ExtremaState(
            max_acceleration=self._max_acceleration,
            max_braking=self._max_braking,
            max_left=self._max_left,
            max_right=self._max_right,
        )
