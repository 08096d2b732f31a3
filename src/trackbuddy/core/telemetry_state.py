"""Observable aggregate tying the extrema, throttle, history and trace together."""

from __future__ import annotations

import enum
import logging
import math
import threading
from typing import Callable, List, Optional

import numpy as np

from ..sensors.source import SampleSource, SensorUnavailable
from .extrema import ExtremaTracker
from .history import HistoryBuffer
from .interpolation import TraceInterpolator
from .models import AccelerationSample, ExtremaState, Point2D
from .throttle import RenderSignalThrottle

logger = logging.getLogger(__name__)

Listener = Callable[["TelemetryState"], None]


class TelemetryStatus(enum.Enum):
    IDLE = "idle"
    ACTIVE = "active"


class TelemetryState:
    """
    Single mutable aggregate for one session.

    Threading model
    ---------------
    - :meth:`on_sample` runs on the sensor thread. It only touches the
      extrema tracker and the throttle register, both O(1) under their own
      locks.
    - :meth:`tick` runs on the render context (Qt timer or
      :class:`~trackbuddy.core.throttle.ThreadTickDriver`). It is the only
      writer of the history buffer and of :attr:`current_point`, and it
      notifies subscribers from that same context.
    - Readers get immutable values or list copies.
    """

    def __init__(
        self,
        extrema: ExtremaTracker,
        throttle: RenderSignalThrottle,
        history: HistoryBuffer,
        interpolator: TraceInterpolator,
    ) -> None:
        self._extrema = extrema
        self._throttle = throttle
        self._history = history
        self._interpolator = interpolator
        self._throttle.set_downstream(self._on_throttled_point)

        self._status = TelemetryStatus.IDLE
        self._source: Optional[SampleSource] = None
        self._lock = threading.Lock()
        self._current_sample = AccelerationSample(0.0, 0.0, 0.0)
        self._current_point = Point2D(0.0, 0.0)
        self._listeners: List[Listener] = []
        self._dropped = 0

    # ------------------------------------------------------------- lifecycle
    @property
    def status(self) -> TelemetryStatus:
        return self._status

    def start(self, source: SampleSource) -> bool:
        """
        Start receiving samples from ``source``.

        Returns ``False`` (and stays idle with zeroed values) when the sensor
        is unavailable; this is a normal startup outcome, not an error.
        """
        if self._status is TelemetryStatus.ACTIVE:
            return True
        if not source.is_available():
            logger.warning("Motion sensor unavailable; telemetry stays idle")
            return False
        try:
            source.start(self.on_sample)
        except SensorUnavailable as exc:
            logger.warning("Motion sensor unavailable (%s); telemetry stays idle", exc)
            return False
        self._source = source
        self._status = TelemetryStatus.ACTIVE
        logger.info("Telemetry active, render tick every %.3f s", self.render_tick_period)
        return True

    def stop(self) -> None:
        """Stop sample delivery. Buffered state is left untouched."""
        if self._source is not None:
            self._source.stop()
            self._source = None

    # ---------------------------------------------------------------- ingest
    def on_sample(self, sample: Optional[AccelerationSample], error: Optional[Exception] = None) -> None:
        """Sensor callback: fold one raw sample into the pipeline."""
        if error is not None or sample is None:
            self._dropped += 1
            logger.warning("Discarding sensor delivery: %s", error or "empty payload")
            return
        if not (math.isfinite(sample.x) and math.isfinite(sample.y) and math.isfinite(sample.z)):
            self._dropped += 1
            logger.warning("Discarding non-finite sample %r", sample)
            return

        self._extrema.observe(sample)
        axes = self._extrema.axes
        point = Point2D(axes.lateral(sample), axes.longitudinal(sample))
        with self._lock:
            self._current_sample = sample
        self._throttle.feed(point)

    def tick(self) -> Optional[Point2D]:
        """Render tick: forward the held point into the history."""
        return self._throttle.tick()

    def _on_throttled_point(self, point: Point2D) -> None:
        self._history.push(point)
        with self._lock:
            self._current_point = point
            listeners = list(self._listeners)
        for listener in listeners:
            try:
                listener(self)
            except Exception:
                logger.exception("Telemetry listener %r failed", listener)

    # ------------------------------------------------------------ observers
    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call ``listener(state)`` after every render tick emission."""
        with self._lock:
            self._listeners.append(listener)

        def _unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return _unsubscribe

    # --------------------------------------------------------------- reads
    @property
    def extrema(self) -> ExtremaState:
        return self._extrema.state

    @property
    def current_sample(self) -> AccelerationSample:
        with self._lock:
            return self._current_sample

    @property
    def current_point(self) -> Point2D:
        with self._lock:
            return self._current_point

    @property
    def dropped_samples(self) -> int:
        return self._dropped

    @property
    def render_tick_period(self) -> float:
        return self._throttle.period

    @property
    def history_capacity(self) -> int:
        return self._history.capacity

    def history(self) -> List[Point2D]:
        return self._history.snapshot()

    def trace_path(self, scale: float = 1.0) -> List[Point2D]:
        """Dense, smoothed trace of the retained history scaled by ``scale``."""
        return self._interpolator.interpolate(self._history.snapshot(), scale)

    def trace_array(self, scale: float = 1.0) -> np.ndarray:
        """Same as :meth:`trace_path` as an ``(m, 2)`` array for plotting."""
        return self._interpolator.interpolate_array(self._history.snapshot(), scale)

    # ------------------------------------------------------------- commands
    def reset_extrema(self) -> None:
        """Zero the four extrema. The trace history is not affected."""
        self._extrema.reset()
        logger.debug("Extrema reset")
