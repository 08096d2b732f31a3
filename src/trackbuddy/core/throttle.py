"""Sample-and-hold throttle between the sensor rate and the render rate.

The producer calls :meth:`RenderSignalThrottle.feed` for every sample; a tick
driver calls :meth:`RenderSignalThrottle.tick` once per render period on the
consumer's context. Each tick forwards the most recent point seen so far,
repeating the previous one if nothing new arrived. Nothing is emitted until
the first point has been fed.
"""

from __future__ import annotations

import logging
import threading
from typing import Callable, Optional, Protocol

from .models import Point2D

logger = logging.getLogger(__name__)

EmitFn = Callable[[Point2D], None]


class RenderSignalThrottle:
    """Latest-value register plus a tick that forwards it downstream."""

    def __init__(self, render_rate_hz: float, on_emit: Optional[EmitFn] = None) -> None:
        if render_rate_hz <= 0.0:
            raise ValueError("render_rate_hz must be positive.")
        self._period = 1.0 / float(render_rate_hz)
        self._on_emit = on_emit
        self._latest: Optional[Point2D] = None
        self._fresh = False
        self._lock = threading.Lock()

    @property
    def period(self) -> float:
        return self._period

    @property
    def has_value(self) -> bool:
        with self._lock:
            return self._latest is not None

    def set_downstream(self, on_emit: Optional[EmitFn]) -> None:
        self._on_emit = on_emit

    def feed(self, point: Point2D) -> None:
        """Store ``point`` as the latest value. O(1), callable from any thread."""
        with self._lock:
            self._latest = point
            self._fresh = True

    def tick(self) -> Optional[Point2D]:
        """
        Emit the held value once. Returns the emitted point, or ``None`` if
        nothing has been fed yet.
        """
        with self._lock:
            point = self._latest
            repeated = not self._fresh
            self._fresh = False
        if point is None:
            return None
        if repeated:
            logger.debug("No new sample since last tick, holding %r", point)
        if self._on_emit is not None:
            self._on_emit(point)
        return point


class TickDriver(Protocol):
    """Anything that calls a function once per render period until stopped."""

    def start(self) -> None:  # pragma: no cover - protocol
        ...

    def stop(self) -> None:  # pragma: no cover - protocol
        ...


class ThreadTickDriver:
    """
    Call ``on_tick`` every ``period`` seconds from a background thread.

    Used for headless sessions; GUI sessions use
    :class:`trackbuddy.gui.tick_driver.QtTickDriver` so ticks land on the Qt
    thread that also reads the state.
    """

    def __init__(
        self,
        on_tick: Callable[[], object],
        period: float,
        *,
        thread_name: Optional[str] = None,
    ) -> None:
        if period <= 0.0:
            raise ValueError("period must be positive.")
        self._on_tick = on_tick
        self._period = float(period)
        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None
        self._thread_name = thread_name or "TrackBuddyRenderTick"

    def start(self) -> None:
        if self._thread is not None and self._thread.is_alive():
            return
        self._stop_event.clear()
        self._thread = threading.Thread(target=self._run, name=self._thread_name, daemon=True)
        self._thread.start()

    def stop(self, *, join: bool = True, timeout: Optional[float] = 1.0) -> None:
        self._stop_event.set()
        if join and self._thread is not None:
            self._thread.join(timeout)

    def is_alive(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def _run(self) -> None:
        # wait() returns True once stop() is called, ending the loop
        while not self._stop_event.wait(self._period):
            try:
                self._on_tick()
            except Exception:
                logger.exception("Render tick callback failed")
