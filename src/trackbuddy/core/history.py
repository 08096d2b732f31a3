"""Bounded, thread-safe window of throttled trace points."""

from __future__ import annotations

import math
import threading
from typing import List, Optional

from .models import Point2D
from .ringbuffer import RingBuffer


def calculate_capacity(render_rate_hz: float, retention_seconds: float) -> int:
    """
    Compute how many throttled points cover ``retention_seconds`` at
    ``render_rate_hz``.
    """
    if render_rate_hz <= 0.0 or retention_seconds <= 0.0:
        raise ValueError("render_rate_hz and retention_seconds must be positive.")
    return max(1, int(math.ceil(render_rate_hz * retention_seconds)))


class HistoryBuffer:
    """Fixed-capacity FIFO of :class:`Point2D`, oldest evicted first.

    Capacity is fixed for the lifetime of the buffer; build a new one to
    change the render rate or retention window. The render tick is the only
    writer, readers take copies via :meth:`snapshot`.
    """

    def __init__(self, capacity: int) -> None:
        self._points: RingBuffer[Point2D] = RingBuffer(capacity)
        self._lock = threading.RLock()

    @classmethod
    def for_window(cls, render_rate_hz: float, retention_seconds: float) -> "HistoryBuffer":
        return cls(calculate_capacity(render_rate_hz, retention_seconds))

    @property
    def capacity(self) -> int:
        return self._points.capacity

    def push(self, point: Point2D) -> None:
        with self._lock:
            self._points.append(point)

    def snapshot(self) -> List[Point2D]:
        """Return a copy of the contents, oldest first."""
        with self._lock:
            return self._points.to_list()

    def latest(self) -> Optional[Point2D]:
        with self._lock:
            if len(self._points) == 0:
                return None
            return self._points[-1]

    def __len__(self) -> int:
        with self._lock:
            return len(self._points)
