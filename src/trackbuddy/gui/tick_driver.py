"""Render tick driven by a ``QTimer`` on the Qt GUI thread."""

from __future__ import annotations

import logging
from typing import Callable

from PySide6.QtCore import QObject, QTimer, Qt, Slot

logger = logging.getLogger(__name__)


class QtTickDriver(QObject):
    """
    Call ``on_tick`` every ``period`` seconds from the Qt event loop.

    Because the timer lives on the GUI thread, everything the tick mutates
    (history buffer, current point) is written on the same thread that paints
    it.
    """

    def __init__(self, on_tick: Callable[[], object], period: float, parent: QObject | None = None) -> None:
        super().__init__(parent)
        if period <= 0.0:
            raise ValueError("period must be positive.")
        self._on_tick = on_tick
        self._timer = QTimer(self)
        self._timer.setTimerType(Qt.TimerType.PreciseTimer)
        self._timer.setInterval(max(1, int(round(period * 1000.0))))
        self._timer.timeout.connect(self._handle_timeout)

    def start(self) -> None:
        self._timer.start()

    def stop(self) -> None:
        self._timer.stop()

    def is_active(self) -> bool:
        return self._timer.isActive()

    @Slot()
    def _handle_timeout(self) -> None:
        try:
            self._on_tick()
        except Exception:
            logger.exception("Render tick callback failed")
