"""Sample source protocol, sensor errors and the shared threaded base."""

from __future__ import annotations

import logging
import threading
import time
from typing import Callable, Optional, Protocol

from ..core.models import AccelerationSample

logger = logging.getLogger(__name__)

SampleCallback = Callable[[Optional[AccelerationSample], Optional[Exception]], None]


class SensorError(Exception):
    """Base class for sensor problems surfaced to the pipeline."""


class SensorUnavailable(SensorError):
    """The sensor cannot be started; the pipeline stays idle."""


class SensorDeliveryError(SensorError):
    """A single delivery failed; its payload must be discarded."""


class SampleSource(Protocol):
    """Producer of acceleration samples on a background context."""

    def is_available(self) -> bool:  # pragma: no cover - protocol
        ...

    def start(self, callback: SampleCallback) -> None:  # pragma: no cover - protocol
        ...

    def stop(self) -> None:  # pragma: no cover - protocol
        ...


class ThreadedSampleSource:
    """
    Base class running :meth:`_produce` on a daemon thread.

    Subclasses yield ``(sample, error)`` pairs from :meth:`_produce`; the base
    paces them at ``rate_hz`` (unless ``realtime`` is off) and forwards them
    to the registered callback.
    """

    def __init__(self, rate_hz: float, *, realtime: bool = True, thread_name: Optional[str] = None) -> None:
        if rate_hz <= 0.0:
            raise ValueError("rate_hz must be positive.")
        self.rate_hz = float(rate_hz)
        self.realtime = bool(realtime)
        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None
        self._thread_name = thread_name or type(self).__name__

    def is_available(self) -> bool:
        return True

    def start(self, callback: SampleCallback) -> None:
        if not self.is_available():
            raise SensorUnavailable(f"{type(self).__name__} is not available")
        if self._thread is not None and self._thread.is_alive():
            return
        self._stop_event.clear()
        self._thread = threading.Thread(
            target=self._run,
            args=(callback,),
            name=self._thread_name,
            daemon=True,
        )
        self._thread.start()

    def stop(self, *, join: bool = True, timeout: Optional[float] = 1.0) -> None:
        self._stop_event.set()
        if join and self._thread is not None and self._thread is not threading.current_thread():
            self._thread.join(timeout)

    def is_alive(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def join(self, timeout: Optional[float] = None) -> None:
        if self._thread is not None:
            self._thread.join(timeout)

    def _produce(self):  # pragma: no cover - abstract
        raise NotImplementedError

    def _run(self, callback: SampleCallback) -> None:
        interval = 1.0 / self.rate_hz
        next_due = time.monotonic()
        for sample, error in self._produce():
            if self._stop_event.is_set():
                break
            try:
                callback(sample, error)
            except Exception:
                logger.exception("Error in sample callback for %r", sample)
            if self.realtime:
                next_due += interval
                delay = next_due - time.monotonic()
                if delay > 0 and self._stop_event.wait(delay):
                    break
        logger.debug("%s finished", self._thread_name)
