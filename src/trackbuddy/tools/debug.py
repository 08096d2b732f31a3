"""Opt-in timing hooks enabled with ``TRACKBUDDY_DEBUG=1``."""

from __future__ import annotations

import logging
import os
import time
from contextlib import contextmanager
from typing import Iterator

logger = logging.getLogger(__name__)

_TRUTHY = {"1", "true", "yes", "on"}


def debug_enabled() -> bool:
    """Return True when lightweight instrumentation should run."""
    return os.getenv("TRACKBUDDY_DEBUG", "").lower() in _TRUTHY


@contextmanager
def time_block(label: str, *, log: logging.Logger | None = None) -> Iterator[None]:
    """
    Log the elapsed time of the wrapped block at DEBUG level when enabled.

    When disabled the cost is a single environment lookup.
    """
    if not debug_enabled():
        yield
        return

    start = time.perf_counter()
    try:
        yield
    finally:
        elapsed_ms = (time.perf_counter() - start) * 1000.0
        (log or logger).debug("%s took %.3f ms", label, elapsed_ms)
