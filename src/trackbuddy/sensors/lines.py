"""
Replay logged accelerometer lines as a live sample stream.

Two line formats are understood:

  - JSON objects with ``ax``/``ay``/``az`` (or ``x``/``y``/``z``) in G, any
    extra keys (``timestamp_ns``, ``t_s``, gyro channels) are ignored.
  - Comma-separated ``timestamp,ax,ay,az[,...]`` rows as written by simple
    sensor loggers.

``parse_line()`` returns ``None`` for anything it cannot decode so callers
can skip bad lines without exceptions.
"""

from __future__ import annotations

import json
import logging
import math
from pathlib import Path
from typing import Any, Iterable, Iterator, Mapping, Optional, Sequence, Tuple

from ..core.models import AccelerationSample
from .source import SensorDeliveryError, ThreadedSampleSource

logger = logging.getLogger(__name__)

_AXIS_KEYS = (("ax", "x"), ("ay", "y"), ("az", "z"))


def _coerce_number(value: Any) -> Optional[float]:
    if isinstance(value, bool) or value is None:
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def _parse_json_line(text: str) -> AccelerationSample | None:
    try:
        obj = json.loads(text)
    except json.JSONDecodeError as exc:
        logger.warning("Bad JSON in sample stream: %r (%s)", text, exc)
        return None

    if not isinstance(obj, Mapping):
        logger.debug("Skipping non-object JSON payload: %r", obj)
        return None

    values = []
    for primary, alias in _AXIS_KEYS:
        raw = obj.get(primary, obj.get(alias))
        number = _coerce_number(raw)
        if number is None:
            logger.warning("Missing or bad field %s in sample line: %r", primary, obj)
            return None
        values.append(number)
    return AccelerationSample(*values)


def _parse_csv_line(text: str) -> AccelerationSample | None:
    parts: Sequence[str] = text.split(",")
    if len(parts) < 4:
        logger.warning(
            "Expected at least 4 comma-separated values (timestamp,ax,ay,az), got %d: %r",
            len(parts),
            text,
        )
        return None
    values = [_coerce_number(part.strip()) for part in parts[1:4]]
    if any(v is None for v in values):
        logger.warning("Bad CSV field in sample line %r", text)
        return None
    return AccelerationSample(*values)  # type: ignore[arg-type]


def parse_line(line: str) -> AccelerationSample | None:
    """Parse one JSON or CSV line into an :class:`AccelerationSample`."""
    text = line.strip()
    if not text:
        return None
    if text[0] == "{":
        return _parse_json_line(text)
    return _parse_csv_line(text)


class LineSampleSource(ThreadedSampleSource):
    """
    Deliver parsed lines at ``rate_hz`` from a background thread.

    ``lines`` may be any iterable of strings or a path to a log file. Lines
    that fail to parse are delivered as :class:`SensorDeliveryError` so the
    consumer sees the gap; blank lines and ``#`` comments are skipped.
    """

    def __init__(
        self,
        lines: Iterable[str] | str | Path,
        rate_hz: float = 100.0,
        *,
        realtime: bool = True,
    ) -> None:
        super().__init__(rate_hz, realtime=realtime, thread_name="TrackBuddyLineSource")
        self._path: Optional[Path] = None
        self._lines: Optional[Iterable[str]] = None
        if isinstance(lines, (str, Path)):
            self._path = Path(lines).expanduser()
        else:
            self._lines = lines

    def is_available(self) -> bool:
        if self._path is not None:
            return self._path.is_file()
        return self._lines is not None

    def _iter_lines(self) -> Iterator[str]:
        if self._path is not None:
            with self._path.open("r", encoding="utf-8") as fh:
                yield from fh
        elif self._lines is not None:
            yield from self._lines

    def _produce(self) -> Iterator[Tuple[Optional[AccelerationSample], Optional[Exception]]]:
        for raw_line in self._iter_lines():
            line = raw_line.strip()
            if not line or line.startswith("#"):
                continue
            sample = parse_line(line)
            if sample is None:
                yield None, SensorDeliveryError(f"unparseable sample line: {line!r}")
                continue
            yield sample, None
