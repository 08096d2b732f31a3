"""Synthetic cornering pattern used by the demo viewer and tests."""

from __future__ import annotations

from typing import Iterator, Optional, Tuple

import numpy as np

from ..core.models import AccelerationSample
from .source import ThreadedSampleSource


class SyntheticSampleSource(ThreadedSampleSource):
    """
    Generate a lap-like pattern: lateral and longitudinal G trace a circle of
    ``amplitude_g`` once every ``1 / lap_hz`` seconds, plus Gaussian noise.

    The lateral signal goes on ``x`` and the longitudinal one on ``z``, which
    matches the default :class:`~trackbuddy.config.axes.AxisMapping`.
    """

    def __init__(
        self,
        rate_hz: float = 100.0,
        *,
        amplitude_g: float = 1.0,
        lap_hz: float = 0.25,
        noise_g: float = 0.02,
        duration_s: Optional[float] = None,
        seed: Optional[int] = None,
        realtime: bool = True,
    ) -> None:
        super().__init__(rate_hz, realtime=realtime, thread_name="TrackBuddySyntheticSource")
        self.amplitude_g = float(amplitude_g)
        self.lap_hz = float(lap_hz)
        self.noise_g = max(0.0, float(noise_g))
        self.duration_s = duration_s
        self._rng = np.random.default_rng(seed)

    def sample_at(self, t: float) -> AccelerationSample:
        phase = 2.0 * np.pi * self.lap_hz * t
        noise = self._rng.normal(0.0, self.noise_g, size=3) if self.noise_g > 0 else np.zeros(3)
        return AccelerationSample(
            x=float(self.amplitude_g * np.sin(phase) + noise[0]),
            y=float(noise[1]),
            z=float(self.amplitude_g * np.cos(phase) + noise[2]),
        )

    def generate(self, count: Optional[int] = None) -> Iterator[AccelerationSample]:
        """Yield samples spaced ``1 / rate_hz`` apart, forever if ``count`` is None."""
        dt = 1.0 / self.rate_hz
        if count is None and self.duration_s is not None:
            count = int(round(self.duration_s * self.rate_hz))
        index = 0
        while count is None or index < count:
            yield self.sample_at(index * dt)
            index += 1

    def _produce(self) -> Iterator[Tuple[Optional[AccelerationSample], None]]:
        for sample in self.generate():
            yield sample, None
