"""Axis sign convention for projecting 3-axis samples onto the G-force plane."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

AXIS_NAMES = ("x", "y", "z")


def _coerce_sign(value: Any, default: int) -> int:
    try:
        sign = float(value)
    except (TypeError, ValueError):
        return default
    if sign == 0.0:
        return default
    return 1 if sign > 0 else -1


def _coerce_axis(value: Any, default: str) -> str:
    name = str(value or default).strip().lower()
    return name if name in AXIS_NAMES else default


@dataclass(frozen=True)
class AxisMapping:
    """
    Which sensor axis drives each graph direction, and with which sign.

    lateral: positive values count as "left", negative as "right".
    longitudinal: positive values count as "acceleration", negative as "braking".

    The physical orientation of the phone decides which convention is right,
    so it is always supplied from configuration and never guessed here.
    """

    lateral_axis: str = "x"
    lateral_sign: int = 1
    longitudinal_axis: str = "z"
    longitudinal_sign: int = 1

    def __post_init__(self) -> None:
        if self.lateral_axis not in AXIS_NAMES or self.longitudinal_axis not in AXIS_NAMES:
            raise ValueError(f"axes must be one of {AXIS_NAMES}")
        if self.lateral_axis == self.longitudinal_axis:
            raise ValueError("lateral_axis and longitudinal_axis must differ")
        if self.lateral_sign not in (-1, 1) or self.longitudinal_sign not in (-1, 1):
            raise ValueError("axis signs must be +1 or -1")

    def lateral(self, sample: Any) -> float:
        """Signed lateral G of ``sample`` (anything with x/y/z attributes)."""
        return self.lateral_sign * float(getattr(sample, self.lateral_axis))

    def longitudinal(self, sample: Any) -> float:
        """Signed longitudinal G of ``sample``."""
        return self.longitudinal_sign * float(getattr(sample, self.longitudinal_axis))

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any] | None) -> "AxisMapping":
        """
        Construct an AxisMapping from the ``axes`` block of a config file.

        Supported shape::

            axes:
              lateral: x
              lateral_sign: 1
              longitudinal: z
              longitudinal_sign: -1

        Unknown axis names and zero/invalid signs fall back to the defaults.
        """
        payload: Mapping[str, Any] = mapping if isinstance(mapping, Mapping) else {}
        defaults = cls()
        return cls(
            lateral_axis=_coerce_axis(payload.get("lateral"), defaults.lateral_axis),
            lateral_sign=_coerce_sign(payload.get("lateral_sign"), defaults.lateral_sign),
            longitudinal_axis=_coerce_axis(payload.get("longitudinal"), defaults.longitudinal_axis),
            longitudinal_sign=_coerce_sign(payload.get("longitudinal_sign"), defaults.longitudinal_sign),
        )

    def to_mapping(self) -> dict:
        return {
            "lateral": self.lateral_axis,
            "lateral_sign": self.lateral_sign,
            "longitudinal": self.longitudinal_axis,
            "longitudinal_sign": self.longitudinal_sign,
        }
