"""Dataclasses describing knob configuration and interaction state."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping, Optional

import json
import math
import numbers

DEFAULT_ANGLE = 90.0


class InvalidSettings(ValueError):
    """Raised when a knob configuration cannot be used."""


class TrackingMode(Enum):
    """How pointer movement is turned into knob rotation."""

    RELATIVE = "relative"  # session delta, the knob never jumps
    ABSOLUTE = "absolute"  # knob follows the pointer direction


@dataclass(frozen=True)
class Point:
    """A 2D coordinate, screen orientation (y grows downward)."""

    x: float
    y: float


@dataclass(frozen=True)
class Bound:
    """One end of a :class:`Range`: an angle and the value it stands for."""

    angle: float
    value: float


@dataclass(frozen=True)
class Range:
    """Angular interval of valid knob angles and its linear value mapping."""

    min: Bound
    max: Bound

    def __post_init__(self) -> None:
        if self.min.angle == self.max.angle:
            raise InvalidSettings("range min and max angles must differ")
        if self.min.value == self.max.value:
            raise InvalidSettings("range min and max values must differ")

    @staticmethod
    def default() -> "Range":
        """270° sweep from 225° (value 0) clockwise to -45° (value 100)."""
        return Range(
            min=Bound(angle=225.0, value=0.0), max=Bound(angle=-45.0, value=100.0)
        )

    @property
    def low_angle(self) -> float:
        return min(self.min.angle, self.max.angle)

    @property
    def high_angle(self) -> float:
        return max(self.min.angle, self.max.angle)

    @property
    def low_value(self) -> float:
        return min(self.min.value, self.max.value)

    @property
    def high_value(self) -> float:
        return max(self.min.value, self.max.value)


@dataclass
class InteractionSession:
    """State of one drag/touch gesture.

    ``initial_pointer_angle`` stays ``None`` while the gesture has only been
    seen exactly on the knob center.
    """

    initial_knob_angle: float
    initial_pointer_angle: Optional[float] = None
    last_pointer_angle: Optional[float] = None


def is_real_number(value: Any) -> bool:
    """True for finite real numbers, numpy scalars included; bools are not."""
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        return False
    try:
        return math.isfinite(value)
    except OverflowError:  # ints beyond float range
        return False


def _parse_angle(raw: Any) -> Optional[float]:
    if raw is None or raw == "":
        return None
    if isinstance(raw, str):
        try:
            parsed = float(raw.strip())
        except ValueError:
            raise InvalidSettings(f"initial_angle is not numeric: {raw!r}") from None
    elif is_real_number(raw):
        parsed = float(raw)
    else:
        raise InvalidSettings(f"initial_angle is not numeric: {raw!r}")
    if not math.isfinite(parsed):
        raise InvalidSettings(f"initial_angle is not finite: {raw!r}")
    return parsed


def _parse_bound(raw: Any, name: str, fallback: Bound) -> Bound:
    if raw is None:
        return fallback
    if not isinstance(raw, Mapping):
        raise InvalidSettings(f"range.{name} must be a mapping")
    angle = raw.get("angle")
    value = raw.get("value")
    if not (is_real_number(angle) and is_real_number(value)):
        raise InvalidSettings(f"range.{name} needs numeric 'angle' and 'value'")
    return Bound(angle=float(angle), value=float(value))


def _parse_range(raw: Any) -> Optional[Range]:
    if raw is None:
        return None
    if not isinstance(raw, Mapping):
        raise InvalidSettings("range must be a mapping")
    default = Range.default()
    return Range(
        min=_parse_bound(raw.get("min"), "min", default.min),
        max=_parse_bound(raw.get("max"), "max", default.max),
    )


def _parse_tracking(raw: Any) -> TrackingMode:
    if raw is None:
        return TrackingMode.RELATIVE
    if isinstance(raw, TrackingMode):
        return raw
    try:
        return TrackingMode(str(raw).lower())
    except ValueError:
        raise InvalidSettings(f"unknown tracking mode: {raw!r}") from None


@dataclass
class KnobSettings:
    """Validated configuration for one knob."""

    initial_angle: Optional[float] = None
    range: Optional[Range] = None
    tracking: TrackingMode = field(default=TrackingMode.RELATIVE)

    def resolved_initial_angle(self) -> float:
        if self.initial_angle is not None:
            return self.initial_angle
        if self.range is not None:
            return self.range.min.angle
        return DEFAULT_ANGLE

    @staticmethod
    def from_mapping(data: Mapping[str, Any]) -> "KnobSettings":
        if not isinstance(data, Mapping):
            raise InvalidSettings("knob settings must be a mapping")
        return KnobSettings(
            initial_angle=_parse_angle(data.get("initial_angle")),
            range=_parse_range(data.get("range")),
            tracking=_parse_tracking(data.get("tracking")),
        )

    @staticmethod
    def from_json(text: str) -> "KnobSettings":
        try:
            data = json.loads(text)
        except ValueError as exc:  # JSONDecodeError, oversized int literals
            raise InvalidSettings(f"settings are not valid JSON: {exc}") from exc
        return KnobSettings.from_mapping(data)


__all__ = [
    "DEFAULT_ANGLE",
    "Bound",
    "InteractionSession",
    "InvalidSettings",
    "KnobSettings",
    "Point",
    "Range",
    "TrackingMode",
    "is_real_number",
]
