"""Angle engine: pointer geometry and the angle/value mapping.

Angles are in degrees, measured counter-clockwise from the positive x-axis
of the knob center. They are never normalized, so a knob turned twice
around reads 720 rather than 0.
"""

from __future__ import annotations

import math
from typing import Optional

from ..models import Point, Range
from ..utils import clamp

FULL_TURN = 360.0


class DegenerateGeometry(ValueError):
    """Raised when a pointer sits exactly on the knob center."""


def nearest_turn(angle: float, reference: float) -> float:
    """Shift ``angle`` by whole turns to the branch closest to ``reference``."""
    turns = round((reference - angle) / FULL_TURN)
    return angle + FULL_TURN * turns


def angle_of(point: Point, center: Point, reference: Optional[float] = None) -> float:
    """Angle of ``point`` as seen from ``center``.

    Without ``reference`` the result lies in ``(-90, 270]``. With it, whole
    turns are added or removed so the result is continuous with
    ``reference``; this is what lets a drag accumulate several revolutions.
    """
    dx = point.x - center.x
    dy = center.y - point.y  # screen y grows downward
    hyp = math.hypot(dx, dy)
    if hyp == 0.0:
        raise DegenerateGeometry("pointer coincides with the knob center")

    arcsine = math.degrees(math.asin(clamp(dy / hyp, -1.0, 1.0)))
    raw = arcsine if dx > 0 else 180.0 - arcsine
    if reference is None:
        return raw
    return nearest_turn(raw, reference)


def direction_sign(rng: Range) -> int:
    return 1 if rng.max.angle > rng.min.angle else -1


def arc_percent(angle: float, rng: Range) -> float:
    """Angular distance of ``angle`` from ``rng.min``, as a share of the sweep."""
    return abs(angle - rng.min.angle) / abs(rng.max.angle - rng.min.angle)


def value_of(angle: float, rng: Range) -> float:
    value_span = abs(rng.max.value - rng.min.value)
    return arc_percent(angle, rng) * value_span + rng.min.value


def angle_for_value(value: float, rng: Range) -> float:
    """Inverse of :func:`value_of` inside the range."""
    percent = abs(value - rng.min.value) / abs(rng.max.value - rng.min.value)
    angle_span = abs(rng.max.angle - rng.min.angle)
    return percent * angle_span * direction_sign(rng) + rng.min.angle


def is_angle_in_range(angle: float, rng: Range) -> bool:
    return rng.low_angle <= angle <= rng.high_angle


def constrain_angle(angle: float, rng: Range) -> float:
    """Apply the range-exceeded policy.

    Angles inside the range pass through. Others snap to ``rng.min`` when
    they are less than halfway along the sweep from it, else to ``rng.max``.
    """
    if is_angle_in_range(angle, rng):
        return angle
    return rng.min.angle if arc_percent(angle, rng) < 0.5 else rng.max.angle


def screen_rotation(angle: float) -> float:
    """Clockwise-from-top rotation used to draw a knob at ``angle``."""
    return -(angle - 90.0)


__all__ = [
    "DegenerateGeometry",
    "FULL_TURN",
    "angle_for_value",
    "angle_of",
    "arc_percent",
    "constrain_angle",
    "direction_sign",
    "is_angle_in_range",
    "nearest_turn",
    "screen_rotation",
    "value_of",
]
