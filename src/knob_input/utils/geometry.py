"""Geometry helpers used by the angle engine and the knob renderer."""

import math
from typing import Tuple

import numpy as np


def rotate_point(
    x: float, y: float, cx: float, cy: float, angle_deg: float
) -> Tuple[float, float]:
    """Rotate a point around ``(cx, cy)`` by ``angle_deg`` degrees."""
    theta = math.radians(angle_deg)
    cos_t = math.cos(theta)
    sin_t = math.sin(theta)
    x0 = x - cx
    y0 = y - cy
    xr = x0 * cos_t - y0 * sin_t + cx
    yr = x0 * sin_t + y0 * cos_t + cy
    return xr, yr


def clamp(value: float, lo: float, hi: float) -> float:
    """Clamp ``value`` to the inclusive range ``[lo, hi]``."""
    return max(lo, min(hi, value))


def arc_points(
    cx: float,
    cy: float,
    radius: float,
    start_deg: float,
    end_deg: float,
    count: int,
) -> np.ndarray:
    """Return ``count`` screen points evenly spaced on an arc.

    Angles follow the math convention (counter-clockwise from +x) while the
    returned coordinates are in screen space, so y is flipped. The result has
    shape ``(count, 2)``; both endpoints are included.
    """
    n = max(0, int(count))
    if n == 0:
        return np.empty((0, 2), dtype=np.float64)
    if n == 1:
        angles = np.array([math.radians(start_deg)])
    else:
        angles = np.radians(np.linspace(start_deg, end_deg, n))
    xs = cx + radius * np.cos(angles)
    ys = cy - radius * np.sin(angles)
    return np.column_stack((xs, ys))


__all__ = ["rotate_point", "clamp", "arc_points"]
