"""Pointer-position helpers shared by the knob tests."""

import math

from knob_input.models import Point


def on_circle(center: Point, angle_deg: float, radius: float = 50.0) -> Point:
    """Screen point at ``angle_deg`` (counter-clockwise from +x) around ``center``."""
    theta = math.radians(angle_deg)
    return Point(
        x=center.x + radius * math.cos(theta),
        y=center.y - radius * math.sin(theta),
    )
