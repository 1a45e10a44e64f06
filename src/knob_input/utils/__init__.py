"""Shared helpers for the knob_input package."""

from .geometry import arc_points, clamp, rotate_point

__all__ = ["arc_points", "clamp", "rotate_point"]
