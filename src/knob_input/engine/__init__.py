"""Knob core: angle geometry and the rotation state machine."""

from .angles import (
    DegenerateGeometry,
    angle_for_value,
    angle_of,
    arc_percent,
    constrain_angle,
    direction_sign,
    is_angle_in_range,
    nearest_turn,
    screen_rotation,
    value_of,
)
from .controller import (
    Construction,
    ControllerState,
    RotationController,
    create_controller,
)

__all__ = [
    "Construction",
    "ControllerState",
    "DegenerateGeometry",
    "RotationController",
    "angle_for_value",
    "angle_of",
    "arc_percent",
    "constrain_angle",
    "create_controller",
    "direction_sign",
    "is_angle_in_range",
    "nearest_turn",
    "screen_rotation",
    "value_of",
]
