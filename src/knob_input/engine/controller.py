"""Rotation controller: the knob's interaction state machine."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, List, Mapping, Optional, Union

import logging

from ..models import (
    InteractionSession,
    InvalidSettings,
    KnobSettings,
    Point,
    Range,
    TrackingMode,
    is_real_number,
)
from ..utils import clamp
from .angles import (
    DegenerateGeometry,
    angle_for_value,
    angle_of,
    constrain_angle,
    screen_rotation,
    value_of,
)

logger = logging.getLogger(__name__)

AngleListener = Callable[[float], None]
ValueListener = Callable[[float], None]


class ControllerState(Enum):
    IDLE = "idle"
    DRAGGING = "dragging"


class RotationController:
    """Owns the current knob angle and the active drag session.

    Every angle change goes through :meth:`rotate_to`, which notifies the
    angle listeners and, when a range is configured, the value listeners.
    Calls are expected from a single thread (the UI event loop).
    """

    def __init__(
        self,
        center: Point,
        initial_angle: Optional[float] = None,
        range: Optional[Range] = None,
        tracking: TrackingMode = TrackingMode.RELATIVE,
        on_angle_changed: Optional[AngleListener] = None,
        on_value_changed: Optional[ValueListener] = None,
    ) -> None:
        self._center = center
        self._range = range
        self._tracking = tracking
        self._session: Optional[InteractionSession] = None
        self._angle_listeners: List[AngleListener] = []
        self._value_listeners: List[ValueListener] = []
        if on_angle_changed is not None:
            self._angle_listeners.append(on_angle_changed)
        if on_value_changed is not None:
            self._value_listeners.append(on_value_changed)

        if initial_angle is None:
            initial_angle = KnobSettings(range=range).resolved_initial_angle()
        if not is_real_number(initial_angle):
            raise InvalidSettings(f"initial angle is not numeric: {initial_angle!r}")
        self._angle = float(initial_angle)
        self.rotate_to(self._constrain(self._angle))

    # ----------------------------- Properties ---------------------------------

    @property
    def angle(self) -> float:
        return self._angle

    @property
    def value(self) -> Optional[float]:
        if self._range is None:
            return None
        return value_of(self._angle, self._range)

    @property
    def screen_rotation(self) -> float:
        return screen_rotation(self._angle)

    @property
    def range(self) -> Optional[Range]:
        return self._range

    @property
    def tracking(self) -> TrackingMode:
        return self._tracking

    @property
    def center(self) -> Point:
        return self._center

    @center.setter
    def center(self, center: Point) -> None:
        self._center = center

    @property
    def session(self) -> Optional[InteractionSession]:
        return self._session

    @property
    def state(self) -> ControllerState:
        if self._session is None:
            return ControllerState.IDLE
        return ControllerState.DRAGGING

    @property
    def is_dragging(self) -> bool:
        return self._session is not None

    def add_angle_listener(self, listener: AngleListener) -> None:
        self._angle_listeners.append(listener)

    def add_value_listener(self, listener: ValueListener) -> None:
        self._value_listeners.append(listener)

    # ----------------------------- Interaction --------------------------------

    def begin_interaction(self, point: Point) -> None:
        session = InteractionSession(initial_knob_angle=self._angle)
        try:
            pointer = angle_of(point, self._center, reference=self._angle)
        except DegenerateGeometry:
            logger.debug("Gesture started on the knob center; angle pending")
        else:
            session.initial_pointer_angle = pointer
            session.last_pointer_angle = pointer
        self._session = session

    def update_interaction(self, point: Point) -> None:
        session = self._session
        if session is None:
            return

        reference = session.last_pointer_angle
        if reference is None:
            reference = self._angle
        try:
            pointer = angle_of(point, self._center, reference=reference)
        except DegenerateGeometry:
            logger.debug("Ignoring pointer update on the knob center")
            return
        session.last_pointer_angle = pointer

        if session.initial_pointer_angle is None:
            # First usable position of a gesture that began on the center.
            session.initial_pointer_angle = pointer
            if self._tracking is TrackingMode.RELATIVE:
                return

        if self._tracking is TrackingMode.ABSOLUTE:
            candidate = pointer
        else:
            delta = pointer - session.initial_pointer_angle
            candidate = session.initial_knob_angle + delta

        self.rotate_to(self._constrain(candidate))

    def end_interaction(self) -> None:
        self._session = None

    def set_value(self, value: Any) -> bool:
        """Rotate the knob to the angle standing for ``value``.

        Values outside the range are clamped to its nearest end. Returns
        False, changing nothing, when no range is configured or ``value`` is
        not a finite number.
        """
        rng = self._range
        if rng is None or not is_real_number(value):
            return False
        value = clamp(float(value), rng.low_value, rng.high_value)
        self.rotate_to(self._constrain(angle_for_value(value, rng)))
        return True

    def rotate_to(self, angle: float) -> None:
        self._angle = angle
        for angle_listener in list(self._angle_listeners):
            angle_listener(angle)
        if self._range is not None:
            value = value_of(angle, self._range)
            for value_listener in list(self._value_listeners):
                value_listener(value)

    def _constrain(self, angle: float) -> float:
        if self._range is None:
            return angle
        return constrain_angle(angle, self._range)


@dataclass
class Construction:
    """Outcome of :func:`create_controller`."""

    controller: Optional[RotationController] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.controller is not None


def create_controller(
    settings: Union[KnobSettings, Mapping[str, Any], None],
    center: Point,
    on_angle_changed: Optional[AngleListener] = None,
    on_value_changed: Optional[ValueListener] = None,
) -> Construction:
    """Build a controller without ever raising on bad configuration.

    Invalid settings are logged and reported through the returned
    :class:`Construction`; the caller decides whether to show anything.
    """
    try:
        if settings is None:
            settings = KnobSettings()
        elif not isinstance(settings, KnobSettings):
            settings = KnobSettings.from_mapping(settings)
        if not (is_real_number(center.x) and is_real_number(center.y)):
            raise InvalidSettings(f"knob center is not a finite point: {center!r}")
        controller = RotationController(
            center,
            initial_angle=settings.resolved_initial_angle(),
            range=settings.range,
            tracking=settings.tracking,
            on_angle_changed=on_angle_changed,
            on_value_changed=on_value_changed,
        )
    except InvalidSettings as exc:
        logger.warning("Knob not initialized: %s", exc)
        return Construction(error=str(exc))
    return Construction(controller=controller)


__all__ = [
    "AngleListener",
    "Construction",
    "ControllerState",
    "RotationController",
    "ValueListener",
    "create_controller",
]
