import logging
import math
from typing import List

import numpy as np
import pytest

from helpers import on_circle
from knob_input.engine import ControllerState, RotationController, create_controller
from knob_input.models import Bound, InvalidSettings, Point, Range, TrackingMode


def _recorders():
    angles: List[float] = []
    values: List[float] = []
    return angles, values


# ------------------------------ Scenarios -------------------------------------


def test_default_range_starts_at_min(center: Point) -> None:
    knob = RotationController(center, range=Range.default())
    assert knob.angle == pytest.approx(225.0)
    assert knob.value == pytest.approx(0.0)
    assert knob.state is ControllerState.IDLE


def test_set_value_resolves_angles_on_default_range(center: Point) -> None:
    knob = RotationController(center, range=Range.default())
    assert knob.set_value(100)
    assert knob.angle == pytest.approx(-45.0)
    assert knob.set_value(50.0)
    assert knob.angle == pytest.approx(90.0)


def test_drag_from_top_to_right_turns_knob_to_zero(center: Point) -> None:
    knob = RotationController(center, initial_angle=90.0)
    knob.begin_interaction(Point(center.x, center.y - 10.0))
    assert knob.session is not None
    assert knob.session.initial_pointer_angle == pytest.approx(90.0)

    knob.update_interaction(Point(center.x + 10.0, center.y))
    assert knob.angle == pytest.approx(0.0)
    assert knob.is_dragging


def test_angle_only_knob_defaults_to_90(center: Point) -> None:
    knob = RotationController(center)
    assert knob.angle == 90.0
    assert knob.value is None
    assert knob.screen_rotation == 0.0


# ------------------------------ Sessions --------------------------------------


def test_zero_delta_update_keeps_angle(center: Point) -> None:
    knob = RotationController(center, initial_angle=37.0)
    p0 = on_circle(center, 200.0)
    knob.begin_interaction(p0)
    knob.update_interaction(p0)
    assert knob.angle == pytest.approx(37.0)


def test_drag_does_not_jump_to_pointer(center: Point) -> None:
    knob = RotationController(center, initial_angle=10.0)
    knob.begin_interaction(on_circle(center, 180.0))
    knob.update_interaction(on_circle(center, 190.0))
    assert knob.angle == pytest.approx(20.0)


def test_update_while_idle_is_ignored(center: Point) -> None:
    seen, _ = _recorders()
    knob = RotationController(center, initial_angle=45.0, on_angle_changed=seen.append)
    knob.update_interaction(on_circle(center, 300.0))
    assert knob.angle == 45.0
    assert seen == [45.0]


def test_end_interaction_discards_session(center: Point) -> None:
    knob = RotationController(center, initial_angle=0.0)
    knob.begin_interaction(on_circle(center, 0.0))
    knob.update_interaction(on_circle(center, 30.0))
    knob.end_interaction()
    assert knob.session is None
    assert knob.state is ControllerState.IDLE
    assert knob.angle == pytest.approx(30.0)

    knob.update_interaction(on_circle(center, 120.0))
    assert knob.angle == pytest.approx(30.0)


def test_new_session_resumes_from_current_angle(center: Point) -> None:
    knob = RotationController(center, initial_angle=0.0)
    knob.begin_interaction(on_circle(center, 0.0))
    knob.update_interaction(on_circle(center, 40.0))
    knob.end_interaction()

    knob.begin_interaction(on_circle(center, 270.0))
    knob.update_interaction(on_circle(center, 280.0))
    assert knob.angle == pytest.approx(50.0)


def test_begin_while_dragging_restarts_session(center: Point) -> None:
    knob = RotationController(center, initial_angle=0.0)
    knob.begin_interaction(on_circle(center, 0.0))
    knob.update_interaction(on_circle(center, 60.0))
    knob.begin_interaction(on_circle(center, 150.0))
    assert knob.session is not None
    assert knob.session.initial_knob_angle == pytest.approx(60.0)


@pytest.mark.parametrize("step", (30.0, -30.0))
def test_drag_accumulates_full_revolutions(center: Point, step: float) -> None:
    knob = RotationController(center, initial_angle=0.0)
    knob.begin_interaction(on_circle(center, 0.0))
    deg = 0.0
    for _ in range(24):
        deg += step
        knob.update_interaction(on_circle(center, deg))
    assert knob.angle == pytest.approx(math.copysign(720.0, step))
    assert knob.screen_rotation == pytest.approx(-(knob.angle - 90.0))


def test_drag_crossing_bottom_of_knob_is_continuous(center: Point) -> None:
    knob = RotationController(center, initial_angle=90.0)
    knob.begin_interaction(on_circle(center, 260.0))
    knob.update_interaction(on_circle(center, 275.0))
    assert knob.angle == pytest.approx(105.0)
    knob.update_interaction(on_circle(center, 255.0))
    assert knob.angle == pytest.approx(85.0)


# ------------------------------ Degenerate input ------------------------------


def test_gesture_starting_on_center_waits_for_usable_position(center: Point) -> None:
    knob = RotationController(center, initial_angle=10.0)
    knob.begin_interaction(center)
    assert knob.is_dragging
    assert knob.session is not None
    assert knob.session.initial_pointer_angle is None

    knob.update_interaction(on_circle(center, 0.0))
    assert knob.angle == pytest.approx(10.0)
    knob.update_interaction(on_circle(center, 90.0))
    assert knob.angle == pytest.approx(100.0)


def test_update_on_center_keeps_previous_angle(center: Point) -> None:
    knob = RotationController(center, initial_angle=0.0)
    knob.begin_interaction(on_circle(center, 0.0))
    knob.update_interaction(on_circle(center, 20.0))
    knob.update_interaction(center)
    assert knob.angle == pytest.approx(20.0)
    assert knob.is_dragging


# ------------------------------ Range policy ----------------------------------


def test_drag_past_max_snaps_to_max(center: Point) -> None:
    knob = RotationController(center, initial_angle=0.0, range=Range.default())
    knob.begin_interaction(on_circle(center, 0.0))
    knob.update_interaction(on_circle(center, -90.0))
    assert knob.angle == pytest.approx(-45.0)
    assert knob.value == pytest.approx(100.0)


def test_drag_past_min_snaps_then_recovers(center: Point) -> None:
    knob = RotationController(center, range=Range.default())
    knob.begin_interaction(on_circle(center, 225.0))
    knob.update_interaction(on_circle(center, 250.0))
    assert knob.angle == pytest.approx(225.0)

    knob.update_interaction(on_circle(center, 90.0))
    assert knob.angle == pytest.approx(90.0)
    assert knob.value == pytest.approx(50.0)


def test_initial_angle_outside_range_is_snapped(center: Point) -> None:
    knob = RotationController(center, initial_angle=-60.0, range=Range.default())
    assert knob.angle == pytest.approx(-45.0)


def test_rising_range_clamps_both_ends(center: Point) -> None:
    rng = Range(min=Bound(angle=0.0, value=0.0), max=Bound(angle=180.0, value=10.0))
    knob = RotationController(center, range=rng)
    assert knob.angle == 0.0
    knob.begin_interaction(on_circle(center, 0.0))
    knob.update_interaction(on_circle(center, -20.0))
    assert knob.angle == 0.0
    knob.update_interaction(on_circle(center, 120.0))
    assert knob.value == pytest.approx(120.0 / 18.0)
    knob.update_interaction(on_circle(center, 200.0))
    assert knob.angle == 180.0


# ------------------------------ Values ----------------------------------------


@pytest.mark.parametrize(
    "bad", (float("nan"), float("inf"), "50", None, True, 10**400, -(10**400))
)
def test_set_value_ignores_non_numbers(center: Point, bad) -> None:
    knob = RotationController(center, range=Range.default())
    assert not knob.set_value(bad)
    assert knob.angle == pytest.approx(225.0)


def test_set_value_accepts_numpy_scalars(center: Point) -> None:
    knob = RotationController(center, range=Range.default())
    assert knob.set_value(np.int64(50))
    assert knob.angle == pytest.approx(90.0)
    assert knob.set_value(np.float32(100.0))
    assert knob.angle == pytest.approx(-45.0)


def test_set_value_without_range_is_noop(center: Point) -> None:
    knob = RotationController(center, initial_angle=12.0)
    assert not knob.set_value(3.0)
    assert knob.angle == 12.0


@pytest.mark.parametrize(("value", "angle"), ((150.0, -45.0), (-10.0, 225.0)))
def test_set_value_outside_range_clamps(center: Point, value, angle) -> None:
    knob = RotationController(center, range=Range.default())
    assert knob.set_value(value)
    assert knob.angle == pytest.approx(angle)


def test_set_value_works_mid_drag_and_bypasses_session(center: Point) -> None:
    knob = RotationController(center, range=Range.default())
    knob.begin_interaction(on_circle(center, 225.0))
    assert knob.set_value(25.0)
    assert knob.angle == pytest.approx(157.5)
    assert knob.session is not None
    assert knob.session.initial_knob_angle == pytest.approx(225.0)


def test_listeners_receive_angle_and_value(center: Point) -> None:
    seen_angles, seen_values = _recorders()
    knob = RotationController(
        center,
        range=Range.default(),
        on_angle_changed=seen_angles.append,
        on_value_changed=seen_values.append,
    )
    extra: List[float] = []
    knob.add_value_listener(extra.append)
    knob.set_value(50.0)

    assert seen_angles == pytest.approx([225.0, 90.0])
    assert seen_values == pytest.approx([0.0, 50.0])
    assert extra == pytest.approx([50.0])


def test_value_listener_silent_without_range(center: Point) -> None:
    seen_angles, seen_values = _recorders()
    knob = RotationController(
        center, on_angle_changed=seen_angles.append, on_value_changed=seen_values.append
    )
    knob.begin_interaction(on_circle(center, 90.0))
    knob.update_interaction(on_circle(center, 100.0))
    assert seen_angles == pytest.approx([90.0, 100.0])
    assert seen_values == []


# ------------------------------ Tracking & center -----------------------------


def test_absolute_tracking_follows_pointer(center: Point) -> None:
    knob = RotationController(
        center, initial_angle=90.0, tracking=TrackingMode.ABSOLUTE
    )
    knob.begin_interaction(on_circle(center, 0.0))
    assert knob.angle == 90.0
    knob.update_interaction(on_circle(center, 45.0))
    assert knob.angle == pytest.approx(45.0)


def test_absolute_tracking_respects_range(center: Point) -> None:
    knob = RotationController(
        center, range=Range.default(), tracking=TrackingMode.ABSOLUTE
    )
    knob.begin_interaction(on_circle(center, 200.0))
    knob.update_interaction(on_circle(center, 260.0))
    assert knob.angle == pytest.approx(225.0)


def test_center_can_move(center: Point) -> None:
    knob = RotationController(center, initial_angle=0.0)
    moved = Point(center.x + 500.0, center.y + 20.0)
    knob.center = moved
    knob.begin_interaction(on_circle(moved, 0.0))
    knob.update_interaction(on_circle(moved, 90.0))
    assert knob.angle == pytest.approx(90.0)


# ------------------------------ Construction ----------------------------------


def test_constructor_rejects_non_finite_angle(center: Point) -> None:
    with pytest.raises(InvalidSettings):
        RotationController(center, initial_angle=float("nan"))


def test_create_controller_defaults(center: Point) -> None:
    outcome = create_controller(None, center)
    assert outcome.ok
    assert outcome.error is None
    assert outcome.controller is not None
    assert outcome.controller.angle == 90.0


def test_create_controller_empty_range_uses_default(center: Point) -> None:
    outcome = create_controller({"range": {}}, center)
    assert outcome.controller is not None
    assert outcome.controller.angle == pytest.approx(225.0)
    assert outcome.controller.range == Range.default()


def test_create_controller_forwards_callbacks(center: Point) -> None:
    seen_values: List[float] = []
    outcome = create_controller(
        {"initial_angle": 90, "range": {}},
        center,
        on_value_changed=seen_values.append,
    )
    assert outcome.ok
    assert seen_values == pytest.approx([50.0])


@pytest.mark.parametrize(
    "settings",
    (
        {"initial_angle": "north"},
        {"range": {"min": {"angle": "0", "value": 0}}},
        {"range": {"max": {"angle": 225, "value": 5}}},
        {"range": {"min": {"angle": 0, "value": 1}, "max": {"angle": 90, "value": 1}}},
        {"tracking": "spin"},
        {"initial_angle": 10**400},
        {"range": {"min": {"angle": 10**400, "value": 0}}},
    ),
)
def test_create_controller_degrades_silently(
    center: Point, settings, caplog: pytest.LogCaptureFixture
) -> None:
    with caplog.at_level(logging.WARNING, logger="knob_input.engine.controller"):
        outcome = create_controller(settings, center)
    assert not outcome.ok
    assert outcome.controller is None
    assert outcome.error
    assert "Knob not initialized" in caplog.text


def test_create_controller_rejects_bad_center() -> None:
    outcome = create_controller(None, Point(float("nan"), 0.0))
    assert not outcome.ok
