"""Qt adapter and demo application for the knob_input control."""

from __future__ import annotations

from pathlib import Path
from typing import Any, List, Mapping, Optional, Sequence, Union

import argparse
import logging
import sys

from PySide6 import QtCore, QtGui, QtWidgets

APP_VERSION: str

if __package__ in (None, ""):
    PACKAGE_ROOT = Path(__file__).resolve().parents[1]
    if str(PACKAGE_ROOT) not in sys.path:
        sys.path.insert(0, str(PACKAGE_ROOT))

    import knob_input as _pkg

    from knob_input.engine import RotationController, create_controller
    from knob_input.models import InvalidSettings, KnobSettings, Range, TrackingMode
    from knob_input.utils import arc_points, rotate_point
    from knob_input.utils.qt import point_from_qt, point_to_qt, rect_center

    APP_VERSION = getattr(_pkg, "__version__", "0.0.0")
else:
    from . import __version__ as APP_VERSION
    from .engine import RotationController, create_controller
    from .models import InvalidSettings, KnobSettings, Range, TrackingMode
    from .utils import arc_points, rotate_point
    from .utils.qt import point_from_qt, point_to_qt, rect_center

logger = logging.getLogger(__name__)

SettingsLike = Union[KnobSettings, Mapping[str, Any], None]


def _coerce_settings(settings: SettingsLike) -> KnobSettings:
    if settings is None:
        return KnobSettings()
    if isinstance(settings, KnobSettings):
        return settings
    return KnobSettings.from_mapping(settings)


# ------------------------------- Knob Widget ----------------------------------


class KnobWidget(QtWidgets.QWidget):
    """Round knob rotated by mouse drags and single-finger touch."""

    angleChanged = QtCore.Signal(float)
    valueChanged = QtCore.Signal(float)

    SCALE_TICKS = 11

    def __init__(
        self, settings: SettingsLike = None, parent: Optional[QtWidgets.QWidget] = None
    ) -> None:
        super().__init__(parent)
        self.setMinimumSize(96, 96)
        self.setSizePolicy(
            QtWidgets.QSizePolicy.Policy.Expanding,
            QtWidgets.QSizePolicy.Policy.Expanding,
        )
        self.setAttribute(QtCore.Qt.WidgetAttribute.WA_AcceptTouchEvents, True)

        cfg = _coerce_settings(settings)
        self._controller = RotationController(
            rect_center(QtCore.QRectF(self.rect())),
            initial_angle=cfg.resolved_initial_angle(),
            range=cfg.range,
            tracking=cfg.tracking,
        )
        self._controller.add_angle_listener(self._on_angle)
        self._controller.add_value_listener(self.valueChanged.emit)

    # ----------------------------- Properties ---------------------------------

    @property
    def controller(self) -> RotationController:
        return self._controller

    def angle(self) -> float:
        return self._controller.angle

    def value(self) -> Optional[float]:
        return self._controller.value

    def set_value(self, value: float) -> bool:
        return self._controller.set_value(value)

    # ----------------------------- Interaction --------------------------------

    def _begin(self, pos: QtCore.QPointF) -> None:
        self._controller.begin_interaction(point_from_qt(pos))

    def _move(self, pos: QtCore.QPointF) -> None:
        self._controller.update_interaction(point_from_qt(pos))

    def _end(self) -> None:
        self._controller.end_interaction()

    def _on_angle(self, angle: float) -> None:
        self.angleChanged.emit(angle)
        self.update()

    def mousePressEvent(self, e: QtGui.QMouseEvent) -> None:
        if e.button() != QtCore.Qt.MouseButton.LeftButton:
            e.ignore()
            return
        self._begin(e.position())
        self.setCursor(QtCore.Qt.CursorShape.ClosedHandCursor)
        e.accept()

    def mouseMoveEvent(self, e: QtGui.QMouseEvent) -> None:
        if self._controller.is_dragging:
            self._move(e.position())
            e.accept()
        else:
            self.setCursor(QtCore.Qt.CursorShape.OpenHandCursor)

    def mouseReleaseEvent(self, e: QtGui.QMouseEvent) -> None:
        if e.button() == QtCore.Qt.MouseButton.LeftButton:
            self._end()
            self.setCursor(QtCore.Qt.CursorShape.OpenHandCursor)
        e.accept()

    def event(self, e: QtCore.QEvent) -> bool:
        kind = e.type()
        if kind in (
            QtCore.QEvent.Type.TouchBegin,
            QtCore.QEvent.Type.TouchUpdate,
            QtCore.QEvent.Type.TouchEnd,
            QtCore.QEvent.Type.TouchCancel,
        ):
            self._touch(e, kind)  # type: ignore[arg-type]
            return True
        return super().event(e)

    def _touch(self, e: QtGui.QTouchEvent, kind: QtCore.QEvent.Type) -> None:
        e.accept()
        if kind in (QtCore.QEvent.Type.TouchEnd, QtCore.QEvent.Type.TouchCancel):
            self._end()
            return
        points = e.points()
        if len(points) != 1:
            # Only single-point gestures rotate the knob.
            return
        pos = points[0].position()
        if kind == QtCore.QEvent.Type.TouchBegin:
            self._begin(pos)
        else:
            self._move(pos)

    def hideEvent(self, e: QtGui.QHideEvent) -> None:
        self._end()
        super().hideEvent(e)

    def resizeEvent(self, e: QtGui.QResizeEvent) -> None:
        self._controller.center = rect_center(QtCore.QRectF(self.rect()))
        super().resizeEvent(e)

    # ----------------------------- Painting -----------------------------------

    def _radius(self) -> float:
        return max(8.0, min(self.width(), self.height()) / 2.0 - 12.0)

    def paintEvent(self, e: QtGui.QPaintEvent) -> None:
        painter = QtGui.QPainter(self)
        painter.setRenderHint(QtGui.QPainter.RenderHint.Antialiasing, True)

        center = self._controller.center
        radius = self._radius()
        rng = self._controller.range

        # Scale between the range ends
        if rng is not None:
            ticks = arc_points(
                center.x,
                center.y,
                radius + 6.0,
                rng.min.angle,
                rng.max.angle,
                self.SCALE_TICKS,
            )
            painter.setPen(QtGui.QPen(QtGui.QColor(90, 90, 90), 2))
            for x, y in ticks:
                painter.drawPoint(QtCore.QPointF(float(x), float(y)))

        # Body
        c = point_to_qt(center)
        painter.setPen(QtGui.QPen(QtGui.QColor(60, 60, 60), 2))
        painter.setBrush(QtGui.QBrush(QtGui.QColor(220, 220, 220)))
        painter.drawEllipse(c, radius, radius)

        # Indicator: drawn pointing up, then turned clockwise like the screen
        tip_x, tip_y = rotate_point(
            center.x,
            center.y - radius * 0.8,
            center.x,
            center.y,
            self._controller.screen_rotation,
        )
        painter.setPen(QtGui.QPen(QtGui.QColor(215, 40, 40), 3))
        painter.drawLine(c, QtCore.QPointF(tip_x, tip_y))

        painter.setPen(QtCore.Qt.PenStyle.NoPen)
        painter.setBrush(QtGui.QBrush(QtGui.QColor(60, 60, 60)))
        painter.drawEllipse(c, radius * 0.1, radius * 0.1)


# ------------------------------- Knob Input -----------------------------------


class KnobInput(QtWidgets.QWidget):
    """A :class:`KnobWidget` kept in two-way sync with a numeric field."""

    def __init__(
        self, settings: SettingsLike = None, parent: Optional[QtWidgets.QWidget] = None
    ) -> None:
        super().__init__(parent)
        cfg = _coerce_settings(settings)

        self.knob = KnobWidget(cfg, self)
        self.field = QtWidgets.QDoubleSpinBox(self)
        self.field.setDecimals(2)
        self.field.setKeyboardTracking(False)
        rng = cfg.range
        if rng is not None:
            self.field.setRange(rng.low_value, rng.high_value)
            self.field.setValue(float(self.knob.value() or 0.0))
        else:
            self.field.setVisible(False)

        self.knob.valueChanged.connect(self._on_knob_value)
        self.field.valueChanged.connect(self._on_field_value)

        layout = QtWidgets.QVBoxLayout(self)
        layout.addWidget(self.knob, stretch=1)
        layout.addWidget(self.field, stretch=0)

    def _on_knob_value(self, value: float) -> None:
        self.field.blockSignals(True)
        self.field.setValue(float(value))
        self.field.blockSignals(False)

    def _on_field_value(self, value: float) -> None:
        self.knob.set_value(value)


def mount_knob(
    container: Optional[QtWidgets.QWidget], settings: SettingsLike = None
) -> Optional[KnobInput]:
    """Create a :class:`KnobInput` inside ``container``.

    Returns None, creating and wiring nothing, when the container is missing
    or the settings are invalid. The reason is logged, never raised.
    """
    if container is None:
        logger.warning("Knob not initialized: no container widget")
        return None
    try:
        cfg = _coerce_settings(settings)
    except InvalidSettings as exc:
        logger.warning("Knob not initialized: %s", exc)
        return None

    # Hand-built KnobSettings skip mapping validation; vet them on the core.
    outcome = create_controller(cfg, rect_center(QtCore.QRectF(container.rect())))
    if not outcome.ok:
        return None

    knob = KnobInput(cfg, container)
    layout = container.layout()
    if layout is not None:
        layout.addWidget(knob)
    return knob


# ------------------------------- Main Window ----------------------------------


class MainWindow(QtWidgets.QWidget):
    def __init__(self, settings: KnobSettings, app_version: str) -> None:
        super().__init__(None)
        self.setWindowTitle(f"knob_input {app_version or 'unknown'}")
        self.setMinimumSize(260, 320)

        self.status_label = QtWidgets.QLabel(self)
        self.status_label.setAlignment(QtCore.Qt.AlignmentFlag.AlignCenter)

        layout = QtWidgets.QVBoxLayout(self)
        layout.addWidget(self.status_label)

        self.knob = mount_knob(self, settings)
        if self.knob is None:
            self.status_label.setText("Knob settings are invalid; see the log.")
            return
        self.knob.knob.angleChanged.connect(self._on_angle)
        self._on_angle(self.knob.knob.angle())

    def _on_angle(self, angle: float) -> None:
        text = f"angle {angle:.1f}°"
        value = self.knob.knob.value() if self.knob is not None else None
        if value is not None:
            text += f"  |  value {value:.2f}"
        self.status_label.setText(text)


# ---------------------------------- Main --------------------------------------


def setup_logging(debug: bool = False) -> None:
    """Configure console logging for the demo application."""
    level = logging.DEBUG if debug else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stdout,
    )
    # basicConfig leaves an already configured root alone; the level still applies.
    logging.getLogger().setLevel(level)


def _parse_args(argv: Optional[Sequence[str]]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="knob-input", description="Rotary knob input demo."
    )
    parser.add_argument("--config", type=Path, help="JSON file with knob settings")
    parser.add_argument(
        "--tracking",
        choices=[mode.value for mode in TrackingMode],
        help="override the tracking mode from the settings",
    )
    parser.add_argument(
        "--angle-only",
        action="store_true",
        help="run without a value range when no config is given",
    )
    parser.add_argument("--debug", action="store_true", help="verbose logging")
    return parser.parse_known_args(argv)[0]


def load_settings(args: argparse.Namespace) -> KnobSettings:
    """Settings for the demo window; invalid files fall back to defaults."""
    settings = KnobSettings(range=None if args.angle_only else Range.default())
    if args.config is not None:
        try:
            settings = KnobSettings.from_json(args.config.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:  # ValueError covers InvalidSettings
            logger.warning("Ignoring config %s: %s", args.config, exc)
    if args.tracking:
        settings.tracking = TrackingMode(args.tracking)
    return settings


def main(argv: Optional[List[str]] = None) -> None:
    args = _parse_args(sys.argv[1:] if argv is None else argv)
    setup_logging(args.debug)

    app = QtWidgets.QApplication(sys.argv)
    app.setApplicationName("knob_input")
    app.setApplicationVersion(APP_VERSION)

    window = MainWindow(load_settings(args), APP_VERSION)
    window.show()
    logger.info("knob_input %s started", APP_VERSION)

    sys.exit(app.exec())


if __name__ == "__main__":
    main()
