"""Qt helper utilities."""

from PySide6 import QtCore

from ..models import Point


def point_from_qt(pos: QtCore.QPointF) -> Point:
    """Convert a :class:`~PySide6.QtCore.QPointF` into a :class:`Point`."""
    return Point(x=float(pos.x()), y=float(pos.y()))


def rect_center(rect: QtCore.QRectF) -> Point:
    """Center of ``rect``, computed from its edges like a bounding box."""
    return Point(
        x=(float(rect.left()) + float(rect.right())) / 2.0,
        y=(float(rect.top()) + float(rect.bottom())) / 2.0,
    )


def point_to_qt(point: Point) -> QtCore.QPointF:
    return QtCore.QPointF(point.x, point.y)


__all__ = ["point_from_qt", "point_to_qt", "rect_center"]
