"""knob_input package exposing the knob core and a lazy ``main`` entry point."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ._version import get_version
from .engine import Construction, RotationController, create_controller
from .models import Bound, InvalidSettings, KnobSettings, Point, Range, TrackingMode

__version__ = get_version()

if TYPE_CHECKING:  # pragma: no cover - only for type checkers
    from .app import main as _main_type  # noqa: F401


def main() -> None:
    """Entry point for ``python -m knob_input`` and console scripts."""
    from .app import main as _main

    _main()


__all__ = [
    "Bound",
    "Construction",
    "InvalidSettings",
    "KnobSettings",
    "Point",
    "Range",
    "RotationController",
    "TrackingMode",
    "create_controller",
    "get_version",
    "main",
    "__version__",
]
