"""Shared pytest configuration for the knob_input test-suite."""

from pathlib import Path
import os
import sys

import pytest

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT / "src"))

# Qt tests render without a display server.
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from knob_input.models import Point  # noqa: E402


@pytest.fixture
def center() -> Point:
    return Point(x=200.0, y=150.0)
