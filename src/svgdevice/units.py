"""Device-unit conversion and numeric formatting for SVG attributes."""

from __future__ import annotations

import math

# Host device units are points; the document uses inches.
POINTS_PER_UNIT = 72


def to_user_units(value: float) -> float:
    """Convert a device measurement in points to document units."""
    return value / POINTS_PER_UNIT


def format_number(value: float) -> str:
    """Return attribute text for a number, dropping a redundant ``.0``."""
    number = float(value)
    if math.isfinite(number) and number.is_integer():
        return str(int(number))
    return repr(number)
