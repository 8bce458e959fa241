"""Half-away-from-zero rounding shared by the calculator and calibrator."""

from __future__ import annotations

import math


def round1(value: float) -> float:
    """Round to one decimal place, halves away from zero (0.25 -> 0.3, -0.25 -> -0.3).

    The value is scaled in binary floating point before rounding, so results
    can differ from the builtin ``round`` on decimal ties. Re-rounding a
    rounded value is a no-op.
    """
    return _round_half_away(value, 1)


def round2(value: float) -> float:
    """Round to two decimal places, halves away from zero."""
    return _round_half_away(value, 2)


def _round_half_away(value: float, digits: int) -> float:
    scale = 10**digits
    return math.copysign(math.floor(abs(value) * scale + 0.5), value) / scale
