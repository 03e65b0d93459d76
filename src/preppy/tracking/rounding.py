"""Rounding helpers for reported weights and calories.

Ties round up rather than to even, so a 70.0 -> 70.5 kg gap interpolates
through 70.3 and a 2500.5 kcal average reports as 2501. Decimal places are
rounded on the exact binary value of the float.
"""

from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Decimal


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves toward positive infinity."""
    return math.floor(value + 0.5)


def round_places(value: float, places: int) -> float:
    """
    Round to a fixed number of decimal places, ties away from zero.

    Example:
        >>> round_places(70.25, 1)
        70.3
        >>> round(70.25, 1)
        70.2
    """
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP))
