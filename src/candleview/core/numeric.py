"""Small numeric helpers shared by the viewport and coordinate mapper."""

from __future__ import annotations

import math


def clamp(value: int, lo: int, hi: int) -> int:
    """Clamp *value* into ``[lo, hi]``; *lo* wins when the bounds cross."""
    return max(lo, min(hi, value))


def round_half_away(x: float) -> int:
    """Round to the nearest integer, ties away from zero.

    Python's :func:`round` uses banker's rounding, which would make a
    cursor sitting exactly between two candles snap to alternating sides.
    """
    if x >= 0:
        return int(math.floor(x + 0.5))
    return -int(math.floor(-x + 0.5))
