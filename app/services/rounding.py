"""Half-up rounding for the percentages shown to users (2.5 -> 3, -2.5 -> -2)."""
from __future__ import annotations

import math


def round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def percentage(part: float, whole: float) -> int:
    """round(part / whole * 100); 0 when whole is 0."""
    if not whole:
        return 0
    return round_half_up(part / whole * 100)
