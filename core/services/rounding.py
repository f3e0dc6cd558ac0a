from __future__ import annotations

import math


def round_half_up(value: float) -> int:
    """Round to the nearest integer with .5 going up (not banker's rounding)."""
    return int(math.floor(value + 0.5))


def clamp(value: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, value))


def is_positive_number(value: object) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value) and value > 0
