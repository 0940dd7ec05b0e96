"""Rounding and clamping for 0-100 scores."""

from __future__ import annotations

import math


def round_half_up(value: float) -> int:
    """Round .5 away from zero for positive scores (2.5 -> 3, not 2)."""
    return int(math.floor(value + 0.5))


def clamp(value: float, low: int = 0, high: int = 100) -> int:
    return max(low, min(high, round_half_up(value)))
