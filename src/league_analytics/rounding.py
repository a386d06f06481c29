"""Half-up rounding shared by every displayed figure."""

import math


def round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def round_tenths(value: float) -> float:
    """Round to one decimal place, halves rounding up."""
    return math.floor(value * 10 + 0.5) / 10
