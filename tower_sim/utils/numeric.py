"""Numeric helpers shared by the aircraft and ground models."""
import math


def round_half_up(value: float) -> int:
    """Round to the nearest integer, with halves rounded up (2.5 -> 3)."""
    return math.floor(value + 0.5)


def as_percentage(part: float, whole: float) -> int:
    """Express part / whole as a whole percentage, or 0 if whole is 0."""
    if whole == 0:
        return 0
    return round_half_up(100 * part / whole)
