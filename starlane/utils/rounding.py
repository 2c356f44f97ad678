"""Rounding helpers for resource arithmetic."""

import math


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from negative infinity.

    Python's round() uses banker's rounding (2.5 -> 2); resource costs use
    the conventional rule (2.5 -> 3).
    """
    return int(math.floor(value + 0.5))


def non_negative_int(value: float) -> int:
    """Round half-up and floor the result at zero."""
    return max(0, round_half_up(value))
