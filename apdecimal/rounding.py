"""Truncation family: truncate, floor, ceiling and frac.

Half-up rounding lives with the arithmetic kernel (arithmetic.round_half_up)
because division uses it for its guard digit.
"""

from __future__ import annotations

from apdecimal.arithmetic import add, sub
from apdecimal.config import FULL_PRECISION
from apdecimal.formatting import format_decimal
from apdecimal.number import ONE, APDecimal

__all__ = ["ceiling", "floor", "frac", "truncate"]


def truncate(value: APDecimal, precision: int = 0) -> APDecimal:
    """Cut to `precision` fractional digits (toward zero).

    Examples:
        truncate(APDecimal("2.789"), 1)  -> 2.7
        truncate(APDecimal("-2.789"))    -> -2
    """
    return APDecimal(format_decimal(value, precision, "."))


def floor(value: APDecimal) -> APDecimal:
    """Largest integer not above value."""
    if value.is_integer():
        return value
    truncated = truncate(value)
    return sub(truncated, ONE) if value.is_negative else truncated


def ceiling(value: APDecimal) -> APDecimal:
    """Smallest integer not below value."""
    if value.is_integer():
        return value
    truncated = truncate(value)
    return truncated if value.is_negative else add(truncated, ONE)


def frac(value: APDecimal, precision: int = FULL_PRECISION) -> APDecimal:
    """Fractional part of value, carrying its sign, cut to `precision` digits."""
    return truncate(sub(value, truncate(value)), precision)
