"""Total ordering of decimal values and digit-window alignment.

Operands are aligned on a common window of integer and fractional
positions: a value whose point lies left of all its digits contributes one
implied leading zero, and positions a value does not store read as zero.
The arithmetic kernel reuses the same alignment.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from apdecimal.config import FULL_PRECISION, resolve_precision

if TYPE_CHECKING:
    from apdecimal.number import APDecimal

__all__ = [
    "aligned_digits",
    "compare",
    "compare_magnitudes",
    "fraction_length",
    "integer_length",
]


def integer_length(value: APDecimal) -> int:
    """Number of integer positions (at least one, for the implied zero)."""
    return max(1, len(value.digits) + value.point_shift)


def fraction_length(value: APDecimal) -> int:
    """Number of stored fractional positions."""
    return max(0, -value.point_shift)


def aligned_digits(value: APDecimal, int_len: int, frac_len: int) -> list[int]:
    """Lay the digits of value out on a window of int_len + frac_len positions.

    Positions outside the stored digits are zero. Fractional digits beyond
    frac_len are dropped (hard cut).

    Args:
        value: Value to lay out (sign ignored)
        int_len: Integer positions; must be >= integer_length(value)
        frac_len: Fractional positions

    Returns:
        Digits of the window, most significant first
    """
    digits = value.digits
    window = [0] * (int_len + frac_len)
    # Window index of digits[0]
    lead = int_len - (len(digits) + value.point_shift)
    start = max(0, -lead)
    stop = min(len(digits), len(window) - lead)
    if start < stop:
        window[lead + start : lead + stop] = digits[start:stop]
    return window


def compare_magnitudes(a: APDecimal, b: APDecimal, limit: int | None = None) -> int:
    """Compare |a| and |b| up to limit fractional digits (None: all of them).

    Returns:
        -1 if |a| < |b|, 0 if equal within the window, 1 if |a| > |b|
    """
    int_len = max(integer_length(a), integer_length(b))
    frac_len = max(fraction_length(a), fraction_length(b))
    if limit is not None:
        frac_len = min(frac_len, limit)

    window_a = aligned_digits(a, int_len, frac_len)
    window_b = aligned_digits(b, int_len, frac_len)
    # Equal-length digit lists compare lexicographically, i.e. digit by digit
    # from the most significant position
    return (window_a > window_b) - (window_a < window_b)


def compare(a: APDecimal, b: APDecimal, precision: int = FULL_PRECISION) -> int:
    """Compare two values numerically up to `precision` fractional digits.

    Args:
        a: Left operand
        b: Right operand
        precision: Fractional digits to compare, FULL_PRECISION or FIXED_PRECISION

    Returns:
        -1 if a < b, 0 if a == b within the precision, 1 if a > b

    Examples:
        compare(APDecimal("1.25"), APDecimal("1.2"))     -> 1
        compare(APDecimal("1.25"), APDecimal("1.2"), 1)  -> 0
        compare(APDecimal("-3"), APDecimal("-2"))        -> -1
    """
    limit = resolve_precision(precision)

    # A zero magnitude never counts as negative
    a_negative = a.is_negative and not a.is_zero()
    b_negative = b.is_negative and not b.is_zero()

    if a_negative != b_negative:
        return -1 if a_negative else 1

    order = compare_magnitudes(a, b, limit)
    return -order if a_negative else order
