"""Arithmetic kernel: add, sub, mul, div and half-up rounding.

Every operation works digit by digit on the canonical APDecimal
representation and builds a new value; operands are never modified.

Signs are resolved up front (_signed_sum): each combination of operand
signs reduces to exactly one unsigned addition or one unsigned subtraction
of magnitudes, so add and sub never call each other.
"""

from __future__ import annotations

from apdecimal.comparison import aligned_digits, compare_magnitudes, fraction_length, integer_length
from apdecimal.config import FULL_PRECISION, resolve_precision, resolve_working_precision
from apdecimal.errors import DivisionByZero, InternalInvariantViolation
from apdecimal.number import ZERO, APDecimal

__all__ = ["add", "div", "idiv", "mul", "round_half_up", "sub"]


# =============================================================================
# Magnitude helpers (signs ignored)
# =============================================================================


def _window(a: APDecimal, b: APDecimal, limit: int | None) -> tuple[int, int]:
    """Common (integer, fractional) window of two operands, fraction clipped to limit."""
    int_len = max(integer_length(a), integer_length(b))
    frac_a = fraction_length(a)
    frac_b = fraction_length(b)
    if limit is not None:
        frac_a = min(frac_a, limit)
        frac_b = min(frac_b, limit)
    return int_len, max(frac_a, frac_b)


def _add_magnitudes(a: APDecimal, b: APDecimal, limit: int | None, negative: bool = False) -> APDecimal:
    """Return |a| + |b| with the given sign, walking right to left with carry."""
    int_len, frac_len = _window(a, b, limit)
    window_a = aligned_digits(a, int_len, frac_len)
    window_b = aligned_digits(b, int_len, frac_len)

    result = [0] * len(window_a)
    carry = 0
    for i in range(len(result) - 1, -1, -1):
        total = window_a[i] + window_b[i] + carry
        if total >= 10:
            total -= 10
            carry = 1
        else:
            carry = 0
        result[i] = total
    if carry:
        result.insert(0, 1)

    return APDecimal.from_parts(result, -frac_len, negative)


def _sub_magnitudes(a: APDecimal, b: APDecimal, limit: int | None, negative: bool = False) -> APDecimal:
    """Return |a| - |b| with the given sign. Requires |a| >= |b| within the window.

    Raises:
        InternalInvariantViolation: If a borrow is left after the top digit
    """
    int_len, frac_len = _window(a, b, limit)
    window_a = aligned_digits(a, int_len, frac_len)
    window_b = aligned_digits(b, int_len, frac_len)

    result = [0] * len(window_a)
    borrow = 0
    for i in range(len(result) - 1, -1, -1):
        difference = window_a[i] - window_b[i] - borrow
        if difference < 0:
            difference += 10
            borrow = 1
        else:
            borrow = 0
        result[i] = difference

    if borrow:
        raise InternalInvariantViolation(f"Subtraction underflow: |{a}| < |{b}|")

    return APDecimal.from_parts(result, -frac_len, negative)


def _signed_sum(
    a_negative: bool,
    a: APDecimal,
    b_negative: bool,
    b: APDecimal,
    limit: int | None,
) -> APDecimal:
    """Return (±a) + (±b) for magnitudes a and b with explicit signs.

    Same signs add magnitudes and keep the sign. Opposite signs subtract
    the smaller magnitude from the larger and take the larger one's sign.
    """
    if a_negative == b_negative:
        return _add_magnitudes(a, b, limit, a_negative)

    order = compare_magnitudes(a, b, limit)
    if order == 0:
        return ZERO
    if order > 0:
        return _sub_magnitudes(a, b, limit, a_negative)
    return _sub_magnitudes(b, a, limit, b_negative)


def _mul_digit(value: APDecimal, factor: int) -> APDecimal:
    """Multiply by a single digit 0-9 (or 10) with carry propagation.

    Raises:
        InternalInvariantViolation: If factor is outside 0..10
    """
    if factor == 0:
        return ZERO
    if factor == 1:
        return value
    if factor == 10:
        return value.move_point_right()
    if not 0 <= factor <= 9:
        raise InternalInvariantViolation(f"Scalar factor out of range: {factor}")

    result = []
    carry = 0
    for digit in reversed(value.digits):
        carry, digit = divmod(digit * factor + carry, 10)
        result.append(digit)
    if carry:
        result.append(carry)
    result.reverse()

    return APDecimal.from_parts(result, value.point_shift, value.is_negative)


def _cut(value: APDecimal, limit: int) -> APDecimal:
    """Drop fractional digits beyond limit (toward zero)."""
    excess = -value.point_shift - limit
    if excess <= 0:
        return value
    return APDecimal.from_parts(value.digits[:-excess], value.point_shift + excess, value.is_negative)


# =============================================================================
# Kernel operations
# =============================================================================


def add(a: APDecimal, b: APDecimal, precision: int = FULL_PRECISION) -> APDecimal:
    """Return a + b.

    Operand fractions are cut to `precision` digits before adding. A zero
    operand returns the other operand unchanged.

    Args:
        a: Left operand
        b: Right operand
        precision: Fractional digits, FULL_PRECISION or FIXED_PRECISION

    Returns:
        The sum
    """
    limit = resolve_precision(precision)

    if a.is_zero():
        return b
    if b.is_zero():
        return a

    return _signed_sum(a.is_negative, a.abs(), b.is_negative, b.abs(), limit)


def sub(a: APDecimal, b: APDecimal, precision: int = FULL_PRECISION) -> APDecimal:
    """Return a - b.

    Subtracting from zero negates b; subtracting zero returns a unchanged.
    Otherwise this is a + (-b) through the same sign resolution as add.
    """
    limit = resolve_precision(precision)

    if a.is_zero():
        return b.negate()
    if b.is_zero():
        return a

    return _signed_sum(a.is_negative, a.abs(), not b.is_negative, b.abs(), limit)


def mul(a: APDecimal, b: APDecimal, precision: int = FULL_PRECISION) -> APDecimal:
    """Return a * b.

    The product is the sum of |a| times each digit of b, shifted to that
    digit's position. The point shifts of both operands are applied to the
    total and the sign is the XOR of the operand signs. With a finite
    precision the product is cut (not rounded) to that many fractional digits.
    A factor of 1 or -1 returns the other operand (negated for -1) uncut,
    whatever the precision.

    Args:
        a: Left operand
        b: Right operand
        precision: Fractional digits, FULL_PRECISION or FIXED_PRECISION

    Returns:
        The product
    """
    limit = resolve_precision(precision)

    if a.is_zero() or b.is_zero():
        return ZERO
    if a.is_one():
        return b.negate() if a.is_negative else b
    if b.is_one():
        return a.negate() if b.is_negative else a

    negative = a.is_negative != b.is_negative
    multiplicand = APDecimal.from_parts(a.digits)

    total = ZERO
    for offset, digit in enumerate(reversed(b.digits)):
        if digit == 0:
            continue
        partial = _mul_digit(multiplicand, digit).move_point_right(offset)
        total = _add_magnitudes(total, partial, None)

    product = APDecimal.from_parts(total.digits, total.point_shift + a.point_shift + b.point_shift, negative)
    if limit is not None:
        product = _cut(product, limit)
    return product


def _long_divide(
    dividend: tuple[int, ...],
    scale: int,
    divisor: APDecimal,
    working: int,
) -> tuple[list[int], int]:
    """Long division of the digit integer `dividend` by the integer `divisor`.

    The true quotient is (int(dividend) / divisor) * 10**scale. Dividend digits
    are brought down one at a time, followed by zeros, until `working`
    fractional quotient digits exist or the division is exact.

    Returns:
        (quotient digits, point shift of the quotient)

    Raises:
        InternalInvariantViolation: If a quotient digit search passes 9
    """
    # multiples[k] == k * divisor, built by repeated addition
    multiples = [ZERO, divisor]
    for _ in range(9):
        multiples.append(_add_magnitudes(multiples[-1], divisor, None))

    length = len(dividend)
    remainder = ZERO
    quotient: list[int] = []
    step = 0

    while True:
        if step >= length and remainder.is_zero():
            break
        # Fractional digits the quotient would have after this step's digits
        if step - length - scale >= working:
            break

        brought_down = dividend[step] if step < length else 0
        remainder = APDecimal.from_parts(
            remainder.digits + (0,) * remainder.point_shift + (brought_down,)
        )

        digit = 0
        while compare_magnitudes(remainder, multiples[digit + 1]) >= 0:
            digit += 1
            if digit > 9:
                raise InternalInvariantViolation(
                    f"Quotient digit search exceeded 9 steps: remainder {remainder}, divisor {divisor}"
                )
        if digit:
            remainder = _sub_magnitudes(remainder, multiples[digit], None)

        quotient.append(digit)
        step += 1

    return quotient, length - step + scale


def div(
    a: APDecimal,
    b: APDecimal,
    precision: int = FULL_PRECISION,
    round: bool = True,
) -> APDecimal:
    """Return a / b.

    Division may not terminate, so FULL_PRECISION uses the default precision.
    With round=True one guard digit is computed and rounded away half up;
    with round=False the quotient is cut at `precision` digits.
    A divisor of 1 or -1 returns the dividend (negated for -1) uncut,
    whatever the precision.

    Args:
        a: Dividend
        b: Divisor
        precision: Fractional digits, FULL_PRECISION or FIXED_PRECISION
        round: Round half up instead of truncating

    Returns:
        The quotient

    Raises:
        DivisionByZero: If b is zero
    """
    limit = resolve_working_precision(precision)

    if b.is_zero():
        raise DivisionByZero(f"Division by zero: {a} / 0")
    if a.is_zero():
        return ZERO
    if b.is_one():
        return a.negate() if b.is_negative else a

    working = limit + 1 if round else limit
    negative = a.is_negative != b.is_negative

    digits, point_shift = _long_divide(
        a.digits,
        a.point_shift - b.point_shift,
        APDecimal.from_parts(b.digits),
        working,
    )
    quotient = APDecimal.from_parts(digits, point_shift, negative)

    if round:
        return round_half_up(quotient, limit)
    return quotient


def idiv(a: APDecimal, b: APDecimal) -> APDecimal:
    """Return the quotient a / b truncated toward zero."""
    # The unit-divisor shortcut of div returns the dividend uncut
    return _cut(div(a, b, 0, round=False), 0)


def round_half_up(value: APDecimal, precision: int = 0) -> APDecimal:
    """Round to `precision` fractional digits, half away from zero.

    Only the first discarded digit decides: 5 or more carries one unit into
    the last kept digit. The carry ripples through nines and may add a new
    leading 1. FULL_PRECISION and values with few enough fractional digits
    are returned unchanged.

    Examples:
        round_half_up(APDecimal("2.345"), 2)  -> 2.35
        round_half_up(APDecimal("-2.5"))      -> -3
        round_half_up(APDecimal("9.96"), 1)   -> 10
    """
    limit = resolve_precision(precision)
    if limit is None or value.point_shift >= 0:
        return value

    excess = -value.point_shift - limit
    if excess <= 0:
        return value

    digits = value.digits
    keep = len(digits) - excess
    # The first discarded digit may be an implied leading zero
    first_discarded = digits[keep] if keep >= 0 else 0
    kept = list(digits[: max(keep, 0)])

    if first_discarded >= 5:
        i = len(kept) - 1
        while i >= 0 and kept[i] == 9:
            kept[i] = 0
            i -= 1
        if i >= 0:
            kept[i] += 1
        else:
            kept.insert(0, 1)

    return APDecimal.from_parts(kept, -limit, value.is_negative)
