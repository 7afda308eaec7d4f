"""Powers and roots: power, sqrt, root, factorial and mod.

sqrt and root are iterative. From their second step on the iterates
decrease monotonically toward the root, so an iterate that stops decreasing
has reached the working precision. Low precisions take a float fast path.
"""

from __future__ import annotations

import math
import sys

import structlog

from apdecimal.arithmetic import add, div, mul, round_half_up, sub
from apdecimal.comparison import compare
from apdecimal.config import FULL_PRECISION, get_settings, resolve_precision, resolve_working_precision
from apdecimal.convergence import converged, iterations
from apdecimal.errors import DomainError, UnsupportedOperation
from apdecimal.number import HALF, ONE, ZERO, APDecimal
from apdecimal.rounding import truncate

logger = structlog.get_logger()

__all__ = ["factorial", "mod", "power", "root", "sqrt"]

_FLOAT_MAX = APDecimal(sys.float_info.max)


def _magnitude(x: APDecimal) -> int:
    """Exponent m with 10**m <= |x| < 10**(m + 1), for non-zero x."""
    return len(x.digits) + x.point_shift - 1


def _use_float_fast_path(x: APDecimal, limit: int) -> bool:
    """True if a native float result rounded to `limit` digits is good enough."""
    return limit <= get_settings().fast_path_digits and compare(x.abs(), _FLOAT_MAX) < 0


# =============================================================================
# Power
# =============================================================================


def power(
    base: APDecimal,
    exponent: int | APDecimal,
    precision: int = FULL_PRECISION,
    round: bool = True,
) -> APDecimal:
    """Raise base to an integer power by binary exponentiation.

    With a finite precision every intermediate product is cut to the working
    precision; round=True adds a guard digit that is rounded away at the end.
    With FULL_PRECISION and a non-negative exponent the result is exact.
    Negative exponents divide one by the positive power, so FULL_PRECISION
    falls back to the default precision there.

    Args:
        base: Base
        exponent: int, or an APDecimal holding an integer
        precision: Fractional digits, FULL_PRECISION or FIXED_PRECISION
        round: Round the result half up instead of cutting it

    Raises:
        DomainError: For a non-integer exponent of a negative base
        UnsupportedOperation: For any other non-integer exponent
        DivisionByZero: For a negative exponent of zero
    """
    if isinstance(exponent, APDecimal):
        return _power_decimal(base, exponent, precision)

    limit = resolve_precision(precision)

    if exponent < 0:
        return _reciprocal_power(base, -exponent, precision, round)
    if exponent == 0:
        return ONE
    if exponent == 1:
        return base

    if limit is None:
        working = FULL_PRECISION
    else:
        working = limit + 1 if round else limit

    result = ONE
    square = base
    while exponent > 0:
        if exponent & 1:
            result = mul(result, square, working)
        exponent >>= 1
        if exponent:
            square = mul(square, square, working)

    if round and limit is not None:
        return round_half_up(result, limit)
    return result


def _reciprocal_power(base: APDecimal, exponent: int, precision: int, round: bool) -> APDecimal:
    """1 / base**exponent for a positive exponent.

    The denominator carries extra digits so that its accumulated cut error,
    about the exponent in units of its last digit, stays below the quotient's
    last digit. A denominator near 10**m magnifies that error by 10**(-2m).
    """
    limit = resolve_working_precision(precision)
    extra = 2 * len(str(exponent)) + 2 + max(0, -2 * exponent * _magnitude(base))
    denominator = power(base, exponent, limit + extra, round=False)
    return div(ONE, denominator, limit, round)


def _power_decimal(base: APDecimal, exponent: APDecimal, precision: int) -> APDecimal:
    if exponent.is_float() and base.is_negative:
        raise DomainError(f"A negative base requires an integer exponent, got {exponent}")
    if exponent.is_negative and exponent.is_integer():
        return power(base, exponent.to_int(), precision)
    if exponent.is_negative:
        return _power_decimal(div(ONE, base, precision), exponent.negate(), precision)

    if exponent.is_zero():
        return ONE
    if compare(exponent, ONE) == 0:
        return base
    if base.is_zero() or compare(base, ONE) == 0:
        return base

    if exponent.is_integer():
        return power(base, exponent.to_int(), precision)
    raise UnsupportedOperation(f"Power with a non-integer exponent is not supported: {exponent}")


# =============================================================================
# Roots
# =============================================================================


def sqrt(x: APDecimal, precision: int = FULL_PRECISION) -> APDecimal:
    """Square root by Heron's iteration t = (t + x / t) / 2 starting at 1.

    Args:
        x: Radicand
        precision: Fractional digits (FULL_PRECISION uses the default)

    Raises:
        DomainError: If x is negative
    """
    limit = resolve_working_precision(precision)

    if x.is_zero():
        return ZERO
    if x.is_negative:
        raise DomainError(f"Square root of a negative number: {x}")
    if x.is_one():
        return ONE

    if _use_float_fast_path(x, limit):
        logger.debug("sqrt_fast_path", precision=limit)
        return round_half_up(APDecimal(math.sqrt(x.to_float())), limit)

    working = limit + 1
    current = ONE
    for step in iterations("sqrt", working):
        following = mul(add(current, div(x, current, working, round=False), working), HALF, working)
        if following.is_zero():
            # The root is below the working precision
            converged("sqrt", step, working)
            return ZERO
        order = compare(following, current, working)
        # From the second step on the iterates decrease toward the root
        if order == 0 or (step > 1 and order > 0):
            converged("sqrt", step, working)
            return round_half_up(current if order > 0 else following, limit)
        current = following


def root(x: APDecimal, n: int | APDecimal, precision: int = FULL_PRECISION) -> APDecimal:
    """n-th root by Newton's iteration t = ((n - 1) t + x / t**(n - 1)) / n.

    x is first scaled by a power of 10**n into [1, 10**n), so the iteration
    runs on a root in [1, 10) from a float estimate, with t**(n - 1) carried
    at bounded precision. A negative degree takes the root of the
    reciprocal; degree 0 gives zero.

    Args:
        x: Radicand
        n: int degree, or an APDecimal holding an integer
        precision: Fractional digits (FULL_PRECISION uses the default)

    Raises:
        DomainError: If x is negative
        UnsupportedOperation: For a non-integer degree
    """
    if isinstance(n, APDecimal):
        return _root_decimal(x, n, precision)

    limit = resolve_working_precision(precision)

    if n == 0:
        return ZERO
    if n == 1:
        return x
    if n < 0:
        # Enough digits that the reciprocal's cut stays below the root's last digit
        reciprocal = div(ONE, x, limit + 3 + max(0, _magnitude(x) + 1))
        return root(reciprocal, -n, limit)
    if x.is_zero():
        return ZERO
    if x.is_negative:
        raise DomainError(f"Root of a negative number: {x}")
    if x.is_one():
        return ONE

    if _use_float_fast_path(x, limit):
        logger.debug("root_fast_path", degree=n, precision=limit)
        return round_half_up(APDecimal(math.pow(x.to_float(), 1.0 / n)), limit)

    # root(x) = root(scaled) * 10**shift with root(scaled) in [1, 10)
    shift = _magnitude(x) // n
    working = limit + 1 + shift
    if working < 0:
        # The root is below half a unit of the last digit
        return ZERO
    scaled = x.move_point_left(n * shift)

    power_precision = working + 2 * len(str(n)) + 2
    degree = APDecimal(n)
    lower_degree = APDecimal(n - 1)

    current = _root_estimate(scaled, n)
    for step in iterations("root", working):
        correction = div(scaled, power(current, n - 1, power_precision, round=False), working, round=False)
        following = div(add(mul(lower_degree, current, working), correction, working), degree, working, round=False)
        order = compare(following, current, working)
        # From the second step on the iterates decrease toward the root
        if order == 0 or (step > 1 and order > 0):
            converged("root", step, working)
            result = current if order > 0 else following
            return round_half_up(result.move_point_right(shift), limit)
        current = following


def _root_estimate(scaled: APDecimal, n: int) -> APDecimal:
    """Float estimate of the n-th root of a value in [1, 10**n), kept in [1, 10]."""
    leading = scaled.digits[:17]
    mantissa = int("".join(map(str, leading))) / 10 ** (len(leading) - 1)
    estimate = 10 ** ((_magnitude(scaled) + math.log10(mantissa)) / n)
    return APDecimal(min(max(estimate, 1.0), 10.0))


def _root_decimal(x: APDecimal, n: APDecimal, precision: int) -> APDecimal:
    if x.is_zero():
        return ZERO
    if n.is_zero():
        return ONE
    if x.is_negative:
        raise DomainError(f"Root of a negative number: {x}")
    if n.is_negative and n.is_integer():
        return root(x, n.to_int(), precision)
    if n.is_negative:
        return _root_decimal(div(ONE, x, precision), n.negate(), precision)

    if compare(x, ONE) == 0 or compare(n, ONE) == 0:
        return x

    if n.is_integer():
        return root(x, n.to_int(), precision)
    raise UnsupportedOperation(f"Root with a non-integer degree is not supported: {n}")


# =============================================================================
# Integer functions
# =============================================================================


def factorial(x: APDecimal) -> APDecimal:
    """x! for a non-negative integer x.

    Raises:
        DomainError: If x is negative or fractional
    """
    if x.is_negative:
        raise DomainError(f"Factorial of a negative number: {x}")
    if x.is_float():
        raise DomainError(f"Factorial of a fractional number: {x}")

    result = ONE
    counter = x
    while not counter.is_zero():
        result = mul(result, counter)
        counter = sub(counter, ONE)
    return result


def mod(x: APDecimal, y: APDecimal, precision: int = FULL_PRECISION) -> APDecimal:
    """Remainder x - trunc(x / y) * y, carrying the sign of x.

    The quotient is cut rather than rounded, so an exact integer quotient
    is never pushed past itself.

    Raises:
        DivisionByZero: If y is zero
    """
    quotient = truncate(div(x, y, precision, round=False))
    return sub(x, mul(quotient, y), precision)
