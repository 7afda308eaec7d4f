"""Transcendental functions by Taylor series: exp, e, log, log10, sin, cos, tan, cot.

Each series is summed at the requested precision plus a few guard digits
until adding the next term no longer changes the sum, then rounded half up.
Results are accurate to within a unit of the last requested digit, not
correctly rounded in every case.
"""

from __future__ import annotations

from apdecimal.arithmetic import add, div, mul, round_half_up, sub
from apdecimal.comparison import compare
from apdecimal.config import FULL_PRECISION, resolve_working_precision
from apdecimal.convergence import converged, iterations
from apdecimal.errors import DivisionByZero, DomainError
from apdecimal.number import HALF, ONE, TEN, TWO, ZERO, APDecimal

__all__ = ["cos", "cot", "e", "exp", "log", "log10", "sin", "tan"]

# Extra fractional digits carried through a series to absorb the cut of
# every term
_GUARD_DIGITS = 5

_ONE_AND_A_HALF = APDecimal("1.5")
_FIVE_QUARTERS = APDecimal("1.25")


# =============================================================================
# Exponential
# =============================================================================


def _exp_series(x: APDecimal, working: int) -> APDecimal:
    """Sum x**k / k! with a running power and a running factorial."""
    result = add(ONE, x, working)
    running_power = x
    running_factorial = ONE
    k = ONE
    for step in iterations("exp", working):
        k = add(k, ONE)
        running_factorial = mul(running_factorial, k)
        running_power = mul(running_power, x, working)
        following = add(result, div(running_power, running_factorial, working, round=False), working)
        if compare(following, result, working) == 0:
            converged("exp", step, working)
            return following
        result = following


def exp(x: APDecimal, precision: int = FULL_PRECISION) -> APDecimal:
    """Return e ** x.

    Negative arguments are evaluated as 1 / exp(-x) so the series never
    alternates.

    Args:
        x: Exponent
        precision: Fractional digits (FULL_PRECISION uses the default)
    """
    limit = resolve_working_precision(precision)

    if x.is_zero():
        return ONE

    working = limit + _GUARD_DIGITS
    if x.is_negative:
        return div(ONE, _exp_series(x.negate(), working), limit)
    return round_half_up(_exp_series(x, working), limit)


def e(precision: int = FULL_PRECISION) -> APDecimal:
    """Euler's number."""
    return exp(ONE, precision)


# =============================================================================
# Logarithm
# =============================================================================


def _log_series(x: APDecimal, working: int) -> APDecimal:
    """ln(x) = 2 * sum(t**(2k+1) / (2k+1)) with t = (x - 1) / (x + 1).

    Converges quickly for x near 1; callers reduce the argument first.
    """
    t = div(sub(x, ONE), add(x, ONE), working, round=False)
    if t.is_zero():
        return ZERO

    t_squared = mul(t, t, working)
    running_power = t
    k = ONE
    result = t
    for step in iterations("log", working):
        k = add(k, TWO)
        running_power = mul(running_power, t_squared, working)
        following = add(result, div(running_power, k, working, round=False), working)
        if compare(following, result, working) == 0:
            converged("log", step, working)
            return mul(following, TWO, working)
        result = following


def _ln(x: APDecimal, working: int) -> APDecimal:
    """Natural logarithm of a positive x at `working` fractional digits.

    x = m * 10**p with 1 <= m < 10, and m is halved h times until it is at
    most 1.5. With ln 10 = 3 ln 2 + ln 1.25:

        ln x = ln m + (h + 3p) ln 2 + p ln 1.25
    """
    exponent = len(x.digits) + x.point_shift - 1
    mantissa = APDecimal.from_parts(x.digits, 1 - len(x.digits))

    halvings = 0
    while compare(mantissa, _ONE_AND_A_HALF) > 0:
        mantissa = mul(mantissa, HALF)
        halvings += 1

    result = _log_series(mantissa, working)

    twos = halvings + 3 * exponent
    if twos == 0 and exponent == 0:
        return result

    # The constants are scaled by up to max(|twos|, |exponent|), so they
    # need that many more digits
    extended = working + len(str(max(abs(twos), abs(exponent))))
    if twos:
        result = add(result, mul(_log_series(TWO, extended), APDecimal(twos), extended), extended)
    if exponent:
        result = add(result, mul(_log_series(_FIVE_QUARTERS, extended), APDecimal(exponent), extended), extended)
    return result


def _require_positive(x: APDecimal) -> APDecimal:
    if x.is_zero() or x.is_negative:
        raise DomainError(f"Logarithm argument must be greater than zero: {x}")
    return x


def log(x: APDecimal, base: APDecimal | None = None, precision: int = FULL_PRECISION) -> APDecimal:
    """Logarithm of x, natural unless a base is given.

    Args:
        x: Argument, must be positive
        base: Optional base, must be positive and not one
        precision: Fractional digits (FULL_PRECISION uses the default)

    Raises:
        DomainError: If x or base is not positive
        DivisionByZero: If base is one
    """
    limit = resolve_working_precision(precision)
    working = limit + _GUARD_DIGITS

    numerator = _ln(_require_positive(x), working)
    if base is None:
        return round_half_up(numerator, limit)

    denominator = _ln(_require_positive(base), working)
    if denominator.is_zero():
        raise DivisionByZero(f"Logarithm base must not be one: {base}")
    return div(numerator, denominator, limit)


def log10(x: APDecimal, precision: int = FULL_PRECISION) -> APDecimal:
    """Base-10 logarithm of x."""
    return log(x, TEN, precision)


# =============================================================================
# Trigonometry
# =============================================================================


def _sin_series(x: APDecimal, working: int) -> APDecimal:
    """Sum (-1)**k x**(2k+1) / (2k+1)!."""
    x_squared = mul(x, x, working)
    running_power = x
    running_factorial = ONE
    k = ONE
    result = x
    negative = False
    for step in iterations("sin", working):
        running_power = mul(running_power, x_squared, working)
        running_factorial = mul(running_factorial, mul(add(k, ONE), add(k, TWO)))
        k = add(k, TWO)
        negative = not negative
        term = div(running_power, running_factorial, working, round=False)
        following = add(result, term.negate() if negative else term, working)
        if compare(following, result, working) == 0:
            converged("sin", step, working)
            return following
        result = following


def _cos_series(x: APDecimal, working: int) -> APDecimal:
    """Sum (-1)**k x**(2k) / (2k)!."""
    x_squared = mul(x, x, working)
    running_power = ONE
    running_factorial = ONE
    k = ZERO
    result = ONE
    negative = False
    for step in iterations("cos", working):
        running_power = mul(running_power, x_squared, working)
        running_factorial = mul(running_factorial, mul(add(k, ONE), add(k, TWO)))
        k = add(k, TWO)
        negative = not negative
        term = div(running_power, running_factorial, working, round=False)
        following = add(result, term.negate() if negative else term, working)
        if compare(following, result, working) == 0:
            converged("cos", step, working)
            return following
        result = following


def sin(x: APDecimal, precision: int = FULL_PRECISION) -> APDecimal:
    """Sine of x (radians)."""
    limit = resolve_working_precision(precision)
    if x.is_zero():
        return ZERO
    return round_half_up(_sin_series(x, limit + _GUARD_DIGITS), limit)


def cos(x: APDecimal, precision: int = FULL_PRECISION) -> APDecimal:
    """Cosine of x (radians)."""
    limit = resolve_working_precision(precision)
    if x.is_zero():
        return ONE
    return round_half_up(_cos_series(x, limit + _GUARD_DIGITS), limit)


def tan(x: APDecimal, precision: int = FULL_PRECISION) -> APDecimal:
    """Tangent of x (radians), sin(x) / cos(x)."""
    limit = resolve_working_precision(precision)
    if x.is_zero():
        return ZERO
    working = limit + _GUARD_DIGITS
    return div(_sin_series(x, working), _cos_series(x, working), limit)


def cot(x: APDecimal, precision: int = FULL_PRECISION) -> APDecimal:
    """Cotangent of x (radians), cos(x) / sin(x).

    Raises:
        DivisionByZero: If x is zero
    """
    limit = resolve_working_precision(precision)
    if x.is_zero():
        raise DivisionByZero("Cotangent of zero")
    working = limit + _GUARD_DIGITS
    return div(_cos_series(x, working), _sin_series(x, working), limit)
