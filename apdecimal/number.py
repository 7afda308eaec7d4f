"""APDecimal: arbitrary-precision decimal value type.

A value is stored as sign/magnitude/exponent:

    value = (-1 if is_negative else 1) * int(digits) * 10**point_shift

Values are immutable and always canonical: no leading zeros, no trailing
zeros (they are folded into point_shift), and zero is ((0,), 0, positive).
Two equal values therefore have identical fields, which makes APDecimal
hashable.

Operators accept int, str, float and Decimal operands on either side and
delegate to the engine functions with their default precision.
"""

from __future__ import annotations

import math
from collections.abc import Iterable
from decimal import Decimal
from typing import Union

from apdecimal.comparison import compare
from apdecimal.config import FULL_PRECISION
from apdecimal.errors import ConversionError, DomainError, InvalidNumberError
from apdecimal.formatting import format_decimal
from apdecimal.parsing import parse_components

__all__ = ["APDecimal", "HALF", "MINUS_ONE", "ONE", "TEN", "TWO", "ZERO", "parse"]

Operand = Union["APDecimal", int, str, float, Decimal]


class APDecimal:
    """Arbitrary-precision decimal number.

    Example: 12.5 is stored as digits=(1, 2, 5), point_shift=-1.

    Attributes:
        digits: Magnitude digits, most significant first (read-only)
        point_shift: Power of ten applied to the digit integer (read-only)
        is_negative: Sign flag (read-only)
    """

    __slots__ = ("_digits", "_point_shift", "_negative")

    _digits: tuple[int, ...]
    _point_shift: int
    _negative: bool

    def __init__(self, value: Operand | None = None) -> None:
        """Create an APDecimal from text or a native number.

        Args:
            value: Decimal text (plain or scientific, "." or "," separator),
                int, float, Decimal or APDecimal. None gives zero.

        Raises:
            InvalidNumberError: If the text is not a decimal literal (this
                includes non-finite floats and Decimals)
            TypeError: For unsupported types
        """
        if isinstance(value, APDecimal):
            digits, point_shift, negative = value._digits, value._point_shift, value._negative
        elif value is None or isinstance(value, str):
            digits, point_shift, negative = parse_components(value)
        elif isinstance(value, bool):
            raise TypeError("APDecimal does not accept bool")
        elif isinstance(value, int):
            digits, point_shift, negative = parse_components(str(value))
        elif isinstance(value, float):
            if not math.isfinite(value):
                raise InvalidNumberError(f"Cannot represent non-finite float {value!r}")
            digits, point_shift, negative = parse_components(repr(value))
        elif isinstance(value, Decimal):
            if not value.is_finite():
                raise InvalidNumberError(f"Cannot represent non-finite Decimal {value}")
            digits, point_shift, negative = parse_components(str(value))
        else:
            raise TypeError(f"APDecimal requires str, int, float or Decimal, got {type(value).__name__}")
        self._set(digits, point_shift, negative)

    def _set(self, digits: Iterable[int], point_shift: int, negative: bool) -> None:
        """Store the canonical form of (digits, point_shift, negative)."""
        digits = tuple(digits)
        first = next((i for i, d in enumerate(digits) if d), None)
        if first is None:
            self._digits, self._point_shift, self._negative = (0,), 0, False
            return
        end = len(digits)
        while digits[end - 1] == 0:
            end -= 1
            point_shift += 1
        self._digits = digits[first:end]
        self._point_shift = point_shift
        self._negative = negative

    @classmethod
    def from_parts(cls, digits: Iterable[int], point_shift: int = 0, negative: bool = False) -> APDecimal:
        """Build a value directly from its digits, point shift and sign.

        Args:
            digits: Magnitude digits 0-9, most significant first
            point_shift: Power of ten applied to the digit integer
            negative: Sign flag (ignored for zero)
        """
        result = cls.__new__(cls)
        result._set(digits, point_shift, negative)
        return result

    # --- Representation ---

    @property
    def digits(self) -> tuple[int, ...]:
        """Magnitude digits, most significant first."""
        return self._digits

    @property
    def point_shift(self) -> int:
        """Power of ten applied to the digit integer."""
        return self._point_shift

    @property
    def is_negative(self) -> bool:
        """True for values below zero."""
        return self._negative

    @property
    def current_precision(self) -> int:
        """Number of stored fractional digits."""
        return max(0, -self._point_shift)

    def __repr__(self) -> str:
        return f"APDecimal('{format_decimal(self, FULL_PRECISION, '.')}')"

    def __str__(self) -> str:
        return format_decimal(self)

    def __hash__(self) -> int:
        # Equal int, float and Decimal values share Decimal's numeric hash
        return hash(self.to_decimal())

    def __bool__(self) -> bool:
        """True if non-zero."""
        return not self.is_zero()

    # --- Queries ---

    def is_zero(self) -> bool:
        """True if every digit is zero."""
        return not any(self._digits)

    def is_one(self) -> bool:
        """True if the magnitude is exactly one (so for both 1 and -1)."""
        return compare(self.abs(), ONE) == 0

    def is_integer(self) -> bool:
        """True if all digits at or after the point position are zero."""
        if self._point_shift >= 0:
            return True
        return not any(self._digits[len(self._digits) + self._point_shift :])

    def is_float(self) -> bool:
        """True if the value has a non-zero fractional part."""
        return not self.is_integer()

    def is_odd(self) -> bool:
        """True if the value is an odd integer.

        Raises:
            DomainError: If the value is not an integer
        """
        if not self.is_integer():
            raise DomainError(f"A fractional number cannot be odd or even: {self}")
        # Implied trailing zeros make the last integer digit 0
        if self._point_shift > 0:
            return False
        return self._digits[len(self._digits) + self._point_shift - 1] % 2 == 1

    def is_even(self) -> bool:
        """True if the value is an even integer.

        Raises:
            DomainError: If the value is not an integer
        """
        return not self.is_odd()

    # --- Sign and point manipulation ---

    def negate(self) -> APDecimal:
        """Return the value with its sign flipped."""
        return APDecimal.from_parts(self._digits, self._point_shift, not self._negative)

    def abs(self) -> APDecimal:
        """Return the magnitude."""
        if not self._negative:
            return self
        return APDecimal.from_parts(self._digits, self._point_shift, False)

    def sign(self) -> APDecimal:
        """Return -1, 0 or 1 according to the sign of the value."""
        if self.is_zero():
            return ZERO
        return MINUS_ONE if self._negative else ONE

    def move_point_left(self, n: int = 1) -> APDecimal:
        """Divide by 10**n by moving the decimal point."""
        return APDecimal.from_parts(self._digits, self._point_shift - n, self._negative)

    def move_point_right(self, n: int = 1) -> APDecimal:
        """Multiply by 10**n by moving the decimal point."""
        return APDecimal.from_parts(self._digits, self._point_shift + n, self._negative)

    # --- Conversion ---

    def to_string(self, precision: int = FULL_PRECISION) -> str:
        """Format with at most `precision` fractional digits (cut, not rounded)."""
        return format_decimal(self, precision)

    def to_decimal(self) -> Decimal:
        """Convert to decimal.Decimal (exact)."""
        return Decimal(format_decimal(self, FULL_PRECISION, "."))

    def to_float(self) -> float:
        """Convert to float.

        Raises:
            ConversionError: If the magnitude exceeds the float range
        """
        result = float(format_decimal(self, FULL_PRECISION, "."))
        if math.isinf(result):
            raise ConversionError(f"Value out of float range: {self}")
        return result

    def to_int(self) -> int:
        """Convert an integer value to int.

        Raises:
            ConversionError: If the value has a fractional part
        """
        if not self.is_integer():
            raise ConversionError(f"Value is not an integer: {self}")
        return int(format_decimal(self, 0, "."))

    def __float__(self) -> float:
        return self.to_float()

    def __int__(self) -> int:
        """Convert to int, truncating toward zero."""
        return int(format_decimal(self, 0, "."))

    # --- Comparison ---

    def compare_to(self, other: Operand, precision: int = FULL_PRECISION) -> int:
        """Return -1, 0 or 1 comparing self with other up to `precision` digits."""
        return compare(self, _coerce(other), precision)

    def equals(self, other: Operand, precision: int = FULL_PRECISION) -> bool:
        """True if self equals other up to `precision` fractional digits."""
        return self.compare_to(other, precision) == 0

    def min(self, other: Operand, precision: int = FULL_PRECISION) -> APDecimal:
        """Return the smaller of self and other (self on ties)."""
        other = _coerce(other)
        return self if compare(self, other, precision) <= 0 else other

    def max(self, other: Operand, precision: int = FULL_PRECISION) -> APDecimal:
        """Return the larger of self and other (self on ties)."""
        other = _coerce(other)
        return self if compare(self, other, precision) >= 0 else other

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, (APDecimal, int, str, float, Decimal)) or isinstance(other, bool):
            return NotImplemented
        try:
            other = _coerce(other)
        except InvalidNumberError:
            return False
        return compare(self, other) == 0

    def __ne__(self, other: object) -> bool:
        result = self.__eq__(other)
        if result is NotImplemented:
            return NotImplemented
        return not result

    def __lt__(self, other: Operand) -> bool:
        return compare(self, _coerce(other)) < 0

    def __le__(self, other: Operand) -> bool:
        return compare(self, _coerce(other)) <= 0

    def __gt__(self, other: Operand) -> bool:
        return compare(self, _coerce(other)) > 0

    def __ge__(self, other: Operand) -> bool:
        return compare(self, _coerce(other)) >= 0

    # --- Arithmetic ---

    def add(self, other: Operand, precision: int = FULL_PRECISION) -> APDecimal:
        """Return self + other."""
        from apdecimal import arithmetic

        return arithmetic.add(self, _coerce(other), precision)

    def sub(self, other: Operand, precision: int = FULL_PRECISION) -> APDecimal:
        """Return self - other."""
        from apdecimal import arithmetic

        return arithmetic.sub(self, _coerce(other), precision)

    def mul(self, other: Operand, precision: int = FULL_PRECISION) -> APDecimal:
        """Return self * other, cut to `precision` fractional digits."""
        from apdecimal import arithmetic

        return arithmetic.mul(self, _coerce(other), precision)

    def div(self, other: Operand, precision: int = FULL_PRECISION, round: bool = True) -> APDecimal:
        """Return self / other (FULL_PRECISION uses the default precision)."""
        from apdecimal import arithmetic

        return arithmetic.div(self, _coerce(other), precision, round)

    def idiv(self, other: Operand) -> APDecimal:
        """Return the quotient truncated toward zero."""
        from apdecimal import arithmetic

        return arithmetic.idiv(self, _coerce(other))

    def mod(self, other: Operand, precision: int = FULL_PRECISION) -> APDecimal:
        """Return self - trunc(self / other) * other."""
        from apdecimal import powers

        return powers.mod(self, _coerce(other), precision)

    def __neg__(self) -> APDecimal:
        return self.negate()

    def __pos__(self) -> APDecimal:
        return self

    def __abs__(self) -> APDecimal:
        return self.abs()

    def __add__(self, other: Operand) -> APDecimal:
        return self.add(other)

    def __radd__(self, other: Operand) -> APDecimal:
        return _coerce(other).add(self)

    def __sub__(self, other: Operand) -> APDecimal:
        return self.sub(other)

    def __rsub__(self, other: Operand) -> APDecimal:
        return _coerce(other).sub(self)

    def __mul__(self, other: Operand) -> APDecimal:
        return self.mul(other)

    def __rmul__(self, other: Operand) -> APDecimal:
        return _coerce(other).mul(self)

    def __truediv__(self, other: Operand) -> APDecimal:
        return self.div(other)

    def __rtruediv__(self, other: Operand) -> APDecimal:
        return _coerce(other).div(self)

    def __floordiv__(self, other: Operand) -> APDecimal:
        """Integer division truncating toward zero (like decimal.Decimal)."""
        return self.idiv(other)

    def __rfloordiv__(self, other: Operand) -> APDecimal:
        return _coerce(other).idiv(self)

    def __mod__(self, other: Operand) -> APDecimal:
        """Remainder with the sign of the dividend (like decimal.Decimal)."""
        return self.mod(other)

    def __rmod__(self, other: Operand) -> APDecimal:
        return _coerce(other).mod(self)

    def __pow__(self, exponent: int | Operand) -> APDecimal:
        return self.pow(exponent)

    # --- Rounding ---

    def round(self, precision: int = 0) -> APDecimal:
        """Round half up to `precision` fractional digits."""
        from apdecimal import arithmetic

        return arithmetic.round_half_up(self, precision)

    def trunc(self, precision: int = 0) -> APDecimal:
        """Cut to `precision` fractional digits."""
        from apdecimal import rounding

        return rounding.truncate(self, precision)

    def floor(self) -> APDecimal:
        """Return the largest integer <= self."""
        from apdecimal import rounding

        return rounding.floor(self)

    def ceiling(self) -> APDecimal:
        """Return the smallest integer >= self."""
        from apdecimal import rounding

        return rounding.ceiling(self)

    def frac(self, precision: int = FULL_PRECISION) -> APDecimal:
        """Return the fractional part (self minus its integer part)."""
        from apdecimal import rounding

        return rounding.frac(self, precision)

    def __round__(self, ndigits: int | None = None) -> int | APDecimal:
        if ndigits is None:
            return int(self.round(0))
        return self.round(ndigits)

    def __trunc__(self) -> int:
        return int(self)

    def __floor__(self) -> int:
        return int(self.floor())

    def __ceil__(self) -> int:
        return int(self.ceiling())

    # --- Extended functions ---

    def pow(self, exponent: int | Operand, precision: int = FULL_PRECISION) -> APDecimal:
        """Return self ** exponent (integer exponents only)."""
        from apdecimal import powers

        if not isinstance(exponent, int) or isinstance(exponent, bool):
            exponent = _coerce(exponent)
        return powers.power(self, exponent, precision)

    def sqrt(self, precision: int = FULL_PRECISION) -> APDecimal:
        """Return the square root."""
        from apdecimal import powers

        return powers.sqrt(self, precision)

    def root(self, n: int | Operand, precision: int = FULL_PRECISION) -> APDecimal:
        """Return the n-th root (integer degrees only)."""
        from apdecimal import powers

        if not isinstance(n, int) or isinstance(n, bool):
            n = _coerce(n)
        return powers.root(self, n, precision)

    def factorial(self) -> APDecimal:
        """Return self! for non-negative integers."""
        from apdecimal import powers

        return powers.factorial(self)

    def exp(self, precision: int = FULL_PRECISION) -> APDecimal:
        """Return e ** self."""
        from apdecimal import transcendental

        return transcendental.exp(self, precision)

    def log(self, base: Operand | None = None, precision: int = FULL_PRECISION) -> APDecimal:
        """Return the logarithm (natural unless a base is given)."""
        from apdecimal import transcendental

        return transcendental.log(self, None if base is None else _coerce(base), precision)

    def log10(self, precision: int = FULL_PRECISION) -> APDecimal:
        """Return the base-10 logarithm."""
        from apdecimal import transcendental

        return transcendental.log10(self, precision)

    def sin(self, precision: int = FULL_PRECISION) -> APDecimal:
        """Return the sine (radians)."""
        from apdecimal import transcendental

        return transcendental.sin(self, precision)

    def cos(self, precision: int = FULL_PRECISION) -> APDecimal:
        """Return the cosine (radians)."""
        from apdecimal import transcendental

        return transcendental.cos(self, precision)

    def tan(self, precision: int = FULL_PRECISION) -> APDecimal:
        """Return the tangent (radians)."""
        from apdecimal import transcendental

        return transcendental.tan(self, precision)

    def cot(self, precision: int = FULL_PRECISION) -> APDecimal:
        """Return the cotangent (radians)."""
        from apdecimal import transcendental

        return transcendental.cot(self, precision)


def _coerce(value: Operand) -> APDecimal:
    """Return value as an APDecimal (no copy for APDecimal input)."""
    if isinstance(value, APDecimal):
        return value
    return APDecimal(value)


def parse(text: str | None) -> APDecimal:
    """Parse decimal text (plain or scientific notation) into an APDecimal.

    Raises:
        InvalidNumberError: If the text is not a decimal literal
    """
    return APDecimal(text)


# =============================================================================
# Constants
# =============================================================================

ZERO = APDecimal("0")
ONE = APDecimal("1")
MINUS_ONE = APDecimal("-1")
TWO = APDecimal("2")
TEN = APDecimal("10")
HALF = APDecimal("0.5")
