"""Decimal text formatting."""

from __future__ import annotations

from typing import TYPE_CHECKING

from apdecimal.config import FULL_PRECISION, get_settings, resolve_precision

if TYPE_CHECKING:
    from apdecimal.number import APDecimal

__all__ = ["format_decimal"]


def format_decimal(
    value: APDecimal,
    precision: int = FULL_PRECISION,
    separator: str | None = None,
) -> str:
    """Format a value as plain decimal text.

    Digits past `precision` fractional places are cut, not rounded. Trailing
    fractional zeros and a bare trailing separator are dropped, and a value
    that formats as "0" never carries a sign.

    Args:
        value: Value to format
        precision: Fractional digits to keep, FULL_PRECISION or FIXED_PRECISION
        separator: Decimal separator (default: configured decimal_separator)

    Returns:
        Decimal text such as "-12.5" or "0.000013456"
    """
    limit = resolve_precision(precision)
    if separator is None:
        separator = get_settings().decimal_separator

    digits = value.digits
    length = len(digits)
    point = length + value.point_shift

    parts: list[str] = []
    if point <= 0:
        parts.append("0")

    fractional = False
    emitted = 0
    for i in range(min(0, point), max(length, point)):
        if fractional and limit is not None and emitted >= limit:
            break
        if i == point:
            if limit == 0:
                break
            parts.append(separator)
            fractional = True
        if fractional:
            emitted += 1
        parts.append(str(digits[i]) if 0 <= i < length else "0")

    result = "".join(parts).lstrip("0")
    if result.startswith(separator):
        result = "0" + result
    if value.point_shift < 0 and separator in result:
        result = result.rstrip("0").rstrip(separator)
    if result == "":
        result = "0"

    if value.is_negative and result != "0":
        result = "-" + result
    return result
