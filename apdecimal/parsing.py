"""Decimal text parsing.

Turns decimal text into the (digits, point_shift, negative) triple that
APDecimal is built from. Scientific notation ("-1.3456E-5") is expanded to
plain decimal text first. Both "." and "," are accepted as the separator.
"""

from __future__ import annotations

import re

from apdecimal.errors import InvalidNumberError

__all__ = ["expand_exponent", "parse_components"]

# sign, integer digits, fraction digits, exponent sign, exponent digits
_EXPONENT_RE = re.compile(r"^([+-]?)(\d+)(?:[.,](\d*))?[eE]([+-]?)(\d+)$")
_DIGITS_RE = re.compile(r"[0-9]+")

Components = tuple[tuple[int, ...], int, bool]

_ZERO: Components = ((0,), 0, False)
_ONE: Components = ((1,), 0, False)
_MINUS_ONE: Components = ((1,), 0, True)


def expand_exponent(text: str) -> str:
    """Expand scientific notation to a plain decimal string.

    Text that is not in exponential form is returned unchanged.

    Examples:
        >>> expand_exponent("1.3456E-5")
        '0.000013456'
        >>> expand_exponent("-2.5e+3")
        '-2500'
        >>> expand_exponent("12.75e1")
        '127.5'
    """
    match = _EXPONENT_RE.match(text)
    if match is None:
        return text

    sign, int_part, frac_part, exp_sign, exp_digits = match.groups()
    frac_part = frac_part or ""
    exponent = int(exp_digits)
    if exp_sign == "-":
        exponent = -exponent

    digits = int_part + frac_part
    # Position of the point inside `digits` after shifting
    point = len(int_part) + exponent

    if point <= 0:
        body = "0." + "0" * -point + digits
    elif point >= len(digits):
        body = digits + "0" * (point - len(digits))
    else:
        body = digits[:point] + "." + digits[point:]

    return sign + body


def parse_components(text: str | None) -> Components:
    """Parse decimal text into (digits, point_shift, negative).

    A free-standing sign or separator parses as zero.

    Args:
        text: Plain or scientific decimal text, or None

    Returns:
        Tuple of (digits most significant first, point shift, sign flag).
        The digits are not normalized; APDecimal does that.

    Raises:
        InvalidNumberError: If the text contains anything but an optional
            sign, digits and at most one separator
    """
    if text is None:
        return _ZERO
    text = expand_exponent(text.strip())

    # Shortcuts for the most common literals
    if text == "" or text == "0":
        return _ZERO
    if text == "1":
        return _ONE
    if text == "-1":
        return _MINUS_ONE

    negative = False
    body = text
    if body.startswith(("-", "+")):
        negative = body[0] == "-"
        body = body[1:]

    point_shift = 0
    separator = body.find(".")
    if separator < 0:
        separator = body.find(",")
    if separator >= 0:
        point_shift = -(len(body) - separator - 1)
        body = body[:separator] + body[separator + 1 :]

    if not body:
        return _ZERO
    if _DIGITS_RE.fullmatch(body) is None:
        raise InvalidNumberError(f"Invalid decimal literal: {text!r}")

    zero = ord("0")
    return tuple(ord(c) - zero for c in body), point_shift, negative
