"""Arbitrary-precision decimal arithmetic."""

from apdecimal.config import (
    FIXED_PRECISION,
    FULL_PRECISION,
    EngineSettings,
    configure,
    get_settings,
    override_settings,
)
from apdecimal.errors import (
    APDecimalError,
    ConversionError,
    DidNotConverge,
    DivisionByZero,
    DomainError,
    InternalInvariantViolation,
    InvalidNumberError,
    InvalidPrecisionError,
    UnsupportedOperation,
)
from apdecimal.number import HALF, MINUS_ONE, ONE, TEN, TWO, ZERO, APDecimal, parse

__version__ = "0.1.0"
__all__ = [
    "APDecimal",
    "APDecimalError",
    "ConversionError",
    "DidNotConverge",
    "DivisionByZero",
    "DomainError",
    "EngineSettings",
    "FIXED_PRECISION",
    "FULL_PRECISION",
    "HALF",
    "InternalInvariantViolation",
    "InvalidNumberError",
    "InvalidPrecisionError",
    "MINUS_ONE",
    "ONE",
    "TEN",
    "TWO",
    "UnsupportedOperation",
    "ZERO",
    "configure",
    "get_settings",
    "override_settings",
    "parse",
    "__version__",
]
