"""Error classes for the decimal engine.

User-facing errors derive from APDecimalError (an ArithmeticError) and also
from the closest builtin, so callers can catch either. Engine defects raise
InternalInvariantViolation, which is deliberately outside that hierarchy.
"""


class APDecimalError(ArithmeticError):
    """Base error for APDecimal operations."""

    pass


class InvalidNumberError(APDecimalError, ValueError):
    """Text is not a decimal literal."""

    pass


class InvalidPrecisionError(APDecimalError, ValueError):
    """Negative precision that is not one of the named sentinels."""

    pass


class DivisionByZero(APDecimalError, ZeroDivisionError):
    """Division or modulo by zero."""

    pass


class DomainError(APDecimalError, ValueError):
    """Argument outside the mathematical domain of the operation."""

    pass


class UnsupportedOperation(APDecimalError, NotImplementedError):
    """Result is defined but the engine has no algorithm for it."""

    pass


class DidNotConverge(APDecimalError):
    """Iterative algorithm hit the iteration ceiling before converging."""

    pass


class ConversionError(APDecimalError, ValueError):
    """Value cannot be represented in the requested native type."""

    pass


class InternalInvariantViolation(RuntimeError):
    """Kernel produced an impossible intermediate result (engine defect)."""

    pass
