"""Tests for the error hierarchy."""

import pytest

from apdecimal import (
    APDecimal,
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


class TestHierarchy:
    """Errors can be caught as APDecimalError or as the closest builtin."""

    @pytest.mark.parametrize(
        "error, builtin",
        [
            (InvalidNumberError, ValueError),
            (InvalidPrecisionError, ValueError),
            (DivisionByZero, ZeroDivisionError),
            (DomainError, ValueError),
            (UnsupportedOperation, NotImplementedError),
            (ConversionError, ValueError),
        ],
    )
    def test_dual_base(self, error: type, builtin: type):
        """Each user error derives from APDecimalError and a builtin."""
        assert issubclass(error, APDecimalError)
        assert issubclass(error, builtin)

    def test_did_not_converge(self):
        """DidNotConverge is an APDecimalError."""
        assert issubclass(DidNotConverge, APDecimalError)

    def test_base_is_arithmetic_error(self):
        """APDecimalError is an ArithmeticError."""
        assert issubclass(APDecimalError, ArithmeticError)

    def test_internal_violation_is_separate(self):
        """Engine defects are not user errors."""
        assert issubclass(InternalInvariantViolation, RuntimeError)
        assert not issubclass(InternalInvariantViolation, APDecimalError)

    def test_catch_as_base(self):
        """Operations raise errors catchable through the base class."""
        with pytest.raises(APDecimalError):
            APDecimal(1) / 0
        with pytest.raises(APDecimalError):
            APDecimal("-4").sqrt()
