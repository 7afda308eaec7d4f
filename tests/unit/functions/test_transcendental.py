"""Tests for exp, log and the trigonometric functions."""

import pytest
from structlog.testing import capture_logs

from apdecimal import APDecimal, DivisionByZero, DomainError, InvalidPrecisionError
from apdecimal.transcendental import cos, cot, e, exp, log, log10, sin, tan


def D(text: str | int) -> APDecimal:
    return APDecimal(text)


class TestExp:
    """Tests for exp and e."""

    def test_zero(self):
        """exp(0) is one."""
        assert str(exp(D(0))) == "1"

    def test_euler_number(self):
        """e to 20 digits."""
        assert str(e(20)) == "2.71828182845904523536"
        assert str(exp(D(1), 5)) == "2.71828"

    def test_positive_argument(self):
        """exp(2) to 10 digits."""
        assert str(exp(D(2), 10)) == "7.3890560989"

    def test_negative_argument(self):
        """Negative arguments use the reciprocal."""
        assert str(exp(D(-1), 20)) == "0.3678794411714423216"

    def test_convergence_logged(self):
        """Series completion is logged at debug level."""
        with capture_logs() as logs:
            exp(D(1), 10)
        converged = [entry for entry in logs if entry["event"] == "series_converged"]
        assert converged
        assert converged[0]["function"] == "exp"

    def test_invalid_precision(self):
        """Negative non-sentinel precisions are rejected."""
        with pytest.raises(InvalidPrecisionError):
            exp(D(1), -7)


class TestLog:
    """Tests for log and log10."""

    def test_natural_log(self):
        """ln 2 and ln 10 to 20 digits."""
        assert str(log(D(2), precision=20)) == "0.69314718055994530942"
        assert str(log(D(10), precision=20)) == "2.30258509299404568402"

    def test_fraction_argument(self):
        """Arguments below one have negative logarithms."""
        assert str(log(D("0.5"), precision=20)) == "-0.69314718055994530942"

    def test_log_of_one(self):
        """ln 1 is zero."""
        assert log(D(1)).is_zero()

    def test_with_base(self):
        """log(x, base) divides the natural logarithms."""
        assert str(log(D(8), D(2), 10)) == "3"

    def test_log10(self):
        """log10 of powers of ten is exact."""
        assert str(log10(D(1000), 10)) == "3"
        assert str(log10(D("0.01"), 10)) == "-2"

    def test_domain(self):
        """Non-positive arguments and bases raise DomainError."""
        with pytest.raises(DomainError):
            log(D(0))
        with pytest.raises(DomainError):
            log(D(-1))
        with pytest.raises(DomainError):
            log(D(2), D(-10))

    def test_base_one(self):
        """A base of one divides by zero."""
        with pytest.raises(DivisionByZero):
            log(D(5), D(1))

    def test_method_form(self):
        """APDecimal.log accepts native bases."""
        assert str(APDecimal(8).log(2, 10)) == "3"


class TestTrigonometry:
    """Tests for sin, cos, tan and cot."""

    def test_zero(self):
        """sin 0 = 0, cos 0 = 1, tan 0 = 0."""
        assert sin(D(0)).is_zero()
        assert str(cos(D(0))) == "1"
        assert tan(D(0)).is_zero()

    def test_sin(self):
        """sin(1) to 20 digits; sin is odd."""
        assert str(sin(D(1), 20)) == "0.84147098480789650665"
        assert str(sin(D(-1), 20)) == "-0.84147098480789650665"

    def test_cos(self):
        """cos(1) to 20 digits; cos is even."""
        assert str(cos(D(1), 20)) == "0.5403023058681397174"
        assert str(cos(D(-1), 20)) == "0.5403023058681397174"

    def test_tan(self):
        """tan(1) to 20 digits."""
        assert str(tan(D(1), 20)) == "1.55740772465490223051"

    def test_cot(self):
        """cot(1) to 10 digits."""
        assert str(cot(D(1), 10)) == "0.6420926159"

    def test_cot_zero(self):
        """cot(0) divides by zero."""
        with pytest.raises(DivisionByZero):
            cot(D(0))
