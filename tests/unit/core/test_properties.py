"""Algebraic properties and reference scenarios of the engine."""

import pytest

from apdecimal import APDecimal, parse
from apdecimal.arithmetic import add, div, mul, sub
from apdecimal.comparison import compare
from apdecimal.config import FULL_PRECISION
from apdecimal.formatting import format_decimal
from apdecimal.powers import factorial, mod, sqrt

SAMPLES = ["0", "1", "-1", "12.5", "-0.000013456", "1234567890.0987654321", "100", "-7.25"]


class TestRoundTrip:
    """Parsing then formatting reproduces canonical text."""

    @pytest.mark.parametrize("text", SAMPLES)
    def test_round_trip(self, text: str):
        """format(parse(s)) == s for canonical s."""
        assert format_decimal(parse(text), FULL_PRECISION) == text


class TestAlgebra:
    """Identities of the kernel operations."""

    @pytest.mark.parametrize("a", SAMPLES)
    @pytest.mark.parametrize("b", ["0.3", "-45.125", "1000"])
    def test_add_commutative(self, a: str, b: str):
        """a + b == b + a."""
        assert add(parse(a), parse(b)) == add(parse(b), parse(a))

    def test_add_associative(self):
        """(a + b) + c == a + (b + c)."""
        a, b, c = parse("1.25"), parse("-99.999"), parse("0.0001")
        assert add(add(a, b), c) == add(a, add(b, c))

    @pytest.mark.parametrize("a", SAMPLES)
    def test_identities(self, a: str):
        """a + 0 == a, a * 1 == a, a * 0 == 0, a - a == 0."""
        value = parse(a)
        assert mul(value, parse("0")).is_zero()
        assert add(value, parse("0")) == value
        assert mul(value, parse("1")) == value
        assert sub(value, value).is_zero()

    @pytest.mark.parametrize("a", SAMPLES)
    def test_sub_inverts_add(self, a: str):
        """(a + b) - b == a."""
        b = parse("-3.0625")
        assert sub(add(parse(a), b), b) == parse(a)

    @pytest.mark.parametrize(
        "a, b",
        [("12.5", "4"), ("0.125", "8"), ("-3.75", "0.2"), ("1024", "-0.5")],
    )
    def test_div_inverts_exact_mul(self, a: str, b: str):
        """(a * b) / b == a when the product is exact."""
        assert div(mul(parse(a), parse(b)), parse(b), FULL_PRECISION) == parse(a)

    def test_compare_antisymmetric(self):
        """compare(a, b) == -compare(b, a)."""
        values = [parse(text) for text in SAMPLES]
        for a in values:
            for b in values:
                assert compare(a, b) == -compare(b, a)
            assert compare(a, a) == 0


class TestScenarios:
    """Reference results."""

    def test_scientific_parse(self):
        """1.3456E-5 parses to 0.000013456."""
        assert str(APDecimal("1.3456E-5")) == "0.000013456"

    def test_decimal_sum(self):
        """0.1 + 0.2 is exactly 0.3."""
        assert str(APDecimal("0.1") + APDecimal("0.2")) == "0.3"

    def test_one_third(self):
        """1 / 3 at five digits."""
        assert str(div(APDecimal(1), APDecimal(3), 5)) == "0.33333"

    def test_sqrt_two(self):
        """sqrt(2) at ten digits."""
        assert str(sqrt(APDecimal(2), 10)) == "1.4142135624"

    def test_factorial(self):
        """5! = 120."""
        assert str(factorial(APDecimal(5))) == "120"

    def test_mod(self):
        """7 mod 3 = 1."""
        assert str(mod(APDecimal(7), APDecimal(3))) == "1"
