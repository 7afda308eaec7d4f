"""Tests for comparison and digit-window alignment."""

import pytest

from apdecimal import APDecimal, InvalidPrecisionError
from apdecimal.comparison import (
    aligned_digits,
    compare,
    compare_magnitudes,
    fraction_length,
    integer_length,
)


def D(text: str) -> APDecimal:
    return APDecimal(text)


class TestLengths:
    """Tests for integer and fractional lengths."""

    def test_integer_length(self):
        """Integer length counts the implied zero of purely fractional values."""
        assert integer_length(D("0.5")) == 1
        assert integer_length(D("12.5")) == 2
        assert integer_length(D("2500")) == 4

    def test_fraction_length(self):
        """Fraction length counts stored fractional digits."""
        assert fraction_length(D("0.0123")) == 4
        assert fraction_length(D("2500")) == 0


class TestAlignedDigits:
    """Tests for aligned_digits."""

    def test_padding(self):
        """Missing positions read as zero."""
        assert aligned_digits(D("12.5"), 3, 2) == [0, 1, 2, 5, 0]

    def test_cut(self):
        """Fractional digits beyond the window are dropped."""
        assert aligned_digits(D("0.0123"), 1, 2) == [0, 0, 1]

    def test_implied_integer_zeros(self):
        """A positive point shift contributes zeros."""
        assert aligned_digits(D("300"), 3, 1) == [3, 0, 0, 0]


class TestCompare:
    """Tests for compare."""

    def test_fraction_lengths_differ(self):
        """Longer fractions compare correctly against shorter ones."""
        assert compare(D("1.25"), D("1.2")) == 1
        assert compare(D("1.2"), D("1.25")) == -1
        assert compare(D("10"), D("9.999")) == 1

    def test_precision_bound(self):
        """Digits past the precision are ignored."""
        assert compare(D("1.25"), D("1.2"), 1) == 0
        assert compare(D("1.25"), D("1.2"), 2) == 1

    def test_equal(self):
        """Equal values compare as 0 regardless of representation."""
        assert compare(D("1.50"), D("1.5")) == 0
        assert compare(D("0"), D("-0")) == 0

    def test_opposite_signs(self):
        """Opposite signs decide immediately."""
        assert compare(D("-5"), D("3")) == -1
        assert compare(D("0.001"), D("-1000")) == 1
        assert compare(D("0.001"), D("0")) == 1

    def test_both_negative(self):
        """Two negatives compare inverted."""
        assert compare(D("-3"), D("-2")) == -1
        assert compare(D("-0.1"), D("-0.01")) == -1

    def test_invalid_precision(self):
        """A negative non-sentinel precision is rejected."""
        with pytest.raises(InvalidPrecisionError):
            compare(D("1"), D("2"), -3)

    def test_compare_magnitudes_ignores_sign(self):
        """compare_magnitudes compares absolute values."""
        assert compare_magnitudes(D("-7"), D("3")) == 1
        assert compare_magnitudes(D("-3"), D("3")) == 0

    def test_total_order(self):
        """Sorting agrees with the numeric order."""
        values = [D("3"), D("-1.5"), D("0"), D("0.01"), D("-20"), D("2.999")]
        ordered = sorted(values)
        assert [str(v) for v in ordered] == ["-20", "-1.5", "0", "0.01", "2.999", "3"]
