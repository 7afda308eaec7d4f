"""Tests for the command-line evaluator."""

import pytest

from apdecimal.cli import OPERATIONS, main


class TestMain:
    """Tests for cli.main."""

    @pytest.mark.parametrize(
        "argv, expected",
        [
            (["div", "1", "3", "--precision", "5"], "0.33333"),
            (["sqrt", "2", "--precision", "10"], "1.4142135624"),
            (["add", "0.1", "0.2"], "0.3"),
            (["sub", "1", "-2"], "3"),
            (["factorial", "5"], "120"),
            (["mod", "7", "3"], "1"),
            (["pow", "2", "10"], "1024"),
            (["round", "2.5"], "3"),
            (["round", "2.345", "-p", "2"], "2.35"),
            (["trunc", "-2.7"], "-2"),
            (["floor", "-2.5"], "-3"),
            (["e", "--precision", "5"], "2.71828"),
            (["log", "8", "2", "--precision", "10"], "3"),
            (["add", "1.3456E-5", "0"], "0.000013456"),
        ],
    )
    def test_evaluates(self, argv: list[str], expected: str, capsys: pytest.CaptureFixture[str]):
        """Each operation prints its result and exits with 0."""
        assert main(argv) == 0
        assert capsys.readouterr().out.strip() == expected

    def test_separator(self, capsys: pytest.CaptureFixture[str]):
        """--separator changes the output separator."""
        assert main(["add", "1.5", "1", "--separator", ","]) == 0
        assert capsys.readouterr().out.strip() == "2,5"

    def test_engine_error(self, capsys: pytest.CaptureFixture[str]):
        """Engine errors go to stderr with exit status 1."""
        assert main(["div", "1", "0"]) == 1
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "Division by zero" in captured.err

    def test_invalid_operand(self, capsys: pytest.CaptureFixture[str]):
        """Unparsable operands are engine errors."""
        assert main(["sqrt", "abc"]) == 1
        assert "Invalid decimal literal" in capsys.readouterr().err

    def test_invalid_precision(self, capsys: pytest.CaptureFixture[str]):
        """Negative non-sentinel precisions are engine errors."""
        assert main(["div", "1", "3", "--precision", "-5"]) == 1
        assert "Invalid precision" in capsys.readouterr().err

    def test_wrong_operand_count(self, capsys: pytest.CaptureFixture[str]):
        """Operand counts are checked per operation."""
        assert main(["sqrt", "1", "2"]) == 1
        assert "sqrt takes 1 operand(s), got 2" in capsys.readouterr().err

    def test_unknown_function(self):
        """argparse rejects unknown operations."""
        with pytest.raises(SystemExit):
            main(["frobnicate", "1"])

    def test_operation_table(self):
        """Every engine operation is reachable."""
        assert set(OPERATIONS) == {
            "add", "sub", "mul", "div", "idiv", "mod", "pow", "sqrt", "root",
            "factorial", "exp", "e", "log", "log10", "sin", "cos", "tan", "cot",
            "round", "trunc", "floor", "ceiling", "frac",
        }  # fmt: skip
