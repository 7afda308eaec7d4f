"""Command-line evaluator.

Evaluates one engine operation and prints the result:

    apdecimal div 1 3 --precision 5      # 0.33333
    apdecimal sqrt 2 --precision 10      # 1.4142135624
    apdecimal e --precision 20           # 2.71828182845904523536

Engine errors are printed to stderr and exit with status 1.
"""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Callable, Sequence
from contextlib import nullcontext

import structlog

from apdecimal import arithmetic, powers, rounding, transcendental
from apdecimal.config import FULL_PRECISION, override_settings
from apdecimal.errors import APDecimalError
from apdecimal.number import APDecimal

logger = structlog.get_logger()

Operation = Callable[[list[APDecimal], int], APDecimal]


def _rounding_precision(precision: int) -> int:
    # round/trunc keep no fractional digits unless asked to
    return 0 if precision == FULL_PRECISION else precision


# name -> (accepted operand counts, operation)
OPERATIONS: dict[str, tuple[tuple[int, ...], Operation]] = {
    "add": ((2,), lambda ops, p: arithmetic.add(ops[0], ops[1], p)),
    "sub": ((2,), lambda ops, p: arithmetic.sub(ops[0], ops[1], p)),
    "mul": ((2,), lambda ops, p: arithmetic.mul(ops[0], ops[1], p)),
    "div": ((2,), lambda ops, p: arithmetic.div(ops[0], ops[1], p)),
    "idiv": ((2,), lambda ops, p: arithmetic.idiv(ops[0], ops[1])),
    "mod": ((2,), lambda ops, p: powers.mod(ops[0], ops[1], p)),
    "pow": ((2,), lambda ops, p: powers.power(ops[0], ops[1], p)),
    "sqrt": ((1,), lambda ops, p: powers.sqrt(ops[0], p)),
    "root": ((2,), lambda ops, p: powers.root(ops[0], ops[1], p)),
    "factorial": ((1,), lambda ops, p: powers.factorial(ops[0])),
    "exp": ((1,), lambda ops, p: transcendental.exp(ops[0], p)),
    "e": ((0,), lambda ops, p: transcendental.e(p)),
    "log": ((1, 2), lambda ops, p: transcendental.log(ops[0], ops[1] if len(ops) > 1 else None, p)),
    "log10": ((1,), lambda ops, p: transcendental.log10(ops[0], p)),
    "sin": ((1,), lambda ops, p: transcendental.sin(ops[0], p)),
    "cos": ((1,), lambda ops, p: transcendental.cos(ops[0], p)),
    "tan": ((1,), lambda ops, p: transcendental.tan(ops[0], p)),
    "cot": ((1,), lambda ops, p: transcendental.cot(ops[0], p)),
    "round": ((1,), lambda ops, p: arithmetic.round_half_up(ops[0], _rounding_precision(p))),
    "trunc": ((1,), lambda ops, p: rounding.truncate(ops[0], _rounding_precision(p))),
    "floor": ((1,), lambda ops, p: rounding.floor(ops[0])),
    "ceiling": ((1,), lambda ops, p: rounding.ceiling(ops[0])),
    "frac": ((1,), lambda ops, p: rounding.frac(ops[0], p)),
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="apdecimal",
        description="Evaluate an arbitrary-precision decimal operation",
    )
    parser.add_argument("function", choices=sorted(OPERATIONS), help="Operation to evaluate")
    parser.add_argument("operands", nargs="*", help="Decimal operands (plain or scientific notation)")
    parser.add_argument(
        "--precision",
        "-p",
        type=int,
        default=FULL_PRECISION,
        help="Fractional digits of the result (default: full, or the configured default where unbounded)",
    )
    parser.add_argument(
        "--separator",
        choices=[".", ","],
        default=None,
        help="Decimal separator of the output (default: APDECIMAL_SEPARATOR or '.')",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable debug logging on stderr",
    )
    return parser


def _configure_logging(verbose: bool) -> None:
    log_level = logging.DEBUG if verbose else logging.WARNING
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
    )


def main(argv: Sequence[str] | None = None) -> int:
    """Run the evaluator. Returns the process exit status."""
    parser = build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)

    arities, operation = OPERATIONS[args.function]
    if len(args.operands) not in arities:
        expected = " or ".join(str(n) for n in arities)
        print(
            f"Error: {args.function} takes {expected} operand(s), got {len(args.operands)}",
            file=sys.stderr,
        )
        return 1

    settings = (
        override_settings(decimal_separator=args.separator)
        if args.separator is not None
        else nullcontext()
    )
    try:
        with settings:
            operands = [APDecimal(text) for text in args.operands]
            result = operation(operands, args.precision)
            print(result)
    except APDecimalError as e:
        logger.debug("evaluation_failed", function=args.function, error=str(e))
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
