"""Bounded iteration for the convergence loops of the extended functions.

Every loop that runs until successive iterates agree draws its steps from
iterations(), so no loop can spin forever on an argument that oscillates at
the working precision.
"""

from __future__ import annotations

from collections.abc import Iterator

import structlog

from apdecimal.config import get_settings
from apdecimal.errors import DidNotConverge

logger = structlog.get_logger()


def iterations(function: str, precision: int) -> Iterator[int]:
    """Yield step numbers up to the configured max_iterations.

    The caller returns from inside the loop once it has converged. Falling
    off the end means the ceiling was reached.

    Args:
        function: Name of the computation, for logs and the error message
        precision: Working precision of the computation

    Raises:
        DidNotConverge: When all max_iterations steps were consumed
    """
    ceiling = get_settings().max_iterations
    yield from range(1, ceiling + 1)

    logger.warning(
        "iteration_ceiling_reached",
        function=function,
        iterations=ceiling,
        precision=precision,
    )
    raise DidNotConverge(f"{function} did not converge after {ceiling} iterations")


def converged(function: str, steps: int, precision: int) -> None:
    """Record a finished convergence loop."""
    logger.debug("series_converged", function=function, iterations=steps, precision=precision)
