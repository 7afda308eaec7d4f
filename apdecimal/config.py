"""Engine configuration and precision sentinels.

The engine keeps one process-wide EngineSettings instance. It is read on
every operation that takes a precision, so configure it once at startup
(or through override_settings in tests) before other threads compute.

Configuration from environment variables with sensible defaults:
- APDECIMAL_PRECISION: default working precision (default: 50)
- APDECIMAL_SEPARATOR: decimal separator used for output (default: ".")
- APDECIMAL_MAX_ITERATIONS: ceiling for convergence loops (default: 5000)
"""

from __future__ import annotations

import os
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any, Final

import structlog
from pydantic import BaseModel, Field

from apdecimal.errors import InvalidPrecisionError

logger = structlog.get_logger()

# Precision sentinels (any other negative precision is invalid)
FULL_PRECISION: Final[int] = -1  # no bound: keep every stored digit
FIXED_PRECISION: Final[int] = -2  # substitute the configured default precision

DEFAULT_PRECISION: Final[int] = 50
DEFAULT_MAX_ITERATIONS: Final[int] = 5000

# Largest precision served by the native float fast path of sqrt/root
FLOAT_FAST_PATH_DIGITS: Final[int] = 15


class EngineSettings(BaseModel):
    """Validated process-wide engine settings.

    Attributes:
        default_precision: Fractional digits used for FIXED_PRECISION and for
            operations that cannot run unbounded (division, series).
        decimal_separator: Separator emitted by the formatter ("." or ",").
            The parser accepts both regardless of this setting.
        max_iterations: Maximum steps of any convergence loop.
        fast_path_digits: Precision ceiling for the float fast path of
            sqrt/root.
    """

    model_config = {"frozen": True}

    default_precision: int = Field(default=DEFAULT_PRECISION, ge=0)
    decimal_separator: str = Field(default=".", pattern=r"^[.,]$")
    max_iterations: int = Field(default=DEFAULT_MAX_ITERATIONS, gt=0)
    fast_path_digits: int = Field(default=FLOAT_FAST_PATH_DIGITS, ge=0)

    @classmethod
    def from_env(cls) -> EngineSettings:
        """Build settings from APDECIMAL_* environment variables."""
        return cls(
            default_precision=int(os.environ.get("APDECIMAL_PRECISION", DEFAULT_PRECISION)),
            decimal_separator=os.environ.get("APDECIMAL_SEPARATOR", "."),
            max_iterations=int(
                os.environ.get("APDECIMAL_MAX_ITERATIONS", DEFAULT_MAX_ITERATIONS)
            ),
        )


_settings: EngineSettings = EngineSettings.from_env()


def get_settings() -> EngineSettings:
    """Return the active engine settings."""
    return _settings


def configure(**changes: Any) -> EngineSettings:
    """Replace the active settings with validated changes.

    Args:
        **changes: EngineSettings fields to change

    Returns:
        The new active settings

    Raises:
        pydantic.ValidationError: If a changed value is invalid
    """
    global _settings
    _settings = EngineSettings(**{**_settings.model_dump(), **changes})
    logger.info("settings_configured", **changes)
    return _settings


@contextmanager
def override_settings(**changes: Any) -> Iterator[EngineSettings]:
    """Temporarily apply settings changes, restoring the previous ones on exit."""
    global _settings
    previous = _settings
    try:
        yield configure(**changes)
    finally:
        _settings = previous


def resolve_precision(precision: int) -> int | None:
    """Resolve a precision argument to a digit count, or None for unbounded.

    Args:
        precision: Non-negative digit count, FULL_PRECISION or FIXED_PRECISION

    Returns:
        The fractional digit bound, or None when FULL_PRECISION was given

    Raises:
        InvalidPrecisionError: For any other negative value
    """
    if precision >= 0:
        return precision
    if precision == FULL_PRECISION:
        return None
    if precision == FIXED_PRECISION:
        return _settings.default_precision
    raise InvalidPrecisionError(f"Invalid precision: {precision}")


def resolve_working_precision(precision: int) -> int:
    """Resolve a precision for operations that cannot run unbounded.

    FULL_PRECISION falls back to the default precision, since division and
    the series functions would never terminate without a bound.
    """
    resolved = resolve_precision(precision)
    if resolved is None:
        return _settings.default_precision
    return resolved
