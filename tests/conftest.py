"""Pytest configuration and fixtures."""

from collections.abc import Iterator

import pytest
import structlog

from apdecimal.config import DEFAULT_MAX_ITERATIONS, DEFAULT_PRECISION, override_settings


@pytest.fixture(autouse=True)
def default_settings() -> Iterator[None]:
    """Run every test against the built-in defaults, whatever the environment says.

    Settings changed inside a test are restored afterwards.
    """
    with override_settings(
        default_precision=DEFAULT_PRECISION,
        decimal_separator=".",
        max_iterations=DEFAULT_MAX_ITERATIONS,
    ):
        yield


@pytest.fixture(autouse=True)
def reset_logging() -> Iterator[None]:
    """Undo structlog configuration done by a test (the CLI configures it)."""
    yield
    structlog.reset_defaults()
