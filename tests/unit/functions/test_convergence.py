"""Tests for the iteration ceiling of convergence loops."""

import pytest
from structlog.testing import capture_logs

from apdecimal import APDecimal, DidNotConverge, configure
from apdecimal.convergence import iterations


class TestIterations:
    """Tests for the bounded iteration helper."""

    def test_yields_max_iterations_steps(self):
        """Steps are numbered from one up to the ceiling."""
        configure(max_iterations=3)
        steps = []
        with pytest.raises(DidNotConverge):
            for step in iterations("test", 5):
                steps.append(step)
        assert steps == [1, 2, 3]

    def test_early_return_does_not_raise(self):
        """Leaving the loop early is convergence."""
        configure(max_iterations=3)
        for step in iterations("test", 5):
            if step == 2:
                break
        assert step == 2

    def test_ceiling_logged(self):
        """Reaching the ceiling logs a warning before raising."""
        configure(max_iterations=2)
        with capture_logs() as logs:
            with pytest.raises(DidNotConverge, match="test did not converge after 2 iterations"):
                for _ in iterations("test", 5):
                    pass
        assert logs[-1]["event"] == "iteration_ceiling_reached"
        assert logs[-1]["log_level"] == "warning"
        assert logs[-1]["function"] == "test"


class TestFunctionCeilings:
    """Extended functions stop at the configured ceiling."""

    def test_sqrt(self):
        """sqrt raises DidNotConverge when the ceiling is too low."""
        configure(max_iterations=2)
        with pytest.raises(DidNotConverge):
            APDecimal(2).sqrt(30)

    def test_exp(self):
        """exp raises DidNotConverge when the ceiling is too low."""
        configure(max_iterations=2)
        with pytest.raises(DidNotConverge):
            APDecimal(1).exp(30)

    def test_enough_iterations(self):
        """A sufficient ceiling lets the same computation finish."""
        configure(max_iterations=100)
        assert str(APDecimal(2).sqrt(20)) == "1.4142135623730950488"
