"""
Pytest configuration and shared fixtures.
"""

import matplotlib

matplotlib.use("Agg")

import numpy as np
import pytest


class FixedRandom:
    """
    Stand-in for numpy's Generator that always draws the same point.

    random() returns u; uniform(low, high) returns low + u * (high - low);
    integers(low, high) returns low. Pins every draw of the tick rule.
    """

    def __init__(self, u: float = 0.5):
        self.u = u

    def random(self, size=None):
        if size is None:
            return self.u
        return np.full(size, self.u, dtype=np.float64)

    def uniform(self, low=0.0, high=1.0, size=None):
        value = low + self.u * (high - low)
        if size is None:
            return value
        return np.full(size, value, dtype=np.float64)

    def integers(self, low, high=None, size=None):
        if size is None:
            return low
        return np.full(size, low, dtype=np.int64)


@pytest.fixture
def rng():
    """Reproducible random number generator."""
    return np.random.default_rng(seed=42)


@pytest.fixture
def fixed_rng():
    """Random source whose perturbation is exactly zero (u = 0.5)."""
    return FixedRandom(0.5)


@pytest.fixture
def small_grid(rng):
    """The default 4x5 junction grid."""
    from trafficsim.core import build_grid
    return build_grid(4, 5, rng=rng)


@pytest.fixture
def simulation():
    """A seeded 4x5 simulation with a frozen clock."""
    from trafficsim.core import Simulation
    return Simulation.from_config(seed=42, clock=lambda: 1_700_000_000.0)


@pytest.fixture
def make_fixed_rng():
    """Factory for FixedRandom with a chosen draw."""
    return FixedRandom
