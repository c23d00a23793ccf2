"""
Shared fixtures for distribution tests.
"""

import numpy as np
import pytest

from pyfitstats.distributions import makedist


@pytest.fixture
def beta_interior_sample():
    """50 evenly spaced points strictly inside (0, 1)."""
    return np.linspace(0.01, 0.99, 50)


@pytest.fixture
def beta_boundary_sample():
    """51 evenly spaced points on [0, 1], including both endpoints."""
    return np.linspace(0.0, 1.0, 51)


@pytest.fixture
def standard_gev():
    return makedist('GeneralizedExtremeValue', k=0, sigma=1, mu=0)


@pytest.fixture
def truncated_gev(standard_gev):
    return standard_gev.truncate(2, 4)
