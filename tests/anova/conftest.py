"""
Shared fixtures for ANOVA tests.

Provides the unbalanced two-factor salary dataset and small balanced
designs with known sums of squares.
"""

import numpy as np
import pytest


# =====================================================================
# Unbalanced two-way design
# =====================================================================


@pytest.fixture
def salary_data():
    """
    Starting salaries (thousands) by gender and degree.

    22 observations: 12 'f' then 10 'm'; degree 1 = graduate, 0 = not.
    Unbalanced, so sequential sums of squares depend on factor order.
    """
    salary = np.array([24, 26, 25, 24, 27, 24, 27, 23, 15, 17, 20, 16,
                       25, 29, 27, 19, 18, 21, 20, 21, 22, 19], dtype=float)
    gender = np.array(['f'] * 12 + ['m'] * 10)
    degree = np.array([1, 1, 1, 1, 1, 1, 1, 1, 0, 0, 0, 0,
                       1, 1, 1, 0, 0, 0, 0, 0, 0, 0])
    return salary, gender, degree


# =====================================================================
# Balanced designs
# =====================================================================


@pytest.fixture
def oneway_unbalanced():
    """3-group unbalanced design (n=5, 10, 15)."""
    rng = np.random.default_rng(123)
    y = np.concatenate([
        rng.normal(10.0, 2.0, 5),
        rng.normal(15.0, 2.0, 10),
        rng.normal(20.0, 2.0, 15),
    ])
    group = np.array(['A'] * 5 + ['B'] * 10 + ['C'] * 15)
    return y, group


@pytest.fixture
def twoway_balanced():
    """2x3 balanced factorial, 10 replicates per cell."""
    rng = np.random.default_rng(42)
    a = np.repeat(['a1', 'a2'], 30)
    b = np.tile(np.repeat(['b1', 'b2', 'b3'], 10), 2)
    effect_a = np.where(a == 'a2', 2.0, 0.0)
    effect_b = np.select([b == 'b2', b == 'b3'], [1.0, -1.0], 0.0)
    y = 10.0 + effect_a + effect_b + rng.normal(0.0, 1.0, 60)
    return y, a, b


@pytest.fixture
def threeway_balanced():
    """2x2x3 balanced factorial, 4 replicates per cell."""
    rng = np.random.default_rng(7)
    a, b, c = np.meshgrid([0, 1], ['lo', 'hi'], [1.5, 2.5, 3.5], indexing='ij')
    a = np.repeat(a.ravel(), 4)
    b = np.repeat(b.ravel(), 4)
    c = np.repeat(c.ravel(), 4)
    y = 5.0 + a + (b == 'hi') * 0.5 + c * 0.3 + rng.normal(0.0, 1.0, len(a))
    return y, a, b, c
