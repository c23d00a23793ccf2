"""
Optimization utilities for pyfitstats.

Provides the derivative-free simplex search used for maximum-likelihood
fitting, its stopping criteria, and finite-difference derivatives for
observed information matrices.
"""

from pyfitstats.core.compute.optimization.simplex import (
    OptimizerOptions,
    SimplexResult,
    minimize_simplex,
)
from pyfitstats.core.compute.optimization.derivatives import (
    numerical_gradient,
    numerical_hessian,
)

__all__ = [
    "OptimizerOptions",
    "SimplexResult",
    "minimize_simplex",
    "numerical_gradient",
    "numerical_hessian",
]
