"""
Derivative-free minimization for likelihood fitting.

Thin wrapper over SciPy's Nelder-Mead that resolves iteration budgets from
the problem size and reports non-convergence as data rather than raising.
"""

from dataclasses import dataclass
from typing import Any, Callable

import numpy as np
from numpy.typing import NDArray
from scipy.optimize import minimize

from pyfitstats.core.exceptions import ValidationError


@dataclass(frozen=True)
class OptimizerOptions:
    """
    Stopping criteria for the simplex search.

    Attributes:
        max_iter: Iteration budget. None means 200 * n_params.
        max_fev: Function evaluation budget. None means 400 * n_params.
        xatol: Absolute tolerance on the simplex vertices (search space units)
        fatol: Absolute tolerance on the objective spread across the simplex
    """
    max_iter: int | None = None
    max_fev: int | None = None
    xatol: float = 1e-8
    fatol: float = 1e-10

    def __post_init__(self):
        for name in ('max_iter', 'max_fev'):
            value = getattr(self, name)
            if value is not None and (not isinstance(value, (int, np.integer)) or value < 1):
                raise ValidationError(f"{name}: must be a positive integer or None, got {value!r}")
        for name in ('xatol', 'fatol'):
            value = getattr(self, name)
            if not value > 0:
                raise ValidationError(f"{name}: must be positive, got {value!r}")

    def resolve(self, n_params: int) -> tuple[int, int]:
        """Return concrete (max_iter, max_fev) for a problem of this size."""
        max_iter = self.max_iter if self.max_iter is not None else 200 * n_params
        max_fev = self.max_fev if self.max_fev is not None else 400 * n_params
        return int(max_iter), int(max_fev)


@dataclass(frozen=True)
class SimplexResult:
    """
    Outcome of a simplex search.

    Attributes:
        x: Best point found
        fun: Objective value at x
        converged: Whether both tolerances were met within budget
        n_iter: Iterations performed
        n_fev: Objective evaluations performed
        message: Optimizer status message
    """
    x: NDArray[np.floating[Any]]
    fun: float
    converged: bool
    n_iter: int
    n_fev: int
    message: str


def minimize_simplex(
    fun: Callable[[NDArray[np.floating[Any]]], float],
    x0: NDArray[np.floating[Any]],
    options: OptimizerOptions | None = None,
) -> SimplexResult:
    """
    Minimize fun starting at x0 with the Nelder-Mead simplex method.

    The best point is always returned. When the budget runs out first,
    converged is False and message says why.

    Args:
        fun: Objective taking a 1D array and returning a float (may be inf)
        x0: Starting point
        options: Stopping criteria (package defaults when None)

    Returns:
        SimplexResult
    """
    if options is None:
        options = OptimizerOptions()
    x0 = np.asarray(x0, dtype=np.float64)
    max_iter, max_fev = options.resolve(len(x0))

    opt = minimize(
        fun,
        x0,
        method='Nelder-Mead',
        options={
            'maxiter': max_iter,
            'maxfev': max_fev,
            'xatol': options.xatol,
            'fatol': options.fatol,
            'disp': False,
        },
    )

    return SimplexResult(
        x=np.asarray(opt.x, dtype=np.float64),
        fun=float(opt.fun),
        converged=bool(opt.success),
        n_iter=int(getattr(opt, 'nit', 0)),
        n_fev=int(getattr(opt, 'nfev', 0)),
        message=str(getattr(opt, 'message', '')),
    )
