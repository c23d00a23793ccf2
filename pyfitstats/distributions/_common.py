"""
Shared parameter payload for maximum-likelihood distribution fits.
"""

from dataclasses import dataclass
from typing import Any

import numpy as np
from numpy.typing import NDArray


@dataclass(frozen=True)
class FitParams:
    """
    Parameter payload for a maximum-likelihood fit.

    Immutable data computed by backends.

    Attributes:
        family: Registered family name
        parameter_names: Parameter names, in estimate order
        estimates: Maximum-likelihood estimates (p,)
        covariance: Asymptotic covariance of the estimates (p x p)
        ci: Confidence intervals (2 x p); row 0 lower, row 1 upper
        alpha: Significance level used for ci
        nll: Negative log-likelihood at the estimates
        n_obs: Observations used in the fit (total frequency)
        likelihood_mode: 'continuous' or 'boundary_corrected'
        n_censored: (lower, upper) counts of observations treated as censored
    """
    family: str
    parameter_names: tuple[str, ...]
    estimates: NDArray[np.floating[Any]]
    covariance: NDArray[np.floating[Any]]
    ci: NDArray[np.floating[Any]]
    alpha: float
    nll: float
    n_obs: int
    likelihood_mode: str = 'continuous'
    n_censored: tuple[int, int] = (0, 0)
