"""
Likelihood objectives for maximum-likelihood fitting.

The optimizer searches an unconstrained space: strictly positive
parameters are searched on the log scale, real-line parameters as-is.
LikelihoodObjective maps search-space vectors back to natural parameters
and evaluates the family's negative log-likelihood against an explicit,
immutable context built once from the sample.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, TYPE_CHECKING

import numpy as np
from numpy.typing import NDArray

if TYPE_CHECKING:
    from pyfitstats.distributions._family import DistributionFamily


@dataclass(frozen=True)
class LikelihoodContext:
    """
    Sample and frequencies for families that need the raw observations.

    Attributes:
        x: Observations
        w: Frequency of each observation
        n: Total frequency
    """
    x: NDArray[np.floating[Any]]
    w: NDArray[np.floating[Any]]
    n: float

    @property
    def likelihood_mode(self) -> str:
        return 'continuous'

    @property
    def n_censored(self) -> tuple[int, int]:
        return (0, 0)


@dataclass(frozen=True)
class BetaLikelihoodContext:
    """
    Sufficient statistics of a sample on [0, 1] for the Beta likelihood.

    Observations below x_lower are treated as left-censored at x_lower and
    observations above x_upper as right-censored at x_upper; n and the
    log sums cover the remaining (interior) observations only. Every
    count and sum is weighted by the observation frequencies.

    Attributes:
        n: Total frequency of interior observations
        sum_log_x: Weighted sum of log(x) over interior observations
        sum_log1m_x: Weighted sum of log(1 - x) over interior observations
        n_lower: Left-censored frequency
        n_upper: Right-censored frequency
        x_lower: Left censoring threshold
        x_upper: Right censoring threshold
    """
    n: float
    sum_log_x: float
    sum_log1m_x: float
    n_lower: float
    n_upper: float
    x_lower: float
    x_upper: float

    @property
    def likelihood_mode(self) -> str:
        if self.n_lower == 0 and self.n_upper == 0:
            return 'continuous'
        return 'boundary_corrected'

    @property
    def n_censored(self) -> tuple[int, int]:
        return (self.n_lower, self.n_upper)


class LikelihoodObjective:
    """
    Negative log-likelihood of a sample as a function of search-space
    parameters.

    Follows the objective protocol used by the backends:
    get_initial_parameters(), compute_objective(theta),
    extract_parameters(theta).
    """

    def __init__(
        self,
        family: 'DistributionFamily',
        data: NDArray[np.floating[Any]],
        freq: NDArray[np.floating[Any]] | None = None,
    ):
        self.family = family
        self.data = data
        self.freq = freq
        self.context = family.make_context(data, freq)
        self.n_params = len(family.parameter_names)
        self.n_evaluations = 0

    def get_initial_parameters(self) -> NDArray[np.floating[Any]]:
        """Closed-form starting point, mapped to search space."""
        return self.family.to_search(self.family.initial_guess(self.data, self.freq))

    def compute_objective(self, theta: NDArray[np.floating[Any]]) -> float:
        """
        Negative log-likelihood at search-space point theta.

        Points outside the parameter space, or where the likelihood
        vanishes, evaluate to +inf so the simplex search steps away.
        """
        self.n_evaluations += 1
        params = self.family.from_search(theta)
        if not np.all(np.isfinite(params)):
            return np.inf
        value = self.family.negloglik(params, self.context)
        if not np.isfinite(value):
            return np.inf
        return float(value)

    def extract_parameters(
        self, theta: NDArray[np.floating[Any]]
    ) -> tuple[NDArray[np.floating[Any]], float]:
        """Natural parameters and negative log-likelihood at theta."""
        params = self.family.from_search(theta)
        return params, float(self.family.negloglik(params, self.context))
