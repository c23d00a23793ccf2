"""
Normal distribution with mean mu and standard deviation sigma.
"""

from typing import Any

import numpy as np
from numpy.typing import NDArray
from scipy import stats

from pyfitstats.distributions._family import DistributionFamily, frequencies, register_family
from pyfitstats.distributions._objective import LikelihoodContext
from pyfitstats.distributions._weights import weighted_mean, weighted_std

_LOG_2PI = np.log(2.0 * np.pi)


class Normal(DistributionFamily):
    """Normal(mu, sigma)."""

    @property
    def name(self) -> str:
        return 'Normal'

    @property
    def parameter_names(self) -> tuple[str, ...]:
        return ('mu', 'sigma')

    @property
    def parameter_descriptions(self) -> tuple[str, ...]:
        return ('Mean', 'Standard Deviation')

    @property
    def default_parameters(self) -> tuple[float, ...]:
        return (0.0, 1.0)

    @property
    def log_ci(self) -> tuple[bool, ...]:
        return (False, True)

    def typical_magnitudes(
        self,
        x: NDArray[np.floating[Any]],
        w: NDArray[np.floating[Any]] | None = None,
    ) -> NDArray[np.floating[Any]]:
        return np.array([max(weighted_std(x, frequencies(x, w)), 1.0), 1.0])

    def initial_guess(
        self,
        x: NDArray[np.floating[Any]],
        w: NDArray[np.floating[Any]] | None = None,
    ) -> NDArray[np.floating[Any]]:
        w = frequencies(x, w)
        return np.array([weighted_mean(x, w), weighted_std(x, w)])

    def negloglik(self, params: NDArray[np.floating[Any]], context: LikelihoodContext) -> float:
        mu, sigma = params
        z = (context.x - mu) / sigma
        return float(0.5 * np.sum(context.w * z * z)
                     + context.n * (np.log(sigma) + 0.5 * _LOG_2PI))

    def frozen(self, params: NDArray[np.floating[Any]]) -> Any:
        mu, sigma = params
        return stats.norm(loc=mu, scale=sigma)


NORMAL = register_family(Normal(), aliases=('gaussian',))
