"""
Generalized extreme value distribution.

Parameterization: shape k, scale sigma > 0, location mu, with

    F(x) = exp(-(1 + k z)^(-1/k)),   z = (x - mu) / sigma,

defined where 1 + k z > 0. k = 0 is the Gumbel limit exp(-exp(-z)).
k > 0 gives the heavy-tailed (Frechet) type, k < 0 the bounded (reverse
Weibull) type. scipy.stats.genextreme uses c = -k.
"""

from typing import Any

import numpy as np
from numpy.typing import NDArray
from scipy import stats

from pyfitstats.distributions._family import DistributionFamily, frequencies, register_family
from pyfitstats.distributions._objective import LikelihoodContext
from pyfitstats.distributions._weights import weighted_mean, weighted_std

EULER_GAMMA = 0.5772156649015329
_GUMBEL_TOL = 1e-12


class GeneralizedExtremeValue(DistributionFamily):
    """GEV(k, sigma, mu)."""

    @property
    def name(self) -> str:
        return 'GeneralizedExtremeValue'

    @property
    def parameter_names(self) -> tuple[str, ...]:
        return ('k', 'sigma', 'mu')

    @property
    def parameter_descriptions(self) -> tuple[str, ...]:
        return ('Shape', 'Scale', 'Location')

    @property
    def default_parameters(self) -> tuple[float, ...]:
        return (0.0, 1.0, 0.0)

    @property
    def log_ci(self) -> tuple[bool, ...]:
        return (False, True, False)

    def typical_magnitudes(
        self,
        x: NDArray[np.floating[Any]],
        w: NDArray[np.floating[Any]] | None = None,
    ) -> NDArray[np.floating[Any]]:
        return np.array([1.0, 1.0, max(weighted_std(x, frequencies(x, w)), 1.0)])

    def initial_guess(
        self,
        x: NDArray[np.floating[Any]],
        w: NDArray[np.floating[Any]] | None = None,
    ) -> NDArray[np.floating[Any]]:
        """Gumbel method-of-moments estimates with k = 0."""
        w = frequencies(x, w)
        sigma0 = np.sqrt(6.0) * weighted_std(x, w) / np.pi
        mu0 = weighted_mean(x, w) - EULER_GAMMA * sigma0
        return np.array([0.0, sigma0, mu0])

    def negloglik(self, params: NDArray[np.floating[Any]], context: LikelihoodContext) -> float:
        k, sigma, mu = params
        z = (context.x - mu) / sigma
        with np.errstate(over='ignore'):
            if abs(k) < _GUMBEL_TOL:
                return float(context.n * np.log(sigma) + np.sum(context.w * (z + np.exp(-z))))
            t = 1.0 + k * z
            if np.any(t <= 0):
                return np.inf
            log_t = np.log(t)
            return float(context.n * np.log(sigma)
                         + (1.0 + 1.0 / k) * np.sum(context.w * log_t)
                         + np.sum(context.w * np.exp(-log_t / k)))

    def frozen(self, params: NDArray[np.floating[Any]]) -> Any:
        k, sigma, mu = params
        return stats.genextreme(-k, loc=mu, scale=sigma)


GEV = register_family(
    GeneralizedExtremeValue(),
    aliases=('gev', 'generalized extreme value', 'GeneralizedExtremeValueDistribution'),
)
