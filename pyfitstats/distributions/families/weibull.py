"""
Two-parameter Weibull distribution with scale lambda and shape k.

F(x) = 1 - exp(-(x / lambda)^k) for x > 0. The alternative names
a (scale) and b (shape) are accepted.
"""

from typing import Any

import numpy as np
from numpy.typing import NDArray
from scipy import stats

from pyfitstats.distributions._family import DistributionFamily, frequencies, register_family
from pyfitstats.distributions._objective import LikelihoodContext
from pyfitstats.distributions._weights import weighted_mean, weighted_std
from pyfitstats.distributions.families.gev import EULER_GAMMA


class Weibull(DistributionFamily):
    """Weibull(lambda, k)."""

    @property
    def name(self) -> str:
        return 'Weibull'

    @property
    def parameter_names(self) -> tuple[str, ...]:
        return ('lambda', 'k')

    @property
    def parameter_descriptions(self) -> tuple[str, ...]:
        return ('Scale', 'Shape')

    @property
    def default_parameters(self) -> tuple[float, ...]:
        return (1.0, 1.0)

    @property
    def log_ci(self) -> tuple[bool, ...]:
        return (True, True)

    @property
    def parameter_aliases(self) -> dict[str, str]:
        return {'a': 'lambda', 'scale': 'lambda', 'b': 'k', 'shape': 'k'}

    @property
    def sample_support(self) -> tuple[float, float]:
        return (0.0, np.inf)

    def initial_guess(
        self,
        x: NDArray[np.floating[Any]],
        w: NDArray[np.floating[Any]] | None = None,
    ) -> NDArray[np.floating[Any]]:
        """
        log(x) follows a minimum-Gumbel law with scale 1/k and location
        log(lambda); match its first two moments.
        """
        w = frequencies(x, w)
        log_x = np.log(x)
        k0 = np.pi / (np.sqrt(6.0) * weighted_std(log_x, w))
        lambda0 = np.exp(weighted_mean(log_x, w) + EULER_GAMMA / k0)
        return np.array([lambda0, k0])

    def negloglik(self, params: NDArray[np.floating[Any]], context: LikelihoodContext) -> float:
        scale, shape = params
        z = context.x / scale
        with np.errstate(over='ignore'):
            return float(-np.sum(context.w * (np.log(shape / scale)
                                              + (shape - 1.0) * np.log(z)
                                              - z ** shape)))

    def frozen(self, params: NDArray[np.floating[Any]]) -> Any:
        scale, shape = params
        return stats.weibull_min(shape, scale=scale)


WEIBULL = register_family(Weibull(), aliases=('wbl',))
