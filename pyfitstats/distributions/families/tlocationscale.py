"""
Location-scale Student t distribution.

If T has a standard t distribution with nu degrees of freedom, then
mu + sigma * T is tLocationScale(mu, sigma, nu). Large nu approaches the
normal distribution; small nu gives heavy tails.
"""

from typing import Any

import numpy as np
from numpy.typing import NDArray
from scipy import stats
from scipy.special import gammaln

from pyfitstats.distributions._family import DistributionFamily, frequencies, register_family
from pyfitstats.distributions._objective import LikelihoodContext
from pyfitstats.distributions._weights import weighted_median, weighted_std

# Normal-consistency factor for the median absolute deviation
_MAD_SCALE = 1.4826


class TLocationScale(DistributionFamily):
    """tLocationScale(mu, sigma, nu)."""

    @property
    def name(self) -> str:
        return 'tLocationScale'

    @property
    def parameter_names(self) -> tuple[str, ...]:
        return ('mu', 'sigma', 'nu')

    @property
    def parameter_descriptions(self) -> tuple[str, ...]:
        return ('Location', 'Scale', 'Degrees of Freedom')

    @property
    def default_parameters(self) -> tuple[float, ...]:
        return (0.0, 1.0, 5.0)

    @property
    def log_ci(self) -> tuple[bool, ...]:
        return (False, True, True)

    @property
    def parameter_aliases(self) -> dict[str, str]:
        return {'df': 'nu'}

    def typical_magnitudes(
        self,
        x: NDArray[np.floating[Any]],
        w: NDArray[np.floating[Any]] | None = None,
    ) -> NDArray[np.floating[Any]]:
        return np.array([max(weighted_std(x, frequencies(x, w)), 1.0), 1.0, 1.0])

    def initial_guess(
        self,
        x: NDArray[np.floating[Any]],
        w: NDArray[np.floating[Any]] | None = None,
    ) -> NDArray[np.floating[Any]]:
        """Median, scaled MAD (std if MAD is zero) and nu = 5."""
        w = frequencies(x, w)
        mu0 = weighted_median(x, w)
        sigma0 = _MAD_SCALE * weighted_median(np.abs(x - mu0), w)
        if sigma0 <= 0:
            sigma0 = weighted_std(x, w)
        return np.array([mu0, sigma0, 5.0])

    def negloglik(self, params: NDArray[np.floating[Any]], context: LikelihoodContext) -> float:
        mu, sigma, nu = params
        z = (context.x - mu) / sigma
        log_norm = (gammaln(0.5 * (nu + 1.0)) - gammaln(0.5 * nu)
                    - 0.5 * np.log(nu * np.pi) - np.log(sigma))
        return float(-(context.n * log_norm
                       - 0.5 * (nu + 1.0) * np.sum(context.w * np.log1p(z * z / nu))))

    def frozen(self, params: NDArray[np.floating[Any]]) -> Any:
        mu, sigma, nu = params
        return stats.t(nu, loc=mu, scale=sigma)


TLOCATIONSCALE = register_family(
    TLocationScale(),
    aliases=('t location-scale', 'tlocationscale'),
)
