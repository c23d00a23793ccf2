"""
Beta distribution on [0, 1] with shape parameters a and b.

Exact zeros and ones have zero density for most shapes, so samples that
touch the boundary are fitted with a mixed likelihood: observations within
sqrt(tiny) of 0 (or eps/2 of 1) are treated as censored at that threshold
and contribute the incomplete-beta probability of the tail instead of a
density.

References:
    Johnson, N. L., Kotz, S., & Balakrishnan, N. (1995). Continuous
    Univariate Distributions, Vol. 2 (2nd ed.), ch. 25.
"""

from typing import Any

import numpy as np
from numpy.typing import NDArray
from scipy import stats
from scipy.special import betainc, betaincc, betaln, psi

from pyfitstats.core.compute.optimization import numerical_gradient
from pyfitstats.core.exceptions import SingularMatrixError
from pyfitstats.distributions._family import DistributionFamily, frequencies, register_family
from pyfitstats.distributions._objective import BetaLikelihoodContext
from pyfitstats.distributions._weights import total_weight

X_LOWER = float(np.sqrt(np.finfo(np.float64).tiny))
X_UPPER = float(1.0 - np.finfo(np.float64).eps / 2.0)


class Beta(DistributionFamily):
    """Beta(a, b): density x^(a-1) (1-x)^(b-1) / B(a, b)."""

    @property
    def name(self) -> str:
        return 'Beta'

    @property
    def parameter_names(self) -> tuple[str, ...]:
        return ('a', 'b')

    @property
    def parameter_descriptions(self) -> tuple[str, ...]:
        return ('First shape parameter', 'Second shape parameter')

    @property
    def default_parameters(self) -> tuple[float, ...]:
        return (1.0, 1.0)

    @property
    def log_ci(self) -> tuple[bool, ...]:
        return (True, True)

    @property
    def sample_support(self) -> tuple[float, float]:
        return (0.0, 1.0)

    @property
    def support_closed(self) -> tuple[bool, bool]:
        return (True, True)

    def make_context(
        self,
        x: NDArray[np.floating[Any]],
        w: NDArray[np.floating[Any]] | None = None,
    ) -> BetaLikelihoodContext:
        w = frequencies(x, w)
        lower = x < X_LOWER
        upper = x > X_UPPER
        inside = ~(lower | upper)
        interior, w_interior = x[inside], w[inside]
        return BetaLikelihoodContext(
            n=total_weight(w_interior),
            sum_log_x=float(np.sum(w_interior * np.log(interior))),
            sum_log1m_x=float(np.sum(w_interior * np.log1p(-interior))),
            n_lower=total_weight(w[lower]),
            n_upper=total_weight(w[upper]),
            x_lower=X_LOWER,
            x_upper=X_UPPER,
        )

    def initial_guess(
        self,
        x: NDArray[np.floating[Any]],
        w: NDArray[np.floating[Any]] | None = None,
    ) -> NDArray[np.floating[Any]]:
        """
        Moment-type estimates from the geometric means of x and 1 - x.

        G1 and G2 are computed as products of weighted roots. A boundary
        observation zeroes the corresponding product, which still gives
        positive starting values.
        """
        w = frequencies(x, w)
        share = w / np.sum(w)
        g1 = np.prod((1.0 - x) ** share)
        g2 = np.prod(x ** share)
        denom = 1.0 - g1 - g2
        a0 = 0.5 * (1.0 - g1) / denom
        b0 = 0.5 * (1.0 - g2) / denom
        return np.array([a0, b0])

    def negloglik(self, params: NDArray[np.floating[Any]], context: BetaLikelihoodContext) -> float:
        a, b = params
        nll = (context.n * betaln(a, b)
               - (a - 1.0) * context.sum_log_x
               - (b - 1.0) * context.sum_log1m_x)
        with np.errstate(divide='ignore'):
            if context.n_lower > 0:
                nll -= context.n_lower * np.log(betainc(a, b, context.x_lower))
            if context.n_upper > 0:
                nll -= context.n_upper * np.log(betaincc(a, b, context.x_upper))
        return float(nll)

    def covariance(
        self,
        params: NDArray[np.floating[Any]],
        x: NDArray[np.floating[Any]],
        context: BetaLikelihoodContext,
        w: NDArray[np.floating[Any]] | None = None,
    ) -> NDArray[np.floating[Any]]:
        """
        Covariance from the outer product of per-observation scores.

        Interior observations have the analytic score
        (psi(a+b) - psi(a) + log x, psi(a+b) - psi(b) + log(1-x)); censored
        observations use the numerical gradient of the log tail probability.
        Each score row is scaled by the square root of its frequency.
        """
        a, b = params
        w = frequencies(x, w)
        inside = (x >= context.x_lower) & (x <= context.x_upper)
        interior = x[inside]
        root_w = np.sqrt(w[inside])[:, None]
        common = psi(a + b)
        scores = [root_w * np.column_stack([
            common - psi(a) + np.log(interior),
            common - psi(b) + np.log1p(-interior),
        ])]

        if context.n_lower > 0:
            g = numerical_gradient(
                lambda p: np.log(betainc(p[0], p[1], context.x_lower)), params)
            scores.append(np.sqrt(context.n_lower) * g[None, :])
        if context.n_upper > 0:
            g = numerical_gradient(
                lambda p: np.log(betaincc(p[0], p[1], context.x_upper)), params)
            scores.append(np.sqrt(context.n_upper) * g[None, :])

        J = np.vstack(scores)
        try:
            return np.linalg.inv(J.T @ J)
        except np.linalg.LinAlgError as e:
            raise SingularMatrixError(
                "Beta: score outer-product matrix is singular",
                matrix_name='score_outer_product',
            ) from e

    def frozen(self, params: NDArray[np.floating[Any]]) -> Any:
        a, b = params
        return stats.beta(a, b)


BETA = register_family(Beta())
