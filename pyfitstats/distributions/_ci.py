"""
Wald confidence intervals for maximum-likelihood estimates.

Strictly positive parameters get intervals on the log scale (delta method
with se(log theta) = se(theta) / theta), so both limits stay positive.
Real-line parameters get ordinary symmetric intervals.
"""

from typing import Any, Sequence

import numpy as np
from numpy.typing import NDArray
from scipy.stats import norm


def wald_intervals(
    estimates: NDArray[np.floating[Any]],
    covariance: NDArray[np.floating[Any]],
    alpha: float,
    log_scale: Sequence[bool],
) -> NDArray[np.floating[Any]]:
    """
    Two-sided (1 - alpha) intervals for each parameter.

    Args:
        estimates: Point estimates (p,)
        covariance: Asymptotic covariance (p x p)
        alpha: Significance level, already validated
        log_scale: Per parameter, whether to build the interval on log scale

    Returns:
        Array (2 x p); row 0 lower limits, row 1 upper limits. Parameters
        with a non-positive or non-finite variance get NaN limits.
    """
    estimates = np.asarray(estimates, dtype=np.float64)
    variances = np.diag(np.asarray(covariance, dtype=np.float64))
    with np.errstate(invalid='ignore'):
        se = np.sqrt(np.where(variances > 0, variances, np.nan))
    probs = np.array([alpha / 2.0, 1.0 - alpha / 2.0])

    ci = np.empty((2, len(estimates)))
    for j, (theta, s, on_log) in enumerate(zip(estimates, se, log_scale)):
        if not np.isfinite(s):
            ci[:, j] = np.nan
        elif on_log:
            ci[:, j] = np.exp(norm.ppf(probs, loc=np.log(theta), scale=s / theta))
        else:
            ci[:, j] = norm.ppf(probs, loc=theta, scale=s)
    return ci
