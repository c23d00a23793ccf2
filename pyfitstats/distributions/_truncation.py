"""
Truncated-distribution computations.

A distribution with CDF F truncated to [lower, upper] has

    F_T(x) = (F(x) - F(lower)) / (F(upper) - F(lower))   for lower <= x <= upper,

0 below lower and 1 above upper. Every function here takes a scipy.stats
frozen distribution and the interval; the bounds are inclusive.
"""

import numbers
from typing import Any

import numpy as np
from numpy.typing import NDArray
from scipy.integrate import quad

from pyfitstats.core.exceptions import ConvergenceError, ValidationError

# Upper bound on a single rejection-sampling batch
MAX_BATCH = 10_000_000

# Below this interval probability, rejection sampling gives way to inversion
MIN_REJECTION_MASS = 1e-4


def validate_interval(lower: Any, upper: Any) -> tuple[float, float]:
    """
    Check a truncation interval.

    Raises:
        ValidationError: If a bound is not a real scalar, is NaN, or
            lower >= upper
    """
    for name, value in (('lower', lower), ('upper', upper)):
        if isinstance(value, (bool, np.bool_)) or not isinstance(value, numbers.Real):
            raise ValidationError(f"truncate: {name} must be a real scalar, got {value!r}")
        if np.isnan(value):
            raise ValidationError(f"truncate: {name} must not be NaN")
    lower, upper = float(lower), float(upper)
    if not lower < upper:
        raise ValidationError(
            f"truncate: invalid limits, lower={lower} must be less than upper={upper}"
        )
    return lower, upper


def interval_mass(frozen: Any, lower: float, upper: float) -> tuple[float, float]:
    """
    F(lower) and F(upper).

    Raises:
        ValidationError: If the interval carries no probability
    """
    f_lo = float(frozen.cdf(lower))
    f_hi = float(frozen.cdf(upper))
    if not f_hi - f_lo > 0:
        raise ValidationError(
            f"truncate: interval [{lower}, {upper}] has zero probability "
            f"under the distribution"
        )
    return f_lo, f_hi


def truncated_cdf(
    frozen: Any,
    x: NDArray[np.floating[Any]],
    lower: float,
    upper: float,
) -> NDArray[np.floating[Any]]:
    f_lo, f_hi = interval_mass(frozen, lower, upper)
    with np.errstate(invalid='ignore'):
        p = (frozen.cdf(x) - f_lo) / (f_hi - f_lo)
        p = np.clip(p, 0.0, 1.0)
        p = np.where(x < lower, 0.0, p)
        return np.where(x > upper, 1.0, p)


def truncated_pdf(
    frozen: Any,
    x: NDArray[np.floating[Any]],
    lower: float,
    upper: float,
) -> NDArray[np.floating[Any]]:
    f_lo, f_hi = interval_mass(frozen, lower, upper)
    with np.errstate(invalid='ignore'):
        inside = (x >= lower) & (x <= upper)
        y = np.where(inside, frozen.pdf(x) / (f_hi - f_lo), 0.0)
        return np.where(np.isnan(x), np.nan, y)


def truncated_icdf(
    frozen: Any,
    p: NDArray[np.floating[Any]],
    lower: float,
    upper: float,
) -> NDArray[np.floating[Any]]:
    """
    Quantiles of the truncated distribution.

    p is mapped into [F(lower), F(upper)], inverted with the untruncated
    quantile function and clipped to the interval. p outside [0, 1] gives
    NaN.
    """
    f_lo, f_hi = interval_mass(frozen, lower, upper)
    with np.errstate(invalid='ignore'):
        invalid = (p < 0) | (p > 1)
        x = frozen.ppf(f_lo + (f_hi - f_lo) * p)
        x = np.clip(x, lower, upper)
        return np.where(invalid, np.nan, x)


def truncated_moments(frozen: Any, lower: float, upper: float) -> tuple[float, float]:
    """
    Mean and variance of the truncated distribution by adaptive quadrature.

    Returns:
        (mean, variance)
    """
    f_lo, f_hi = interval_mass(frozen, lower, upper)
    mass = f_hi - f_lo

    def density(t):
        return frozen.pdf(t) / mass

    mean, _ = quad(lambda t: t * density(t), lower, upper, limit=200)
    var, _ = quad(lambda t: (t - mean) ** 2 * density(t), lower, upper, limit=200)
    return float(mean), float(var)


def _inverse_transform(
    frozen: Any,
    lower: float,
    upper: float,
    count: int,
    rng: np.random.Generator,
) -> NDArray[np.floating[Any]]:
    """
    Inverse-CDF draws from the truncated distribution.

    Intervals in the upper tail are inverted through the survival function,
    where F(lower) and F(upper) would both round to 1.
    """
    u = rng.uniform(size=count)
    s_lo = float(frozen.sf(lower))
    if s_lo < 0.5:
        s_hi = float(frozen.sf(upper))
        x = frozen.isf(s_lo - (s_lo - s_hi) * u)
    else:
        f_lo = float(frozen.cdf(lower))
        f_hi = float(frozen.cdf(upper))
        x = frozen.ppf(f_lo + (f_hi - f_lo) * u)
    return np.clip(x, lower, upper)


def sample_truncated(
    frozen: Any,
    lower: float,
    upper: float,
    count: int,
    rng: np.random.Generator,
    max_attempts: int = 10,
) -> NDArray[np.floating[Any]]:
    """
    Draw `count` values from the truncated distribution.

    Each rejection round draws about twice the expected number of proposals
    needed to cover the remaining deficit and keeps those inside
    [lower, upper]. Exactly `count` of the accepted draws are then chosen
    uniformly without replacement. Intervals holding less than
    MIN_REJECTION_MASS of the probability are sampled by inverting the CDF
    instead.

    Raises:
        ConvergenceError: If max_attempts rounds do not yield count draws
    """
    if count == 0:
        return np.empty(0)

    f_lo, f_hi = interval_mass(frozen, lower, upper)
    mass = f_hi - f_lo
    if mass < MIN_REJECTION_MASS:
        return _inverse_transform(frozen, lower, upper, count, rng)

    accepted = []
    n_accepted = 0

    for _ in range(max_attempts):
        deficit = count - n_accepted
        batch = min(max(int(2 * deficit / mass), deficit), MAX_BATCH)
        draws = np.atleast_1d(frozen.rvs(size=batch, random_state=rng))
        keep = draws[(draws >= lower) & (draws <= upper)]
        accepted.append(keep)
        n_accepted += len(keep)
        if n_accepted >= count:
            break
    else:
        raise ConvergenceError(
            f"random: rejection sampling produced {n_accepted} of {count} draws "
            f"inside [{lower}, {upper}] after {max_attempts} rounds",
            iterations=max_attempts,
            reason='max_iterations',
        )

    pool = np.concatenate(accepted)
    return rng.choice(pool, size=count, replace=False)
