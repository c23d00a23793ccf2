"""
Distribution fitting dispatch.

Public API:
    fit(x, family, ..., freq=None) -> FitSolution
    fitdist(x, family, ..., freq=None) -> ProbabilityDistribution
    makedist(family, **params) -> ProbabilityDistribution
    betafit(x, alpha) -> (paramhat, paramci)
    gevfit(x, alpha, freq=None) -> (paramhat, paramci)
"""

import warnings
from typing import Any

import numpy as np
from numpy.typing import NDArray

from pyfitstats.core.compute.optimization import OptimizerOptions
from pyfitstats.core.validation import check_alpha
from pyfitstats.distributions._family import DistributionFamily, list_families
from pyfitstats.distributions.backends.cpu import CPUSimplexBackend
from pyfitstats.distributions.design import SampleDesign
from pyfitstats.distributions.distribution import ProbabilityDistribution
from pyfitstats.distributions.solution import FitSolution


def fit(
    x: Any,
    family: str | DistributionFamily,
    *,
    alpha: float = 0.05,
    options: OptimizerOptions | None = None,
    verbose: bool = False,
    freq: Any = None,
) -> FitSolution:
    """
    Maximum-likelihood fit of a distribution family to a sample.

    Args:
        x: Sample (vector of real values). NaN entries are ignored.
        family: Family name ('Beta', 'GeneralizedExtremeValue', 'Weibull',
            'tLocationScale', 'Normal' or an alias) or instance
        alpha: Significance level for the (1 - alpha) confidence intervals
        options: Simplex stopping criteria; family or package defaults if None
        verbose: Print progress messages
        freq: Frequency of each observation in x (non-negative, same length
            as x). Rows with zero or NaN frequency are ignored. None counts
            every observation once.

    Returns:
        FitSolution

    Raises:
        ArgumentTypeError: If x or freq is not a real vector
        DimensionMismatchError: If freq and x differ in length
        ValidationError: If freq has negative or infinite entries
        DomainError: If x has infinite values or values outside the support
        DegenerateSampleError: If all observations are equal
        InvalidSignificanceLevel: If alpha is not in (0, 1)
        UnknownFamilyError: If the family is not registered

    Examples:
        >>> sol = fit(np.arange(0.01, 1.0, 0.02), 'Beta')
        >>> sol.params
        array([1.0199, 1.0199])
        >>> print(sol.summary())
    """
    alpha = check_alpha(alpha)
    design = SampleDesign.for_family(x, family, freq)

    if verbose:
        print(f"Fitting {design.family.name} to {design.n_obs} observations"
              + (f" ({design.n_removed} rows removed)" if design.n_removed else ""))

    backend = CPUSimplexBackend()
    if verbose:
        print(f"Using backend: {backend.name}")

    result = backend.solve(design, alpha=alpha, options=options)

    if verbose:
        print(f"Converged: {result.info['converged']} "
              f"({result.info['iterations']} iterations, "
              f"likelihood {result.info['likelihood_mode']})")

    if not result.converged:
        warnings.warn(
            f"{design.family.name} fit did not converge after "
            f"{result.info['iterations']} iterations. "
            f"Message: {result.info['message']}",
            RuntimeWarning,
            stacklevel=2,
        )

    return FitSolution(_result=result, _design=design)


def fitdist(
    x: Any,
    family: str | DistributionFamily,
    *,
    alpha: float = 0.05,
    options: OptimizerOptions | None = None,
    verbose: bool = False,
    freq: Any = None,
) -> ProbabilityDistribution:
    """
    Fit a family to x and return the fitted distribution object.

    Same arguments and errors as fit().
    """
    solution = fit(x, family, alpha=alpha, options=options, verbose=verbose, freq=freq)
    return solution.to_distribution()


def makedist(
    family: str | DistributionFamily | None = None,
    **params: float,
) -> ProbabilityDistribution | tuple[str, ...]:
    """
    Create a distribution object with given parameter values.

    With no family, returns the names of all registered families.
    Unspecified parameters take the family defaults.

    Examples:
        >>> makedist()
        ('Beta', 'GeneralizedExtremeValue', 'Normal', 'tLocationScale', 'Weibull')
        >>> pd = makedist('GeneralizedExtremeValue', k=0.2, sigma=2)
        >>> makedist('Weibull', a=2, b=3)['lambda']
        2.0

    Raises:
        UnknownFamilyError: If family is not registered
        InvalidParameterError: If a parameter name or value is invalid
    """
    if family is None:
        if params:
            raise TypeError("makedist: parameters given without a distribution family")
        return list_families()
    return ProbabilityDistribution.create(family, **params)


def betafit(
    x: Any,
    alpha: float = 0.05,
) -> tuple[NDArray[np.floating[Any]], NDArray[np.floating[Any]]]:
    """
    Beta maximum-likelihood estimates and confidence intervals.

    Samples containing exact zeros or ones are fitted with the
    boundary-corrected likelihood.

    Returns:
        (paramhat, paramci): estimates [a, b] and a (2 x 2) interval array
    """
    solution = fit(x, 'Beta', alpha=alpha)
    return solution.params, solution.ci


def gevfit(
    x: Any,
    alpha: float = 0.05,
    *,
    freq: Any = None,
) -> tuple[NDArray[np.floating[Any]], NDArray[np.floating[Any]]]:
    """
    Generalized extreme value estimates [k, sigma, mu] and confidence
    intervals (2 x 3). freq gives optional observation frequencies.
    """
    solution = fit(x, 'GeneralizedExtremeValue', alpha=alpha, freq=freq)
    return solution.params, solution.ci
