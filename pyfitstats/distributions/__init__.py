"""
Parametric distributions and maximum-likelihood fitting.

Public API:
    fit(x, family, ...) -> FitSolution
    fitdist(x, family, ...) -> ProbabilityDistribution
    makedist(family, **params) -> ProbabilityDistribution
    betafit(x, alpha) -> (paramhat, paramci)
    gevfit(x, alpha) -> (paramhat, paramci)
    register_family / resolve_family / list_families   # family registry
"""

from pyfitstats.distributions import families
from pyfitstats.distributions._family import (
    DistributionFamily,
    list_families,
    register_family,
    resolve_family,
)
from pyfitstats.distributions._common import FitParams
from pyfitstats.distributions.design import SampleDesign
from pyfitstats.distributions.distribution import ProbabilityDistribution
from pyfitstats.distributions.solution import FitSolution
from pyfitstats.distributions.solvers import (
    betafit,
    fit,
    fitdist,
    gevfit,
    makedist,
)

__all__ = [
    "fit",
    "fitdist",
    "makedist",
    "betafit",
    "gevfit",
    "DistributionFamily",
    "register_family",
    "resolve_family",
    "list_families",
    "FitParams",
    "FitSolution",
    "ProbabilityDistribution",
    "SampleDesign",
    "families",
]
