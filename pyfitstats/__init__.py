"""
pyfitstats: maximum-likelihood distribution fitting and N-way ANOVA.

Probability distribution objects for parametric families (Beta,
generalized extreme value, Weibull, t location-scale, normal) with
maximum-likelihood estimation, confidence intervals and truncation, plus
an N-way sequential sums-of-squares ANOVA engine.

Submodules:
    distributions: Family registry, fitting and distribution objects
    anova: N-way ANOVA (anovan)
    core: Result envelope, exceptions, validation and numeric kernels
"""

__version__ = "0.1.0"

from pyfitstats import distributions
from pyfitstats import anova
from pyfitstats.distributions import betafit, fit, fitdist, gevfit, makedist
from pyfitstats.anova import anovan

__all__ = [
    "__version__",
    "distributions",
    "anova",
    "fit",
    "fitdist",
    "makedist",
    "betafit",
    "gevfit",
    "anovan",
]
