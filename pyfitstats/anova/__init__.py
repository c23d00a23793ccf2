"""
N-way Analysis of Variance.

Public API:
    anovan(y, group, ...) -> AnovaSolution    # sequential (Type I) SS
"""

from pyfitstats.anova.solvers import anovan
from pyfitstats.anova.solution import AnovaSolution
from pyfitstats.anova._common import AnovaParams, AnovaTableRow

__all__ = [
    "anovan",
    "AnovaSolution",
    "AnovaParams",
    "AnovaTableRow",
]
