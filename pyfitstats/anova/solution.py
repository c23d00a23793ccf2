"""
User-facing ANOVA solution type.

Wraps a Result[AnovaParams] and provides convenient accessors, the
model statistics and a formatted ANOVA table.
"""

from dataclasses import dataclass
from typing import Any

import numpy as np
from numpy.typing import NDArray

from pyfitstats.core.result import Result
from pyfitstats.anova._common import AnovaParams, AnovaTableRow


def _significance_stars(p: float | None) -> str:
    """Return significance stars for a p-value."""
    if p is None or np.isnan(p):
        return ""
    if p < 0.001:
        return "***"
    if p < 0.01:
        return "**"
    if p < 0.05:
        return "*"
    if p < 0.1:
        return "."
    return ""


@dataclass
class AnovaSolution:
    """
    User-facing result for N-way ANOVA.

    Produced by anovan().
    """
    _result: Result[AnovaParams]

    @property
    def table(self) -> tuple[AnovaTableRow, ...]:
        """ANOVA table: one row per term, then Error and Total."""
        return self._result.params.table

    @property
    def p_values(self) -> NDArray[np.floating[Any]]:
        return self._result.params.p_values

    @property
    def f_values(self) -> NDArray[np.floating[Any]]:
        return self._result.params.f_values

    @property
    def sum_sq(self) -> NDArray[np.floating[Any]]:
        return self._result.params.sum_sq

    @property
    def df(self) -> NDArray[np.int_]:
        return self._result.params.df

    @property
    def mean_sq(self) -> NDArray[np.floating[Any]]:
        return self._result.params.mean_sq

    @property
    def terms(self) -> NDArray[np.bool_]:
        """Terms matrix (T x N): which factors each term involves."""
        return self._result.params.terms

    @property
    def term_names(self) -> tuple[str, ...]:
        return self._result.params.term_names

    @property
    def sstype(self) -> int:
        return self._result.params.sstype

    @property
    def n_obs(self) -> int:
        return self._result.params.n_obs

    @property
    def sse(self) -> float:
        return self._result.params.sse

    @property
    def dfe(self) -> int:
        return self._result.params.dfe

    @property
    def mse(self) -> float:
        return self._result.params.mse

    @property
    def sst(self) -> float:
        return self._result.params.sst

    @property
    def dft(self) -> int:
        return self._result.params.dft

    @property
    def coefficients(self) -> NDArray[np.floating[Any]]:
        """Full-model coefficients (deviation coding), intercept first."""
        return self._result.params.coefficients

    @property
    def residuals(self) -> NDArray[np.floating[Any]]:
        return self._result.params.residuals

    @property
    def n_levels(self) -> tuple[int, ...]:
        return self._result.params.n_levels

    @property
    def level_names(self) -> tuple[tuple[str, ...], ...]:
        """Sorted level labels of each factor."""
        return self._result.params.level_names

    @property
    def varnames(self) -> tuple[str, ...]:
        return self._result.params.varnames

    @property
    def column_counts(self) -> tuple[int, ...]:
        """
        Cell count of each term, intercept first: the number of levels for a
        main effect, the product of the level counts for an interaction.
        """
        return self._result.params.column_counts

    @property
    def alpha(self) -> float:
        return self._result.params.alpha

    @property
    def significant_terms(self) -> tuple[str, ...]:
        """Names of the terms with p < alpha."""
        return tuple(
            name for name, p in zip(self.term_names, self.p_values)
            if np.isfinite(p) and p < self.alpha
        )

    @property
    def info(self) -> dict[str, Any]:
        return self._result.info

    @property
    def timing(self) -> dict[str, float] | None:
        return self._result.timing

    @property
    def backend_name(self) -> str:
        return self._result.backend_name

    @property
    def warnings(self) -> tuple[str, ...]:
        return self._result.warnings

    def summary(self) -> str:
        """Generate the N-way ANOVA table."""
        n_ways = int(np.sum(self.terms.sum(axis=1) == 1))
        lines = [
            f"{n_ways}-way ANOVA Table (Type {self.sstype} SS)",
            "=" * 78,
            f"Observations: {self.n_obs}",
            "",
            f"{'Source':<20} {'Sum Sq.':>14} {'d.f.':>6} {'Mean Sq.':>14} {'F':>10} {'Prob>F':>12}",
            "-" * 78,
        ]

        for row in self.table:
            if row.f_value is not None:
                sig = _significance_stars(row.p_value)
                lines.append(
                    f"{row.term[:20]:<20} {row.sum_sq:>14.4f} {row.df:>6} "
                    f"{row.mean_sq:>14.4f} {row.f_value:>10.4f} "
                    f"{row.p_value:>12.4e} {sig}"
                )
            elif row.mean_sq is not None:
                lines.append(
                    f"{row.term[:20]:<20} {row.sum_sq:>14.4f} {row.df:>6} "
                    f"{row.mean_sq:>14.4f}"
                )
            else:
                lines.append(f"{row.term[:20]:<20} {row.sum_sq:>14.4f} {row.df:>6}")

        lines.append("-" * 78)
        lines.append("Signif. codes:  0 '***' 0.001 '**' 0.01 '*' 0.05 '.' 0.1 ' ' 1")
        if self.warnings:
            lines.append("")
            for w in self.warnings:
                lines.append(f"Warning: {w}")

        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"AnovaSolution(type={self.sstype}, n={self.n_obs}, "
            f"terms={list(self.term_names)})"
        )
