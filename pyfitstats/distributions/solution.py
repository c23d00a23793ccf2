"""
User-facing result of a maximum-likelihood distribution fit.
"""

from dataclasses import dataclass
from typing import Any, TYPE_CHECKING

import numpy as np
from numpy.typing import NDArray

from pyfitstats.core.result import Result
from pyfitstats.distributions._common import FitParams
from pyfitstats.distributions.design import SampleDesign

if TYPE_CHECKING:
    from pyfitstats.distributions.distribution import ProbabilityDistribution


@dataclass
class FitSolution:
    """
    User-facing maximum-likelihood fit results.

    Wraps the backend Result and the validated sample, and provides
    convenient accessors for estimates, intervals and diagnostics.
    """
    _result: Result[FitParams]
    _design: SampleDesign

    @property
    def family(self) -> str:
        return self._result.params.family

    @property
    def parameter_names(self) -> tuple[str, ...]:
        return self._result.params.parameter_names

    @property
    def params(self) -> NDArray[np.floating[Any]]:
        """Maximum-likelihood estimates, ordered as parameter_names."""
        return self._result.params.estimates

    @property
    def ci(self) -> NDArray[np.floating[Any]]:
        """Confidence intervals (2 x p): row 0 lower, row 1 upper."""
        return self._result.params.ci

    @property
    def covariance(self) -> NDArray[np.floating[Any]]:
        """Asymptotic covariance of the estimates."""
        return self._result.params.covariance

    @property
    def standard_errors(self) -> NDArray[np.floating[Any]]:
        with np.errstate(invalid='ignore'):
            return np.sqrt(np.diag(self.covariance))

    @property
    def alpha(self) -> float:
        return self._result.params.alpha

    @property
    def nll(self) -> float:
        """Negative log-likelihood at the estimates."""
        return self._result.params.nll

    @property
    def loglik(self) -> float:
        return -self.nll

    @property
    def aic(self) -> float:
        """Akaike Information Criterion."""
        return 2.0 * self.nll + 2.0 * len(self.params)

    @property
    def bic(self) -> float:
        """Bayesian Information Criterion."""
        return 2.0 * self.nll + len(self.params) * np.log(self.n_obs)

    @property
    def n_obs(self) -> int:
        return self._result.params.n_obs

    @property
    def likelihood_mode(self) -> str:
        """'continuous', or 'boundary_corrected' when censored terms were used."""
        return self._result.params.likelihood_mode

    @property
    def n_censored(self) -> tuple[int, int]:
        return self._result.params.n_censored

    @property
    def converged(self) -> bool:
        return self._result.converged

    @property
    def n_iter(self) -> int:
        return self._result.info.get('iterations', 0)

    @property
    def input_data(self) -> NDArray[np.floating[Any]]:
        """The sample the model was fitted to (NaN and zero-frequency rows removed)."""
        return self._design.data

    @property
    def frequencies(self) -> NDArray[np.floating[Any]]:
        """Frequency of each row of input_data."""
        return self._design.freq

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

    def parameter(self, name: str) -> float:
        """Estimate of one parameter, by name or alias."""
        canonical = self._design.family.canonical_parameter(name)
        return float(self.params[self.parameter_names.index(canonical)])

    def to_distribution(self) -> 'ProbabilityDistribution':
        """Fitted distribution object carrying these estimates and the sample."""
        from pyfitstats.distributions.distribution import ProbabilityDistribution
        return ProbabilityDistribution.from_fit(self._design.family, self._result.params,
                                                self._design.data, self._design.freq)

    def summary(self) -> str:
        """Generate summary output."""
        level = 100.0 * (1.0 - self.alpha)
        lines = [
            f"{self.family} Maximum-Likelihood Fit",
            "=" * 64,
            f"Observations: {self.n_obs}",
            f"Likelihood: {self.likelihood_mode}",
        ]
        if self.likelihood_mode == 'boundary_corrected':
            lines.append(f"Censored (lower, upper): {self.n_censored}")
        lines.extend([
            f"Converged: {self.converged}",
            f"Iterations: {self.n_iter}",
            f"Log-likelihood: {self.loglik:.6f}",
            f"AIC: {self.aic:.4f}",
            "",
            f"{'Parameter':<12} {'Estimate':>12} {'Std.Err':>12} "
            f"{f'{level:g}% Lower':>12} {f'{level:g}% Upper':>12}",
            "-" * 64,
        ])

        for j, name in enumerate(self.parameter_names):
            lines.append(
                f"{name:<12} {self.params[j]:>12.6f} {self.standard_errors[j]:>12.6f} "
                f"{self.ci[0, j]:>12.6f} {self.ci[1, j]:>12.6f}"
            )

        lines.append("-" * 64)
        lines.append(f"Backend: {self.backend_name}")
        if self.timing:
            lines.append(f"Time: {self.timing.get('total_seconds', 0):.4f}s")
        if self.warnings:
            lines.append(f"Warnings: {len(self.warnings)}")
            for w in self.warnings:
                lines.append(f"  {w}")

        return "\n".join(lines)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            'family': self.family,
            'parameter_names': list(self.parameter_names),
            'params': self.params.tolist(),
            'ci': self.ci.tolist(),
            'covariance': self.covariance.tolist(),
            'alpha': self.alpha,
            'nll': self.nll,
            'n_obs': self.n_obs,
            'likelihood_mode': self.likelihood_mode,
            'converged': self.converged,
            'backend': self.backend_name,
        }

    def __repr__(self) -> str:
        values = ", ".join(f"{n}={v:.4g}" for n, v in zip(self.parameter_names, self.params))
        return f"FitSolution({self.family}: {values}, n={self.n_obs}, converged={self.converged})"
