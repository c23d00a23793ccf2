"""
Probability distribution objects.

A ProbabilityDistribution pairs a registered family with concrete
parameter values, an optional truncation interval and, when produced by
fitting, the fit payload and the sample. Instances are immutable:
truncate() and with_parameters() return new, unfitted objects.

Construction:
    makedist('GeneralizedExtremeValue', k=0.1, sigma=2, mu=5)
    fitdist(x, 'Beta')
    ProbabilityDistribution.create('Weibull', a=2, b=3)
"""

from dataclasses import dataclass, replace
from typing import Any, Sequence

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pyfitstats.core.exceptions import InvalidParameterError
from pyfitstats.core.validation import check_alpha
from pyfitstats.distributions import _truncation
from pyfitstats.distributions._ci import wald_intervals
from pyfitstats.distributions._common import FitParams
from pyfitstats.distributions._family import DistributionFamily, resolve_family


def _as_float_array(values: ArrayLike) -> tuple[NDArray[np.floating[Any]], bool]:
    arr = np.asarray(values, dtype=np.float64)
    return arr, arr.ndim == 0


def _unwrap(arr: NDArray[np.floating[Any]], scalar: bool) -> Any:
    return float(arr) if scalar else arr


@dataclass(frozen=True, eq=False)
class ProbabilityDistribution:
    """
    A parametric distribution with fixed parameter values.

    Attributes:
        family: The distribution family
        parameters: Parameter values, ordered as family.parameter_names
        truncation: (lower, upper) interval, or None
        fit: Maximum-likelihood fit payload, or None if not fitted
        input_data: Sample the distribution was fitted to, or None
        input_freq: Frequency of each input_data row, or None
    """
    family: DistributionFamily
    parameters: tuple[float, ...]
    truncation: tuple[float, float] | None = None
    fit: FitParams | None = None
    input_data: NDArray[np.floating[Any]] | None = None
    input_freq: NDArray[np.floating[Any]] | None = None

    def __post_init__(self):
        values = self.family.validate_parameters(self.parameters)
        object.__setattr__(self, 'parameters', tuple(float(v) for v in values))
        if self.truncation is not None:
            lower, upper = _truncation.validate_interval(*self.truncation)
            _truncation.interval_mass(self._frozen, lower, upper)
            object.__setattr__(self, 'truncation', (lower, upper))

    # -----------------------------------------------------------------
    # Construction
    # -----------------------------------------------------------------

    @classmethod
    def create(cls, family: str | DistributionFamily, **params: float) -> 'ProbabilityDistribution':
        """
        Distribution with the family's defaults, overridden by `params`.

        Parameter names may be canonical names or aliases.

        Raises:
            UnknownFamilyError: If family is not registered
            InvalidParameterError: If a name is unknown, given twice, or a
                value is invalid
        """
        fam = resolve_family(family)
        values = dict(zip(fam.parameter_names, fam.default_parameters))
        seen: set[str] = set()
        for name, value in params.items():
            canonical = fam.canonical_parameter(name)
            if canonical in seen:
                raise InvalidParameterError(
                    f"{fam.name}: parameter {canonical!r} given more than once",
                    parameter=canonical,
                )
            seen.add(canonical)
            values[canonical] = value
        return cls(family=fam, parameters=tuple(values[n] for n in fam.parameter_names))

    @classmethod
    def from_fit(
        cls,
        family: DistributionFamily,
        fit: FitParams,
        data: NDArray[np.floating[Any]],
        freq: NDArray[np.floating[Any]] | None = None,
    ) -> 'ProbabilityDistribution':
        return cls(
            family=family,
            parameters=tuple(fit.estimates),
            fit=fit,
            input_data=data,
            input_freq=freq,
        )

    def truncate(self, lower: float, upper: float) -> 'ProbabilityDistribution':
        """
        Same parameters restricted to [lower, upper].

        The result is unfitted.

        Raises:
            ValidationError: If lower >= upper or the interval has zero probability
        """
        return ProbabilityDistribution(
            family=self.family,
            parameters=self.parameters,
            truncation=(lower, upper),
        )

    def with_parameters(self, **values: float) -> 'ProbabilityDistribution':
        """
        Copy with some parameters changed; the result is unfitted and keeps
        the truncation interval.
        """
        current = dict(zip(self.family.parameter_names, self.parameters))
        for name, value in values.items():
            current[self.family.canonical_parameter(name)] = value
        return replace(
            self,
            parameters=tuple(current[n] for n in self.family.parameter_names),
            fit=None,
            input_data=None,
            input_freq=None,
        )

    # -----------------------------------------------------------------
    # Properties
    # -----------------------------------------------------------------

    @property
    def name(self) -> str:
        return self.family.name

    @property
    def parameter_names(self) -> tuple[str, ...]:
        return self.family.parameter_names

    @property
    def parameter_descriptions(self) -> tuple[str, ...]:
        return self.family.parameter_descriptions

    @property
    def num_parameters(self) -> int:
        return len(self.parameters)

    @property
    def parameter_values(self) -> NDArray[np.floating[Any]]:
        return np.array(self.parameters)

    @property
    def parameter_covariance(self) -> NDArray[np.floating[Any]]:
        """Covariance of the estimates; zeros when not fitted."""
        if self.fit is None:
            return np.zeros((self.num_parameters, self.num_parameters))
        return self.fit.covariance

    @property
    def parameter_is_fixed(self) -> tuple[bool, ...]:
        """True for parameters that were set rather than estimated."""
        return (self.fit is None,) * self.num_parameters

    @property
    def is_fitted(self) -> bool:
        return self.fit is not None

    @property
    def is_truncated(self) -> bool:
        return self.truncation is not None

    def __getitem__(self, name: str) -> float:
        """Parameter value by name or alias."""
        canonical = self.family.canonical_parameter(name)
        return self.parameters[self.family.parameter_names.index(canonical)]

    @property
    def _frozen(self) -> Any:
        return self.family.frozen(np.array(self.parameters))

    # -----------------------------------------------------------------
    # Distribution functions
    # -----------------------------------------------------------------

    def cdf(self, x: ArrayLike, upper: bool = False) -> Any:
        """
        Cumulative distribution function.

        Args:
            x: Evaluation points
            upper: If True, return the upper tail 1 - F(x)
        """
        if not isinstance(upper, (bool, np.bool_)):
            raise TypeError(f"cdf: upper must be a bool, got {upper!r}")
        arr, scalar = _as_float_array(x)
        if self.truncation is None:
            p = self._frozen.cdf(arr)
        else:
            p = _truncation.truncated_cdf(self._frozen, arr, *self.truncation)
        if upper:
            p = 1.0 - p
        return _unwrap(np.asarray(p, dtype=np.float64), scalar)

    def pdf(self, x: ArrayLike) -> Any:
        """Probability density function."""
        arr, scalar = _as_float_array(x)
        if self.truncation is None:
            y = self._frozen.pdf(arr)
        else:
            y = _truncation.truncated_pdf(self._frozen, arr, *self.truncation)
        return _unwrap(np.asarray(y, dtype=np.float64), scalar)

    def icdf(self, p: ArrayLike) -> Any:
        """Inverse CDF (quantile function); p outside [0, 1] gives NaN."""
        arr, scalar = _as_float_array(p)
        if self.truncation is None:
            x = self._frozen.ppf(arr)
        else:
            x = _truncation.truncated_icdf(self._frozen, arr, *self.truncation)
        return _unwrap(np.asarray(x, dtype=np.float64), scalar)

    def mean(self) -> float:
        if self.truncation is None:
            return float(self._frozen.mean())
        return _truncation.truncated_moments(self._frozen, *self.truncation)[0]

    def var(self) -> float:
        if self.truncation is None:
            return float(self._frozen.var())
        return _truncation.truncated_moments(self._frozen, *self.truncation)[1]

    def std(self) -> float:
        return float(np.sqrt(self.var()))

    def median(self) -> float:
        if self.truncation is None:
            return float(self._frozen.median())
        lower, upper = self.truncation
        f_lo, f_hi = _truncation.interval_mass(self._frozen, lower, upper)
        return float(np.clip(self._frozen.ppf(0.5 * (f_lo + f_hi)), lower, upper))

    def iqr(self) -> float:
        """Interquartile range."""
        q = self.icdf(np.array([0.25, 0.75]))
        return float(q[1] - q[0])

    def random(
        self,
        size: int | tuple[int, ...] | None = None,
        *,
        rng: np.random.Generator | int | None = None,
    ) -> Any:
        """
        Random draws.

        Args:
            size: Output shape; None returns a single float
            rng: Generator or seed for np.random.default_rng

        Raises:
            ConvergenceError: If a truncated distribution cannot be sampled
                within the rejection budget
        """
        gen = np.random.default_rng(rng)
        shape = () if size is None else (size,) if np.isscalar(size) else tuple(size)
        count = int(np.prod(shape)) if shape else 1

        if self.truncation is None:
            draws = np.atleast_1d(self._frozen.rvs(size=count, random_state=gen))
        else:
            draws = _truncation.sample_truncated(self._frozen, *self.truncation, count, gen)

        if size is None:
            return float(draws[0])
        return draws.reshape(shape)

    # -----------------------------------------------------------------
    # Fit diagnostics
    # -----------------------------------------------------------------

    def negloglik(self) -> float | None:
        """
        Negative log-likelihood of the fitted sample, weighted by its
        frequencies; None if not fitted.
        """
        if self.fit is None or self.input_data is None:
            return None
        context = self.family.make_context(self.input_data, self.input_freq)
        return float(self.family.negloglik(self.parameter_values, context))

    def paramci(
        self,
        alpha: float | None = None,
        parameter: str | Sequence[str] | None = None,
    ) -> NDArray[np.floating[Any]]:
        """
        Confidence intervals for the parameters.

        Args:
            alpha: Significance level; defaults to the level used when fitting
            parameter: Name (or alias), or list of names, to restrict to

        Returns:
            Array (2 x m); row 0 lower, row 1 upper. An unfitted distribution
            returns its parameter values in both rows.
        """
        if alpha is not None:
            alpha = check_alpha(alpha)

        if self.fit is None:
            ci = np.vstack([self.parameter_values, self.parameter_values])
        elif alpha is None or alpha == self.fit.alpha:
            ci = self.fit.ci
        else:
            ci = wald_intervals(self.fit.estimates, self.fit.covariance, alpha,
                                self.family.log_ci)

        if parameter is None:
            return ci
        names = [parameter] if isinstance(parameter, str) else list(parameter)
        idx = [self.family.parameter_names.index(self.family.canonical_parameter(n))
               for n in names]
        return ci[:, idx]

    def summary(self) -> str:
        """Generate summary output."""
        lines = [f"{self.name} distribution"]
        fitted = self.fit is not None
        for j, (name, value) in enumerate(zip(self.parameter_names, self.parameters)):
            line = f"  {name:<8} = {value:.6g}"
            if fitted:
                lo, hi = self.fit.ci[:, j]
                line += f"   [{lo:.6g}, {hi:.6g}]"
            lines.append(line)
        if self.truncation is not None:
            lines.append(f"  Truncated to the interval [{self.truncation[0]:g}, {self.truncation[1]:g}]")
        if fitted:
            lines.append(f"  Fitted to {self.fit.n_obs} observations, "
                         f"{100 * (1 - self.fit.alpha):g}% confidence intervals")
        return "\n".join(lines)

    def __repr__(self) -> str:
        values = ", ".join(f"{n}={v:.4g}" for n, v in zip(self.parameter_names, self.parameters))
        extra = ""
        if self.truncation is not None:
            extra += f", truncation=[{self.truncation[0]:g}, {self.truncation[1]:g}]"
        if self.fit is not None:
            extra += ", fitted"
        return f"ProbabilityDistribution({self.name}: {values}{extra})"
