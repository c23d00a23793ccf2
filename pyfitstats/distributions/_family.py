"""
Distribution family specifications and registry.

Each DistributionFamily defines:
- Parameter names, defaults, bounds and accepted aliases
- Which parameters are strictly positive (searched and interval-estimated
  on the log scale)
- The data support used to validate samples before fitting
- A negative log-likelihood evaluated against an explicit context
- A closed-form initial guess for the simplex search
- The asymptotic covariance of the estimates
- A frozen scipy.stats distribution for cdf/pdf/quantiles/moments

Families register themselves by name at import time; lookup is
case-insensitive and ignores spaces, hyphens and underscores.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pyfitstats.core.compute.optimization import OptimizerOptions, numerical_hessian
from pyfitstats.core.exceptions import (
    InvalidParameterError,
    SingularMatrixError,
    UnknownFamilyError,
)
from pyfitstats.distributions._objective import LikelihoodContext
from pyfitstats.distributions._weights import total_weight

_HESSIAN_STEP = np.finfo(np.float64).eps ** 0.25


def frequencies(
    x: NDArray[np.floating[Any]],
    w: NDArray[np.floating[Any]] | None,
) -> NDArray[np.floating[Any]]:
    """Observation frequencies, defaulting to one per observation."""
    if w is None:
        return np.ones(len(x))
    return np.asarray(w, dtype=np.float64)


class DistributionFamily(ABC):
    """
    Parametric family specification.

    Subclasses are stateless; a single registered instance serves every
    caller.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Canonical family name, e.g. 'Beta'."""
        ...

    @property
    @abstractmethod
    def parameter_names(self) -> tuple[str, ...]:
        ...

    @property
    @abstractmethod
    def parameter_descriptions(self) -> tuple[str, ...]:
        ...

    @property
    @abstractmethod
    def default_parameters(self) -> tuple[float, ...]:
        ...

    @property
    @abstractmethod
    def log_ci(self) -> tuple[bool, ...]:
        """Per parameter: True if strictly positive (log-scale search and CI)."""
        ...

    @property
    def parameter_aliases(self) -> dict[str, str]:
        """Alternative parameter names mapped to canonical names."""
        return {}

    @property
    def parameter_bounds(self) -> tuple[tuple[float, float], ...]:
        """Open (lower, upper) bounds for each parameter."""
        return tuple((0.0, np.inf) if positive else (-np.inf, np.inf)
                     for positive in self.log_ci)

    @property
    def sample_support(self) -> tuple[float, float]:
        """Interval that fitted observations must lie in."""
        return (-np.inf, np.inf)

    @property
    def support_closed(self) -> tuple[bool, bool]:
        """Whether each end of sample_support is attainable."""
        return (False, False)

    # -----------------------------------------------------------------
    # Parameters
    # -----------------------------------------------------------------

    def canonical_parameter(self, name: str) -> str:
        """
        Resolve a parameter name or alias.

        Raises:
            InvalidParameterError: If name is not a parameter of this family
        """
        if name in self.parameter_names:
            return name
        aliases = self.parameter_aliases
        if name in aliases:
            return aliases[name]
        valid = ', '.join(self.parameter_names)
        raise InvalidParameterError(
            f"{self.name}: unknown parameter {name!r}. Valid parameters: {valid}",
            parameter=name,
        )

    def validate_parameters(self, values: ArrayLike) -> NDArray[np.floating[Any]]:
        """
        Check a parameter vector against the family's bounds.

        Returns:
            Parameters as a float64 array

        Raises:
            InvalidParameterError: If a value is non-finite, non-real or
                outside its bounds
        """
        arr = np.asarray(values)
        if arr.shape != (len(self.parameter_names),):
            raise InvalidParameterError(
                f"{self.name}: expected {len(self.parameter_names)} parameters, "
                f"got shape {arr.shape}"
            )
        if not (np.issubdtype(arr.dtype, np.number) and not np.iscomplexobj(arr)):
            raise InvalidParameterError(
                f"{self.name}: parameters must be real numbers, got {values!r}"
            )
        arr = arr.astype(np.float64)
        for name, value, (lo, hi) in zip(self.parameter_names, arr, self.parameter_bounds):
            if not np.isfinite(value) or not (lo < value < hi):
                if lo == 0.0:
                    requirement = "a positive finite real scalar"
                else:
                    requirement = "a finite real scalar"
                raise InvalidParameterError(
                    f"{self.name}: {name} must be {requirement}, got {value}",
                    parameter=name,
                    value=float(value),
                )
        return arr

    def to_search(self, params: ArrayLike) -> NDArray[np.floating[Any]]:
        """Map natural parameters to the unconstrained search space."""
        params = np.asarray(params, dtype=np.float64)
        with np.errstate(divide='ignore', invalid='ignore'):
            return np.where(self.log_ci, np.log(params), params)

    def from_search(self, theta: ArrayLike) -> NDArray[np.floating[Any]]:
        """Map a search-space vector back to natural parameters."""
        theta = np.asarray(theta, dtype=np.float64)
        with np.errstate(over='ignore'):
            return np.where(self.log_ci, np.exp(theta), theta)

    # -----------------------------------------------------------------
    # Sample handling
    # -----------------------------------------------------------------

    def in_support(self, x: NDArray[np.floating[Any]]) -> NDArray[np.bool_]:
        """Elementwise membership in sample_support."""
        lo, hi = self.sample_support
        lo_closed, hi_closed = self.support_closed
        above = x >= lo if lo_closed else x > lo
        below = x <= hi if hi_closed else x < hi
        return above & below

    def make_context(
        self,
        x: NDArray[np.floating[Any]],
        w: NDArray[np.floating[Any]] | None = None,
    ) -> Any:
        """
        Build the immutable likelihood context for a validated sample.

        w holds the frequency of each observation; None means one each.
        """
        w = frequencies(x, w)
        return LikelihoodContext(x=x, w=w, n=total_weight(w))

    def typical_magnitudes(
        self,
        x: NDArray[np.floating[Any]],
        w: NDArray[np.floating[Any]] | None = None,
    ) -> NDArray[np.floating[Any]]:
        """
        Natural size of each real-line parameter, used to scale
        finite-difference steps. Location parameters scale with the data.
        """
        return np.ones(len(self.parameter_names))

    def default_options(self) -> OptimizerOptions | None:
        """Family-specific optimizer settings; None uses package defaults."""
        return None

    # -----------------------------------------------------------------
    # Likelihood
    # -----------------------------------------------------------------

    @abstractmethod
    def negloglik(self, params: NDArray[np.floating[Any]], context: Any) -> float:
        """Negative log-likelihood at natural parameters params."""
        ...

    @abstractmethod
    def initial_guess(
        self,
        x: NDArray[np.floating[Any]],
        w: NDArray[np.floating[Any]] | None = None,
    ) -> NDArray[np.floating[Any]]:
        """Closed-form starting values in natural space; w as in make_context()."""
        ...

    def covariance(
        self,
        params: NDArray[np.floating[Any]],
        x: NDArray[np.floating[Any]],
        context: Any,
        w: NDArray[np.floating[Any]] | None = None,
    ) -> NDArray[np.floating[Any]]:
        """
        Asymptotic covariance from the observed information.

        The Hessian of the negative log-likelihood is taken in search
        coordinates and mapped back with the Jacobian of the log transform.
        At a stationary point this equals the inverse Hessian in natural
        coordinates.

        Raises:
            SingularMatrixError: If the observed information is singular
        """
        theta = self.to_search(params)
        mags = np.where(self.log_ci, 1.0, self.typical_magnitudes(x, w))
        step = _HESSIAN_STEP * np.maximum(np.abs(theta), mags)

        def objective(t):
            return self.negloglik(self.from_search(t), context)

        H = numerical_hessian(objective, theta, step=step)
        try:
            cov_search = np.linalg.inv(H)
        except np.linalg.LinAlgError as e:
            raise SingularMatrixError(
                f"{self.name}: observed information matrix is singular",
                matrix_name='observed_information',
            ) from e

        jac = np.where(self.log_ci, params, 1.0)
        cov = cov_search * np.outer(jac, jac)
        return 0.5 * (cov + cov.T)

    def negloglik_and_covariance(
        self,
        params: Any,
        x: NDArray[np.floating[Any]],
        freq: NDArray[np.floating[Any]] | None = None,
    ) -> tuple[float, NDArray[np.floating[Any]]]:
        """
        Negative log-likelihood and asymptotic covariance at params for
        sample x, optionally with observation frequencies freq.
        """
        params = np.asarray(params, dtype=np.float64)
        context = self.make_context(x, freq)
        return float(self.negloglik(params, context)), self.covariance(params, x, context, freq)

    # -----------------------------------------------------------------
    # Distribution functions
    # -----------------------------------------------------------------

    @abstractmethod
    def frozen(self, params: NDArray[np.floating[Any]]) -> Any:
        """scipy.stats frozen distribution at natural parameters params."""
        ...

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"


# =====================================================================
# Registry
# =====================================================================

_FAMILY_REGISTRY: dict[str, DistributionFamily] = {}
_FAMILY_NAMES: list[str] = []


def _normalize(name: str) -> str:
    return ''.join(ch for ch in name.lower() if ch.isalnum())


def register_family(
    family: DistributionFamily,
    *,
    aliases: tuple[str, ...] = (),
) -> DistributionFamily:
    """
    Register a family instance under its name and any aliases.

    Raises:
        ValueError: If a name or alias is already taken by another family
    """
    keys = [_normalize(family.name)] + [_normalize(a) for a in aliases]
    for key in keys:
        existing = _FAMILY_REGISTRY.get(key)
        if existing is not None and type(existing) is not type(family):
            raise ValueError(
                f"Family name {key!r} is already registered to {existing.name}"
            )
    for key in keys:
        _FAMILY_REGISTRY[key] = family
    if family.name not in _FAMILY_NAMES:
        _FAMILY_NAMES.append(family.name)
    return family


def list_families() -> tuple[str, ...]:
    """Canonical names of all registered families, in registration order."""
    return tuple(_FAMILY_NAMES)


def resolve_family(family: str | DistributionFamily) -> DistributionFamily:
    """Resolve a family argument to a DistributionFamily instance.

    Args:
        family: A registered name or alias ('Beta', 'gev', 'Weibull', ...)
                or a DistributionFamily instance (passed through).

    Returns:
        DistributionFamily instance.

    Raises:
        UnknownFamilyError: If the name is not registered.
        TypeError: If argument is neither string nor DistributionFamily.
    """
    if isinstance(family, DistributionFamily):
        return family
    if isinstance(family, str):
        found = _FAMILY_REGISTRY.get(_normalize(family))
        if found is None:
            valid = ', '.join(_FAMILY_NAMES)
            raise UnknownFamilyError(
                f"Unknown distribution family: {family!r}. Valid families: {valid}",
                name=family,
                available=tuple(_FAMILY_NAMES),
            )
        return found
    raise TypeError(
        f"family must be str or DistributionFamily, got {type(family).__name__}"
    )
