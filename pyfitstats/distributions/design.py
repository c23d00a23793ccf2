"""
Sample design for maximum-likelihood distribution fitting.

Wraps a validated sample and the family it will be fitted to.
"""

from dataclasses import dataclass
from typing import Any

import numpy as np
from numpy.typing import NDArray

from pyfitstats.core.exceptions import (
    DegenerateSampleError,
    DomainError,
    ValidationError,
)
from pyfitstats.core.validation import as_vector, check_array, check_consistent_length
from pyfitstats.distributions._family import DistributionFamily, resolve_family
from pyfitstats.distributions._weights import total_weight


@dataclass(frozen=True)
class SampleDesign:
    """
    Validated sample for a distribution fit.

    Created via for_family(), not directly. Observations whose value or
    frequency is NaN, and observations with zero frequency, are dropped;
    everything left is finite, inside the family's support and not
    constant.

    Attributes:
        data: Observations used in the fit
        freq: Frequency of each observation (ones when none were given)
        family: Family to fit
        n: Number of distinct observation rows
        n_obs: Total frequency, the effective sample size
        n_removed: Rows dropped before fitting
    """
    data: NDArray[np.floating[Any]]
    freq: NDArray[np.floating[Any]]
    family: DistributionFamily
    n: int
    n_obs: float
    n_removed: int

    @staticmethod
    def for_family(
        x: Any,
        family: str | DistributionFamily,
        freq: Any = None,
    ) -> 'SampleDesign':
        """
        Create a design for fitting `family` to sample `x`.

        Args:
            x: Sample (vector of real values; row or column shapes accepted)
            family: Family name or instance
            freq: Frequency of each observation in x (non-negative, same
                length as x); None counts every observation once

        Returns:
            SampleDesign

        Raises:
            ArgumentTypeError: If x or freq is not a real vector
            DimensionMismatchError: If freq and x differ in length
            UnknownFamilyError: If family is not registered
            ValidationError: If freq has negative or infinite entries, or no
                observations remain after removing NaN and zero-frequency rows
            DomainError: If x has infinite values or values outside the support
            DegenerateSampleError: If all observations are equal
        """
        fam = resolve_family(family)
        x_arr = as_vector(check_array(x, "x"), "x")

        if freq is None:
            w_arr = np.ones(len(x_arr))
        else:
            w_arr = as_vector(check_array(freq, "freq"), "freq")
            check_consistent_length(x_arr, w_arr, names=("x", "freq"))
            if np.any(np.isinf(w_arr)) or np.any(w_arr < 0):
                raise ValidationError(
                    "freq: frequencies must be finite and non-negative"
                )

        drop = np.isnan(x_arr) | np.isnan(w_arr) | (w_arr == 0)
        data = x_arr[~drop].astype(np.float64)
        w_clean = w_arr[~drop].astype(np.float64)
        n_removed = int(np.sum(drop))

        if len(data) == 0:
            raise ValidationError(
                f"x: no observations left to fit {fam.name} after removing "
                f"{n_removed} NaN or zero-frequency values"
            )

        n_inf = int(np.sum(np.isinf(data)))
        if n_inf > 0:
            raise DomainError(
                f"x: contains {n_inf} infinite values; {fam.name} requires finite data",
                family=fam.name,
                support=fam.sample_support,
                n_outside=n_inf,
            )

        outside = ~fam.in_support(data)
        if np.any(outside):
            lo, hi = fam.sample_support
            lo_br = '[' if fam.support_closed[0] else '('
            hi_br = ']' if fam.support_closed[1] else ')'
            raise DomainError(
                f"x: {int(np.sum(outside))} values outside the {fam.name} support "
                f"{lo_br}{lo}, {hi}{hi_br}",
                family=fam.name,
                support=fam.sample_support,
                n_outside=int(np.sum(outside)),
            )

        if np.min(data) == np.max(data):
            raise DegenerateSampleError(
                f"x: all {len(data)} observations equal {data[0]}; "
                f"{fam.name} parameters are not identifiable"
            )

        return SampleDesign(
            data=data,
            freq=w_clean,
            family=fam,
            n=len(data),
            n_obs=total_weight(w_clean),
            n_removed=n_removed,
        )

    def __repr__(self) -> str:
        return (
            f"SampleDesign(family={self.family.name}, n={self.n}, "
            f"n_obs={self.n_obs}, n_removed={self.n_removed})"
        )
