"""
ANOVA design object.

Wraps the validated response and grouping variables for anovan().
"""

from dataclasses import dataclass
from typing import Any

import numpy as np
from numpy.typing import NDArray

from pyfitstats.core.exceptions import (
    DimensionError,
    ValidationError,
)
from pyfitstats.core.validation import (
    as_vector,
    check_array,
    check_consistent_length,
    check_min_samples,
)


def _is_column_sequence(group: Any) -> bool:
    """A list/tuple whose items are themselves label sequences."""
    if not isinstance(group, (list, tuple)) or len(group) == 0:
        return False
    return all(
        not isinstance(item, (str, bytes)) and np.ndim(item) == 1
        for item in group
    )


def _factor_columns(group: Any, y: NDArray) -> tuple[list[NDArray], list[str] | None]:
    """
    Split a grouping specification into factor columns.

    Accepted forms: a dict {name: labels}; an (n, N) array (an (N, n)
    array is transposed); a single 1D label vector; a list of label
    vectors, one per factor.
    """
    if isinstance(group, dict):
        names = [str(k) for k in group.keys()]
        columns = [np.asarray(v, dtype=object).reshape(-1) for v in group.values()]
    elif _is_column_sequence(group):
        names = None
        columns = [np.asarray(v, dtype=object).reshape(-1) for v in group]
    else:
        names = None
        n = len(y)
        arr = np.asarray(group, dtype=object)
        if arr.ndim == 1:
            columns = [arr]
        elif arr.ndim == 2:
            if arr.shape[0] != n and arr.shape[1] == n:
                arr = arr.T
            columns = [arr[:, j] for j in range(arr.shape[1])]
        else:
            raise DimensionError(
                f"group: expected a vector or a 2D array of labels, got {arr.ndim}D"
            )

    if len(columns) == 0:
        raise ValidationError("group: at least one grouping variable is required")

    for j, column in enumerate(columns):
        check_consistent_length(y, column, names=("y", f"group variable {j + 1}"))
    return columns, names


@dataclass(frozen=True)
class AnovaDesign:
    """
    Validated data container for N-way ANOVA.

    Created via for_anovan(), not directly. Observations whose response is
    NaN or infinite are removed together with their group labels.
    """
    y: NDArray[np.floating[Any]]
    factors: tuple[NDArray, ...]
    varnames: tuple[str, ...]
    n: int
    n_removed: int

    @property
    def n_factors(self) -> int:
        return len(self.factors)

    @staticmethod
    def for_anovan(
        y: Any,
        group: Any,
        *,
        varnames: Any = None,
    ) -> 'AnovaDesign':
        """
        Create design for anovan().

        Args:
            y: Response (vector of real values)
            group: Grouping variables (see _factor_columns for the forms)
            varnames: Factor names; defaults to dict keys, else X1..XN

        Returns:
            AnovaDesign

        Raises:
            ArgumentTypeError: If y is not a real vector
            DimensionMismatchError: If group rows do not match len(y)
            ValidationError: For fewer than 2 usable observations, a factor
                with a single level, or a varnames count mismatch
        """
        y_arr = as_vector(check_array(y, "y"), "y")
        n_total = len(y_arr)
        columns, dict_names = _factor_columns(group, y_arr)

        if varnames is None:
            names = dict_names or [f"X{j + 1}" for j in range(len(columns))]
        elif isinstance(varnames, str):
            names = [varnames]
        else:
            names = [str(v) for v in varnames]
        if len(names) != len(columns):
            raise ValidationError(
                f"varnames: got {len(names)} names for {len(columns)} grouping variables"
            )

        keep = np.isfinite(y_arr)
        y_clean = y_arr[keep].astype(np.float64)
        factors = tuple(column[keep] for column in columns)
        check_min_samples(y_clean, 2, "y")

        for name, column in zip(names, factors):
            if len(set(column.tolist())) < 2:
                raise ValidationError(
                    f"group: grouping variable {name!r} needs at least 2 levels"
                )

        return AnovaDesign(
            y=y_clean,
            factors=factors,
            varnames=tuple(names),
            n=len(y_clean),
            n_removed=int(n_total - len(y_clean)),
        )

    def __repr__(self) -> str:
        return (
            f"AnovaDesign(n={self.n}, factors={list(self.varnames)}, "
            f"n_removed={self.n_removed})"
        )
