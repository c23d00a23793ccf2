"""
Common data types for ANOVA.

Contains the frozen parameter payloads that go inside Result[P] envelopes.
Each payload is a pure data container: no methods, no computation.
"""

from dataclasses import dataclass
from typing import Any

import numpy as np
from numpy.typing import NDArray


@dataclass(frozen=True)
class AnovaTableRow:
    """One row of an ANOVA table (a model term, Error or Total)."""
    term: str
    sum_sq: float
    df: int
    mean_sq: float | None    # None for Total row
    f_value: float | None    # None for Error and Total rows
    p_value: float | None    # None for Error and Total rows


@dataclass(frozen=True)
class AnovaParams:
    """
    Parameter payload for N-way sequential ANOVA.

    Per-term arrays follow the row order of `terms`.
    """
    table: tuple[AnovaTableRow, ...]
    sstype: int
    n_obs: int
    terms: NDArray[np.bool_]                       # (T, N) factor membership
    term_names: tuple[str, ...]
    sum_sq: NDArray[np.floating[Any]]
    df: NDArray[np.int_]
    mean_sq: NDArray[np.floating[Any]]
    f_values: NDArray[np.floating[Any]]            # NaN where undefined
    p_values: NDArray[np.floating[Any]]            # NaN where undefined
    sse: float
    dfe: int
    mse: float
    sst: float
    dft: int
    coefficients: NDArray[np.floating[Any]]
    residuals: NDArray[np.floating[Any]]
    n_levels: tuple[int, ...]                      # per factor
    level_names: tuple[tuple[str, ...], ...]       # per factor
    varnames: tuple[str, ...]
    column_counts: tuple[int, ...]                 # cells per term, intercept first
    rank: int
    alpha: float                                   # level for significant_terms
