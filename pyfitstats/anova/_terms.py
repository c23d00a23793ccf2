"""
Terms matrix construction for N-way ANOVA.

A terms matrix has one row per model term and one column per factor; a 1
marks the factors a term involves. Rows with one 1 are main effects, rows
with several 1s are interactions. Rows must be ordered by non-decreasing
order so that sequential sums of squares enter main effects first.
"""

import numbers
from itertools import combinations
from typing import Any, Sequence

import numpy as np
from numpy.typing import NDArray

from pyfitstats.core.exceptions import InvalidModelSpecError, InvalidTermOrderError

MODEL_ORDERS = ('linear', 'interaction', 'full')


def terms_for_order(order: int, n_factors: int) -> NDArray[np.bool_]:
    """
    All terms involving at most `order` factors.

    Terms are grouped by size; within a size, factor combinations appear in
    lexicographic order (for three factors: X1, X2, X3, X1*X2, X1*X3, X2*X3).
    """
    rows = []
    for size in range(1, order + 1):
        for members in combinations(range(n_factors), size):
            row = np.zeros(n_factors, dtype=bool)
            row[list(members)] = True
            rows.append(row)
    return np.array(rows, dtype=bool).reshape(-1, n_factors)


def validate_terms_matrix(matrix: Any, n_factors: int) -> NDArray[np.bool_]:
    """
    Check an explicit terms matrix and pad it to n_factors columns.

    Raises:
        InvalidModelSpecError: If the matrix is not 0/1, has more columns
            than factors, contains an all-zero or repeated row
        InvalidTermOrderError: If a row involves fewer factors than the row
            above it
    """
    arr = np.asarray(matrix)
    if arr.ndim == 1:
        arr = arr.reshape(1, -1)
    if arr.ndim != 2 or arr.shape[0] == 0:
        raise InvalidModelSpecError(
            f"model: terms matrix must be a non-empty 2D array, got shape {arr.shape}"
        )
    if not (np.issubdtype(arr.dtype, np.number) or arr.dtype == bool):
        raise InvalidModelSpecError(f"model: terms matrix must be numeric 0/1, got {arr.dtype}")
    if not np.all((arr == 0) | (arr == 1)):
        raise InvalidModelSpecError("model: terms matrix entries must be 0 or 1")
    if arr.shape[1] > n_factors:
        raise InvalidModelSpecError(
            f"model: terms matrix has {arr.shape[1]} columns but there are only "
            f"{n_factors} grouping variables"
        )

    terms = np.zeros((arr.shape[0], n_factors), dtype=bool)
    terms[:, :arr.shape[1]] = arr.astype(bool)

    row_sums = terms.sum(axis=1)
    empty = np.flatnonzero(row_sums == 0)
    if len(empty) > 0:
        raise InvalidModelSpecError(
            f"model: terms matrix row {int(empty[0])} involves no factors"
        )
    if len({tuple(r) for r in terms}) != len(terms):
        raise InvalidModelSpecError("model: terms matrix contains repeated terms")
    if np.any(np.diff(row_sums) < 0):
        raise InvalidTermOrderError(
            "model: the terms matrix must list main effects above interactions "
            f"(term orders {row_sums.tolist()})",
            row_sums=row_sums.tolist(),
        )
    return terms


def build_terms(model: Any, n_factors: int) -> NDArray[np.bool_]:
    """
    Terms matrix for a model specification.

    Args:
        model: 'linear' (main effects), 'interaction' (main effects and
            two-way interactions), 'full' (all interactions), an integer
            maximum order, or an explicit 0/1 terms matrix
        n_factors: Number of grouping variables

    Returns:
        (T, n_factors) boolean terms matrix

    Raises:
        InvalidModelSpecError: For an unknown model name, an order outside
            [1, n_factors] or an invalid matrix
        InvalidTermOrderError: For a matrix with decreasing term orders
    """
    if isinstance(model, str):
        key = model.lower()
        if key not in MODEL_ORDERS:
            raise InvalidModelSpecError(
                f"model: unknown model type {model!r}. "
                f"Valid types: {', '.join(MODEL_ORDERS)}, an integer order, or a terms matrix"
            )
        order = {'linear': 1, 'interaction': 2, 'full': n_factors}[key]
        return terms_for_order(min(order, n_factors), n_factors)

    if isinstance(model, numbers.Integral) and not isinstance(model, (bool, np.bool_)):
        order = int(model)
        if not 1 <= order <= n_factors:
            raise InvalidModelSpecError(
                f"model: order must be between 1 and {n_factors}, got {order}"
            )
        return terms_for_order(order, n_factors)

    return validate_terms_matrix(model, n_factors)


def term_names(terms: NDArray[np.bool_], varnames: Sequence[str]) -> tuple[str, ...]:
    """Names of the terms: member variable names joined with '*'."""
    return tuple('*'.join(varnames[i] for i in np.flatnonzero(row)) for row in terms)
