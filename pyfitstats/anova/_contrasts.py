"""
Deviation coding and design block construction for N-way ANOVA.

Each factor with L levels is encoded by the sum-to-zero contrast matrix
(identity over the first L-1 levels, -1 for the last level). A term is a
block of columns: the factor's own encoding for a main effect, and the
row-wise products of every combination of the constituent encodings for an
interaction, with the first factor varying slowest. Blocks are kept
separate so the sequential fit can add them one at a time.
"""

from dataclasses import dataclass
from typing import Any, Sequence

import numpy as np
from numpy.typing import NDArray


@dataclass(frozen=True)
class DesignBlocks:
    """
    Design matrix split into per-term column blocks.

    Attributes:
        blocks: Column blocks; blocks[0] is the intercept column, then one
            block per term in terms-matrix order
        levels: Sorted distinct labels of each factor
        n_levels: Number of levels of each factor
        df: Degrees of freedom of each term (number of columns of its block)
        column_counts: Cell count of each term (1 for the intercept, L for a
            main effect, the product of the level counts for an interaction)
        factor_index: (n, N) integer level codes, indexing into levels
    """
    blocks: tuple[NDArray[np.floating[Any]], ...]
    levels: tuple[tuple[Any, ...], ...]
    n_levels: tuple[int, ...]
    df: tuple[int, ...]
    column_counts: tuple[int, ...]
    factor_index: NDArray[np.intp]


def contr_sum(n_levels: int) -> NDArray[np.floating[Any]]:
    """
    Sum-to-zero contrast matrix, shape (L, L-1).

    >>> contr_sum(3)
    array([[ 1.,  0.],
           [ 0.,  1.],
           [-1., -1.]])
    """
    return np.vstack([np.eye(n_levels - 1), -np.ones((1, n_levels - 1))])


def factor_levels(column: Sequence[Any]) -> tuple[tuple[Any, ...], NDArray[np.intp]]:
    """
    Distinct labels of a factor and the level code of each observation.

    Labels are sorted by value; a column mixing labels that do not compare
    (e.g. numbers and strings) is sorted by string form.

    Returns:
        (levels, codes)
    """
    values = list(column)
    distinct = set(values)
    try:
        levels = tuple(sorted(distinct))
    except TypeError:
        levels = tuple(sorted(distinct, key=str))
    lookup = {level: code for code, level in enumerate(levels)}
    codes = np.fromiter((lookup[v] for v in values), dtype=np.intp, count=len(values))
    return levels, codes


def interaction_columns(X_a: NDArray, X_b: NDArray) -> NDArray:
    """
    Row-wise products of every column of X_a with every column of X_b.

    Column order is (a0*b0, a0*b1, ..., a1*b0, ...): X_a varies slowest.
    """
    n = X_a.shape[0]
    return (X_a[:, :, None] * X_b[:, None, :]).reshape(n, -1)


def build_design_blocks(
    factors: Sequence[Sequence[Any]],
    terms: NDArray[np.bool_],
) -> DesignBlocks:
    """
    Encode factors and assemble one column block per model term.

    Args:
        factors: N factor columns, each of length n
        terms: (T, N) boolean terms matrix

    Returns:
        DesignBlocks
    """
    n = len(factors[0])
    levels = []
    codes = []
    encodings = []
    for column in factors:
        lv, cd = factor_levels(column)
        levels.append(lv)
        codes.append(cd)
        encodings.append(contr_sum(len(lv))[cd])

    blocks = [np.ones((n, 1), dtype=np.float64)]
    df = []
    cells = [1]
    for row in terms:
        members = np.flatnonzero(row)
        block = encodings[members[0]]
        for i in members[1:]:
            block = interaction_columns(block, encodings[i])
        blocks.append(block)
        df.append(block.shape[1])
        cells.append(int(np.prod([len(levels[i]) for i in members])))

    return DesignBlocks(
        blocks=tuple(blocks),
        levels=tuple(levels),
        n_levels=tuple(len(lv) for lv in levels),
        df=tuple(df),
        column_counts=tuple(cells),
        factor_index=np.column_stack(codes),
    )
