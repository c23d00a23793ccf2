"""
Sequential (Type I) sums of squares.

Terms are added in order. SS(term_k) = RSS(terms 1..k-1) - RSS(terms 1..k),
starting from the intercept-only model whose RSS is the corrected total
sum of squares. Order-dependent for unbalanced designs.

Each nested model is fitted by column-pivoted QR, so an empty cell (a
rank-deficient cumulative design) still yields the correct residual sum of
squares.
"""

from dataclasses import dataclass
from typing import Any, Sequence

import numpy as np
from numpy.typing import NDArray
from scipy import stats as sp_stats

from pyfitstats.core.compute.linalg import lstsq_qr


@dataclass(frozen=True)
class SequentialFit:
    """
    Outcome of the nested model fits.

    Attributes:
        sum_sq: Sequential SS of each term
        sse: Residual SS of the full model
        coefficients: Full-model coefficients, intercept first
        residuals: Full-model residuals
        rank: Numerical rank of the full design
        rank_deficient_terms: Indices of terms whose addition left the
            cumulative design rank-deficient
    """
    sum_sq: NDArray[np.floating[Any]]
    sse: float
    coefficients: NDArray[np.floating[Any]]
    residuals: NDArray[np.floating[Any]]
    rank: int
    rank_deficient_terms: tuple[int, ...]


def total_sum_of_squares(y: NDArray[np.floating[Any]]) -> float:
    """Corrected total sum of squares sum(y^2) - (sum y)^2 / n."""
    return float(np.sum(y ** 2) - np.sum(y) ** 2 / len(y))


def compute_ss_type1(
    y: NDArray[np.floating[Any]],
    blocks: Sequence[NDArray[np.floating[Any]]],
    sst: float,
) -> SequentialFit:
    """
    Fit [intercept, block 1, ..., block j] for j = 1..T.

    Args:
        y: Response (n,)
        blocks: Intercept column followed by one block per term
        sst: Corrected total sum of squares of y

    Returns:
        SequentialFit
    """
    rss_prev = sst
    columns = [blocks[0]]
    sum_sq = np.zeros(len(blocks) - 1)
    deficient = []
    fit = None

    for j, block in enumerate(blocks[1:]):
        columns.append(block)
        X = np.hstack(columns)
        fit = lstsq_qr(X, y)
        sum_sq[j] = rss_prev - fit.rss
        rss_prev = fit.rss
        if fit.rank < X.shape[1]:
            deficient.append(j)

    if fit is None:
        fit = lstsq_qr(blocks[0], y)

    return SequentialFit(
        sum_sq=sum_sq,
        sse=float(rss_prev),
        coefficients=fit.coefficients,
        residuals=fit.residuals,
        rank=fit.rank,
        rank_deficient_terms=tuple(deficient),
    )


def compute_f_and_p(
    ss: float,
    df: int,
    mse: float,
    df_error: int,
) -> tuple[float | None, float | None]:
    """F statistic and upper-tail p-value, or (None, None) if undefined."""
    if df <= 0 or df_error <= 0 or not mse > 0:
        return None, None

    f_val = (ss / df) / mse
    p_val = float(sp_stats.f.sf(f_val, df, df_error))
    return float(f_val), p_val
