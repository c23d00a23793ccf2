"""
Frequency-weighted sample summaries.

With integer frequencies every function here equals its unweighted
counterpart on the sample with each observation repeated freq times.
"""

from typing import Any

import numpy as np
from numpy.typing import NDArray


def total_weight(w: NDArray[np.floating[Any]]) -> float | int:
    """Sum of frequencies; an int when every frequency is whole."""
    total = float(np.sum(w))
    return int(total) if total.is_integer() else total


def weighted_mean(x: NDArray[np.floating[Any]], w: NDArray[np.floating[Any]]) -> float:
    return float(np.sum(w * x) / np.sum(w))


def weighted_std(x: NDArray[np.floating[Any]], w: NDArray[np.floating[Any]]) -> float:
    """Standard deviation with one degree of freedom removed from the total weight."""
    total = float(np.sum(w))
    m = np.sum(w * x) / total
    denom = total - 1.0 if total > 1.0 else total
    return float(np.sqrt(np.sum(w * (x - m) ** 2) / denom))


def weighted_median(x: NDArray[np.floating[Any]], w: NDArray[np.floating[Any]]) -> float:
    """
    Median of the expanded sample.

    The two middle order statistics of a sample of total weight W sit at
    1-based positions floor((W+1)/2) and floor(W/2)+1; each is found as the
    first sorted value whose cumulative weight reaches its position.
    """
    order = np.argsort(x, kind='stable')
    xs = x[order]
    cw = np.cumsum(w[order])
    total = cw[-1]
    positions = np.array([np.floor((total + 1.0) / 2.0), np.floor(total / 2.0) + 1.0])
    idx = np.minimum(np.searchsorted(cw, positions, side='left'), len(xs) - 1)
    return float(0.5 * (xs[idx[0]] + xs[idx[1]]))
