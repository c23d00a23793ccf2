"""
Central finite-difference derivatives.

Used for observed information matrices where no analytic Hessian is
available, and for scores of censored likelihood terms.
"""

from typing import Any, Callable

import numpy as np
from numpy.typing import NDArray

# eps^(1/3) balances truncation and rounding for first differences,
# eps^(1/4) for second differences.
_GRADIENT_STEP = np.finfo(np.float64).eps ** (1.0 / 3.0)
_HESSIAN_STEP = np.finfo(np.float64).eps ** 0.25


def _steps(
    x: NDArray[np.floating[Any]],
    base: float,
    step: NDArray[np.floating[Any]] | None,
) -> NDArray[np.floating[Any]]:
    if step is not None:
        return np.broadcast_to(np.asarray(step, dtype=np.float64), x.shape).copy()
    return base * np.maximum(np.abs(x), 1.0)


def numerical_gradient(
    fun: Callable[[NDArray[np.floating[Any]]], float],
    x: NDArray[np.floating[Any]],
    step: NDArray[np.floating[Any]] | None = None,
) -> NDArray[np.floating[Any]]:
    """
    Gradient of a scalar function by central differences.

    Args:
        fun: Scalar function of a 1D array
        x: Evaluation point
        step: Per-coordinate step sizes. Default eps^(1/3) * max(|x|, 1).

    Returns:
        Gradient vector, same length as x
    """
    x = np.asarray(x, dtype=np.float64)
    h = _steps(x, _GRADIENT_STEP, step)
    grad = np.empty_like(x)
    for j in range(len(x)):
        xp = x.copy()
        xm = x.copy()
        xp[j] += h[j]
        xm[j] -= h[j]
        grad[j] = (fun(xp) - fun(xm)) / (2.0 * h[j])
    return grad


def numerical_hessian(
    fun: Callable[[NDArray[np.floating[Any]]], float],
    x: NDArray[np.floating[Any]],
    step: NDArray[np.floating[Any]] | None = None,
) -> NDArray[np.floating[Any]]:
    """
    Hessian of a scalar function by central differences.

    Diagonal entries use the three-point second difference; off-diagonal
    entries use the four-corner mixed difference. The result is symmetric
    by construction.

    Args:
        fun: Scalar function of a 1D array
        x: Evaluation point
        step: Per-coordinate step sizes. Default eps^(1/4) * max(|x|, 1).

    Returns:
        Hessian matrix (p x p)
    """
    x = np.asarray(x, dtype=np.float64)
    p = len(x)
    h = _steps(x, _HESSIAN_STEP, step)
    f0 = fun(x)

    def shifted(*moves):
        xs = x.copy()
        for idx, delta in moves:
            xs[idx] += delta
        return fun(xs)

    H = np.zeros((p, p), dtype=np.float64)
    for j in range(p):
        f_plus = shifted((j, h[j]))
        f_minus = shifted((j, -h[j]))
        H[j, j] = (f_plus - 2.0 * f0 + f_minus) / (h[j] ** 2)

    for j in range(p):
        for k in range(j + 1, p):
            f_pp = shifted((j, h[j]), (k, h[k]))
            f_pm = shifted((j, h[j]), (k, -h[k]))
            f_mp = shifted((j, -h[j]), (k, h[k]))
            f_mm = shifted((j, -h[j]), (k, -h[k]))
            H[j, k] = (f_pp - f_pm - f_mp + f_mm) / (4.0 * h[j] * h[k])
            H[k, j] = H[j, k]

    return H
