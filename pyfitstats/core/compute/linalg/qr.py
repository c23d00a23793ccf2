"""
QR decomposition and least squares.

Column-pivoted QR (LAPACK geqp3 via SciPy) so that rank-deficient designs
still produce the correct fitted values and residual sum of squares. Used
by the ANOVA engine for every nested model fit.
"""

from dataclasses import dataclass
from typing import Any
import numpy as np
from numpy.typing import NDArray
from scipy.linalg import qr, solve_triangular


@dataclass(frozen=True)
class QRResult:
    """
    Result of a pivoted QR decomposition X[:, pivot] = Q R.

    Attributes:
        Q: Orthonormal columns (n x k, k = min(n, p))
        R: Upper triangular factor (k x p)
        pivot: Column permutation applied to X
        rank: Numerical rank determined from the R diagonal
    """
    Q: NDArray[np.floating[Any]]
    R: NDArray[np.floating[Any]]
    pivot: NDArray[np.intp]
    rank: int


@dataclass(frozen=True)
class LeastSquaresResult:
    """
    Minimum-residual solution of X b ~ y.

    Attributes:
        coefficients: Basic solution (p,); columns outside the numerical
            rank receive zero coefficients
        residuals: y - X b (n,)
        rss: Residual sum of squares
        rank: Numerical rank of X
    """
    coefficients: NDArray[np.floating[Any]]
    residuals: NDArray[np.floating[Any]]
    rss: float
    rank: int


def _numerical_rank(R: NDArray[np.floating[Any]], shape: tuple[int, int]) -> int:
    diag_R = np.abs(np.diag(R))
    if len(diag_R) == 0 or diag_R[0] == 0:
        return 0
    tol = max(shape) * np.finfo(R.dtype).eps * diag_R[0]
    return int(np.sum(diag_R > tol))


def qr_cpu(X: NDArray[np.floating[Any]]) -> QRResult:
    """
    Economy-size QR decomposition with column pivoting.

    Pivoting orders the R diagonal by decreasing magnitude, which makes the
    rank estimate reliable for collinear designs.

    Args:
        X: Matrix to decompose (n x p)

    Returns:
        QRResult with Q, R, pivot and numerical rank
    """
    Q, R, pivot = qr(X, mode='economic', pivoting=True)
    return QRResult(Q=Q, R=R, pivot=pivot, rank=_numerical_rank(R, X.shape))


def lstsq_qr(
    X: NDArray[np.floating[Any]],
    y: NDArray[np.floating[Any]],
) -> LeastSquaresResult:
    """
    Least squares fit that tolerates rank deficiency.

    Only the leading `rank` pivoted columns are used; the remaining columns
    lie (numerically) in their span and get zero coefficients. The residuals
    are those of the projection onto the column space of X, so the residual
    sum of squares is correct whatever the rank.

    Args:
        X: Design matrix (n x p)
        y: Response vector (n,)

    Returns:
        LeastSquaresResult
    """
    qr_result = qr_cpu(X)
    p = X.shape[1]
    r = qr_result.rank

    coefficients = np.zeros(p)
    if r > 0:
        Qty = qr_result.Q[:, :r].T @ y
        basic = solve_triangular(qr_result.R[:r, :r], Qty, lower=False)
        coefficients[qr_result.pivot[:r]] = basic

    residuals = y - X @ coefficients
    return LeastSquaresResult(
        coefficients=coefficients,
        residuals=residuals,
        rss=float(residuals @ residuals),
        rank=r,
    )
