"""
Linear algebra kernels shared across domains.
"""

from pyfitstats.core.compute.linalg.qr import (
    QRResult,
    LeastSquaresResult,
    qr_cpu,
    lstsq_qr,
)

__all__ = [
    "QRResult",
    "LeastSquaresResult",
    "qr_cpu",
    "lstsq_qr",
]
