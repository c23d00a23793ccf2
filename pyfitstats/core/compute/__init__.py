"""
Numeric infrastructure shared by the domain backends.

Domain backends live in {domain}/backends/; this package only holds the
pieces they have in common.

Submodules:
    timing: Section timer behind Result.timing
    linalg: Pivoted QR and least squares
    optimization: Simplex search and finite-difference derivatives
"""

from pyfitstats.core.compute.timing import Timer

__all__ = [
    "Timer",
]
