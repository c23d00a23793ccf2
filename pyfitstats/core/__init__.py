"""
Core infrastructure for pyfitstats.

Shared abstractions and utilities used by the domain sub-packages
(distributions, anova).

Key components:
    protocols: Backend protocol
    result: Generic Result[P] envelope
    exceptions: Exception hierarchy
    validation: Input validators
    compute: Timing, linear algebra and optimization primitives
"""

from pyfitstats.core.protocols import Backend
from pyfitstats.core.result import Result
from pyfitstats.core.exceptions import (
    PyFitStatsError,
    ValidationError,
    ArgumentTypeError,
    DimensionError,
    DimensionMismatchError,
    DomainError,
    DegenerateSampleError,
    InvalidSignificanceLevel,
    InvalidParameterError,
    UnknownFamilyError,
    InvalidModelSpecError,
    InvalidTermOrderError,
    UnsupportedSumOfSquaresType,
    NumericalError,
    SingularMatrixError,
    ConvergenceError,
)

__all__ = [
    # Protocols
    "Backend",
    # Result
    "Result",
    # Exceptions
    "PyFitStatsError",
    "ValidationError",
    "ArgumentTypeError",
    "DimensionError",
    "DimensionMismatchError",
    "DomainError",
    "DegenerateSampleError",
    "InvalidSignificanceLevel",
    "InvalidParameterError",
    "UnknownFamilyError",
    "InvalidModelSpecError",
    "InvalidTermOrderError",
    "UnsupportedSumOfSquaresType",
    "NumericalError",
    "SingularMatrixError",
    "ConvergenceError",
]
