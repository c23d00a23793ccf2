"""
Exception hierarchy for pyfitstats.

All exceptions inherit from PyFitStatsError to allow catching any
library-specific error. Domain-specific exceptions should inherit from
the appropriate base class here.

Design principles:
    - Exceptions carry diagnostic information as attributes
    - Error messages are actionable with actual vs expected values
    - Never catch and re-raise with less information
"""


class PyFitStatsError(Exception):
    """Base exception for all pyfitstats errors."""
    pass


class ValidationError(PyFitStatsError):
    """
    Input validation failed.

    Raised when user-provided inputs fail validation checks.
    """
    pass


class ArgumentTypeError(ValidationError, TypeError):
    """
    Argument has the wrong kind or shape.

    Raised for samples that are not real vectors (complex values, matrices,
    non-numeric data). Also a builtin TypeError so generic callers can
    catch it without importing this module.
    """
    pass


class DimensionError(ValidationError):
    """
    Array dimensions are incorrect or inconsistent.

    Raised when array shapes don't match expected dimensions or
    when multiple arrays have inconsistent shapes.
    """
    pass


class DimensionMismatchError(DimensionError):
    """
    Two inputs that must be paired row-by-row have different lengths.

    Attributes:
        expected: Required number of rows
        actual: Number of rows received
    """

    def __init__(
        self,
        message: str,
        expected: int | None = None,
        actual: int | None = None,
    ):
        super().__init__(message)
        self.expected = expected
        self.actual = actual


class DomainError(ValidationError):
    """
    Values lie outside the mathematical support of a distribution family.

    Attributes:
        family: Name of the distribution family
        support: (lower, upper) support bounds
        n_outside: Number of offending observations
    """

    def __init__(
        self,
        message: str,
        family: str | None = None,
        support: tuple[float, float] | None = None,
        n_outside: int | None = None,
    ):
        super().__init__(message)
        self.family = family
        self.support = support
        self.n_outside = n_outside


class DegenerateSampleError(ValidationError):
    """
    Sample cannot identify distinct parameters (e.g. all values equal).
    """
    pass


class InvalidSignificanceLevel(ValidationError):
    """
    Significance level alpha is not in the open interval (0, 1).

    Attributes:
        alpha: The rejected value
    """

    def __init__(self, message: str, alpha: object = None):
        super().__init__(message)
        self.alpha = alpha


class UnknownFamilyError(ValidationError, ValueError):
    """
    Distribution family name is not registered.

    Also a builtin ValueError.

    Attributes:
        name: The requested family name
        available: Registered family names
    """

    def __init__(
        self,
        message: str,
        name: str | None = None,
        available: tuple[str, ...] = (),
    ):
        super().__init__(message)
        self.name = name
        self.available = available


class InvalidParameterError(ValidationError):
    """
    Distribution parameter is unknown or outside its valid range.

    Attributes:
        parameter: Parameter name
        value: The rejected value
    """

    def __init__(
        self,
        message: str,
        parameter: str | None = None,
        value: object = None,
    ):
        super().__init__(message)
        self.parameter = parameter
        self.value = value


class InvalidModelSpecError(ValidationError):
    """
    ANOVA model specification (model type or terms matrix) is malformed.
    """
    pass


class InvalidTermOrderError(InvalidModelSpecError):
    """
    Terms matrix lists an interaction above a lower-order term.

    Attributes:
        row_sums: Number of factors in each term, in the order given
    """

    def __init__(self, message: str, row_sums: list[int] | None = None):
        super().__init__(message)
        self.row_sums = row_sums


class UnsupportedSumOfSquaresType(PyFitStatsError, NotImplementedError):
    """
    Requested sum-of-squares decomposition is not implemented.

    Only sequential (Type I) sums of squares are computed. Other types are
    refused rather than approximated.

    Attributes:
        sstype: The requested type
    """

    def __init__(self, message: str, sstype: object = None):
        super().__init__(message)
        self.sstype = sstype


class NumericalError(PyFitStatsError):
    """
    Numerical computation failed.

    Base class for errors arising from numerical issues during computation.
    """
    pass


class SingularMatrixError(NumericalError):
    """
    Matrix is singular or nearly singular.

    Raised when a matrix operation requires invertibility but the matrix
    is singular or numerically rank-deficient.

    Attributes:
        matrix_name: Name/description of the problematic matrix
        condition_number: Estimated condition number, if available
        rank: Numerical rank, if computed
        expected_rank: Expected rank (typically min(n, p))
    """

    def __init__(
        self,
        message: str,
        matrix_name: str | None = None,
        condition_number: float | None = None,
        rank: int | None = None,
        expected_rank: int | None = None
    ):
        super().__init__(message)
        self.matrix_name = matrix_name
        self.condition_number = condition_number
        self.rank = rank
        self.expected_rank = expected_rank


class ConvergenceError(PyFitStatsError):
    """
    Iterative algorithm failed to produce a result within its budget.

    Raised only where a partial answer would be wrong (e.g. rejection
    sampling that cannot deliver the requested number of draws). Optimizer
    non-convergence is reported through Result.warnings instead.

    Attributes:
        iterations: Number of iterations completed
        final_change: Final parameter or objective change
        reason: Why convergence failed (e.g., 'max_iterations', 'diverging')
        threshold: The convergence threshold that was not met
    """

    def __init__(
        self,
        message: str,
        iterations: int,
        final_change: float | None = None,
        reason: str | None = None,
        threshold: float | None = None
    ):
        super().__init__(message)
        self.iterations = iterations
        self.final_change = final_change
        self.reason = reason
        self.threshold = threshold
