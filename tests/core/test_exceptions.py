"""
Tests for the pyfitstats exception hierarchy.

Validates:
    - Inheritance chain (all exceptions catchable via PyFitStatsError)
    - Builtin bases for ArgumentTypeError, UnknownFamilyError and
      UnsupportedSumOfSquaresType
    - Diagnostic attributes and their defaults
"""

import pytest

from pyfitstats.core.exceptions import (
    ArgumentTypeError,
    ConvergenceError,
    DegenerateSampleError,
    DimensionError,
    DimensionMismatchError,
    DomainError,
    InvalidModelSpecError,
    InvalidParameterError,
    InvalidSignificanceLevel,
    InvalidTermOrderError,
    NumericalError,
    PyFitStatsError,
    SingularMatrixError,
    UnknownFamilyError,
    UnsupportedSumOfSquaresType,
    ValidationError,
)


# ═══════════════════════════════════════════════════════════════════════
# Inheritance hierarchy
# ═══════════════════════════════════════════════════════════════════════


class TestInheritance:
    """Every exception is catchable via PyFitStatsError."""

    @pytest.mark.parametrize("exc", [
        ArgumentTypeError("bad"),
        DimensionError("bad"),
        DimensionMismatchError("bad"),
        DomainError("bad"),
        DegenerateSampleError("bad"),
        InvalidSignificanceLevel("bad"),
        UnknownFamilyError("bad"),
        InvalidParameterError("bad"),
        InvalidModelSpecError("bad"),
        InvalidTermOrderError("bad"),
    ])
    def test_input_errors_are_validation_errors(self, exc):
        assert isinstance(exc, ValidationError)
        assert isinstance(exc, PyFitStatsError)

    def test_argument_type_error_is_type_error(self):
        with pytest.raises(TypeError):
            raise ArgumentTypeError("x: must be a vector")

    def test_unknown_family_is_value_error(self):
        with pytest.raises(ValueError):
            raise UnknownFamilyError("no such family")

    def test_dimension_mismatch_is_dimension_error(self):
        assert isinstance(DimensionMismatchError("rows"), DimensionError)

    def test_term_order_is_model_spec_error(self):
        assert isinstance(InvalidTermOrderError("order"), InvalidModelSpecError)

    def test_unsupported_sstype_is_not_implemented(self):
        err = UnsupportedSumOfSquaresType("type 3", sstype=3)
        assert isinstance(err, NotImplementedError)
        assert isinstance(err, PyFitStatsError)
        assert not isinstance(err, ValidationError)

    def test_singular_matrix_error_is_numerical_error(self):
        with pytest.raises(NumericalError):
            raise SingularMatrixError("singular")

    def test_convergence_error_is_not_numerical_error(self):
        """ConvergenceError inherits from PyFitStatsError, not NumericalError."""
        err = ConvergenceError("did not converge", iterations=100)
        assert isinstance(err, PyFitStatsError)
        assert not isinstance(err, NumericalError)


# ═══════════════════════════════════════════════════════════════════════
# Diagnostic attributes
# ═══════════════════════════════════════════════════════════════════════


class TestAttributes:
    """Exceptions carry the values needed to act on them."""

    def test_dimension_mismatch(self):
        err = DimensionMismatchError("group has 3 rows", expected=5, actual=3)
        assert err.expected == 5
        assert err.actual == 3
        assert "3 rows" in str(err)

    def test_domain_error(self):
        err = DomainError("outside", family="Beta", support=(0.0, 1.0), n_outside=2)
        assert err.family == "Beta"
        assert err.support == (0.0, 1.0)
        assert err.n_outside == 2

    def test_domain_error_defaults(self):
        err = DomainError("outside")
        assert err.family is None
        assert err.support is None
        assert err.n_outside is None

    def test_unknown_family(self):
        err = UnknownFamilyError("nope", name="Gamma", available=("Beta", "Normal"))
        assert err.name == "Gamma"
        assert err.available == ("Beta", "Normal")

    def test_invalid_parameter(self):
        err = InvalidParameterError("sigma must be positive", parameter="sigma", value=-1.0)
        assert err.parameter == "sigma"
        assert err.value == -1.0

    def test_invalid_significance_level(self):
        err = InvalidSignificanceLevel("alpha", alpha=1.5)
        assert err.alpha == 1.5

    def test_term_order_row_sums(self):
        err = InvalidTermOrderError("order", row_sums=[2, 1])
        assert err.row_sums == [2, 1]

    def test_singular_matrix_defaults(self):
        err = SingularMatrixError("singular")
        assert err.matrix_name is None
        assert err.condition_number is None
        assert err.rank is None
        assert err.expected_rank is None

    def test_convergence_error(self):
        err = ConvergenceError(
            "rejection sampling failed",
            iterations=10,
            reason="max_iterations",
        )
        assert err.iterations == 10
        assert err.reason == "max_iterations"
        assert err.final_change is None
        assert err.threshold is None

    def test_catchable_with_attributes(self):
        with pytest.raises(ConvergenceError) as exc_info:
            raise ConvergenceError("failed", 5, reason="max_iterations")
        assert exc_info.value.iterations == 5
