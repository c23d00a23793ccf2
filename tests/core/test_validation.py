"""
Tests for input validation utilities.

Validates every function in core/validation.py:
    - check_array: conversion, dtype coercion, rejection of non-real data
    - as_vector: row/column vectors flattened, matrices rejected
    - check_consistent_length: multi-array length matching
    - check_min_samples: minimum sample count
    - check_alpha: significance level range and type
"""

import numpy as np
import pytest

from pyfitstats.core.exceptions import (
    ArgumentTypeError,
    DimensionMismatchError,
    InvalidSignificanceLevel,
    ValidationError,
)
from pyfitstats.core.validation import (
    as_vector,
    check_alpha,
    check_array,
    check_consistent_length,
    check_min_samples,
)


# ═══════════════════════════════════════════════════════════════════════
# check_array
# ═══════════════════════════════════════════════════════════════════════


class TestCheckArray:
    """check_array converts to ndarray and rejects non-numeric data."""

    def test_list_to_float_array(self):
        result = check_array([1, 2, 3], "x")
        assert isinstance(result, np.ndarray)
        assert result.dtype == np.float64

    def test_float32_preserved(self):
        result = check_array(np.array([1.0, 2.0], dtype=np.float32), "x")
        assert result.dtype == np.float32

    def test_object_dtype_rejected(self):
        with pytest.raises(ArgumentTypeError, match="object dtype"):
            check_array([1, "a", None], "x")

    def test_string_dtype_rejected(self):
        with pytest.raises(ArgumentTypeError, match="non-numeric"):
            check_array(["a", "b"], "x")

    def test_complex_rejected(self):
        with pytest.raises(ArgumentTypeError, match="complex"):
            check_array(np.array([1 + 2j, 3.0]), "x")

    def test_error_is_also_type_error(self):
        with pytest.raises(TypeError):
            check_array(["a"], "x")

    def test_nan_passes(self):
        """NaN handling is left to the design factories."""
        result = check_array([1.0, np.nan], "x")
        assert np.isnan(result[1])


# ═══════════════════════════════════════════════════════════════════════
# as_vector
# ═══════════════════════════════════════════════════════════════════════


class TestAsVector:
    """Samples may be row or column vectors."""

    def test_1d_unchanged(self):
        x = np.arange(4.0)
        np.testing.assert_array_equal(as_vector(x, "x"), x)

    def test_column_vector_flattened(self):
        assert as_vector(np.arange(4.0).reshape(4, 1), "x").shape == (4,)

    def test_row_vector_flattened(self):
        assert as_vector(np.arange(4.0).reshape(1, 4), "x").shape == (4,)

    def test_scalar_becomes_length_one(self):
        assert as_vector(np.array(3.0), "x").shape == (1,)

    def test_matrix_rejected(self):
        with pytest.raises(ArgumentTypeError, match="vector"):
            as_vector(np.zeros((3, 2)), "x")


# ═══════════════════════════════════════════════════════════════════════
# Lengths and sample counts
# ═══════════════════════════════════════════════════════════════════════


class TestCheckConsistentLength:

    def test_matching(self):
        check_consistent_length(np.zeros(3), np.zeros((3, 2)), names=("y", "group"))

    def test_mismatch(self):
        with pytest.raises(DimensionMismatchError, match="y=3, group=4") as exc_info:
            check_consistent_length(np.zeros(3), np.zeros(4), names=("y", "group"))
        assert exc_info.value.expected == 3
        assert exc_info.value.actual == 4

    def test_names_count_mismatch(self):
        with pytest.raises(ValueError):
            check_consistent_length(np.zeros(3), names=("a", "b"))


class TestCheckMinSamples:

    def test_enough(self):
        check_min_samples(np.zeros(2), 2, "y")

    def test_too_few(self):
        with pytest.raises(ValidationError, match="at least 2"):
            check_min_samples(np.zeros(1), 2, "y")


# ═══════════════════════════════════════════════════════════════════════
# check_alpha
# ═══════════════════════════════════════════════════════════════════════


class TestCheckAlpha:
    """alpha must be a real scalar strictly between 0 and 1."""

    def test_returns_float(self):
        value = check_alpha(np.float32(0.05))
        assert isinstance(value, float)
        assert value == pytest.approx(0.05)

    @pytest.mark.parametrize("alpha", [0, 1, -0.1, 1.5, np.nan])
    def test_out_of_range(self, alpha):
        with pytest.raises(InvalidSignificanceLevel):
            check_alpha(alpha)

    @pytest.mark.parametrize("alpha", ["0.05", None, True, [0.05]])
    def test_wrong_type(self, alpha):
        with pytest.raises(InvalidSignificanceLevel) as exc_info:
            check_alpha(alpha)
        assert exc_info.value.alpha is alpha
