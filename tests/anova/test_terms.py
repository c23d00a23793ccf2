"""
Tests for terms matrix construction.

Validates:
    - Named models ('linear', 'interaction', 'full') and integer orders
    - Explicit matrices: padding, validation, ordering
    - Term names joined with '*'
"""

import numpy as np
import pytest

from pyfitstats.anova._terms import build_terms, term_names, terms_for_order
from pyfitstats.core.exceptions import InvalidModelSpecError, InvalidTermOrderError


class TestNamedModels:

    def test_linear(self):
        np.testing.assert_array_equal(build_terms('linear', 3), np.eye(3, dtype=bool))

    def test_interaction_three_factors(self):
        expected = np.array([
            [1, 0, 0], [0, 1, 0], [0, 0, 1],
            [1, 1, 0], [1, 0, 1], [0, 1, 1],
        ], dtype=bool)
        np.testing.assert_array_equal(build_terms('interaction', 3), expected)

    def test_full_three_factors(self):
        terms = build_terms('full', 3)
        assert terms.shape == (7, 3)
        np.testing.assert_array_equal(terms[-1], [True, True, True])

    def test_interaction_single_factor(self):
        """With one factor there are no interactions to add."""
        np.testing.assert_array_equal(build_terms('interaction', 1), [[True]])

    def test_case_insensitive(self):
        np.testing.assert_array_equal(build_terms('Full', 2), build_terms('full', 2))

    def test_unknown_name(self):
        with pytest.raises(InvalidModelSpecError, match="unknown model type"):
            build_terms('quadratic', 2)


class TestIntegerOrder:

    def test_order_two_equals_interaction(self):
        np.testing.assert_array_equal(build_terms(2, 4), build_terms('interaction', 4))

    def test_order_n_equals_full(self):
        np.testing.assert_array_equal(build_terms(3, 3), build_terms('full', 3))

    def test_terms_for_order_grouped_by_size(self):
        sizes = terms_for_order(3, 4).sum(axis=1)
        assert np.all(np.diff(sizes) >= 0)
        assert len(sizes) == 4 + 6 + 4

    @pytest.mark.parametrize("order", [0, 4, -1])
    def test_out_of_range(self, order):
        with pytest.raises(InvalidModelSpecError, match="order"):
            build_terms(order, 3)

    def test_bool_not_an_order(self):
        with pytest.raises(InvalidModelSpecError):
            build_terms(True, 2)


class TestExplicitMatrix:

    def test_accepted(self):
        matrix = [[1, 0], [0, 1], [1, 1]]
        np.testing.assert_array_equal(build_terms(matrix, 2), np.array(matrix, dtype=bool))

    def test_padded_to_factor_count(self):
        terms = build_terms([[1, 0], [0, 1]], 3)
        np.testing.assert_array_equal(terms, [[1, 0, 0], [0, 1, 0]])

    def test_single_row(self):
        np.testing.assert_array_equal(build_terms([0, 1], 2), [[False, True]])

    def test_subset_of_terms(self):
        """Main effects may be omitted."""
        np.testing.assert_array_equal(build_terms([[0, 1]], 2), [[False, True]])

    def test_decreasing_order(self):
        with pytest.raises(InvalidTermOrderError) as exc_info:
            build_terms([[1, 1], [1, 0]], 2)
        assert exc_info.value.row_sums == [2, 1]

    def test_non_binary(self):
        with pytest.raises(InvalidModelSpecError, match="0 or 1"):
            build_terms([[2, 0]], 2)

    def test_too_many_columns(self):
        with pytest.raises(InvalidModelSpecError, match="columns"):
            build_terms([[1, 0, 0]], 2)

    def test_zero_row(self):
        with pytest.raises(InvalidModelSpecError, match="no factors"):
            build_terms([[1, 0], [0, 0]], 2)

    def test_repeated_row(self):
        with pytest.raises(InvalidModelSpecError, match="repeated"):
            build_terms([[1, 0], [1, 0]], 2)

    def test_empty(self):
        with pytest.raises(InvalidModelSpecError):
            build_terms(np.zeros((0, 2)), 2)


class TestTermNames:

    def test_joined_with_star(self):
        terms = build_terms('full', 3)
        names = term_names(terms, ('A', 'B', 'C'))
        assert names == ('A', 'B', 'C', 'A*B', 'A*C', 'B*C', 'A*B*C')
