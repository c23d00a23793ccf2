"""
Tests for frequency-weighted fitting.

Validates:
    - Integer frequencies give the same fit as the repeated sample
    - Unit frequencies reproduce the unweighted fit
    - Zero and NaN frequencies drop their rows
    - Frequency validation (negative, infinite, wrong length, non-numeric)
    - Frequencies carried through fitdist(), gevfit() and negloglik()
    - Weighted sample summaries used for starting values
"""

import numpy as np
import pytest

from pyfitstats.core.exceptions import (
    ArgumentTypeError,
    DimensionMismatchError,
    ValidationError,
)
from pyfitstats.distributions import fit, fitdist, gevfit
from pyfitstats.distributions._weights import (
    total_weight,
    weighted_mean,
    weighted_median,
    weighted_std,
)
from pyfitstats.distributions.families.beta import BETA


def _samples(rng):
    return {
        'Normal': rng.normal(3.0, 2.0, size=40),
        'GeneralizedExtremeValue': rng.gumbel(10.0, 2.0, size=40),
        'Weibull': rng.weibull(1.5, size=40) * 3.0,
        'tLocationScale': rng.standard_t(4.0, size=40),
        'Beta': rng.beta(2.0, 3.0, size=40),
    }


FAMILIES = ['Normal', 'GeneralizedExtremeValue', 'Weibull', 'tLocationScale', 'Beta']


# ═══════════════════════════════════════════════════════════════════════
# Equivalence with repeated observations
# ═══════════════════════════════════════════════════════════════════════


class TestRepeatedSample:
    """freq=[2, 1, 3, ...] fits exactly as the sample with rows repeated."""

    @pytest.mark.parametrize("family", FAMILIES)
    def test_matches_repeated_sample(self, rng, family):
        x = _samples(rng)[family]
        freq = np.tile([2, 1, 3, 1], len(x) // 4)
        weighted = fit(x, family, freq=freq)
        repeated = fit(np.repeat(x, freq), family)

        np.testing.assert_allclose(weighted.params, repeated.params, rtol=1e-5, atol=1e-7)
        assert weighted.nll == pytest.approx(repeated.nll, rel=1e-7)
        np.testing.assert_allclose(weighted.covariance, repeated.covariance, rtol=1e-3)
        np.testing.assert_allclose(weighted.ci, repeated.ci, rtol=1e-3, atol=1e-6)
        assert weighted.n_obs == len(np.repeat(x, freq))
        assert weighted.n_obs == repeated.n_obs

    def test_first_row_doubled(self, rng):
        x = rng.normal(size=30)
        freq = np.ones(30)
        freq[0] = 2
        weighted = fit(x, 'Normal', freq=freq)
        repeated = fit(np.concatenate([[x[0]], x]), 'Normal')
        np.testing.assert_allclose(weighted.params, repeated.params, rtol=1e-6)
        assert weighted.n_obs == 31

    def test_unit_frequencies(self, rng):
        x = rng.weibull(2.0, size=60) * 4.0
        plain = fit(x, 'Weibull')
        unit = fit(x, 'Weibull', freq=np.ones(60))
        np.testing.assert_allclose(unit.params, plain.params)
        assert unit.nll == pytest.approx(plain.nll)
        assert unit.n_obs == plain.n_obs == 60

    def test_beta_censored_counts_weighted(self, beta_boundary_sample):
        freq = np.ones(51)
        freq[0] = 3
        sol = fit(beta_boundary_sample, 'Beta', freq=freq)
        assert sol.n_censored == (3, 1)
        assert sol.likelihood_mode == 'boundary_corrected'
        repeated = fit(np.concatenate([[0.0, 0.0], beta_boundary_sample]), 'Beta')
        np.testing.assert_allclose(sol.params, repeated.params, rtol=1e-5)
        np.testing.assert_allclose(sol.covariance, repeated.covariance, rtol=1e-4)

    def test_beta_covariance_weighted_scores(self, beta_boundary_sample):
        freq = np.tile([1.0, 2.0, 3.0], 17)
        params = np.array([0.5, 0.7])
        _, cov_w = BETA.negloglik_and_covariance(params, beta_boundary_sample, freq)
        _, cov_r = BETA.negloglik_and_covariance(
            params, np.repeat(beta_boundary_sample, freq.astype(int)))
        np.testing.assert_allclose(cov_w, cov_r, rtol=1e-6)


# ═══════════════════════════════════════════════════════════════════════
# Dropped rows
# ═══════════════════════════════════════════════════════════════════════


class TestDroppedRows:

    def test_zero_frequency_ignored(self, rng):
        x = np.concatenate([rng.normal(size=40), [250.0]])
        freq = np.concatenate([np.ones(40), [0.0]])
        sol = fit(x, 'Normal', freq=freq)
        plain = fit(x[:40], 'Normal')
        np.testing.assert_allclose(sol.params, plain.params, rtol=1e-6)
        assert sol.n_obs == 40
        assert sol.info['n_removed'] == 1
        assert len(sol.input_data) == 40

    def test_zero_frequency_outside_support_ignored(self):
        """A dropped row is not checked against the support."""
        x = np.array([0.2, 0.4, 0.6, 1.5])
        sol = fit(x, 'Beta', freq=[1, 2, 1, 0])
        assert sol.n_obs == 4

    def test_nan_frequency_dropped(self, rng):
        x = rng.normal(size=20)
        freq = np.ones(20)
        freq[3] = np.nan
        sol = fit(x, 'Normal', freq=freq)
        assert sol.info['n_removed'] == 1
        assert sol.n_obs == 19

    def test_nan_value_drops_its_frequency(self, rng):
        x = np.concatenate([rng.normal(size=20), [np.nan]])
        freq = np.concatenate([np.ones(20), [5.0]])
        sol = fit(x, 'Normal', freq=freq)
        assert sol.n_obs == 20
        np.testing.assert_array_equal(sol.frequencies, np.ones(20))

    def test_all_frequencies_zero(self):
        with pytest.raises(ValidationError, match="no observations"):
            fit([1.0, 2.0, 3.0], 'Normal', freq=[0, 0, 0])


# ═══════════════════════════════════════════════════════════════════════
# Validation
# ═══════════════════════════════════════════════════════════════════════


class TestFrequencyValidation:

    def test_negative(self):
        with pytest.raises(ValidationError, match="non-negative"):
            fit([1.0, 2.0, 3.0], 'Normal', freq=[1, -1, 2])

    def test_infinite(self):
        with pytest.raises(ValidationError, match="finite"):
            fit([1.0, 2.0, 3.0], 'Normal', freq=[1, np.inf, 2])

    def test_length_mismatch(self):
        with pytest.raises(DimensionMismatchError):
            fit([1.0, 2.0, 3.0], 'Normal', freq=[1, 2])

    def test_non_numeric(self):
        with pytest.raises(ArgumentTypeError):
            fit([1.0, 2.0, 3.0], 'Normal', freq=['a', 'b', 'c'])

    def test_column_vector_accepted(self, rng):
        x = rng.normal(size=12)
        freq = np.arange(1, 13)
        row = fit(x, 'Normal', freq=freq)
        col = fit(x, 'Normal', freq=freq.reshape(-1, 1))
        np.testing.assert_allclose(col.params, row.params)

    def test_fractional_frequencies(self, rng):
        x = rng.normal(size=30)
        sol = fit(x, 'Normal', freq=np.full(30, 0.5))
        assert sol.n_obs == 15
        np.testing.assert_allclose(sol.params[0], np.mean(x), rtol=1e-5)


# ═══════════════════════════════════════════════════════════════════════
# Entry points
# ═══════════════════════════════════════════════════════════════════════


class TestEntryPoints:

    def test_fitdist_negloglik_uses_frequencies(self, rng):
        x = rng.gumbel(5.0, 1.5, size=30)
        freq = np.tile([1, 4, 2], 10)
        pd = fitdist(x, 'GEV', freq=freq)
        repeated = fit(np.repeat(x, freq), 'GEV')
        assert pd.negloglik() == pytest.approx(pd.fit.nll, rel=1e-12)
        assert pd.negloglik() == pytest.approx(repeated.nll, rel=1e-7)
        np.testing.assert_array_equal(pd.input_freq, freq)

    def test_gevfit_frequencies(self, rng):
        x = rng.gumbel(0.0, 1.0, size=40)
        freq = np.tile([1, 2], 20)
        params, ci = gevfit(x, freq=freq)
        params_rep, ci_rep = gevfit(np.repeat(x, freq))
        np.testing.assert_allclose(params, params_rep, rtol=1e-5, atol=1e-7)
        np.testing.assert_allclose(ci, ci_rep, rtol=1e-3, atol=1e-6)

    def test_solution_frequencies(self, rng):
        x = rng.normal(size=10)
        freq = np.arange(1.0, 11.0)
        sol = fit(x, 'Normal', freq=freq)
        np.testing.assert_array_equal(sol.frequencies, freq)
        assert sol.n_obs == 55

    def test_default_frequencies_are_ones(self, rng):
        sol = fit(rng.normal(size=10), 'Normal')
        np.testing.assert_array_equal(sol.frequencies, np.ones(10))


# ═══════════════════════════════════════════════════════════════════════
# Weighted summaries
# ═══════════════════════════════════════════════════════════════════════


class TestWeightedSummaries:

    @pytest.mark.parametrize("freq", [
        [1, 1, 1, 1, 1],
        [2, 1, 1, 1, 1],
        [1, 3, 1, 2, 1],
        [4, 1, 1, 1, 1],
        [1, 1, 1, 1, 6],
    ])
    def test_median_matches_repeated(self, freq):
        x = np.array([3.0, -1.0, 7.0, 2.0, 5.0])
        w = np.array(freq, dtype=float)
        expected = np.median(np.repeat(x, freq))
        assert weighted_median(x, w) == pytest.approx(expected)

    def test_mean_and_std_match_repeated(self, rng):
        x = rng.normal(size=15)
        freq = rng.integers(1, 5, size=15)
        w = freq.astype(float)
        expanded = np.repeat(x, freq)
        assert weighted_mean(x, w) == pytest.approx(np.mean(expanded))
        assert weighted_std(x, w) == pytest.approx(np.std(expanded, ddof=1))

    def test_total_weight_type(self):
        assert isinstance(total_weight(np.array([1.0, 2.0])), int)
        assert total_weight(np.array([0.5, 1.0])) == 1.5
