"""
Tests for the distribution family registry and the FitSolution wrapper.

Validates:
    - Name and alias resolution (case, spaces, hyphens ignored)
    - Unknown names and wrong argument types
    - Registration conflicts
    - FitSolution accessors, summary and serialization
    - Non-convergence is reported as a RuntimeWarning
"""

import numpy as np
import pytest

from pyfitstats.core.exceptions import UnknownFamilyError
from pyfitstats.distributions import (
    DistributionFamily,
    fit,
    list_families,
    register_family,
    resolve_family,
)
from pyfitstats.distributions.families import Normal
from pyfitstats.distributions.families.beta import BETA


# ═══════════════════════════════════════════════════════════════════════
# Registry
# ═══════════════════════════════════════════════════════════════════════


class TestResolveFamily:

    @pytest.mark.parametrize("name, expected", [
        ('Beta', 'Beta'),
        ('BETA', 'Beta'),
        ('gev', 'GeneralizedExtremeValue'),
        ('Generalized Extreme Value', 'GeneralizedExtremeValue'),
        ('GeneralizedExtremeValueDistribution', 'GeneralizedExtremeValue'),
        ('wbl', 'Weibull'),
        ('t location-scale', 'tLocationScale'),
        ('t_location_scale', 'tLocationScale'),
        ('Gaussian', 'Normal'),
    ])
    def test_names_and_aliases(self, name, expected):
        assert resolve_family(name).name == expected

    def test_instance_passthrough(self):
        assert resolve_family(BETA) is BETA

    def test_unknown(self):
        with pytest.raises(UnknownFamilyError) as exc_info:
            resolve_family('Lognormal')
        assert exc_info.value.available == list_families()

    def test_unknown_is_value_error(self):
        with pytest.raises(ValueError):
            resolve_family('')

    def test_wrong_type(self):
        with pytest.raises(TypeError, match="family must be str"):
            resolve_family(1.5)

    def test_registration_order(self):
        assert list_families()[:5] == (
            'Beta', 'GeneralizedExtremeValue', 'Normal', 'tLocationScale', 'Weibull',
        )

    def test_conflicting_registration(self):
        class FakeBeta(Normal):
            @property
            def name(self):
                return 'Beta'

        with pytest.raises(ValueError, match="already registered"):
            register_family(FakeBeta())
        assert resolve_family('Beta') is BETA

    def test_families_are_subclasses(self):
        for name in list_families():
            assert isinstance(resolve_family(name), DistributionFamily)


# ═══════════════════════════════════════════════════════════════════════
# FitSolution
# ═══════════════════════════════════════════════════════════════════════


class TestFitSolution:

    @pytest.fixture
    def solution(self, rng):
        return fit(rng.weibull(2.0, size=300) * 4.0, 'Weibull')

    def test_accessors(self, solution):
        assert solution.family == 'Weibull'
        assert solution.parameter_names == ('lambda', 'k')
        assert solution.params.shape == (2,)
        assert solution.covariance.shape == (2, 2)
        assert solution.n_obs == 300
        assert solution.alpha == 0.05
        assert solution.backend_name == 'cpu_simplex'
        assert solution.n_iter > 0

    def test_standard_errors(self, solution):
        np.testing.assert_allclose(
            solution.standard_errors, np.sqrt(np.diag(solution.covariance))
        )

    def test_info_keys(self, solution):
        for key in ('method', 'converged', 'iterations', 'n_function_evals',
                    'objective_value', 'initial_parameters', 'likelihood_mode'):
            assert key in solution.info
        assert solution.info['objective_value'] == pytest.approx(solution.nll)

    def test_timing_sections(self, solution):
        for key in ('total_seconds', 'optimization', 'covariance', 'confidence_intervals'):
            assert key in solution.timing

    def test_summary(self, solution):
        text = solution.summary()
        assert 'Weibull Maximum-Likelihood Fit' in text
        assert 'lambda' in text
        assert '95% Lower' in text

    def test_to_dict(self, solution):
        d = solution.to_dict()
        assert d['family'] == 'Weibull'
        assert len(d['params']) == 2
        assert np.array(d['ci']).shape == (2, 2)

    def test_to_distribution(self, solution):
        pd = solution.to_distribution()
        assert pd.is_fitted
        np.testing.assert_array_equal(pd.parameter_values, solution.params)
        np.testing.assert_array_equal(pd.paramci(), solution.ci)

    def test_repr(self, solution):
        assert repr(solution).startswith('FitSolution(Weibull')

    def test_budget_warning(self, rng):
        from pyfitstats.core.compute.optimization import OptimizerOptions
        with pytest.warns(RuntimeWarning, match="did not converge"):
            sol = fit(rng.normal(size=100), 'Normal', options=OptimizerOptions(max_iter=2))
        assert not sol.converged
        assert any('did not converge' in w for w in sol.warnings)


class TestBackend:

    def test_satisfies_protocol(self):
        from pyfitstats.core import Backend
        from pyfitstats.distributions.backends import CPUSimplexBackend
        backend = CPUSimplexBackend()
        assert isinstance(backend, Backend)
        assert backend.name == 'cpu_simplex'

    def test_solve_directly(self, rng):
        from pyfitstats.distributions import SampleDesign
        from pyfitstats.distributions.backends import CPUSimplexBackend
        design = SampleDesign.for_family(rng.normal(size=50), 'Normal')
        result = CPUSimplexBackend().solve(design, alpha=0.1)
        assert result.params.alpha == 0.1
        assert result.params.ci.shape == (2, 2)
        assert result.converged

