"""
CPU backend for maximum-likelihood distribution fitting.

Nelder-Mead simplex search on the family's negative log-likelihood in
search space (log scale for positive parameters), followed by the
asymptotic covariance and Wald intervals at the estimate.
"""

import numpy as np

from pyfitstats.core.compute.optimization import OptimizerOptions, minimize_simplex
from pyfitstats.core.compute.timing import Timer
from pyfitstats.core.exceptions import SingularMatrixError
from pyfitstats.core.result import Result
from pyfitstats.distributions._ci import wald_intervals
from pyfitstats.distributions._common import FitParams
from pyfitstats.distributions._objective import LikelihoodObjective
from pyfitstats.distributions.design import SampleDesign


class CPUSimplexBackend:
    """
    CPU backend for distribution fitting.

    Stateless; all configuration is passed to solve().
    """

    @property
    def name(self) -> str:
        return 'cpu_simplex'

    def solve(
        self,
        design: SampleDesign,
        *,
        alpha: float = 0.05,
        options: OptimizerOptions | None = None,
    ) -> Result[FitParams]:
        """
        Fit design.family to design.data, weighted by design.freq, by
        maximum likelihood.

        Parameters
        ----------
        design : SampleDesign
            Validated sample and family
        alpha : float
            Significance level for the confidence intervals (validated)
        options : OptimizerOptions or None
            Stopping criteria; falls back to the family's defaults, then the
            package defaults

        Returns
        -------
        Result[FitParams]
        """
        timer = Timer()
        timer.start()
        warnings_list = []
        family = design.family

        if options is None:
            options = family.default_options() or OptimizerOptions()

        with timer.section('objective_setup'):
            objective = LikelihoodObjective(family, design.data, design.freq)
            context = objective.context

        with timer.section('initial_parameters'):
            theta0 = objective.get_initial_parameters()

        with timer.section('optimization'):
            opt = minimize_simplex(objective.compute_objective, theta0, options)

        with timer.section('parameter_extraction'):
            estimates, nll = objective.extract_parameters(opt.x)

        if not opt.converged:
            warnings_list.append(f"Optimization did not converge: {opt.message}")

        with timer.section('covariance'):
            try:
                covariance = family.covariance(estimates, design.data, context, design.freq)
            except SingularMatrixError as e:
                covariance = np.full((len(estimates), len(estimates)), np.nan)
                warnings_list.append(f"Covariance unavailable: {e}")

        variances = np.diag(covariance)
        if np.all(np.isfinite(covariance)) and np.any(variances <= 0):
            warnings_list.append(
                "Observed information is not positive definite at the estimate; "
                "affected confidence limits are NaN"
            )

        with timer.section('confidence_intervals'):
            ci = wald_intervals(estimates, covariance, alpha, family.log_ci)

        timer.stop()

        params = FitParams(
            family=family.name,
            parameter_names=family.parameter_names,
            estimates=estimates,
            covariance=covariance,
            ci=ci,
            alpha=alpha,
            nll=nll,
            n_obs=design.n_obs,
            likelihood_mode=context.likelihood_mode,
            n_censored=context.n_censored,
        )

        return Result(
            params=params,
            info={
                'method': 'nelder-mead',
                'converged': opt.converged,
                'iterations': opt.n_iter,
                'n_function_evals': opt.n_fev,
                'objective_value': opt.fun,
                'initial_parameters': family.from_search(theta0),
                'message': opt.message,
                'likelihood_mode': context.likelihood_mode,
                'n_removed': design.n_removed,
            },
            timing=timer.result(),
            backend_name=self.name,
            warnings=tuple(warnings_list),
        )
