"""
ANOVA solver.

Public API:
    anovan(y, group, ...) -> AnovaSolution
"""

from typing import Any

import numpy as np

from pyfitstats.core.compute.timing import Timer
from pyfitstats.core.exceptions import UnsupportedSumOfSquaresType
from pyfitstats.core.result import Result
from pyfitstats.core.validation import check_alpha
from pyfitstats.anova._common import AnovaParams, AnovaTableRow
from pyfitstats.anova._contrasts import build_design_blocks
from pyfitstats.anova._ss import compute_f_and_p, compute_ss_type1, total_sum_of_squares
from pyfitstats.anova._terms import build_terms, term_names
from pyfitstats.anova.design import AnovaDesign
from pyfitstats.anova.solution import AnovaSolution

_TYPE1_ALIASES = ('1', 'i')


def _resolve_sstype(sstype: Any) -> int:
    """Only sequential sums of squares are implemented."""
    if isinstance(sstype, (bool, np.bool_)):
        pass
    elif isinstance(sstype, (int, np.integer)) and sstype == 1:
        return 1
    elif isinstance(sstype, str) and sstype.strip().lower() in _TYPE1_ALIASES:
        return 1
    raise UnsupportedSumOfSquaresType(
        f"sstype: only sequential (type 1) sums of squares are supported, got {sstype!r}",
        sstype=sstype,
    )


def _level_name(value: Any) -> str:
    if isinstance(value, (float, np.floating)) and float(value).is_integer():
        return str(int(value))
    return str(value)


def anovan(
    y: Any,
    group: Any,
    *,
    model: Any = 'linear',
    sstype: Any = 1,
    varnames: Any = None,
    alpha: float = 0.05,
    verbose: bool = False,
) -> AnovaSolution:
    """
    N-way Analysis of Variance with sequential (Type I) sums of squares.

    Factors are deviation (sum-to-zero) coded. Terms enter the model in the
    order of the terms matrix, so for unbalanced designs the sums of
    squares depend on that order; the residual and total rows do not.

    Args:
        y: Response (vector of real values). NaN/Inf responses and their
            group rows are dropped.
        group: Grouping variables: a dict {name: labels}, an (n, N) array of
            labels, a single label vector, or a list of label vectors
        model: 'linear', 'interaction', 'full', an integer maximum
            interaction order, or an explicit (T, N) 0/1 terms matrix
        sstype: Sum-of-squares type; only 1 (also '1' or 'I') is supported
        varnames: Factor names for the table (default dict keys or X1..XN)
        alpha: Significance level used by significant_terms
        verbose: Print progress messages

    Returns:
        AnovaSolution

    Raises:
        UnsupportedSumOfSquaresType: For sstype other than 1
        InvalidSignificanceLevel: If alpha is not in (0, 1)
        DimensionMismatchError: If group rows do not match len(y)
        InvalidModelSpecError: For an invalid model specification
        InvalidTermOrderError: For a terms matrix listing interactions above
            lower-order terms
        ValidationError: For too few observations, single-level factors or
            a varnames count mismatch

    Examples:
        >>> sol = anovan(salary, {'gender': gender, 'degree': degree},
        ...              model='interaction')
        >>> sol.p_values
        >>> print(sol.summary())
    """
    timer = Timer()
    timer.start()
    warnings_list = []

    sstype = _resolve_sstype(sstype)
    alpha = check_alpha(alpha)

    with timer.section('design'):
        design = AnovaDesign.for_anovan(y, group, varnames=varnames)
        terms = build_terms(model, design.n_factors)
        names = term_names(terms, design.varnames)

    if verbose:
        print(f"ANOVA: n={design.n} ({design.n_removed} removed), "
              f"factors={list(design.varnames)}, terms={list(names)}")

    with timer.section('design_matrix'):
        blocks = build_design_blocks(design.factors, terms)

    y_arr = design.y
    sst = total_sum_of_squares(y_arr)
    dft = design.n - 1

    with timer.section('sequential_fits'):
        seq = compute_ss_type1(y_arr, blocks.blocks, sst)

    if seq.rank_deficient_terms:
        deficient = ', '.join(names[j] for j in seq.rank_deficient_terms)
        warnings_list.append(
            f"Design is rank deficient after adding: {deficient}. "
            "Some factor combinations are not observed; degrees of freedom "
            "are nominal."
        )

    df = np.array(blocks.df, dtype=int)
    dfe = int(dft - df.sum())
    sse = seq.sse
    with np.errstate(divide='ignore', invalid='ignore'):
        mse = sse / dfe if dfe > 0 else np.nan
        mean_sq = seq.sum_sq / df

    if dfe <= 0:
        warnings_list.append(
            f"No residual degrees of freedom (dfe={dfe}); F statistics are undefined"
        )

    rows = []
    f_values = np.full(len(df), np.nan)
    p_values = np.full(len(df), np.nan)
    for j, name in enumerate(names):
        f_val, p_val = compute_f_and_p(seq.sum_sq[j], int(df[j]), mse, dfe)
        if f_val is not None:
            f_values[j] = f_val
            p_values[j] = p_val
        rows.append(AnovaTableRow(
            term=name,
            sum_sq=float(seq.sum_sq[j]),
            df=int(df[j]),
            mean_sq=float(mean_sq[j]),
            f_value=f_val,
            p_value=p_val,
        ))
    rows.append(AnovaTableRow(
        term='Error', sum_sq=float(sse), df=dfe, mean_sq=float(mse),
        f_value=None, p_value=None,
    ))
    rows.append(AnovaTableRow(
        term='Total', sum_sq=float(sst), df=dft, mean_sq=None,
        f_value=None, p_value=None,
    ))

    timer.stop()

    params = AnovaParams(
        table=tuple(rows),
        sstype=sstype,
        n_obs=design.n,
        terms=terms,
        term_names=names,
        sum_sq=seq.sum_sq,
        df=df,
        mean_sq=mean_sq,
        f_values=f_values,
        p_values=p_values,
        sse=float(sse),
        dfe=dfe,
        mse=float(mse),
        sst=float(sst),
        dft=dft,
        coefficients=seq.coefficients,
        residuals=seq.residuals,
        n_levels=blocks.n_levels,
        level_names=tuple(tuple(_level_name(v) for v in lv) for lv in blocks.levels),
        varnames=design.varnames,
        column_counts=blocks.column_counts,
        rank=seq.rank,
        alpha=alpha,
    )

    if verbose:
        print(f"Residual SS {sse:.6g} on {dfe} df; "
              f"significant at {alpha:g}: {[n for n, p in zip(names, p_values) if p < alpha]}")

    result = Result(
        params=params,
        info={
            'method': 'qr',
            'sstype': sstype,
            'design_type': f"{design.n_factors}-way",
            'n_removed': design.n_removed,
            'rank': seq.rank,
            'n_columns': int(sum(b.shape[1] for b in blocks.blocks)),
        },
        timing=timer.result(),
        backend_name='cpu_qr',
        warnings=tuple(warnings_list),
    )

    return AnovaSolution(_result=result)
