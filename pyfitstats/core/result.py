"""
Result envelope shared by the distribution fitter and the ANOVA engine.

Backends return Result[P] where P is the domain payload (FitParams,
AnovaParams). Solution classes wrap it and add accessors.

Conventions:
    - info carries method metadata; iterative methods set info['converged']
    - timing comes from Timer.result(), or None when not measured
    - warnings collects non-fatal issues instead of raising
"""

from dataclasses import dataclass, field
from typing import TypeVar, Generic, Any

P = TypeVar('P')  # Parameter payload type


@dataclass(frozen=True)
class Result(Generic[P]):
    """
    Immutable result envelope for statistical computations.

    Type Parameters:
        P: The domain-specific parameter payload type

    Attributes:
        params: Domain-specific parameters (estimates, ANOVA table, etc.)
        info: Structured metadata (method, convergence, diagnostics)
        timing: Execution timing breakdown, or None if not measured
        backend_name: Identifier of the backend that produced this result
        warnings: Non-fatal issues encountered during computation

    Examples:
        >>> # Direct method (no convergence notion)
        >>> Result(
        ...     params=AnovaParams(...),
        ...     info={'method': 'qr', 'sstype': 1},
        ...     timing={'total_seconds': 0.01},
        ...     backend_name='cpu_qr'
        ... )

        >>> # Iterative method
        >>> Result(
        ...     params=FitParams(...),
        ...     info={'method': 'nelder-mead', 'converged': True, 'iterations': 58},
        ...     timing={'total_seconds': 0.02, 'optimization': 0.018},
        ...     backend_name='cpu_simplex'
        ... )
    """
    params: P
    info: dict[str, Any]
    timing: dict[str, float] | None
    backend_name: str
    warnings: tuple[str, ...] = field(default_factory=tuple)

    @property
    def converged(self) -> bool:
        """
        Whether the producing algorithm met its stopping criteria.

        Direct methods have no convergence notion and report True.
        """
        return bool(self.info.get('converged', True))
