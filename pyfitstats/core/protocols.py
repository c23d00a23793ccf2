"""
Core protocols for pyfitstats.

These define structural interfaces that domain-specific implementations
must satisfy. Protocol (structural typing) is used rather than ABC so that
backends need not inherit from anything.
"""

from typing import Protocol, TypeVar, runtime_checkable

from pyfitstats.core.result import Result

D = TypeVar('D', contravariant=True)  # Design type
P = TypeVar('P', covariant=True)  # Parameter payload type


@runtime_checkable
class Backend(Protocol[D, P]):
    """
    Protocol for computational backends.

    Each backend takes a validated domain design (e.g. SampleDesign)
    and produces a domain-specific parameter payload wrapped in Result.
    Backends are stateless; configuration is passed to solve().

    Type Parameters:
        D: The design type this backend accepts
        P: The parameter payload type this backend produces
    """

    @property
    def name(self) -> str:
        """
        Backend identifier.

        Convention: '{device}_{algorithm}'
        Examples: 'cpu_simplex', 'cpu_qr'
        """
        ...

    def solve(self, design: D) -> Result[P]:
        """
        Execute the statistical computation.

        Raises:
            NumericalError: If numerical issues prevent a solution
            ValidationError: If design is invalid for this backend
        """
        ...
