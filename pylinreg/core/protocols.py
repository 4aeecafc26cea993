"""
Core protocols for pylinreg.

These define structural interfaces that implementations must satisfy.
We use Protocol (structural typing) rather than ABC (nominal typing) so
a caller can plug in any object with the right shape.

Design Principles:
    - Minimal contracts: prescribe only what's truly universal
    - Type-safe: use generics to preserve type information through pipelines
"""

from typing import Protocol, TypeVar, runtime_checkable, TYPE_CHECKING

import numpy as np
from numpy.typing import ArrayLike, NDArray

if TYPE_CHECKING:
    from pylinreg.core.result import Result

P = TypeVar('P', covariant=True)  # Parameter payload type
D = TypeVar('D', contravariant=True)  # Design type


@runtime_checkable
class Backend(Protocol[D, P]):
    """
    Protocol for computational backends.

    Each backend knows how to take a design and produce a parameter
    payload wrapped in a Result envelope.

    Backends are stateless: all configuration is passed via the design
    or at construction time. This makes them easy to test and swap.

    Type Parameters:
        D: The design type this backend accepts
        P: The parameter payload type this backend produces
    """

    @property
    def name(self) -> str:
        """
        Backend identifier.

        Convention: '{device}_{algorithm}', e.g. 'cpu_normal_eq'
        """
        ...

    def solve(self, design: D) -> 'Result[P]':
        """
        Execute the statistical computation.

        Raises:
            NumericalError: If numerical issues prevent solution (singularity, etc.)
            ValidationError: If design is invalid for this backend
        """
        ...


@runtime_checkable
class StudentTDistribution(Protocol):
    """
    Student-t special functions used by inference and prediction.

    Conventions:
        sf(x, df) is the UPPER tail P(T_df > x).
        ppf(q, df) is the quantile: the x with P(T_df <= x) = q.

    Both accept scalars or arrays and broadcast like numpy ufuncs.
    """

    @property
    def name(self) -> str:
        ...

    def sf(self, x: ArrayLike, df: float) -> NDArray[np.floating]:
        ...

    def ppf(self, q: ArrayLike, df: float) -> NDArray[np.floating]:
        ...
