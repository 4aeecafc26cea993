"""
Core infrastructure for pylinreg.

This module provides shared abstractions, utilities, and compute
infrastructure used by the regression engine.

Key components:
    protocols: Backend, StudentTDistribution protocols
    result: Generic Result[P] envelope
    exceptions: Exception hierarchy
    validation: Input validators
    compute: Timing, tolerances, distributions, linear algebra kernels
"""

from pylinreg.core.protocols import Backend, StudentTDistribution
from pylinreg.core.result import Result
from pylinreg.core.exceptions import (
    PyLinRegError,
    ValidationError,
    DimensionError,
    EmptyInputError,
    MissingValueError,
    InsufficientDegreesOfFreedomError,
    IncompatibleDesignError,
    NumericalError,
    SingularMatrixError,
    SingularSystemError,
)

__all__ = [
    # Protocols
    "Backend",
    "StudentTDistribution",
    # Result
    "Result",
    # Exceptions
    "PyLinRegError",
    "ValidationError",
    "DimensionError",
    "EmptyInputError",
    "MissingValueError",
    "InsufficientDegreesOfFreedomError",
    "IncompatibleDesignError",
    "NumericalError",
    "SingularMatrixError",
    "SingularSystemError",
]
