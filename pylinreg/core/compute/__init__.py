"""
Shared compute infrastructure for pylinreg.

This module provides timing utilities, tolerances, special functions and
linear algebra kernels used by the regression backends.

IMPORTANT: This is NOT where regression backends live. Those go in
regression/backends/. This module contains shared NUMERIC infrastructure.

Submodules:
    timing: Execution timing utilities
    tolerances: Numerical tolerance tiers and singularity thresholds
    distributions: Student-t CDF/quantile primitive
    linalg: Linear algebra kernels (rank screening, Gram inversion)
"""

from pylinreg.core.compute.timing import Timer
from pylinreg.core.compute.distributions import (
    ScipyStudentT,
    DEFAULT_T_DISTRIBUTION,
    two_sided_p_value,
    critical_value,
)

__all__ = [
    # Timing
    "Timer",
    # Distributions
    "ScipyStudentT",
    "DEFAULT_T_DISTRIBUTION",
    "two_sided_p_value",
    "critical_value",
]
