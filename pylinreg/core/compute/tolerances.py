"""
Numerical tolerances.

Defines precision expectations for the double-precision normal-equations
path and the thresholds the fitter uses to reject or flag a Gram matrix.

Used by the fitter, the linear algebra kernels, and the test suite.
"""

from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True)
class ToleranceTier:
    """Tolerance specification for numerical comparison."""
    rtol: float
    atol: float
    name: str
    description: str


# Well-conditioned problems: agreement with an independent OLS reference
CPU_FP64 = ToleranceTier(
    rtol=1e-9,
    atol=1e-9,
    name='cpu_fp64',
    description='CPU double precision, well-conditioned',
)

# Forming X'X squares the condition number of X, so accuracy degrades
# quickly once cond(X'X) grows.
CPU_FP64_ILL_CONDITIONED = ToleranceTier(
    rtol=1e-4,
    atol=1e-6,
    name='cpu_fp64_ill_conditioned',
    description='CPU double precision, ill-conditioned (cond(X\'X) > 1e10)',
)

# X'X is treated as singular when its reciprocal condition number falls
# below machine epsilon (the criterion R's solve() applies).
SINGULAR_RCOND = float(np.finfo(np.float64).eps)

# Invertible, but with cond(X'X) above this, fewer than ~6 significant
# digits of the coefficients can be trusted.
ILL_CONDITIONED_THRESHOLD = 1e10


def select_tolerance(is_ill_conditioned: bool = False) -> ToleranceTier:
    """Select the tolerance tier for a fit."""
    if is_ill_conditioned:
        return CPU_FP64_ILL_CONDITIONED
    return CPU_FP64
