"""
Coefficient inference: standard errors, t-statistics, two-sided p-values.

Pure function of the variance-covariance matrix, the coefficients and the
residual degrees of freedom. Degenerate values are NOT masked: a zero
standard error yields an infinite (or NaN, for 0/0) t-statistic and the
matching p-value of 0 (or NaN), exactly as IEEE arithmetic dictates.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any
import numpy as np
from numpy.typing import NDArray

from pylinreg.core.protocols import StudentTDistribution
from pylinreg.core.compute.distributions import two_sided_p_value


@dataclass(frozen=True)
class InferenceParams:
    """
    Per-coefficient test statistics, aligned with the coefficients.

    Attributes:
        standard_errors: sqrt(diag(vcov))
        t_statistics: coefficients / standard_errors
        p_values: 2 * P(T_df > |t|)
    """
    standard_errors: NDArray[np.floating[Any]]
    t_statistics: NDArray[np.floating[Any]]
    p_values: NDArray[np.floating[Any]]


def compute_inference(
    coefficients: NDArray[np.floating[Any]],
    variance_covariance: NDArray[np.floating[Any]],
    df_residual: int,
    dist: StudentTDistribution | None = None,
) -> tuple[InferenceParams, list[str]]:
    """
    Compute standard errors, t-statistics and p-values.

    Args:
        coefficients: Estimated coefficients (p,)
        variance_covariance: sigma^2 (X'X)^-1 (p x p)
        df_residual: n - p
        dist: Student-t implementation; scipy's by default

    Returns:
        (InferenceParams, warnings_list)
    """
    warnings_list: list[str] = []

    with np.errstate(divide='ignore', invalid='ignore'):
        standard_errors = np.sqrt(np.diag(variance_covariance))
        t_statistics = coefficients / standard_errors

    p_values = two_sided_p_value(t_statistics, df_residual, dist)

    zero_se = np.flatnonzero(standard_errors == 0.0)
    if zero_se.size:
        warnings_list.append(
            f"zero standard error for coefficient(s) {zero_se.tolist()}; "
            f"t-statistics are infinite or undefined"
        )

    for arr in (standard_errors, t_statistics, p_values):
        arr.flags.writeable = False

    return InferenceParams(
        standard_errors=standard_errors,
        t_statistics=t_statistics,
        p_values=p_values,
    ), warnings_list
