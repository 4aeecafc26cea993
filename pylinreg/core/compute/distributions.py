"""
Student-t distribution primitives.

Inference (p-values) and prediction (critical values) only ever talk to
the StudentTDistribution protocol, so the special-function implementation
can be swapped without touching the fitter or predictor. The default
delegates to scipy.stats.t (regularized incomplete beta under the hood).
"""

from __future__ import annotations

from typing import Any
import numpy as np
from numpy.typing import ArrayLike, NDArray
from scipy import stats as sp_stats

from pylinreg.core.protocols import StudentTDistribution
from pylinreg.core.validation import check_level


class ScipyStudentT:
    """StudentTDistribution backed by scipy.stats.t."""

    @property
    def name(self) -> str:
        return 'scipy'

    def sf(self, x: ArrayLike, df: float) -> NDArray[np.floating[Any]]:
        """Upper tail P(T_df > x)."""
        return np.asarray(sp_stats.t.sf(x, df), dtype=np.float64)

    def ppf(self, q: ArrayLike, df: float) -> NDArray[np.floating[Any]]:
        """Quantile function (inverse CDF)."""
        return np.asarray(sp_stats.t.ppf(q, df), dtype=np.float64)


DEFAULT_T_DISTRIBUTION: StudentTDistribution = ScipyStudentT()


def two_sided_p_value(
    t: ArrayLike,
    df: float,
    dist: StudentTDistribution | None = None,
) -> NDArray[np.floating[Any]]:
    """
    Two-sided p-value 2 * P(T_df > |t|).

    Equal to 2 * (1 - CDF(|t|)) but evaluated on the upper tail directly,
    which keeps precision for large |t| where 1 - CDF cancels to zero.

    IEEE semantics are preserved: |t| = inf gives 0, NaN gives NaN.
    """
    dist = dist or DEFAULT_T_DISTRIBUTION
    t = np.asarray(t, dtype=np.float64)
    return 2.0 * dist.sf(np.abs(t), df)


def critical_value(
    level: float,
    df: float,
    dist: StudentTDistribution | None = None,
) -> float:
    """
    Two-sided critical value t_{1 - alpha/2, df} with alpha = 1 - level.

    Raises:
        ValidationError: If level is not in (0, 1)
    """
    level = check_level(level)
    dist = dist or DEFAULT_T_DISTRIBUTION
    alpha = 1.0 - level
    return float(dist.ppf(1.0 - alpha / 2.0, df))
