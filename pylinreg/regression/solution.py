"""
Regression solution types.

Contains the parameter payload computed by backends and the user-facing,
immutable fitted-model wrapper.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, TYPE_CHECKING
import numpy as np
import pandas as pd
from numpy.typing import ArrayLike, NDArray

from pylinreg.core.result import Result
from pylinreg.core.protocols import StudentTDistribution
from pylinreg.core.compute.tolerances import ToleranceTier, select_tolerance
from pylinreg.regression._inference import InferenceParams
from pylinreg.regression._predict import IntervalChoice, Prediction, predict_linear

if TYPE_CHECKING:
    from pylinreg.regression.design import RegressionDesign


@dataclass(frozen=True)
class LinearParams:
    """
    Parameter payload for linear regression.

    This is the immutable data computed by backends. All arrays are
    read-only.
    """
    coefficients: NDArray[np.floating[Any]]
    residuals: NDArray[np.floating[Any]]
    fitted_values: NDArray[np.floating[Any]]
    inverse_gram: NDArray[np.floating[Any]]
    variance_covariance: NDArray[np.floating[Any]]
    sigma_squared: float
    rss: float
    tss: float
    r_squared: float
    adjusted_r_squared: float
    rank: int
    df_residual: int


@dataclass(frozen=True)
class LinearSolution:
    """
    User-facing regression results (the fitted model).

    Created once by fit() and never modified: every exposed array is
    read-only and predict() is a pure function of the model and new data.
    """
    _result: Result[LinearParams]
    _inference: InferenceParams
    _design: RegressionDesign

    # === Estimates ===

    @property
    def coefficients(self) -> NDArray[np.floating[Any]]:
        return self._result.params.coefficients

    @property
    def coef(self) -> pd.Series:
        """Coefficients keyed by column name."""
        return pd.Series(
            self.coefficients, index=list(self.column_names), name='Estimate'
        )

    @property
    def column_names(self) -> tuple[str, ...]:
        return self._design.column_names

    @property
    def residuals(self) -> NDArray[np.floating[Any]]:
        return self._result.params.residuals

    @property
    def fitted_values(self) -> NDArray[np.floating[Any]]:
        return self._result.params.fitted_values

    # === Variance ===

    @property
    def sigma_squared(self) -> float:
        """Unbiased residual variance RSS / (n - p)."""
        return self._result.params.sigma_squared

    @property
    def residual_std_error(self) -> float:
        return float(np.sqrt(self.sigma_squared))

    @property
    def inverse_gram(self) -> NDArray[np.floating[Any]]:
        """(X'X)⁻¹, retained for inference and prediction."""
        return self._result.params.inverse_gram

    @property
    def variance_covariance(self) -> NDArray[np.floating[Any]]:
        """σ² (X'X)⁻¹."""
        return self._result.params.variance_covariance

    @property
    def vcov(self) -> NDArray[np.floating[Any]]:
        return self.variance_covariance

    # === Inference ===

    @property
    def standard_errors(self) -> NDArray[np.floating[Any]]:
        return self._inference.standard_errors

    @property
    def t_statistics(self) -> NDArray[np.floating[Any]]:
        """t-statistics; ±inf or NaN where a standard error is zero."""
        return self._inference.t_statistics

    @property
    def p_values(self) -> NDArray[np.floating[Any]]:
        """Two-sided p-values on n - p degrees of freedom."""
        return self._inference.p_values

    # === Goodness of fit ===

    @property
    def rss(self) -> float:
        return self._result.params.rss

    @property
    def tss(self) -> float:
        return self._result.params.tss

    @property
    def r_squared(self) -> float:
        """1 - RSS/TSS; NaN when the response is constant."""
        return self._result.params.r_squared

    @property
    def adjusted_r_squared(self) -> float:
        return self._result.params.adjusted_r_squared

    # === Dimensions ===

    @property
    def n(self) -> int:
        return self._design.n

    @property
    def p(self) -> int:
        return self._design.p

    @property
    def rank(self) -> int:
        return self._result.params.rank

    @property
    def df_residual(self) -> int:
        return self._result.params.df_residual

    @property
    def degrees_of_freedom_residual(self) -> int:
        return self.df_residual

    @property
    def design(self) -> RegressionDesign:
        return self._design

    # === Envelope metadata ===

    @property
    def info(self) -> dict[str, Any]:
        return self._result.info

    @property
    def timing(self) -> dict[str, float] | None:
        return self._result.timing

    @property
    def backend_name(self) -> str:
        return self._result.backend_name

    @property
    def warnings(self) -> tuple[str, ...]:
        return self._result.warnings

    @property
    def provenance(self) -> dict[str, str]:
        return self._result.provenance

    def has_warning(self, substring: str) -> bool:
        """Check if any recorded warning contains the given substring."""
        return self._result.has_warning(substring)

    @property
    def tolerance(self) -> ToleranceTier:
        """
        Accuracy to expect from this fit against an exact OLS solution.

        CPU_FP64 for a well-conditioned X'X, CPU_FP64_ILL_CONDITIONED once
        the condition number exceeds ILL_CONDITIONED_THRESHOLD.
        """
        return select_tolerance(self._result.info['is_ill_conditioned'])

    # === Prediction ===

    def predict(
        self,
        new_X: ArrayLike | pd.DataFrame | None = None,
        *,
        interval: IntervalChoice = 'none',
        level: float = 0.95,
        dist: StudentTDistribution | None = None,
    ) -> NDArray[np.floating[Any]] | Prediction:
        """Predict from this model. See pylinreg.regression.predict."""
        return predict_linear(self, new_X, interval=interval, level=level, dist=dist)

    # === Presentation ===

    def coefficient_table(self) -> pd.DataFrame:
        """Estimate, Std. Error, t value and Pr(>|t|) per coefficient."""
        return pd.DataFrame(
            {
                'Estimate': self.coefficients,
                'Std. Error': self.standard_errors,
                't value': self.t_statistics,
                'Pr(>|t|)': self.p_values,
            },
            index=list(self.column_names),
        )

    def summary(self) -> str:
        """Generate R-style summary output."""
        width = max(12, max(len(c) for c in self.column_names) + 2)
        lines = [
            "Linear Regression Results",
            "=" * 72,
            f"Observations: {self.n}",
            f"Residual degrees of freedom: {self.df_residual}",
            "",
            "Coefficients:",
            f"{'':<{width}} {'Estimate':>14} {'Std. Error':>12} {'t value':>10} {'Pr(>|t|)':>12}",
            "-" * 72,
        ]

        for name, coef, se, t, pv in zip(
            self.column_names, self.coefficients, self.standard_errors,
            self.t_statistics, self.p_values,
        ):
            lines.append(
                f"{name:<{width}} {coef:14.6f} {se:12.6f} {t:10.3f} {_format_p(pv):>12}"
            )

        lines.extend([
            "-" * 72,
            f"Residual standard error: {self.residual_std_error:.4g} "
            f"on {self.df_residual} degrees of freedom",
            f"Multiple R-squared: {self.r_squared:.4g},\t"
            f"Adjusted R-squared: {self.adjusted_r_squared:.4g}",
            f"Backend: {self.backend_name}",
        ])
        for w in self.warnings:
            lines.append(f"Warning: {w}")

        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"LinearSolution(n={self.n}, p={self.p}, "
            f"r_squared={self.r_squared:.4f})"
        )


def _format_p(p_value: float) -> str:
    """R's format.pval() cut-off for tiny p-values."""
    if np.isnan(p_value):
        return "NA"
    if p_value < 2e-16:
        return "<2e-16"
    return f"{p_value:.4g}"
