"""
CPU backend for linear regression via the normal equations.

Solves X'X b = X'y by explicitly inverting the Gram matrix X'X. The inverse
is kept on the result because the variance-covariance matrix and every
prediction interval are built from it.
"""

from typing import Any
import warnings
import numpy as np

from pylinreg.core.result import Result
from pylinreg.core.compute.timing import Timer
from pylinreg.core.compute.tolerances import ILL_CONDITIONED_THRESHOLD
from pylinreg.core.compute.linalg import check_full_column_rank, invert_gram
from pylinreg.regression.design import RegressionDesign
from pylinreg.regression.solution import LinearParams


class CPUNormalEquationsBackend:
    """
    CPU backend using the normal equations.

    Implements the Backend protocol for RegressionDesign -> LinearParams.
    """

    @property
    def name(self) -> str:
        return 'cpu_normal_eq'

    def solve(self, design: RegressionDesign) -> Result[LinearParams]:
        """
        Solve OLS via the normal equations.

        Algorithm:
            1. Screen X for column-rank deficiency
            2. G = X'X, c = X'y
            3. G⁻¹ (rejecting computationally singular G)
            4. β = G⁻¹ c
            5. Fitted values, residuals, σ², vcov = σ² G⁻¹, R², adjusted R²

        Args:
            design: Validated regression design (n > p guaranteed)

        Returns:
            Result containing LinearParams

        Raises:
            SingularSystemError: If X'X is not invertible
        """
        timer = Timer()
        timer.start()
        warnings_list: list[str] = []

        X = design.X
        y = design.y
        n, p = design.n, design.p

        # === Singularity Screen and Inversion ===
        with timer.section('rank'):
            rank = check_full_column_rank(X)

        with timer.section('gram'):
            gram = design.XtX()
            cross = design.Xty()

        with timer.section('inverse'):
            inv_result = invert_gram(gram)
        inverse_gram = inv_result.inverse
        condition_number = inv_result.condition_number

        is_ill_conditioned = condition_number > ILL_CONDITIONED_THRESHOLD
        if is_ill_conditioned:
            msg = (
                f"X'X is ill-conditioned (condition number {condition_number:.3e}); "
                f"coefficients may be inaccurate"
            )
            warnings_list.append(msg)
            warnings.warn(msg, RuntimeWarning, stacklevel=3)

        # === Coefficients ===
        with timer.section('solve'):
            coefficients = inverse_gram @ cross

        # === Residuals and Fitted Values ===
        with timer.section('residuals'):
            fitted_values = X @ coefficients
            residuals = y - fitted_values

        # === Summary Statistics ===
        with timer.section('statistics'):
            df_residual = n - p
            rss = float(residuals @ residuals)
            tss = float(np.sum((y - np.mean(y)) ** 2))
            sigma_squared = rss / df_residual
            variance_covariance = sigma_squared * inverse_gram
            r_squared, adjusted_r_squared = _r_squared(rss, tss, n, p)

        if tss == 0.0:
            warnings_list.append(
                "response is constant (total sum of squares is zero); "
                "R-squared is undefined"
            )

        timer.stop()

        for arr in (coefficients, fitted_values, residuals, inverse_gram, variance_covariance):
            arr.flags.writeable = False

        params = LinearParams(
            coefficients=coefficients,
            residuals=residuals,
            fitted_values=fitted_values,
            inverse_gram=inverse_gram,
            variance_covariance=variance_covariance,
            sigma_squared=sigma_squared,
            rss=rss,
            tss=tss,
            r_squared=r_squared,
            adjusted_r_squared=adjusted_r_squared,
            rank=rank,
            df_residual=df_residual,
        )

        info: dict[str, Any] = {
            'method': 'normal_equations',
            'rank': rank,
            'condition_number': condition_number,
            'is_ill_conditioned': is_ill_conditioned,
        }

        return Result(
            params=params,
            info=info,
            timing=timer.result(),
            backend_name=self.name,
            warnings=tuple(warnings_list),
        )


def _r_squared(rss: float, tss: float, n: int, p: int) -> tuple[float, float]:
    """
    Multiple and adjusted R².

    A constant response makes R² = 1 - RSS/0 undefined; both are NaN.
    """
    if tss == 0.0:
        return float('nan'), float('nan')
    r_squared = 1.0 - rss / tss
    adjusted = 1.0 - (1.0 - r_squared) * (n - 1) / (n - p)
    return r_squared, adjusted
