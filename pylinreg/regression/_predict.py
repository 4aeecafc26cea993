"""
Prediction from a fitted linear model.

Point predictions, and confidence (mean response) or prediction (new
observation) intervals built from the stored (X'X)^-1:

    h_i        = x_i' (X'X)^-1 x_i
    confidence : se_i = sqrt(σ² h_i)
    prediction : se_i = sqrt(σ² (1 + h_i))
    bounds     : fit_i ± t_{1-α/2, n-p} se_i
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal, TYPE_CHECKING
import numpy as np
import pandas as pd
from numpy.typing import ArrayLike, NDArray

from pylinreg.core.exceptions import IncompatibleDesignError, ValidationError
from pylinreg.core.protocols import StudentTDistribution
from pylinreg.core.validation import check_array, check_finite, check_level
from pylinreg.core.compute.distributions import critical_value

if TYPE_CHECKING:
    from pylinreg.regression.design import RegressionDesign
    from pylinreg.regression.solution import LinearSolution


IntervalChoice = Literal['none', 'confidence', 'prediction']

VALID_INTERVALS = ('none', 'confidence', 'prediction')


@dataclass(frozen=True)
class Prediction:
    """
    Predictions with interval bounds.

    Attributes:
        fit: Point predictions (m,)
        lower: Lower bounds (m,)
        upper: Upper bounds (m,)
        se_fit: Standard error used for each bound (m,)
        interval: 'confidence' or 'prediction'
        level: Confidence level
        df: Residual degrees of freedom of the t critical value
        critical_value: t_{1-α/2, df}
    """
    fit: NDArray[np.floating[Any]]
    lower: NDArray[np.floating[Any]]
    upper: NDArray[np.floating[Any]]
    se_fit: NDArray[np.floating[Any]]
    interval: str
    level: float
    df: int
    critical_value: float

    def __len__(self) -> int:
        return len(self.fit)

    @property
    def margin(self) -> NDArray[np.floating[Any]]:
        """Half-width of each interval."""
        return self.critical_value * self.se_fit

    def to_frame(self, index: ArrayLike | None = None) -> pd.DataFrame:
        """Columns fit, lwr, upr, matching R's predict.lm() layout."""
        return pd.DataFrame(
            {'fit': self.fit, 'lwr': self.lower, 'upr': self.upper},
            index=index,
        )


def predict_linear(
    solution: LinearSolution,
    new_X: ArrayLike | pd.DataFrame | None = None,
    *,
    interval: IntervalChoice = 'none',
    level: float = 0.95,
    dist: StudentTDistribution | None = None,
) -> NDArray[np.floating[Any]] | Prediction:
    """
    Predict from a fitted model. See pylinreg.regression.predict.
    """
    if interval not in VALID_INTERVALS:
        raise ValidationError(
            f"interval: must be one of {VALID_INTERVALS}, got {interval!r}"
        )
    level = check_level(level)

    design = solution.design
    if new_X is None:
        X = design.X
        fit = np.array(solution.fitted_values, copy=True)
    else:
        X = resolve_new_design(design, new_X)
        fit = X @ solution.coefficients

    if interval == 'none':
        return fit

    df = solution.df_residual
    t_val = critical_value(level, df, dist)
    h = leverage(X, solution.inverse_gram)
    sigma_squared = solution.sigma_squared

    if interval == 'confidence':
        se_fit = np.sqrt(sigma_squared * h)
    else:
        se_fit = np.sqrt(sigma_squared * (1.0 + h))

    margin = t_val * se_fit
    lower = fit - margin
    upper = fit + margin

    for arr in (fit, lower, upper, se_fit):
        arr.flags.writeable = False

    return Prediction(
        fit=fit,
        lower=lower,
        upper=upper,
        se_fit=se_fit,
        interval=interval,
        level=level,
        df=df,
        critical_value=t_val,
    )


def leverage(
    X: NDArray[np.floating[Any]],
    inverse_gram: NDArray[np.floating[Any]],
) -> NDArray[np.floating[Any]]:
    """
    Diagonal of X (X'X)^-1 X' without forming the m x m matrix.

    Computed as the row-wise quadratic form x_i' G⁻¹ x_i.
    """
    h = np.einsum('ij,jk,ik->i', X, inverse_gram, X)
    # Round-off can push an exact zero slightly negative
    return np.maximum(h, 0.0)


def resolve_new_design(
    design: RegressionDesign,
    new_X: ArrayLike | pd.DataFrame,
) -> NDArray[np.floating[Any]]:
    """
    Turn new data into a matrix with the training design's columns.

    Resolution rules:
        - DataFrame, model built from a data frame: encoded by its ModelFrame
        - DataFrame otherwise: column labels must equal the training column
          names, in order
        - array-like: 2D with p columns; a 1D array is one row of length p
          (or, when p == 1, a single column)

    Raises:
        IncompatibleDesignError: Columns or levels don't match the model
        MissingValueError: New data contains missing values
        ValidationError: Non-numeric or infinite values
    """
    p = design.p

    if isinstance(new_X, pd.DataFrame):
        if design.frame is not None:
            X = design.frame.design_matrix(new_X)
            check_finite(X, 'newdata')
            return X
        columns = tuple(str(c) for c in new_X.columns)
        if columns != design.column_names:
            raise IncompatibleDesignError(
                f"columns of new_X do not match the model: expected "
                f"{list(design.column_names)}, got {list(columns)}",
                expected=design.column_names,
                actual=columns,
            )

    X = check_array(new_X, 'new_X')

    if X.ndim == 1:
        if p == 1:
            X = X.reshape(-1, 1)
        elif X.shape[0] == p:
            X = X.reshape(1, -1)
        else:
            raise IncompatibleDesignError(
                f"new_X: 1D input of length {X.shape[0]} is not a row of {p} columns",
                expected=p,
                actual=X.shape[0],
            )

    if X.ndim != 2:
        raise IncompatibleDesignError(
            f"new_X: expected 2D array, got {X.ndim}D with shape {X.shape}",
            expected=p,
        )
    if X.shape[1] != p:
        raise IncompatibleDesignError(
            f"new_X has {X.shape[1]} columns, model has {p}",
            expected=p,
            actual=X.shape[1],
        )

    check_finite(X, 'new_X')
    return X
