"""
Regression Design.

Design holds the numeric design matrix X, the response y and the column
names the fitted coefficients are keyed by. When built from a data frame
it also keeps the ModelFrame so new data can be encoded the same way at
predict time.

Validation happens here, once. Backends trust a Design.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any
import numpy as np
import pandas as pd
from numpy.typing import ArrayLike, NDArray

from pylinreg.core.validation import (
    check_array,
    check_finite,
    check_2d,
    check_has_columns,
    check_1d,
    check_not_empty,
    check_consistent_length,
    check_column_names,
    check_degrees_of_freedom,
)
from pylinreg.regression.frame import ModelFrame


@dataclass(frozen=True)
class RegressionDesign:
    """
    Regression design matrix specification.

    Immutable after construction; X and y are read-only arrays.

    Construction:
        RegressionDesign.build(X, y)                              # arrays
        RegressionDesign.build(X, y, column_names=['(Intercept)', 'wt'])
        RegressionDesign.from_dataframe(df, 'mpg', ['wt', 'cyl']) # encoded
    """
    _X: NDArray[np.floating[Any]]
    _y: NDArray[np.floating[Any]]
    _n: int
    _p: int
    _column_names: tuple[str, ...]
    _frame: ModelFrame | None = None

    @classmethod
    def build(
        cls,
        X: ArrayLike | None,
        y: ArrayLike,
        column_names: Sequence[str] | None = None,
        *,
        frame: ModelFrame | None = None,
    ) -> RegressionDesign:
        """
        Build a Design from arrays, validating everything.

        A pandas DataFrame X contributes its column labels as column names
        unless column_names is given.

        Raises:
            EmptyInputError: X is None or has no rows
            DimensionError: Wrong dimensionality, no columns, or
                inconsistent lengths
            MissingValueError: NaN in X or y
            ValidationError: Non-numeric or infinite data, duplicated names
            InsufficientDegreesOfFreedomError: n <= p
        """
        if X is None:
            check_not_empty(None, 'X')
        if column_names is None and isinstance(X, pd.DataFrame):
            column_names = [str(c) for c in X.columns]

        X_arr = check_array(X, 'X')
        y_arr = check_array(y, 'y')

        check_not_empty(X_arr, 'X')

        if X_arr.ndim == 1:
            X_arr = X_arr.reshape(-1, 1)
        if y_arr.ndim == 2 and y_arr.shape[1] == 1:
            y_arr = y_arr.ravel()

        check_2d(X_arr, 'X')
        check_has_columns(X_arr, 'X')
        check_1d(y_arr, 'y')
        check_finite(X_arr, 'X')
        check_finite(y_arr, 'y')
        check_consistent_length(X_arr, y_arr, names=('X', 'y'))

        n, p = X_arr.shape
        if column_names is None:
            names = tuple(f"x{j}" for j in range(p))
        else:
            names = check_column_names(column_names, p, 'column_names')

        check_degrees_of_freedom(n, p)

        X_arr = np.array(X_arr, dtype=np.float64, copy=True)
        y_arr = np.array(y_arr, dtype=np.float64, copy=True)
        X_arr.flags.writeable = False
        y_arr.flags.writeable = False

        return cls(_X=X_arr, _y=y_arr, _n=n, _p=p, _column_names=names, _frame=frame)

    @classmethod
    def from_dataframe(
        cls,
        data: pd.DataFrame,
        response: str,
        predictors: str | Sequence[str] | None = None,
        *,
        intercept: bool = True,
    ) -> RegressionDesign:
        """
        Build a Design from a data frame via a ModelFrame.

        Args:
            data: Training data
            response: Response column
            predictors: Predictor column(s); None means every other column
            intercept: Prepend an '(Intercept)' column

        Returns:
            Design whose column names follow the encoding, with the
            ModelFrame attached for prediction on new data
        """
        frame = ModelFrame.learn(data, response, predictors, intercept=intercept)
        X = frame.design_matrix(data)
        y = frame.response_vector(data)
        return cls.build(X, y, frame.column_names, frame=frame)

    # === Properties ===

    @property
    def X(self) -> NDArray[np.floating[Any]]:
        """Design matrix (n x p)."""
        return self._X

    @property
    def y(self) -> NDArray[np.floating[Any]]:
        """Response vector (n,)."""
        return self._y

    @property
    def n(self) -> int:
        """Number of observations."""
        return self._n

    @property
    def p(self) -> int:
        """Number of design columns (coefficients)."""
        return self._p

    @property
    def column_names(self) -> tuple[str, ...]:
        return self._column_names

    @property
    def frame(self) -> ModelFrame | None:
        """Encoding used to build X, if built from a data frame."""
        return self._frame

    def XtX(self) -> NDArray[np.floating[Any]]:
        """Compute the Gram matrix X'X."""
        return self._X.T @ self._X

    def Xty(self) -> NDArray[np.floating[Any]]:
        """Compute X'y."""
        return self._X.T @ self._y
