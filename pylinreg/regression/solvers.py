"""
Solver dispatch for regression.

This module provides the fit() and predict() functions (public API) and
backend selection.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Any, Literal
import numpy as np
import pandas as pd
from numpy.typing import ArrayLike, NDArray

from pylinreg.core.protocols import StudentTDistribution
from pylinreg.regression.design import RegressionDesign
from pylinreg.regression.solution import LinearSolution
from pylinreg.regression.backends.cpu import CPUNormalEquationsBackend
from pylinreg.regression._inference import compute_inference
from pylinreg.regression._predict import IntervalChoice, Prediction, predict_linear


# Type alias for backend selection
BackendChoice = Literal['auto', 'cpu', 'cpu_normal_eq']


def fit(
    X: ArrayLike | RegressionDesign | None,
    y: ArrayLike | None = None,
    *,
    column_names: list[str] | tuple[str, ...] | None = None,
    backend: BackendChoice = 'auto',
    dist: StudentTDistribution | None = None,
) -> LinearSolution:
    """
    Fit a linear regression model by ordinary least squares.

    Solves the normal equations:
        X'X β = X'y   =>   β = (X'X)⁻¹ X'y

    This is the primary public API for linear regression. All input
    validation, backend selection, inference and result wrapping happens
    here. Either the whole fit succeeds or an exception is raised; no
    partial model is returned.

    Args:
        X: Design matrix (n x p), including an intercept column if wanted,
            or a RegressionDesign (then y must be omitted).
        y: Response vector (n,).
        column_names: Names for the p columns of X. Defaults to the
            DataFrame labels for a DataFrame X, else 'x0'..'x{p-1}'.
        backend: Computational backend:
            - 'auto' / 'cpu' / 'cpu_normal_eq': CPU normal equations
        dist: Student-t implementation used for p-values. Defaults to
            scipy.stats.t.

    Returns:
        LinearSolution with coefficients, inference and prediction

    Raises:
        EmptyInputError: If X is absent or has no rows
        InsufficientDegreesOfFreedomError: If n <= p
        SingularSystemError: If X'X is singular (collinear columns)
        MissingValueError: If X or y contains NaN
        ValidationError: If inputs are otherwise invalid
        DimensionError: If X and y have inconsistent dimensions

    Example:
        >>> import numpy as np
        >>> from pylinreg.regression import fit
        >>>
        >>> X = np.column_stack([np.ones(100), np.random.randn(100, 2)])
        >>> y = X @ [1, 2, 3] + np.random.randn(100) * 0.1
        >>>
        >>> result = fit(X, y)
        >>> print(result.coefficients)
        >>> print(result.summary())
    """
    # === Construct Design ===
    # This is the boundary - validate here, trust everywhere else
    if isinstance(X, RegressionDesign):
        if y is not None:
            raise ValueError("y must be omitted when X is a RegressionDesign")
        if column_names is not None:
            raise ValueError("column_names must be omitted when X is a RegressionDesign")
        design = X
    else:
        if y is None and X is not None:
            raise ValueError("y required when X is an array")
        design = RegressionDesign.build(X, y, column_names)

    # === Select Backend ===
    backend_impl = _get_backend(backend)

    # === Solve ===
    result = backend_impl.solve(design)

    # === Inference ===
    params = result.params
    inference, inference_warnings = compute_inference(
        params.coefficients,
        params.variance_covariance,
        params.df_residual,
        dist,
    )
    if inference_warnings:
        result = replace(result, warnings=result.warnings + tuple(inference_warnings))

    # === Wrap and Return ===
    return LinearSolution(_result=result, _inference=inference, _design=design)


def predict(
    solution: LinearSolution,
    new_X: ArrayLike | pd.DataFrame | None = None,
    *,
    interval: IntervalChoice = 'none',
    level: float = 0.95,
    dist: StudentTDistribution | None = None,
) -> NDArray[np.floating[Any]] | Prediction:
    """
    Predict from a fitted linear model.

    Args:
        solution: Fitted model from fit()
        new_X: New design matrix (m x p) with the training columns, or a
            DataFrame. For a model fit from a data frame, a DataFrame of
            raw variables is encoded with the training levels. If None,
            the fitted values are returned and intervals use the training
            design matrix.
        interval: 'none', 'confidence' (mean response) or 'prediction'
            (new observation)
        level: Confidence level in (0, 1)
        dist: Student-t implementation for the critical value

    Returns:
        ndarray of predictions when interval='none', otherwise a
        Prediction with fit, lower and upper per row

    Raises:
        IncompatibleDesignError: If new_X does not match the training columns
        MissingValueError: If new_X contains missing values
        ValidationError: If interval or level is invalid

    Example:
        >>> result = fit(X, y)
        >>> pred = predict(result, X_new, interval='prediction', level=0.9)
        >>> pred.to_frame()
    """
    return predict_linear(solution, new_X, interval=interval, level=level, dist=dist)


def _get_backend(choice: BackendChoice) -> CPUNormalEquationsBackend:
    """
    Select and instantiate the appropriate backend.

    Raises:
        ValueError: If unknown backend specified
    """
    if choice in ('auto', 'cpu', 'cpu_normal_eq'):
        return CPUNormalEquationsBackend()
    raise ValueError(f"Unknown backend: {choice!r}")
