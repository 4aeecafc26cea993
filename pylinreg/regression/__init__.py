"""
Ordinary least squares regression.

Public API:
    fit(X, y, ...) -> LinearSolution
    predict(solution, new_X, interval=..., level=...) -> ndarray | Prediction

fit() handles:
    - Input validation
    - Design construction
    - Backend selection
    - Inference and result wrapping

Example:
    >>> from pylinreg.regression import fit, RegressionDesign
    >>> result = fit(X, y)
    >>> print(result.coefficients)
    >>> print(result.summary())
    >>>
    >>> design = RegressionDesign.from_dataframe(df, 'mpg', ['wt', 'cyl'])
    >>> result = fit(design)
    >>> result.predict(new_df, interval='confidence').to_frame()
"""

from pylinreg.regression.design import RegressionDesign
from pylinreg.regression.frame import ModelFrame
from pylinreg.regression.solution import LinearSolution, LinearParams
from pylinreg.regression._inference import InferenceParams
from pylinreg.regression._predict import Prediction
from pylinreg.regression.solvers import fit, predict

__all__ = [
    "fit",
    "predict",
    "RegressionDesign",
    "ModelFrame",
    "LinearSolution",
    "LinearParams",
    "InferenceParams",
    "Prediction",
]
