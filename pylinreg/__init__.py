"""
pylinreg: ordinary least squares regression via the normal equations.

Estimates coefficients from a dense numeric design matrix, derives
standard errors, t-statistics, p-values and R², and predicts with
confidence or prediction intervals. Results match R's lm().

Submodules:
    regression: fit(), predict(), RegressionDesign, ModelFrame
    core: exceptions, Result envelope, validation, numeric primitives
"""

__version__ = "0.1.0"

from pylinreg import regression
from pylinreg.regression import fit, predict, RegressionDesign, LinearSolution

__all__ = [
    "__version__",
    "regression",
    "fit",
    "predict",
    "RegressionDesign",
    "LinearSolution",
]
