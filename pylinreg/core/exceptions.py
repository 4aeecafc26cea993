"""
Exception hierarchy for pylinreg.

All exceptions inherit from PyLinRegError to allow catching any
library-specific error. Domain-specific exceptions inherit from the
appropriate base class here.

Design principles:
    - Exceptions carry diagnostic information as attributes
    - Error messages are actionable with actual vs expected values
    - Never catch and re-raise with less information
"""


class PyLinRegError(Exception):
    """Base exception for all pylinreg errors."""
    pass


class ValidationError(PyLinRegError):
    """
    Input validation failed.

    Raised when user-provided inputs fail validation checks.
    """
    pass


class DimensionError(ValidationError):
    """
    Array dimensions are incorrect or inconsistent.

    Raised when array shapes don't match expected dimensions or
    when multiple arrays have inconsistent shapes.
    """
    pass


class EmptyInputError(ValidationError):
    """No observations to fit on (absent or zero-row design matrix)."""
    pass


class MissingValueError(ValidationError):
    """
    Input contains missing values (NaN / NA).

    Attributes:
        n_missing: Number of missing cells, if counted
    """

    def __init__(self, message: str, n_missing: int | None = None):
        super().__init__(message)
        self.n_missing = n_missing


class InsufficientDegreesOfFreedomError(ValidationError):
    """
    Not enough observations to estimate all coefficients and the
    residual variance (n <= p).

    Attributes:
        n: Number of observations
        p: Number of design columns
    """

    def __init__(self, message: str, n: int | None = None, p: int | None = None):
        super().__init__(message)
        self.n = n
        self.p = p


class IncompatibleDesignError(DimensionError):
    """
    New data does not resolve to the training design matrix.

    Raised by predict() when columns are missing, extra, reordered, or a
    categorical level was never seen at fit time.

    Attributes:
        expected: Expected column names (or count), if known
        actual: Columns (or count) that were supplied, if known
    """

    def __init__(
        self,
        message: str,
        expected: tuple[str, ...] | int | None = None,
        actual: tuple[str, ...] | int | None = None,
    ):
        super().__init__(message)
        self.expected = expected
        self.actual = actual


class NumericalError(PyLinRegError):
    """
    Numerical computation failed.

    Base class for errors arising from numerical issues during computation.
    """
    pass


class SingularMatrixError(NumericalError):
    """
    Matrix is singular or nearly singular.

    Raised when a matrix operation requires invertibility but the matrix
    is singular or numerically rank-deficient.

    Attributes:
        matrix_name: Name/description of the problematic matrix
        condition_number: Estimated condition number, if available
        rank: Numerical rank, if computed
        expected_rank: Expected rank (typically p)
    """

    def __init__(
        self,
        message: str,
        matrix_name: str | None = None,
        condition_number: float | None = None,
        rank: int | None = None,
        expected_rank: int | None = None
    ):
        super().__init__(message)
        self.matrix_name = matrix_name
        self.condition_number = condition_number
        self.rank = rank
        self.expected_rank = expected_rank


class SingularSystemError(SingularMatrixError):
    """
    The normal equations X'X b = X'y cannot be solved.

    Raised at fit time when X'X is not invertible within numerical
    tolerance, typically because predictors are perfectly collinear.
    """
    pass
