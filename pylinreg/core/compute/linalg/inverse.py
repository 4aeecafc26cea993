"""
Gram matrix inversion.

The normal-equations fitter needs (X'X)^-1 explicitly: it is reused for the
variance-covariance matrix and for prediction leverages. Inversion goes
through LAPACK (scipy.linalg.inv); singularity is screened before and after
the call so a rank-deficient design can never produce garbage coefficients.
"""

from dataclasses import dataclass
from typing import Any
import numpy as np
from numpy.linalg import LinAlgError
from numpy.typing import NDArray
from scipy import linalg as sp_linalg

from pylinreg.core.exceptions import SingularSystemError
from pylinreg.core.compute.tolerances import SINGULAR_RCOND


@dataclass(frozen=True)
class InverseResult:
    """
    Result of a symmetric positive-definite inversion.

    Attributes:
        inverse: The inverse matrix (p x p), exactly symmetric
        condition_number: 2-norm condition number of the input
    """
    inverse: NDArray[np.floating[Any]]
    condition_number: float


def column_rank(X: NDArray[np.floating[Any]]) -> int:
    """
    Numerical column rank of X via SVD.

    Uses numpy's default tolerance S.max() * max(n, p) * eps.
    """
    if X.shape[1] == 0:
        return 0
    return int(np.linalg.matrix_rank(X))


def check_full_column_rank(X: NDArray[np.floating[Any]], name: str = 'X') -> int:
    """
    Verify X has full column rank.

    Returns:
        The rank (== number of columns)

    Raises:
        SingularSystemError: If X is rank-deficient
    """
    p = X.shape[1]
    rank = column_rank(X)
    if rank < p:
        raise SingularSystemError(
            f"system is exactly singular: {name} has rank {rank}, expected {p}. "
            f"This indicates perfectly collinear columns.",
            matrix_name=f"{name}'{name}",
            rank=rank,
            expected_rank=p,
        )
    return rank


def invert_gram(
    G: NDArray[np.floating[Any]],
    name: str = "X'X",
) -> InverseResult:
    """
    Invert a symmetric positive-definite Gram matrix.

    Args:
        G: Square symmetric matrix (p x p)
        name: Matrix name for error messages

    Returns:
        InverseResult with the inverse and the condition number of G

    Raises:
        SingularSystemError: If G is singular, computationally singular
            (reciprocal condition number below machine epsilon), or the
            LAPACK inversion fails or produces non-finite values
    """
    p = G.shape[0]
    condition_number = float(np.linalg.cond(G))

    if not np.isfinite(condition_number) or 1.0 / condition_number < SINGULAR_RCOND:
        raise SingularSystemError(
            f"system is computationally singular: reciprocal condition number "
            f"of {name} = {1.0 / condition_number:.3e} < {SINGULAR_RCOND:.3e}",
            matrix_name=name,
            condition_number=condition_number,
            expected_rank=p,
        )

    try:
        G_inv = sp_linalg.inv(G, check_finite=False)
    except LinAlgError as e:
        raise SingularSystemError(
            f"system is exactly singular: inverting {name} failed: {e}",
            matrix_name=name,
            condition_number=condition_number,
            expected_rank=p,
        ) from e

    if not np.all(np.isfinite(G_inv)):
        raise SingularSystemError(
            f"inverse of {name} contains non-finite values",
            matrix_name=name,
            condition_number=condition_number,
            expected_rank=p,
        )

    # Remove round-off asymmetry; the exact inverse of a symmetric matrix is symmetric
    G_inv = 0.5 * (G_inv + G_inv.T)

    return InverseResult(inverse=G_inv, condition_number=condition_number)
