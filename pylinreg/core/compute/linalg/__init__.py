"""
Linear algebra kernels for pylinreg.

All functions follow these conventions:
    - NumPy/SciPy (LAPACK under the hood)
    - Each operation returns a structured result dataclass
    - Errors are raised immediately with clear messages

Submodules:
    inverse: rank screening and Gram matrix inversion
"""

from pylinreg.core.compute.linalg.inverse import (
    InverseResult,
    column_rank,
    check_full_column_rank,
    invert_gram,
)

__all__ = [
    "InverseResult",
    "column_rank",
    "check_full_column_rank",
    "invert_gram",
]
