"""
Input validation utilities for pylinreg.

These validators follow the "fail fast, fail loud" principle. They raise
immediately with clear error messages rather than silently correcting
or making assumptions about user intent.

Design principles:
    - No silent type coercion (except np.asarray on array-likes)
    - No default handling of edge cases
    - Clear, actionable error messages with actual values
    - Each function validates ONE thing
    - Parameter names included in all error messages
"""

from collections.abc import Sequence
import numpy as np
from numpy.typing import ArrayLike, NDArray
from typing import Any

from pylinreg.core.exceptions import (
    ValidationError,
    DimensionError,
    EmptyInputError,
    InsufficientDegreesOfFreedomError,
    MissingValueError,
)


def check_array(
    array: ArrayLike,
    name: str,
) -> NDArray[np.floating[Any]]:
    """
    Validate and convert input to a float64 numpy array.

    Accepts any array-like and converts to numpy array. Rejects inputs
    that result in object dtype (indicating mixed types or non-numeric data).

    Args:
        array: Input to validate
        name: Parameter name for error messages

    Returns:
        numpy.ndarray with float64 dtype

    Raises:
        ValidationError: If input cannot be converted to numeric array
    """
    try:
        result = np.asarray(array)
    except (ValueError, TypeError) as e:
        raise ValidationError(f"{name}: cannot convert to array: {e}") from e

    if result.dtype == object:
        raise ValidationError(
            f"{name}: converted to object dtype, indicating mixed types or non-numeric data"
        )

    if result.dtype == np.bool_:
        return result.astype(np.float64)

    if not np.issubdtype(result.dtype, np.number):
        raise ValidationError(
            f"{name}: non-numeric dtype {result.dtype}, expected numeric data"
        )

    if np.issubdtype(result.dtype, np.complexfloating):
        raise ValidationError(f"{name}: complex dtype {result.dtype} is not supported")

    # All arithmetic is carried out in double precision
    if result.dtype != np.float64:
        result = result.astype(np.float64)

    return result


def check_finite(array: NDArray[np.floating[Any]], name: str) -> None:
    """
    Verify array contains no NaN or Inf values.

    NaN is reported as a missing value; Inf as an invalid value.

    Args:
        array: Array to check
        name: Parameter name for error messages

    Raises:
        MissingValueError: If array contains NaN
        ValidationError: If array contains Inf
    """
    if not np.all(np.isfinite(array)):
        n_nan = int(np.sum(np.isnan(array)))
        n_inf = int(np.sum(np.isinf(array)))
        if n_nan > 0:
            raise MissingValueError(
                f"{name}: contains missing values ({n_nan} NaN, {n_inf} Inf)",
                n_missing=n_nan,
            )
        raise ValidationError(f"{name}: contains non-finite values ({n_inf} Inf)")


def check_ndim(array: NDArray[np.floating[Any]], ndim: int, name: str) -> None:
    """
    Verify array has exactly the specified number of dimensions.

    Raises:
        DimensionError: If array has wrong number of dimensions
    """
    if array.ndim != ndim:
        raise DimensionError(
            f"{name}: expected {ndim}D array, got {array.ndim}D with shape {array.shape}"
        )


def check_1d(array: NDArray[np.floating[Any]], name: str) -> None:
    """Verify array is 1-dimensional."""
    check_ndim(array, 1, name)


def check_2d(array: NDArray[np.floating[Any]], name: str) -> None:
    """Verify array is 2-dimensional."""
    check_ndim(array, 2, name)


def check_not_empty(array: NDArray[np.floating[Any]] | None, name: str) -> None:
    """
    Verify an array is present and has at least one row.

    Raises:
        EmptyInputError: If array is None or has zero rows
    """
    if array is None:
        raise EmptyInputError(f"{name}: no data supplied")
    if array.ndim == 0 or array.shape[0] == 0:
        raise EmptyInputError(f"{name}: empty input, got shape {array.shape}")


def check_consistent_length(
    *arrays: NDArray[np.floating[Any]],
    names: tuple[str, ...]
) -> None:
    """
    Verify all arrays have the same length (first dimension).

    Raises:
        ValueError: If number of names doesn't match number of arrays
        DimensionError: If arrays have inconsistent lengths
    """
    if len(arrays) != len(names):
        raise ValueError(
            f"Number of arrays ({len(arrays)}) must match number of names ({len(names)})"
        )

    if len(arrays) < 2:
        return

    lengths = [arr.shape[0] for arr in arrays]
    if len(set(lengths)) > 1:
        details = ", ".join(f"{name}={length}" for name, length in zip(names, lengths))
        raise DimensionError(f"Inconsistent lengths: {details}")


def check_degrees_of_freedom(n: int, p: int) -> None:
    """
    Verify there are more observations than design columns.

    Raises:
        InsufficientDegreesOfFreedomError: If n <= p
    """
    if n <= p:
        raise InsufficientDegreesOfFreedomError(
            f"insufficient degrees of freedom: n={n} observations for p={p} "
            f"coefficients (need n > p)",
            n=n,
            p=p,
        )


def check_column_names(names: Sequence[str], p: int, name: str) -> tuple[str, ...]:
    """
    Verify a sequence of column names matches the column count and is unique.

    Returns:
        Names as a tuple of str

    Raises:
        DimensionError: If the count differs from p
        ValidationError: If names are duplicated
    """
    names = tuple(str(c) for c in names)
    if len(names) != p:
        raise DimensionError(
            f"{name}: got {len(names)} names for {p} columns"
        )
    if len(set(names)) != len(names):
        dupes = sorted({c for c in names if names.count(c) > 1})
        raise ValidationError(f"{name}: duplicated names {dupes}")
    return names


def check_level(level: float, name: str = 'level') -> float:
    """
    Verify a confidence level lies strictly inside (0, 1).

    Raises:
        ValidationError: If level is not a number in (0, 1)
    """
    try:
        value = float(level)
    except (TypeError, ValueError) as e:
        raise ValidationError(f"{name}: expected a number, got {level!r}") from e
    if not 0.0 < value < 1.0:
        raise ValidationError(f"{name}: must be in (0, 1), got {value}")
    return value


def check_has_columns(array: NDArray[np.floating[Any]], name: str) -> None:
    """
    Verify a 2D array has at least one column.

    Raises:
        DimensionError: If the array has zero columns
    """
    if array.shape[1] == 0:
        raise DimensionError(
            f"{name}: design has no columns, got shape {array.shape}"
        )
