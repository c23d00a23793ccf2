"""
Input validation utilities for pyfitstats.

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

import numbers

import numpy as np
from numpy.typing import ArrayLike, NDArray
from typing import Any

from pyfitstats.core.exceptions import (
    ArgumentTypeError,
    DimensionMismatchError,
    InvalidSignificanceLevel,
    ValidationError,
)


def check_array(
    array: ArrayLike,
    name: str,
) -> NDArray[np.floating[Any]]:
    """
    Validate and convert input to a real floating-point numpy array.

    Accepts any array-like and converts to numpy array. Rejects inputs
    that result in object dtype (indicating mixed types or non-numeric
    data), non-numeric dtypes, and complex values.

    Args:
        array: Input to validate
        name: Parameter name for error messages

    Returns:
        numpy.ndarray with real floating dtype

    Raises:
        ArgumentTypeError: If input cannot be converted to a real numeric array
    """
    try:
        result = np.asarray(array)
    except (ValueError, TypeError) as e:
        raise ArgumentTypeError(f"{name}: cannot convert to array: {e}") from e

    if result.dtype == object:
        raise ArgumentTypeError(
            f"{name}: converted to object dtype, indicating mixed types or non-numeric data"
        )

    if np.issubdtype(result.dtype, np.complexfloating):
        raise ArgumentTypeError(f"{name}: must contain real values, got complex dtype")

    # Reject non-numeric dtypes (strings, bytes, datetime, etc.)
    if not np.issubdtype(result.dtype, np.number):
        raise ArgumentTypeError(
            f"{name}: non-numeric dtype {result.dtype}, expected numeric data"
        )

    # Ensure floating point for numerical stability
    if not np.issubdtype(result.dtype, np.floating):
        result = result.astype(np.float64)

    return result


def as_vector(array: NDArray[np.floating[Any]], name: str) -> NDArray[np.floating[Any]]:
    """
    Flatten a row or column vector to 1D.

    A sample may arrive as shape (n,), (1, n) or (n, 1). Anything with more
    than one non-singleton dimension is not a vector.

    Raises:
        ArgumentTypeError: If the array is a matrix or higher-dimensional
    """
    if array.ndim == 0:
        return array.reshape(1)
    non_singleton = [d for d in array.shape if d != 1]
    if len(non_singleton) > 1:
        raise ArgumentTypeError(
            f"{name}: must be a vector of real values, got shape {array.shape}"
        )
    return array.reshape(-1)


def check_consistent_length(
    *arrays: NDArray[Any],
    names: tuple[str, ...]
) -> None:
    """
    Verify all arrays have the same length (first dimension).

    Args:
        *arrays: Arrays to check
        names: Parameter names for error messages (must match number of arrays)

    Raises:
        ValueError: If number of names doesn't match number of arrays
        DimensionMismatchError: If arrays have inconsistent lengths
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
        raise DimensionMismatchError(
            f"Inconsistent lengths: {details}",
            expected=lengths[0],
            actual=next(length for length in lengths if length != lengths[0]),
        )


def check_min_samples(array: NDArray[Any], min_samples: int, name: str) -> None:
    """
    Verify array has at least the minimum number of samples.

    Raises:
        ValidationError: If array has fewer than min_samples
    """
    n = array.shape[0]
    if n < min_samples:
        raise ValidationError(
            f"{name}: requires at least {min_samples} samples, got {n}"
        )


def check_alpha(alpha: Any, name: str = "alpha") -> float:
    """
    Verify a significance level is a real scalar in the open interval (0, 1).

    Returns:
        alpha as a Python float

    Raises:
        InvalidSignificanceLevel: If alpha is not a scalar in (0, 1)
    """
    if isinstance(alpha, (bool, np.bool_)) or not isinstance(alpha, numbers.Real):
        raise InvalidSignificanceLevel(
            f"{name}: must be a real scalar in (0, 1), got {alpha!r}",
            alpha=alpha,
        )
    value = float(alpha)
    if not (0.0 < value < 1.0):
        raise InvalidSignificanceLevel(
            f"{name}: must be in the open interval (0, 1), got {value}",
            alpha=alpha,
        )
    return value
