from __future__ import annotations

import numpy as np

from sternbrocot import InvalidBoundError, RationalOverflowError

# Values are held in Python integers and checked against the range of a numpy
# signed integer dtype. Stored numerators and denominators must fit the dtype;
# intermediate cross-products must fit the double-width ("widened") domain.

DEFAULT_DTYPE = np.int64


def integer_dtype(dtype) -> np.dtype:
    """Return `dtype` as a numpy dtype.

    Args:
        dtype: Anything accepted by `np.dtype`, e.g. `np.int32` or "int16".

    Returns:
        The normalized dtype.

    Raises:
        ValueError: If `dtype` is not a signed integer dtype.
    """
    dtype = np.dtype(dtype)
    if not np.issubdtype(dtype, np.signedinteger):
        msg = f"integer_dtype: `dtype` ({dtype}) must be a signed integer dtype."
        raise ValueError(msg)
    return dtype


def size_in_bits(x: int) -> int:
    """Return the minimum number of bits required to represent an integer in
    two's complement.

    Args:
        x: The integer to represent.

    Returns:
        The number of bits required to represent `x`.
    """
    return (x if x >= 0 else ~x).bit_length() + 1


def integer_bounds(dtype, widened: bool = False) -> tuple[int, int]:
    """Return the inclusive range (lo, hi) of a signed integer dtype.

    Args:
        dtype: The signed integer dtype.
        widened: If True, return the range of an integer twice as wide.

    Returns:
        The tuple (lo, hi).
    """
    bits = np.iinfo(integer_dtype(dtype)).bits
    if widened:
        bits *= 2
    return -(1 << (bits - 1)), (1 << (bits - 1)) - 1


def check_range(x: int, dtype, operands: tuple = (), widened: bool = False) -> int:
    """Return `x` if it is representable, otherwise raise.

    Args:
        x: The integer to check.
        dtype: The signed integer dtype.
        operands: The operands that produced `x`, reported on failure.
        widened: If True, check against the double-width range.

    Returns:
        `x`, unchanged.

    Raises:
        RationalOverflowError: If `x` does not fit.
    """
    dtype = integer_dtype(dtype)
    lo, hi = integer_bounds(dtype, widened=widened)
    if not lo <= x <= hi:
        width = "widened " if widened else ""
        msg = f"check_range: {x} from operands {operands} needs {size_in_bits(x)} bits; overflows {width}{dtype}."
        raise RationalOverflowError(msg, value=x, operands=operands, dtype=dtype)
    return x


def checked_mul(a: int, b: int, dtype) -> int:
    """Multiply two integers in the widened domain of `dtype`."""
    return check_range(a * b, dtype, operands=(a, b), widened=True)


def checked_add(a: int, b: int, dtype) -> int:
    """Add two integers in the widened domain of `dtype`."""
    return check_range(a + b, dtype, operands=(a, b), widened=True)


def check_bound(N, where: str) -> int:
    """Validate a denominator bound.

    Args:
        N: The bound. Must be an integer > 0.
        where: Name of the caller, used in the error message.

    Returns:
        `N` as a Python int.

    Raises:
        InvalidBoundError: If `N` is not a positive integer.
    """
    if isinstance(N, bool) or not isinstance(N, (int, np.integer)) or not N > 0:
        msg = f"{where}: `N` ({N}) must be a positive integer."
        raise InvalidBoundError(msg, bound=N)
    return int(N)
