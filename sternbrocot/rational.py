from __future__ import annotations

import functools
import math

import numpy as np

from sternbrocot import (
    DEFAULT_DTYPE,
    DivideByZeroError,
    check_range,
    checked_add,
    checked_mul,
    continued_fraction,
    integer_dtype,
)


@functools.total_ordering
class ExactRational(object):
    """An immutable fraction n/d in lowest terms, with d > 0.

    Numerator and denominator are restricted to the range of a fixed-width
    numpy signed integer dtype. Arithmetic never wraps around: any result or
    cross-product that leaves the range raises `RationalOverflowError`.
    """

    __slots__ = ("_numerator", "_denominator", "_dtype")

    def __init__(self, n: int = 0, d: int = 1, dtype=DEFAULT_DTYPE):
        """Construct n/d, reduced.

        Args:
            n: The numerator.
            d: The denominator. Must be non-zero.
            dtype: The numpy signed integer dtype bounding n and d.

        Raises:
            TypeError: If `n` or `d` is not an integer.
            DivideByZeroError: If `d` is zero.
            RationalOverflowError: If the reduced fraction does not fit `dtype`.
        """
        for x in (n, d):
            if not isinstance(x, (int, np.integer)):
                msg = f"ExactRational: {x!r} is not an integer."
                raise TypeError(msg)
        n, d = int(n), int(d)
        if d == 0:
            msg = f"ExactRational: denominator of {n}/{d} must be non-zero."
            raise DivideByZeroError(msg, operand=d)
        dtype = integer_dtype(dtype)

        operands = (n, d)
        g = math.gcd(n, d)
        n, d = n // g, d // g
        if d < 0:
            n, d = -n, -d

        self._numerator = check_range(n, dtype, operands=operands)
        self._denominator = check_range(d, dtype, operands=operands)
        self._dtype = dtype

    @property
    def numerator(self) -> int:
        return self._numerator

    @property
    def denominator(self) -> int:
        return self._denominator

    @property
    def dtype(self) -> np.dtype:
        return self._dtype

    def _coerce(self, other) -> ExactRational | None:
        if isinstance(other, ExactRational):
            return other
        if isinstance(other, (int, np.integer)):
            return ExactRational(other, 1, dtype=self._dtype)
        return None

    def _result_dtype(self, other: ExactRational) -> np.dtype:
        return np.promote_types(self._dtype, other._dtype)

    def add(self, other: ExactRational) -> ExactRational:
        dtype = self._result_dtype(other)
        n = checked_add(
            checked_mul(self._numerator, other._denominator, dtype),
            checked_mul(other._numerator, self._denominator, dtype),
            dtype,
        )
        return ExactRational(n, checked_mul(self._denominator, other._denominator, dtype), dtype=dtype)

    def sub(self, other: ExactRational) -> ExactRational:
        dtype = self._result_dtype(other)
        n = checked_add(
            checked_mul(self._numerator, other._denominator, dtype),
            -checked_mul(other._numerator, self._denominator, dtype),
            dtype,
        )
        return ExactRational(n, checked_mul(self._denominator, other._denominator, dtype), dtype=dtype)

    def mul(self, other: ExactRational) -> ExactRational:
        dtype = self._result_dtype(other)
        return ExactRational(
            checked_mul(self._numerator, other._numerator, dtype),
            checked_mul(self._denominator, other._denominator, dtype),
            dtype=dtype,
        )

    def div(self, other: ExactRational) -> ExactRational:
        """Divide by `other`.

        Raises:
            DivideByZeroError: If `other` is zero.
        """
        if other._numerator == 0:
            msg = f"ExactRational.div: cannot divide {self} by zero divisor {other!r}."
            raise DivideByZeroError(msg, operand=other)
        dtype = self._result_dtype(other)
        return ExactRational(
            checked_mul(self._numerator, other._denominator, dtype),
            checked_mul(self._denominator, other._numerator, dtype),
            dtype=dtype,
        )

    def mediant(self, other: ExactRational) -> ExactRational:
        """Return (n1+n2)/(d1+d2), the Stern-Brocot tree step between `self`
        and `other`. If the two fractions are Farey neighbors the mediant is
        already in lowest terms; it is reduced anyway.
        """
        dtype = self._result_dtype(other)
        return ExactRational(
            checked_add(self._numerator, other._numerator, dtype),
            checked_add(self._denominator, other._denominator, dtype),
            dtype=dtype,
        )

    def _cross(self, other: ExactRational) -> tuple[int, int]:
        """Return (n1*d2, n2*d1), the cross-products used for comparison."""
        dtype = self._result_dtype(other)
        return (
            checked_mul(self._numerator, other._denominator, dtype),
            checked_mul(other._numerator, self._denominator, dtype),
        )

    def to_real(self) -> float:
        """Return the nearest float. Lossy; for display and error measurement."""
        return self._numerator / self._denominator

    def continued_fraction(self) -> list[int]:
        return continued_fraction(self._numerator, self._denominator)

    def __add__(self, other):
        other = self._coerce(other)
        return NotImplemented if other is None else self.add(other)

    def __radd__(self, other):
        other = self._coerce(other)
        return NotImplemented if other is None else other.add(self)

    def __sub__(self, other):
        other = self._coerce(other)
        return NotImplemented if other is None else self.sub(other)

    def __rsub__(self, other):
        other = self._coerce(other)
        return NotImplemented if other is None else other.sub(self)

    def __mul__(self, other):
        other = self._coerce(other)
        return NotImplemented if other is None else self.mul(other)

    def __rmul__(self, other):
        other = self._coerce(other)
        return NotImplemented if other is None else other.mul(self)

    def __truediv__(self, other):
        other = self._coerce(other)
        return NotImplemented if other is None else self.div(other)

    def __rtruediv__(self, other):
        other = self._coerce(other)
        return NotImplemented if other is None else other.div(self)

    def __neg__(self) -> ExactRational:
        return ExactRational(-self._numerator, self._denominator, dtype=self._dtype)

    def __pos__(self) -> ExactRational:
        return self

    def __abs__(self) -> ExactRational:
        return ExactRational(abs(self._numerator), self._denominator, dtype=self._dtype)

    def __eq__(self, other):
        other = self._coerce(other)
        if other is None:
            return NotImplemented
        lhs, rhs = self._cross(other)
        return lhs == rhs

    def __lt__(self, other):
        other = self._coerce(other)
        if other is None:
            return NotImplemented
        lhs, rhs = self._cross(other)
        return lhs < rhs

    def __hash__(self):
        if self._denominator == 1:
            return hash(self._numerator)
        return hash((self._numerator, self._denominator))

    def __bool__(self) -> bool:
        return self._numerator != 0

    def __float__(self) -> float:
        return self.to_real()

    def __str__(self) -> str:
        if self._denominator == 1:
            return str(self._numerator)
        return f"{self._numerator}/{self._denominator}"

    def __repr__(self) -> str:
        return f"ExactRational({self._numerator}, {self._denominator})"
