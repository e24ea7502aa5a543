from __future__ import annotations

import itertools
import logging
import numbers
from typing import Iterable, Type, Union

import numpy as np

from sternbrocot import (
    DEFAULT_DTYPE,
    ExactRational,
    NonFiniteInputError,
    check_bound,
    check_range,
    checked_add,
    checked_mul,
    continued_fraction,
    integer_dtype,
    real_continued_fraction,
)

# Hard ceiling on the number of partial quotients examined. The longest
# continued fraction of a 64-bit fraction has 92 terms (Fibonacci worst case).
MAX_ITERS = 128

# Fractional residuals below this end a float expansion.
EPS = 1e-12

Target = Union[float, int, ExactRational, numbers.Rational]

# |x| as a float, or exactly as a (numerator, denominator) pair of ints.
Magnitude = Union[float, tuple]


class Approximator(object):
    def __init__(self, N: int, dtype=DEFAULT_DTYPE, max_iters: int = MAX_ITERS, eps: float = EPS):
        """Class that finds the best rational approximation p/q, q <= N, to a
        target value.

        The base class searches by brute force over every denominator and
        runs in O(N) time. For a rational target the errors are compared
        exactly; for a float target they are compared in floating point.

        Args:
            N: The denominator bound. Must be a positive integer.
            dtype: The numpy signed integer dtype of the result.
            max_iters: The maximum number of partial quotients to examine.
            eps: Fractional residuals below this end a float expansion.

        Raises:
            InvalidBoundError: if `N` is not a positive integer.
            ValueError: if `max_iters` < 1 or `eps` <= 0.
        """
        self.N = check_bound(N, type(self).__name__)
        self.dtype = integer_dtype(dtype)
        if not max_iters >= 1:
            msg = f"{type(self).__name__}: `max_iters` ({max_iters}) must be >= 1."
            raise ValueError(msg)
        if not eps > 0:
            msg = f"{type(self).__name__}: `eps` ({eps}) must be > 0."
            raise ValueError(msg)
        self.max_iters = max_iters
        self.eps = eps

    def _prepare(self, x: Target) -> tuple[bool, Magnitude]:
        """Split `x` into (negative, |x|). Rational targets keep |x| as an
        exact (numerator, denominator) pair of ints.

        Raises:
            TypeError: if `x` is not a real number.
            NonFiniteInputError: if `x` is a NaN or an infinity.
        """
        if isinstance(x, ExactRational):
            return x.numerator < 0, (abs(x.numerator), x.denominator)
        if isinstance(x, numbers.Rational):
            n, d = int(x.numerator), int(x.denominator)
            return n < 0, (abs(n), d)
        if not isinstance(x, numbers.Real):
            msg = f"{type(self).__name__}: `x` ({x!r}) is not a real number."
            raise TypeError(msg)
        x = float(x)
        if not np.isfinite(x):
            msg = f"{type(self).__name__}: `x` ({x}) must be finite."
            raise NonFiniteInputError(msg, value=x)
        return x < 0, abs(x)

    def _closer(self, target: Magnitude, a: tuple[int, int], b: tuple[int, int]) -> bool:
        """Return True if the fraction a = (h, k) is strictly closer to
        `target` than b. Exact targets are compared by cross-multiplication:
        |n*k_a - h_a*d| * k_b < |n*k_b - h_b*d| * k_a.
        """
        (h_a, k_a), (h_b, k_b) = a, b
        if isinstance(target, tuple):
            n, d = target
            err_a = abs(checked_add(checked_mul(n, k_a, self.dtype), -checked_mul(h_a, d, self.dtype), self.dtype))
            err_b = abs(checked_add(checked_mul(n, k_b, self.dtype), -checked_mul(h_b, d, self.dtype), self.dtype))
            return checked_mul(err_a, k_b, self.dtype) < checked_mul(err_b, k_a, self.dtype)
        return abs(target - h_a / k_a) < abs(target - h_b / k_b)

    @staticmethod
    def _nearest_numerator(target: Magnitude, q: int) -> int:
        """Return round(target * q), halves rounded up."""
        if isinstance(target, tuple):
            n, d = target
            return (2 * n * q + d) // (2 * d)
        return int(np.floor(target * q + 0.5))

    def _result(self, negative: bool, h: int, k: int) -> ExactRational:
        return ExactRational(-h if negative else h, k, dtype=self.dtype)

    def find(self, x: Target) -> ExactRational:
        """Find the best approximation by trying every denominator."""
        negative, target = self._prepare(x)
        best = (0, 1)
        for q in range(1, self.N + 1):
            candidate = (self._nearest_numerator(target, q), q)
            if self._closer(target, candidate, best):
                best = candidate
        return self._result(negative, *best)


class ContinuedFractionApproximator(Approximator):
    """Best rational approximation by continued-fraction convergent search.

    Successive convergents of the target are computed until the next one
    would have a denominator greater than `N`. The answer is then either the
    last convergent or the largest semiconvergent k*curr + prev that still
    fits the bound, whichever is closer; ties go to the convergent. By the
    best-approximation theorem no other fraction with denominator <= N is
    closer. Runs in O(log N) steps, never more than `max_iters`.
    """

    def _partial_quotients(self, target: Magnitude) -> Iterable[int]:
        if isinstance(target, tuple):
            return continued_fraction(*target)
        return real_continued_fraction(target, self.eps)

    def find(self, x: Target) -> ExactRational:
        """Find the best approximation."""
        negative, target = self._prepare(x)
        logging.debug(f"Approximating {x} with denominator <= {self.N} ...")

        # Convergents of |x| as integer pairs; 1/0 is not a valid ExactRational.
        # Numerators are range-checked with the sign of x reapplied.
        sign = -1 if negative else 1
        h_prev, k_prev = 0, 1
        h_curr, k_curr = 1, 0
        n_iters = 0
        terms = iter(self._partial_quotients(target))
        for a in itertools.islice(terms, self.max_iters):
            n_iters += 1
            k_next = a * k_curr + k_prev
            if k_next > self.N:
                h_curr, k_curr = self._truncate(target, sign, h_prev, k_prev, h_curr, k_curr)
                break
            h_next = a * h_curr + h_prev
            check_range(sign * h_next, self.dtype, operands=(a, h_curr, h_prev))
            h_prev, k_prev = h_curr, k_curr
            h_curr, k_curr = h_next, k_next
            logging.debug(f"\tConvergent {h_curr}/{k_curr} (a={a})")
        else:
            if next(terms, None) is not None:
                logging.debug(f"\tIteration cap max_iters={self.max_iters} reached.")

        result = self._result(negative, h_curr, k_curr)
        logging.debug(f"Best approximation {result} in {n_iters} iterations.")
        return result

    def _truncate(self, target: Magnitude, sign: int, h_prev: int, k_prev: int, h_curr: int, k_curr: int) -> tuple[int, int]:
        """Pick between the convergent h_curr/k_curr and the largest admissible
        semiconvergent, once the next convergent overshoots the bound."""
        k = (self.N - k_prev) // k_curr
        if k < 1:
            return h_curr, k_curr
        semi = (k * h_curr + h_prev, k * k_curr + k_prev)
        check_range(sign * semi[0], self.dtype, operands=(k, h_curr, h_prev))
        if self._closer(target, semi, (h_curr, k_curr)):
            logging.debug(f"\tSemiconvergent {semi[0]}/{semi[1]} (k={k}) beats convergent {h_curr}/{k_curr}")
            return semi
        logging.debug(f"\tConvergent {h_curr}/{k_curr} beats semiconvergent {semi[0]}/{semi[1]} (k={k})")
        return h_curr, k_curr


def approximate(
    x: Target,
    N: int,
    approximator: Type[Approximator] = ContinuedFractionApproximator,
    **kwargs,
) -> ExactRational:
    """Return the fraction p/q with q <= N closest to `x`.

    Args:
        x: The target. A finite float, an integer, a Fraction or an
            ExactRational. Rational targets are handled exactly.
        N: The denominator bound. Must be a positive integer.
        approximator: The class used for the search. Use `Approximator` for
            the brute-force reference search.
        kwargs: Passed to `approximator`.

    Raises:
        InvalidBoundError: if `N` is not a positive integer.
        NonFiniteInputError: if `x` is a NaN or an infinity.
        RationalOverflowError: if the result does not fit the integer dtype.
    """
    return approximator(N, **kwargs).find(x)
