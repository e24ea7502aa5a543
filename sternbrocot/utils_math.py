from __future__ import annotations

from typing import Iterator

import numpy as np


def continued_fraction(p: int, q: int) -> list[int]:
    """Given p/q, return its continued fraction.

    Args:
        p: The numerator.
        q: The denominator.

    Returns:
        The continued fraction expansion of p/q, [a0; a1, a2, ..., an].
    """
    coeffs = list()
    while q != 0:
        a = p // q
        coeffs.append(a)
        p, q = q, p - q * a
    return coeffs


def real_continued_fraction(x: float, eps: float) -> Iterator[int]:
    """Generate the continued fraction of a finite, non-negative real.

    The expansion ends when the fractional part of the residual drops below
    `eps`, i.e. `x` is rational to working precision, or when the next
    residual is not finite. It is otherwise unbounded; callers cap it.

    Args:
        x: The value to expand.
        eps: Fractional parts smaller than this terminate the expansion.

    Yields:
        The partial quotients a0, a1, a2, ...
    """
    r = float(x)
    while True:
        a = int(np.floor(r))
        yield a
        frac = r - a
        if frac < eps:
            return
        r = 1.0 / frac
        if not np.isfinite(r):
            return
