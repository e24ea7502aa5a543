from __future__ import annotations

import logging

from sternbrocot import DEFAULT_DTYPE, ExactRational, check_bound


def farey(N: int, dtype=DEFAULT_DTYPE) -> list[ExactRational]:
    """Return the Farey sequence of order N: every reduced fraction in [0, 1]
    with denominator <= N, in increasing order.

    Starting from [0/1, 1/1], the mediant of each adjacent pair a/b, c/d is
    inserted while b + d <= N. Adjacent entries always satisfy bc - ad = 1.

    Args:
        N: The order. Must be a positive integer.
        dtype: The numpy signed integer dtype of the fractions.

    Returns:
        The sequence, from 0/1 to 1/1.

    Raises:
        InvalidBoundError: if `N` is not a positive integer.
    """
    N = check_bound(N, "farey")
    logging.debug(f"Generating Farey sequence of order {N} ...")

    sequence = [ExactRational(0, 1, dtype=dtype), ExactRational(1, 1, dtype=dtype)]
    i = 0
    while i < len(sequence) - 1:
        left, right = sequence[i], sequence[i + 1]
        if left.denominator + right.denominator <= N:
            sequence.insert(i + 1, left.mediant(right))
        else:
            i += 1

    logging.debug(f"Farey sequence of order {N} has {len(sequence)} terms.")
    return sequence
