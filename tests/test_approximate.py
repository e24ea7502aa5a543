import logging
import math
from fractions import Fraction

import numpy as np
import pytest

from sternbrocot import (
    Approximator,
    ContinuedFractionApproximator,
    ExactRational,
    InvalidBoundError,
    NonFiniteInputError,
    RationalOverflowError,
    approximate,
)

TEST_RNG = np.random.default_rng(seed=2022)
TEST_N_TRIALS = 50

PI = 3.14159265358979


def test_approximate_pi():
    r = approximate(PI, 113)
    assert r == ExactRational(355, 113)
    assert abs(PI - r.to_real()) < 3e-7
    assert approximate(PI, 7) == ExactRational(22, 7)
    assert approximate(PI, 1) == ExactRational(3, 1)
    assert approximate(PI, 100) == ExactRational(311, 99)
    assert approximate(PI, 1000) == ExactRational(355, 113)
    assert approximate(-PI, 7) == ExactRational(-22, 7)


def test_approximate_e():
    assert approximate(np.e, 50) == ExactRational(106, 39)
    assert approximate(np.e, 71) == ExactRational(193, 71)
    assert approximate(2.71828, 50).denominator <= 50


def test_approximate_semiconvergent():
    # 1/10 is closer to 0.09 than the convergent 0/1.
    assert approximate(0.09, 10) == ExactRational(1, 10)
    # ... but 0/1 is closer to 0.001.
    assert approximate(0.001, 10) == ExactRational(0, 1)
    # sqrt(2) = [1; 2, 2, ...]: 4/3 is a semiconvergent between 1/1 and 3/2.
    assert approximate(math.sqrt(2), 3) == ExactRational(4, 3)
    assert approximate(math.sqrt(2), 2) == ExactRational(3, 2)


def test_approximate_exact_targets():
    assert approximate(5, 3) == ExactRational(5, 1)
    assert approximate(-5, 3) == ExactRational(-5, 1)
    assert approximate(0.0, 1) == ExactRational(0, 1)
    assert approximate(ExactRational(355, 113), 7) == ExactRational(22, 7)
    assert approximate(ExactRational(-2, 5), 2) == ExactRational(-1, 2)
    # halfway: both 0/1 and 1/1 are 1/2 away; the convergent 0/1 wins.
    assert approximate(ExactRational(1, 2), 1) == ExactRational(0, 1)
    assert approximate(0.5, 1) == ExactRational(0, 1)


def test_round_trip():
    for q in range(1, 60):
        for p in range(-2 * q, 2 * q + 1):
            if math.gcd(p, q) != 1:
                continue
            assert approximate(ExactRational(p, q), q) == ExactRational(p, q)
            assert approximate(p / q, q) == ExactRational(p, q)


def test_denominator_bound():
    for _ in range(TEST_N_TRIALS):
        x = float(TEST_RNG.uniform(-1000, 1000))
        N = int(TEST_RNG.integers(1, 10**6))
        assert approximate(x, N).denominator <= N


def test_optimality_float():
    for N in [1, 2, 3, 5, 8, 13, 50, 113, 200]:
        for _ in range(TEST_N_TRIALS):
            x = float(TEST_RNG.uniform(-10, 10))
            r = approximate(x, N)
            best = approximate(x, N, approximator=Approximator)
            assert r.denominator <= N
            assert abs(x - r.to_real()) <= abs(x - best.to_real()) + 1e-12


def test_optimality_exact():
    for N in [1, 2, 3, 5, 8, 13, 50, 113, 200]:
        for _ in range(TEST_N_TRIALS):
            q = int(TEST_RNG.integers(1, 10**4))
            p = int(TEST_RNG.integers(-10 * q, 10 * q))
            x = ExactRational(p, q)
            r = approximate(x, N)
            best = approximate(x, N, approximator=Approximator)
            assert r.denominator <= N
            assert abs(x - r) == abs(x - best)


def test_brute_force_approximator():
    assert Approximator(113).find(PI) == ExactRational(355, 113)
    assert Approximator(7).find(PI) == ExactRational(22, 7)
    assert Approximator(7).find(-PI) == ExactRational(-22, 7)
    assert Approximator(13).find(ExactRational(1, 13)) == ExactRational(1, 13)


def test_invalid_arguments():
    for N in [0, -1, 2.5, None]:
        with pytest.raises(InvalidBoundError) as info:
            approximate(1.0, N)
        assert info.value.bound == N
    with pytest.raises(ValueError):
        approximate(1.0, 0)
    for x in [float("nan"), float("inf"), -np.inf, np.float64("nan")]:
        with pytest.raises(NonFiniteInputError):
            approximate(x, 10)
    with pytest.raises(ValueError):
        ContinuedFractionApproximator(10, max_iters=0)
    with pytest.raises(ValueError):
        ContinuedFractionApproximator(10, eps=0.0)


def test_overflow():
    with pytest.raises(RationalOverflowError):
        approximate(1e30, 10)
    with pytest.raises(RationalOverflowError):
        approximate(3e9, 5, dtype=np.int32)
    assert approximate(2e9, 5, dtype=np.int32) == ExactRational(2 * 10**9, 1)
    with pytest.raises(OverflowError):
        approximate(100.5, 3, dtype=np.int8)


def test_iteration_cap():
    # the golden ratio has all-ones partial quotients; with a cap of 5 the
    # search stops at the 5th convergent 8/5.
    golden = (1 + math.sqrt(5)) / 2
    assert approximate(golden, 10**6, max_iters=5) == ExactRational(8, 5)
    assert approximate(golden, 10**6).denominator > 1000


def test_dtype():
    r = approximate(PI, 113, dtype=np.int16)
    assert r == ExactRational(355, 113)
    assert r.dtype == np.dtype(np.int16)


def test_large_denominator_exact_target():
    x = ExactRational(3141592653589793, 10**15)
    for N in [10**3, 10**6, 10**9]:
        expected = Fraction(3141592653589793, 10**15).limit_denominator(N)
        r = approximate(x, N)
        assert (r.numerator, r.denominator) == (expected.numerator, expected.denominator)
    # denominators near the top of the int64 range
    x = ExactRational(2**62 + 1, 2**63 - 1)
    expected = Fraction(2**62 + 1, 2**63 - 1).limit_denominator(10**12)
    r = approximate(x, 10**12)
    assert (r.numerator, r.denominator) == (expected.numerator, expected.denominator)
    assert approximate(x, 10**4, approximator=Approximator) == approximate(x, 10**4)


def test_dtype_minimum():
    assert approximate(ExactRational(-(2**63), 1), 1) == ExactRational(-(2**63), 1)
    assert approximate(-(2**63), 5) == ExactRational(-(2**63), 1)
    r = approximate(ExactRational(-128, 1, dtype=np.int8), 1, dtype=np.int8)
    assert (r.numerator, r.denominator) == (-128, 1)
    assert approximate(-128.0, 3, dtype=np.int8) == ExactRational(-128, 1, dtype=np.int8)
    with pytest.raises(RationalOverflowError):
        approximate(128, 1, dtype=np.int8)


def test_fraction_target():
    assert approximate(Fraction(355, 113), 7) == ExactRational(22, 7)
    assert approximate(Fraction(-1, 3), 3) == ExactRational(-1, 3)
    assert approximate(np.float32(0.5), 2) == ExactRational(1, 2)
    assert approximate(np.int16(-7), 2) == ExactRational(-7, 1)


def test_non_numeric_target():
    for x in ["3.14", None, [1.0], 1 + 2j]:
        with pytest.raises(TypeError):
            approximate(x, 10)


def test_iteration_cap_logging(caplog):
    golden = (1 + math.sqrt(5)) / 2
    with caplog.at_level(logging.DEBUG):
        assert approximate(golden, 10**6, max_iters=5) == ExactRational(8, 5)
    assert "Iteration cap" in caplog.text
    caplog.clear()
    # 8/5 = [1; 1, 1, 2] ends after exactly four terms
    with caplog.at_level(logging.DEBUG):
        assert approximate(ExactRational(8, 5), 10, max_iters=4) == ExactRational(8, 5)
    assert "Iteration cap" not in caplog.text
    assert "Best approximation 8/5" in caplog.text
