import math
import random

import numpy as np
import pytest

from gaussproc.utils import cdf_norm, friedman, hill, randi, randn, randperm, sign

# Reference values of the standard normal CDF on the negative half-axis,
# x = -8.0, -7.75, ..., 0.0.  The positive half follows by symmetry.
LOWER_TAIL = {
    -8.00: 6.22e-16,
    -7.75: 4.595e-15,
    -7.50: 3.1909e-14,
    -7.25: 2.08386e-13,
    -7.00: 1.279813e-12,
    -6.75: 7.392258e-12,
    -6.50: 4.0160006e-11,
    -6.25: 2.05226343e-10,
    -6.00: 9.86587645e-10,
    -5.75: 4.462172454e-09,
    -5.50: 1.8989562466e-08,
    -5.25: 7.6049605165e-08,
    -5.00: 2.86651571879e-07,
    -4.75: 1.017083242569e-06,
    -4.50: 3.39767312473e-06,
    -4.25: 1.0688525774934e-05,
    -4.00: 3.167124183312e-05,
    -3.75: 8.8417285200804e-05,
    -3.50: 2.32629079035525e-04,
    -3.25: 5.77025042390767e-04,
    -3.00: 1.349898031630096e-03,
    -2.75: 2.979763235054556e-03,
    -2.50: 6.209665325776138e-03,
    -2.25: 1.2224472655044704e-02,
    -2.00: 2.2750131948179216e-02,
    -1.75: 4.0059156863817079e-02,
    -1.50: 6.6807201268858085e-02,
    -1.25: 1.05649773666855282e-01,
    -1.00: 1.58655253931457046e-01,
    -0.75: 2.26627352376868207e-01,
    -0.50: 3.08537538725986937e-01,
    -0.25: 4.01293674317076299e-01,
    0.00: 0.5,
}

TOL = 10e-16


@pytest.mark.parametrize("x, expected", sorted(LOWER_TAIL.items()))
def test_cdf_norm_lower_half(x, expected):
    assert cdf_norm(x) == pytest.approx(expected, abs=TOL)


@pytest.mark.parametrize("x, expected", sorted(LOWER_TAIL.items()))
def test_cdf_norm_upper_half(x, expected):
    assert cdf_norm(-x) == pytest.approx(1.0 - expected, abs=TOL)


def test_randn_kolmogorov_smirnov():
    rng = random.Random(12345)
    n = 100_000
    samples = sorted(randn(rng) for _ in range(n))
    F = np.array([cdf_norm(v) for v in samples])
    i = np.arange(n)
    D = max(np.max(F - (i - 1.0) / n), np.max(i / n - F))
    assert 1.63 / math.sqrt(n) > D


def test_randperm_chi_square():
    rng = random.Random(2024)
    m, n = 20_000, 31
    perms = np.array([randperm(n, rng) for _ in range(m)])
    assert perms.shape == (m, n)
    assert (np.sort(perms, axis=1) == np.arange(n)).all()
    expected = m / n
    counts = np.stack([(perms == value).sum(axis=0) for value in range(n)])
    stats = ((counts - expected) ** 2 / expected).sum(axis=1)
    fails = int(np.count_nonzero((stats < 18.49) | (stats > 43.77)))
    assert fails <= 10


def test_randi_chi_square():
    rng = random.Random(99)
    m, n, k = 10_000, 31, 30
    expected = m / n
    draws = np.array([[randi(n, rng) for _ in range(m)] for _ in range(k)])
    assert draws.min() >= 0
    assert draws.max() < n
    counts = np.stack([np.bincount(row, minlength=n) for row in draws])
    stats = ((counts - expected) ** 2 / expected).sum(axis=1)
    fails = int(np.count_nonzero((stats < 18.49) | (stats > 43.77)))
    assert fails <= 10


def test_randperm_is_permutation():
    perm = randperm(17, random.Random(3))
    assert sorted(perm) == list(range(17))


def test_randperm_rejects_non_positive():
    with pytest.raises(ValueError):
        randperm(0)


def test_randi_in_range():
    rng = random.Random(5)
    values = {randi(7, rng) for _ in range(500)}
    assert values <= set(range(7))
    assert len(values) == 7


def test_randn_reproducible_with_seed():
    a = [randn(random.Random(8)) for _ in range(1)]
    b = [randn(random.Random(8)) for _ in range(1)]
    assert a == b


def test_sign():
    assert sign(2.5) == 1.0
    assert sign(-3.0) == -1.0
    assert sign(0.0) == 0.0


def test_hill_at_origin():
    assert hill(0.0, 0.0) == pytest.approx(1.0)


def test_friedman_needs_five_inputs():
    with pytest.raises(ValueError):
        friedman([1.0, 2.0])


def test_friedman_linear_in_last_inputs():
    base = friedman([0.1, 0.2, 0.3, 0.0, 0.0])
    shifted = friedman([0.1, 0.2, 0.3, 1.0, 0.0])
    assert shifted - base == pytest.approx(10.0)