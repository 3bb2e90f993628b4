"""Random-number helpers, the normal CDF and a few benchmark functions."""

from __future__ import annotations

import math
import random
from collections.abc import Sequence
from typing import Any, Callable

__all__ = ["randn", "randperm", "randi", "cdf_norm", "friedman", "hill", "sign"]


def _uniform(rng: Any) -> Callable[[], float]:
    """Return a callable drawing uniform numbers from [0, 1)."""
    return random.random if rng is None else rng.random


def randn(rng: Any = None) -> float:
    """Draw a standard normal number using the Box-Muller transform.

    ``rng`` is any object with a ``random()`` method returning floats in
    [0, 1); the module-level generator of :mod:`random` is used if omitted.
    """
    draw = _uniform(rng)
    u1 = 1.0 - draw()
    u2 = 1.0 - draw()
    return math.sqrt(-2.0 * math.log(u1)) * math.cos(2.0 * math.pi * u2)


def randperm(n: int, rng: Any = None) -> list[int]:
    """Return a random permutation of ``0, ..., n-1`` (Fisher-Yates shuffle)."""
    if n <= 0:
        raise ValueError(f"permutation length must be positive, got {n}")
    draw = _uniform(rng)
    perm = list(range(n))
    for i in range(n - 1, 0, -1):
        j = int(draw() * (i + 1))
        perm[i], perm[j] = perm[j], perm[i]
    return perm


def randi(n: int, rng: Any = None) -> int:
    """Return an integer drawn uniformly from ``0, ..., n-1``."""
    return int(_uniform(rng)() * n)


def cdf_norm(x: float) -> float:
    """Double-precision approximation of the standard normal CDF."""
    abs_x = abs(x)
    if abs_x > 37:
        norm = 0.0
    elif abs_x < 7.07106781186547:
        build = 3.52624965998911e-02 * abs_x + 0.700383064443688
        build = build * abs_x + 6.37396220353165
        build = build * abs_x + 33.912866078383
        build = build * abs_x + 112.079291497871
        build = build * abs_x + 221.213596169931
        build = build * abs_x + 220.206867912376
        norm = math.exp(-abs_x * abs_x / 2) * build
        build = 8.83883476483184e-02 * abs_x + 1.75566716318264
        build = build * abs_x + 16.064177579207
        build = build * abs_x + 86.7807322029461
        build = build * abs_x + 296.564248779674
        build = build * abs_x + 637.333633378831
        build = build * abs_x + 793.826512519948
        build = build * abs_x + 440.413735824752
        norm = norm / build
    else:
        build = abs_x + 0.65
        build = abs_x + 4 / build
        build = abs_x + 3 / build
        build = abs_x + 2 / build
        build = abs_x + 1 / build
        norm = math.exp(-abs_x * abs_x / 2) / build / 2.506628274631
    if x > 0:
        norm = 1 - norm
    return norm


def friedman(x: Sequence[float]) -> float:
    """First Friedman benchmark function on the first five inputs."""
    if len(x) < 5:
        raise ValueError("friedman needs at least five inputs")
    return (
        10 * math.sin(math.pi * x[0] * x[1])
        + 20 * (x[2] - 0.5) ** 2
        + 10 * x[3]
        + 5 * x[4]
    )


def hill(x: float, y: float) -> float:
    """Hill function ``sin(x - y) + 0.2 y^3 + cos(y (x - 0.5))``."""
    return math.sin(x - y) + 0.2 * y**3 + math.cos(y * (x - 0.5))


def sign(x: float) -> float:
    """Return 1.0, -1.0 or 0.0 according to the sign of ``x``."""
    if x > 0:
        return 1.0
    if x < 0:
        return -1.0
    return 0.0