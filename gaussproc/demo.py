"""Example: regression of the hill function with a squared-exponential process."""

from __future__ import annotations

import argparse
import random
from collections.abc import Sequence

from .gp import GaussianProcess
from .utils import hill, randn

__all__ = ["run", "main"]


def _point(rng: random.Random) -> tuple[float, float]:
    return (rng.random() * 4 - 2, rng.random() * 4 - 2)


def run(n: int = 4000, m: int = 1000, seed: int | None = None) -> float:
    """Train on ``n`` noisy samples of the hill function; return the test MSE over ``m`` points."""
    if n < 0:
        raise ValueError("number of training patterns must not be negative")
    if m <= 0:
        raise ValueError("number of test points must be positive")
    rng = random.Random(seed)
    gp = GaussianProcess(2, "CovSum ( CovSEiso, CovNoise)")
    gp.covf.set_loghyper([0.0, 0.0, -2.0])
    for _ in range(n):
        x = _point(rng)
        gp.add_pattern(x, hill(*x) + randn(rng) * 0.1)
    tss = 0.0
    for _ in range(m):
        x = _point(rng)
        error = gp.f(x) - hill(*x)
        tss += error * error
    return tss / m


def main(argv: Sequence[str] | None = None) -> int:
    """Run the hill-function regression example and print the mean squared error."""
    parser = argparse.ArgumentParser(
        description="Gaussian process regression of the hill function."
    )
    parser.add_argument("--n", type=int, default=4000, help="training patterns")
    parser.add_argument("--m", type=int, default=1000, help="test points")
    parser.add_argument("--seed", type=int, default=None, help="random seed")
    args = parser.parse_args(argv)
    try:
        mse = run(args.n, args.m, args.seed)
    except ValueError as exc:
        parser.error(str(exc))
    print(f"mse = {mse}")
    return 0