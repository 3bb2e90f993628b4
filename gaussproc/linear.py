"""Linear and white-noise covariance functions."""

from __future__ import annotations

from typing import Any

import numpy as np

from .cov import CovarianceFunction

__all__ = ["CovLinearard", "CovLinearone", "CovNoise"]


class CovLinearard(CovarianceFunction):
    """Linear covariance with one length scale per input dimension."""

    def __init__(self, input_dim: int) -> None:
        super().__init__(input_dim, input_dim)
        self.set_loghyper(np.zeros(self.param_dim))
        self.loghyper_changed = False

    def get(self, x1: Any, x2: Any) -> float:
        a = np.asarray(x1, dtype=float) / self._ell
        b = np.asarray(x2, dtype=float) / self._ell
        return float(a @ b)

    def grad(self, x1: Any, x2: Any) -> np.ndarray:
        a = np.asarray(x1, dtype=float) / self._ell
        b = np.asarray(x2, dtype=float) / self._ell
        return -2.0 * a * b

    def set_loghyper(self, p: Any) -> None:
        super().set_loghyper(p)
        self._ell = np.exp(self._loghyper)

    def __str__(self) -> str:
        return "CovLinearard"


class CovLinearone(CovarianceFunction):
    """Linear covariance with a bias term and a single scale parameter."""

    def __init__(self, input_dim: int) -> None:
        super().__init__(input_dim, 1)
        self.set_loghyper(np.zeros(1))
        self.loghyper_changed = False

    def get(self, x1: Any, x2: Any) -> float:
        dot = float(np.asarray(x1, dtype=float) @ np.asarray(x2, dtype=float))
        return self._it2 * (1.0 + dot)

    def grad(self, x1: Any, x2: Any) -> np.ndarray:
        return np.array([-2.0 * self.get(x1, x2)])

    def set_loghyper(self, p: Any) -> None:
        super().set_loghyper(p)
        self._it2 = float(np.exp(-2.0 * self._loghyper[0]))

    def __str__(self) -> str:
        return "CovLinearone"


class CovNoise(CovarianceFunction):
    """Independent white noise.

    The covariance is non-zero only when both arguments are the very same
    object, i.e. for a sample paired with itself.
    """

    def __init__(self, input_dim: int) -> None:
        super().__init__(input_dim, 1)
        self.set_loghyper(np.zeros(1))
        self.loghyper_changed = False

    def get(self, x1: Any, x2: Any) -> float:
        return self._s2 if x1 is x2 else 0.0

    def grad(self, x1: Any, x2: Any) -> np.ndarray:
        return np.array([2.0 * self._s2 if x1 is x2 else 0.0])

    def set_loghyper(self, p: Any) -> None:
        super().set_loghyper(p)
        self._s2 = float(np.exp(2.0 * self._loghyper[0]))

    def __str__(self) -> str:
        return "CovNoise"