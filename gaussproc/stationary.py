"""Stationary covariance functions: squared exponential, Matern, RQ, periodic."""

from __future__ import annotations

import math
from typing import Any

import numpy as np

from .cov import CovarianceFunction

__all__ = [
    "CovMatern3iso",
    "CovMatern5iso",
    "CovPeriodic",
    "CovPeriodicMatern3iso",
    "CovRQiso",
    "CovSEard",
    "CovSEiso",
]

_SQRT3 = math.sqrt(3.0)
_SQRT5 = math.sqrt(5.0)


def _diff(x1: Any, x2: Any) -> np.ndarray:
    return np.asarray(x1, dtype=float) - np.asarray(x2, dtype=float)


def _distance(x1: Any, x2: Any) -> float:
    return float(np.linalg.norm(_diff(x1, x2)))


class CovMatern3iso(CovarianceFunction):
    """Matern covariance with nu = 3/2 and isotropic distance.

    Log-hyperparameters: length scale, signal standard deviation.
    """

    def __init__(self, input_dim: int) -> None:
        super().__init__(input_dim, 2)
        self.set_loghyper(np.zeros(2))
        self.loghyper_changed = False

    def _z(self, x1: Any, x2: Any) -> float:
        return _distance(x1, x2) * _SQRT3 / self._ell

    def get(self, x1: Any, x2: Any) -> float:
        z = self._z(x1, x2)
        return self._sf2 * math.exp(-z) * (1.0 + z)

    def grad(self, x1: Any, x2: Any) -> np.ndarray:
        z = self._z(x1, x2)
        k = self._sf2 * math.exp(-z)
        return np.array([k * z * z, 2.0 * k * (1.0 + z)])

    def set_loghyper(self, p: Any) -> None:
        super().set_loghyper(p)
        self._ell = math.exp(self._loghyper[0])
        self._sf2 = math.exp(2.0 * self._loghyper[1])

    def __str__(self) -> str:
        return "CovMatern3iso"


class CovMatern5iso(CovarianceFunction):
    """Matern covariance with nu = 5/2 and isotropic distance.

    Log-hyperparameters: length scale, signal standard deviation.
    """

    def __init__(self, input_dim: int) -> None:
        super().__init__(input_dim, 2)
        self.set_loghyper(np.zeros(2))
        self.loghyper_changed = False

    def _z(self, x1: Any, x2: Any) -> float:
        return _distance(x1, x2) * _SQRT5 / self._ell

    def get(self, x1: Any, x2: Any) -> float:
        z = self._z(x1, x2)
        return self._sf2 * math.exp(-z) * (1.0 + z + z * z / 3.0)

    def grad(self, x1: Any, x2: Any) -> np.ndarray:
        z = self._z(x1, x2)
        k = self._sf2 * math.exp(-z)
        z_square = z * z
        return np.array(
            [
                k * (z_square + z_square * z) / 3.0,
                2.0 * k * (1.0 + z + z_square / 3.0),
            ]
        )

    def set_loghyper(self, p: Any) -> None:
        super().set_loghyper(p)
        self._ell = math.exp(self._loghyper[0])
        self._sf2 = math.exp(2.0 * self._loghyper[1])

    def __str__(self) -> str:
        return "CovMatern5iso"


class CovPeriodic(CovarianceFunction):
    """Periodic covariance.

    Log-hyperparameters: length scale, signal standard deviation, and the
    period, which is used as its absolute value (not exponentiated). The
    gradient with respect to the period is reported as zero.
    """

    def __init__(self, input_dim: int) -> None:
        super().__init__(input_dim, 3)
        self.set_loghyper(np.zeros(3))
        self.loghyper_changed = False

    def _s(self, x1: Any, x2: Any) -> float:
        with np.errstate(divide="ignore", invalid="ignore"):
            k = np.float64(math.pi * _distance(x1, x2)) / np.float64(self._period)
            return float(np.sin(k) / self._ell)

    def get(self, x1: Any, x2: Any) -> float:
        s = self._s(x1, x2)
        return self._sf2 * math.exp(-2.0 * s * s) if math.isfinite(s) else math.nan

    def grad(self, x1: Any, x2: Any) -> np.ndarray:
        s = self._s(x1, x2)
        if not math.isfinite(s):
            return np.array([math.nan, math.nan, 0.0])
        e = math.exp(-2.0 * s * s)
        return np.array([4.0 * self._sf2 * e * s * s, 2.0 * self._sf2 * e, 0.0])

    def set_loghyper(self, p: Any) -> None:
        super().set_loghyper(p)
        self._ell = math.exp(self._loghyper[0])
        self._sf2 = math.exp(2.0 * self._loghyper[1])
        self._period = abs(float(self._loghyper[2]))

    def __str__(self) -> str:
        return "CovPeriodic"


class CovPeriodicMatern3iso(CovarianceFunction):
    """Matern 3/2 covariance applied to a periodic distance.

    Log-hyperparameters: length scale, signal standard deviation, and the
    period, which is used directly (not exponentiated).
    """

    def __init__(self, input_dim: int) -> None:
        super().__init__(input_dim, 3)
        self.set_loghyper(np.zeros(3))
        self.loghyper_changed = False

    def _phase(self, x1: Any, x2: Any) -> float:
        with np.errstate(divide="ignore", invalid="ignore"):
            return float(
                np.float64(math.pi * _distance(x1, x2)) / np.float64(self._period)
            )

    def get(self, x1: Any, x2: Any) -> float:
        k = self._phase(x1, x2)
        if not math.isfinite(k):
            return math.nan
        s = _SQRT3 * abs(math.sin(k) / self._ell)
        return self._sf2 * (1.0 + s) * math.exp(-s)

    def grad(self, x1: Any, x2: Any) -> np.ndarray:
        k = self._phase(x1, x2)
        if not math.isfinite(k):
            return np.full(3, math.nan)
        s = _SQRT3 * abs(math.sin(k) / self._ell)
        e = math.exp(-s)
        return np.array(
            [
                self._sf2 * s * s * e,
                2.0 * self._sf2 * (1.0 + s) * e,
                self._sf2 * e * s * _SQRT3 * k * math.cos(k) / self._ell / self._period,
            ]
        )

    def set_loghyper(self, p: Any) -> None:
        super().set_loghyper(p)
        self._ell = math.exp(self._loghyper[0])
        self._sf2 = math.exp(2.0 * self._loghyper[1])
        self._period = float(self._loghyper[2])

    def __str__(self) -> str:
        return "CovPeriodicMatern3iso"


class CovRQiso(CovarianceFunction):
    """Isotropic rational quadratic covariance.

    Log-hyperparameters: length scale, signal standard deviation, shape alpha.
    """

    def __init__(self, input_dim: int) -> None:
        super().__init__(input_dim, 3)
        self.set_loghyper(np.zeros(3))
        self.loghyper_changed = False

    def _z(self, x1: Any, x2: Any) -> float:
        d = _diff(x1, x2) / self._ell
        return float(d @ d)

    def get(self, x1: Any, x2: Any) -> float:
        z = self._z(x1, x2)
        return self._sf2 * (1.0 + 0.5 * z / self._alpha) ** (-self._alpha)

    def grad(self, x1: Any, x2: Any) -> np.ndarray:
        z = self._z(x1, x2)
        k = 1.0 + 0.5 * z / self._alpha
        sf2_k = self._sf2 * k ** (-self._alpha)
        return np.array(
            [
                self._sf2 * z * k ** (-self._alpha - 1.0),
                2.0 * sf2_k,
                sf2_k * (0.5 * z / k - self._alpha * math.log(k)),
            ]
        )

    def set_loghyper(self, p: Any) -> None:
        super().set_loghyper(p)
        self._ell = math.exp(self._loghyper[0])
        self._sf2 = math.exp(2.0 * self._loghyper[1])
        self._alpha = math.exp(self._loghyper[2])

    def __str__(self) -> str:
        return "CovRQiso"


class CovSEard(CovarianceFunction):
    """Squared exponential covariance with automatic relevance determination.

    Log-hyperparameters: one length scale per input dimension, followed by
    the signal standard deviation.
    """

    def __init__(self, input_dim: int) -> None:
        super().__init__(input_dim, input_dim + 1)
        self.set_loghyper(np.zeros(self.param_dim))
        self.loghyper_changed = False

    def _z(self, x1: Any, x2: Any) -> np.ndarray:
        return np.square(_diff(x1, x2) / self._ell)

    def get(self, x1: Any, x2: Any) -> float:
        return self._sf2 * math.exp(-0.5 * float(self._z(x1, x2).sum()))

    def grad(self, x1: Any, x2: Any) -> np.ndarray:
        z = self._z(x1, x2)
        k = self._sf2 * math.exp(-0.5 * float(z.sum()))
        return np.append(z * k, 2.0 * k)

    def set_loghyper(self, p: Any) -> None:
        super().set_loghyper(p)
        self._ell = np.exp(self._loghyper[: self.input_dim])
        self._sf2 = math.exp(2.0 * self._loghyper[self.input_dim])

    def __str__(self) -> str:
        return "CovSEard"


class CovSEiso(CovarianceFunction):
    """Squared exponential covariance with isotropic distance.

    Log-hyperparameters: length scale, signal standard deviation.
    """

    def __init__(self, input_dim: int) -> None:
        super().__init__(input_dim, 2)
        self.set_loghyper(np.zeros(2))
        self.loghyper_changed = False

    def _z(self, x1: Any, x2: Any) -> float:
        d = _diff(x1, x2) / self._ell
        return float(d @ d)

    def get(self, x1: Any, x2: Any) -> float:
        return self._sf2 * math.exp(-0.5 * self._z(x1, x2))

    def grad(self, x1: Any, x2: Any) -> np.ndarray:
        z = self._z(x1, x2)
        k = self._sf2 * math.exp(-0.5 * z)
        return np.array([k * z, 2.0 * k])

    def set_loghyper(self, p: Any) -> None:
        super().set_loghyper(p)
        self._ell = math.exp(self._loghyper[0])
        self._sf2 = math.exp(2.0 * self._loghyper[1])

    def __str__(self) -> str:
        return "CovSEiso"