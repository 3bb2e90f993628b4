"""Base class of covariance functions."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

import numpy as np

from .utils import randn

__all__ = ["CovarianceFunction"]


class CovarianceFunction(ABC):
    """A covariance function parametrised by a vector of log-hyperparameters."""

    def __init__(self, input_dim: int, param_dim: int) -> None:
        self.input_dim = int(input_dim)
        self.param_dim = int(param_dim)
        self._loghyper = np.zeros(self.param_dim)
        self.loghyper_changed = False

    @abstractmethod
    def get(self, x1: np.ndarray, x2: np.ndarray) -> float:
        """Covariance of two input vectors."""

    @abstractmethod
    def grad(self, x1: np.ndarray, x2: np.ndarray) -> np.ndarray:
        """Gradient of the covariance with respect to the log-hyperparameters."""

    @abstractmethod
    def __str__(self) -> str:
        """Definition string of this covariance function."""

    def set_loghyper(self, p: Any) -> None:
        """Set the log-hyperparameter vector."""
        p = np.array(p, dtype=float)
        if p.ndim != 1 or p.size != self.param_dim:
            raise ValueError(
                f"expected {self.param_dim} log-hyperparameters, got shape {p.shape}"
            )
        self._loghyper = p
        self.loghyper_changed = True

    def get_loghyper(self) -> np.ndarray:
        """Return a copy of the log-hyperparameter vector."""
        return self._loghyper.copy()

    def draw_random_sample(self, X: Any, rng: Any = None) -> np.ndarray:
        """Draw target values for the rows of ``X`` from this covariance.

        Raises :class:`numpy.linalg.LinAlgError` if the kernel matrix is not
        positive definite.
        """
        X = np.asarray(X, dtype=float)
        if X.ndim != 2 or X.shape[1] != self.input_dim:
            raise ValueError(
                f"X must have shape (n, {self.input_dim}), got {X.shape}"
            )
        rows = list(X)
        n = len(rows)
        K = np.zeros((n, n))
        y = np.empty(n)
        for i, xi in enumerate(rows):
            for j, xj in enumerate(rows[i:], start=i):
                K[j, i] = self.get(xj, xi)
            y[i] = randn(rng)
        K = K + np.tril(K, -1).T
        L = np.linalg.cholesky(K)
        return L @ y