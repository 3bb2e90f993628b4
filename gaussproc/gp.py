"""Gaussian process regression with an incrementally updated Cholesky factor."""

from __future__ import annotations

import math
import os
import time
from typing import Any

import numpy as np
from scipy.linalg import solve_triangular

from .cov import CovarianceFunction
from .factory import CovFactory
from .sampleset import SampleSet

__all__ = ["ModelFileError", "GaussianProcess"]

_LOG2PI = math.log(2.0 * math.pi)
_MIN_CAPACITY = 64


class ModelFileError(ValueError):
    """A model file could not be read."""


class GaussianProcess:
    """Gaussian process regression model.

    The lower Cholesky factor of the kernel matrix is kept up to date as
    patterns are added, and is rebuilt only when the hyperparameters change.
    """

    def __init__(self, input_dim: int, covf_def: str) -> None:
        self.input_dim = int(input_dim)
        self._cf = CovFactory().create(self.input_dim, covf_def)
        self._cf.loghyper_changed = False
        self._samples = SampleSet(self.input_dim)
        self._L = np.zeros((_MIN_CAPACITY, _MIN_CAPACITY))
        self._alpha = np.zeros(0)
        self._alpha_needs_update = True

    # ----- construction from and to files -----

    @classmethod
    def read(cls, filename: str | os.PathLike[str]) -> GaussianProcess:
        """Load a model written by :meth:`write`."""
        with open(filename, encoding="utf-8") as fh:
            lines = [line.rstrip("\r\n") for line in fh]
        content = [line for line in lines if line and not line.startswith("#")]
        if len(content) < 3:
            raise ModelFileError(f"error while reading {filename}")
        dim_line, cov_line, param_line, *data = content

        try:
            input_dim = int(dim_line.split()[0])
        except (ValueError, IndexError):
            raise ModelFileError(
                f"invalid input dimensionality {dim_line!r} in {filename}"
            ) from None
        try:
            gp = cls(input_dim, cov_line)
        except ValueError as exc:
            raise ModelFileError(f"error while reading {filename}: {exc}") from exc

        param_dim = gp.covf.param_dim
        tokens = param_line.split()
        if len(tokens) < param_dim:
            raise ModelFileError(
                f"expected {param_dim} log-hyperparameters in {filename}"
            )
        try:
            params = [float(t) for t in tokens[:param_dim]]
        except ValueError:
            raise ModelFileError(
                f"invalid log-hyperparameters {param_line!r} in {filename}"
            ) from None
        gp.covf.set_loghyper(params)

        width = 1 + input_dim
        for line in data:
            tokens = line.split()
            if len(tokens) < width:
                raise ModelFileError(f"incomplete data line {line!r} in {filename}")
            try:
                values = [float(t) for t in tokens[:width]]
            except ValueError:
                raise ModelFileError(
                    f"invalid data line {line!r} in {filename}"
                ) from None
            gp.add_pattern(values[1:], values[0])
        return gp

    def write(self, filename: str | os.PathLike[str]) -> None:
        """Write the model (dimension, covariance, hyperparameters, data) to a file."""
        params = " ".join(format(float(p), ".10g") for p in self._cf.get_loghyper())
        with open(filename, "w", encoding="utf-8") as fh:
            fh.write(f"# {time.strftime('%c')}\n\n")
            fh.write(f"# input dimensionality\n{self.input_dim}\n\n")
            fh.write(f"# covariance function\n{self._cf}\n\n")
            fh.write(f"# log-hyperparameter\n{params} \n\n")
            fh.write("# data (target value in first column)\n")
            for k in range(len(self._samples)):
                row = [self._samples.y(k), *self._samples.x(k)]
                fh.write(" ".join(format(float(v), ".10g") for v in row) + " \n")

    def copy(self) -> GaussianProcess:
        """Return an independent copy of this model."""
        other = GaussianProcess(self.input_dim, str(self._cf))
        other._cf.set_loghyper(self._cf.get_loghyper())
        other._cf.loghyper_changed = self._cf.loghyper_changed
        other._samples = self._samples.copy()
        other._L = self._L.copy()
        other._alpha = self._alpha.copy()
        other._alpha_needs_update = self._alpha_needs_update
        return other

    # ----- accessors -----

    @property
    def covf(self) -> CovarianceFunction:
        """The covariance function of this process."""
        return self._cf

    @property
    def sampleset(self) -> SampleSet:
        """The training samples."""
        return self._samples

    def __len__(self) -> int:
        return len(self._samples)

    # ----- prediction -----

    def _as_input(self, x: Any) -> np.ndarray:
        v = np.asarray(x, dtype=float).ravel()
        if v.size != self.input_dim:
            raise ValueError(f"input has {v.size} elements, expected {self.input_dim}")
        return v

    def _k_star(self, x_star: np.ndarray) -> np.ndarray:
        return np.array(
            [self._cf.get(x_star, self._samples.x(i)) for i in range(len(self._samples))]
        )

    def f(self, x: Any) -> float:
        """Predicted mean at input ``x``."""
        if len(self._samples) == 0:
            return 0.0
        x_star = self._as_input(x)
        self._compute()
        self._update_alpha()
        return float(self._k_star(x_star) @ self._alpha)

    def var(self, x: Any) -> float:
        """Predicted variance at input ``x``."""
        if len(self._samples) == 0:
            return 0.0
        x_star = self._as_input(x)
        self._compute()
        self._update_alpha()
        n = len(self._samples)
        v = solve_triangular(self._L[:n, :n], self._k_star(x_star), lower=True)
        return float(self._cf.get(x_star, x_star) - v @ v)

    # ----- training data -----

    def add_pattern(self, x: Any, y: float) -> None:
        """Add an input-target pair and update the Cholesky factor."""
        n = len(self._samples)
        self._samples.add(x, y)
        if n == 0:
            x0 = self._samples.x(0)
            with np.errstate(invalid="ignore"):
                self._L[0, 0] = np.sqrt(self._cf.get(x0, x0))
            self._cf.loghyper_changed = False
        elif self._cf.loghyper_changed:
            self._compute()
        else:
            xn = self._samples.x(n)
            k = np.array([self._cf.get(self._samples.x(i), xn) for i in range(n)])
            kappa = self._cf.get(xn, xn)
            self._reserve(n + 1)
            k = solve_triangular(self._L[:n, :n], k, lower=True)
            self._L[n, :n] = k
            with np.errstate(invalid="ignore"):
                self._L[n, n] = np.sqrt(kappa - k @ k)
        self._alpha_needs_update = True

    def set_y(self, i: int, y: float) -> None:
        """Replace the target value of sample ``i``."""
        self._samples.set_y(i, y)
        self._alpha_needs_update = True

    def clear_sampleset(self) -> None:
        """Remove all training samples."""
        self._samples.clear()

    # ----- likelihood -----

    def log_likelihood(self) -> float:
        """Log marginal likelihood of the training targets."""
        self._compute()
        self._update_alpha()
        n = len(self._samples)
        y = self._samples.targets()
        det = 2.0 * float(np.log(np.diag(self._L[:n, :n])).sum())
        return float(-0.5 * (y @ self._alpha) - 0.5 * det - 0.5 * n * _LOG2PI)

    def log_likelihood_gradient(self) -> np.ndarray:
        """Gradient of the log marginal likelihood w.r.t. the log-hyperparameters."""
        self._compute()
        self._update_alpha()
        n = len(self._samples)
        grad = np.zeros(self._cf.param_dim)
        if n == 0:
            return grad
        L = self._L[:n, :n]
        W = solve_triangular(L, np.eye(n), lower=True)
        W = solve_triangular(L, W, lower=True, trans="T")
        W = np.outer(self._alpha, self._alpha) - W
        xs = [self._samples.x(i) for i in range(n)]
        for i, xi in enumerate(xs):
            for j, xj in enumerate(xs[: i + 1]):
                g = self._cf.grad(xi, xj)
                grad += W[i, j] * g * (0.5 if i == j else 1.0)
        return grad

    # ----- internals -----

    def _reserve(self, n: int) -> None:
        size = self._L.shape[0]
        if n <= size:
            return
        grown = np.zeros((max(n, 2 * size), max(n, 2 * size)))
        grown[:size, :size] = self._L
        self._L = grown

    def _compute(self) -> None:
        """Rebuild the Cholesky factor if the hyperparameters changed."""
        if not self._cf.loghyper_changed:
            return
        self._cf.loghyper_changed = False
        n = len(self._samples)
        self._alpha_needs_update = True
        if n == 0:
            return
        self._reserve(n)
        xs = [self._samples.x(i) for i in range(n)]
        K = np.zeros((n, n))
        for i, xi in enumerate(xs):
            for j, xj in enumerate(xs[: i + 1]):
                K[i, j] = self._cf.get(xi, xj)
        K = K + np.tril(K, -1).T
        self._L[:n, :n] = np.linalg.cholesky(K)

    def _update_alpha(self) -> None:
        if not self._alpha_needs_update:
            return
        self._alpha_needs_update = False
        n = len(self._samples)
        if n == 0:
            self._alpha = np.zeros(0)
            return
        L = self._L[:n, :n]
        alpha = solve_triangular(L, self._samples.targets(), lower=True)
        self._alpha = solve_triangular(L, alpha, lower=True, trans="T")