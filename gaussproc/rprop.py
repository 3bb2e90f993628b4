"""Resilient backpropagation (Rprop) for fitting covariance hyperparameters."""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np

from .gp import GaussianProcess

__all__ = ["RProp"]


def _gradient(gp: GaussianProcess) -> np.ndarray:
    """Log-likelihood gradient, or NaNs if the kernel matrix cannot be factorised."""
    try:
        with np.errstate(all="ignore"):
            return np.asarray(gp.log_likelihood_gradient(), dtype=float)
    except (np.linalg.LinAlgError, ValueError):
        gp.covf.loghyper_changed = True
        return np.full(gp.covf.param_dim, math.nan)


def _likelihood(gp: GaussianProcess) -> float:
    """Log likelihood, or NaN if the kernel matrix cannot be factorised."""
    try:
        with np.errstate(all="ignore"):
            return float(gp.log_likelihood())
    except (np.linalg.LinAlgError, ValueError):
        gp.covf.loghyper_changed = True
        return math.nan


def _sign(v: np.ndarray) -> np.ndarray:
    """Elementwise sign where NaN counts as zero."""
    return np.where(np.isnan(v), 0.0, np.sign(v))


@dataclass
class RProp:
    """Gradient-sign based optimizer maximising the log marginal likelihood."""

    eps_stop: float = 0.0
    delta0: float = 0.1
    delta_min: float = 1e-6
    delta_max: float = 50.0
    eta_minus: float = 0.5
    eta_plus: float = 1.2

    def maximize(self, gp: GaussianProcess, n: int = 100, verbose: bool = True) -> None:
        """Run at most ``n`` steps and leave the best hyperparameters found in ``gp``."""
        param_dim = gp.covf.param_dim
        delta = np.full(param_dim, float(self.delta0))
        grad_old = np.zeros(param_dim)
        params = gp.covf.get_loghyper()
        best_params = params.copy()
        best = -math.inf

        for i in range(n):
            grad = -_gradient(gp)
            change = grad_old * grad
            grew = change > 0
            shrank = change < 0
            delta = np.where(grew, np.minimum(delta * self.eta_plus, self.delta_max), delta)
            delta = np.where(shrank, np.maximum(delta * self.eta_minus, self.delta_min), delta)
            grad = np.where(shrank, 0.0, grad)
            params = params - _sign(grad) * delta
            grad_old = grad
            if np.linalg.norm(grad_old) < self.eps_stop:
                break
            gp.covf.set_loghyper(params)
            lik = _likelihood(gp)
            if verbose:
                print(f"{i} {-lik:g}")
            if lik > best:
                best = lik
                best_params = params.copy()

        gp.covf.set_loghyper(best_params)