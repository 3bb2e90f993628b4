"""Conjugate-gradient optimizer with Wolfe-Powell line searches."""

from __future__ import annotations

import math
import sys

import numpy as np

from .gp import GaussianProcess

__all__ = ["CG"]

_INT = 0.1  # don't reevaluate within 0.1 of the limit of the current bracket
_EXT = 3.0  # extrapolate at most 3 times the current step size
_MAX = 20  # at most 20 function evaluations per line search
_RATIO = 10.0  # maximum allowed slope ratio
_SIG = 0.1
_RHO = _SIG / 2
_TINY = sys.float_info.min


def _evaluate(gp: GaussianProcess, params: np.ndarray) -> tuple[np.float64, np.ndarray]:
    """Negative log likelihood and its gradient at ``params``; NaNs on failure."""
    gp.covf.set_loghyper(params)
    try:
        with np.errstate(all="ignore"):
            nll = np.float64(-gp.log_likelihood())
            dnll = -np.asarray(gp.log_likelihood_gradient(), dtype=float)
    except (np.linalg.LinAlgError, ValueError):
        gp.covf.loghyper_changed = True
        return np.float64(math.nan), np.full(gp.covf.param_dim, math.nan)
    return nll, dnll


def _report(value: float) -> None:
    print(f"{float(value):g}")


class CG:
    """Minimises the negative log marginal likelihood by conjugate gradients."""

    def maximize(self, gp: GaussianProcess, n: int = 100, verbose: bool = True) -> None:
        """Use about ``n`` likelihood evaluations and leave the result in ``gp``."""
        X = gp.covf.get_loghyper()
        f0, df0 = _evaluate(gp, X)
        if verbose:
            _report(f0)

        ls_failed = False
        s = -df0
        d0 = np.float64(-(s @ s))
        x3 = np.float64(1.0) / (1.0 - d0)

        f3 = np.float64(0.0)
        d3 = np.float64(0.0)
        df3 = df0
        x2 = x4 = f2 = f4 = d2 = d4 = np.float64(0.0)

        i = 0
        with np.errstate(all="ignore"):
            while i < n:
                X0, F0, dF0 = X, f0, df0
                M = min(_MAX, n - i)

                # extrapolate until the Wolfe-Powell conditions allow stopping
                while True:
                    x2, f2, d2 = np.float64(0.0), f0, d0
                    f3, df3 = f0, df0
                    success = False
                    while not success and M > 0:
                        M -= 1
                        i += 1
                        f3, df3 = _evaluate(gp, X + s * x3)
                        if verbose:
                            _report(f3)
                        if np.isfinite(f3) and not np.isnan(df3).any():
                            success = True
                        else:
                            x3 = (x2 + x3) / 2
                    if f3 < F0:
                        X0, F0, dF0 = X + s * x3, f3, df3
                    d3 = np.float64(df3 @ s)
                    if d3 > _SIG * d0 or f3 > f0 + x3 * _RHO * d0 or M == 0:
                        break
                    x1, f1, d1 = x2, f2, d2
                    x2, f2, d2 = x3, f3, d3
                    A = 6 * (f1 - f2) + 3 * (d2 + d1) * (x2 - x1)
                    B = 3 * (f2 - f1) - (2 * d1 + d2) * (x2 - x1)
                    x3 = x1 - d1 * (x2 - x1) * (x2 - x1) / (
                        B + np.sqrt(B * B - A * d1 * (x2 - x1))
                    )
                    if np.isnan(x3) or x3 < 0 or x3 > x2 * _EXT:
                        x3 = _EXT * x2
                    elif x3 < x2 + _INT * (x2 - x1):
                        x3 = x2 + _INT * (x2 - x1)

                # interpolate until an acceptable point is found
                while (abs(d3) > -_SIG * d0 or f3 > f0 + x3 * _RHO * d0) and M > 0:
                    if d3 > 0 or f3 > f0 + x3 * _RHO * d0:
                        x4, f4, d4 = x3, f3, d3
                    else:
                        x2, f2, d2 = x3, f3, d3

                    if f4 > f0:
                        x3 = x2 - (0.5 * d2 * (x4 - x2) * (x4 - x2)) / (
                            f4 - f2 - d2 * (x4 - x2)
                        )
                    else:
                        A = 6 * (f2 - f4) / (x4 - x2) + 3 * (d4 + d2)
                        B = 3 * (f4 - f2) - (2 * d2 + d4) * (x4 - x2)
                        x3 = x2 + np.sqrt(B * B - A * d2 * (x4 - x2) * (x4 - x2) - B) / A

                    if np.isnan(x3) or np.isinf(x3):
                        x3 = (x2 + x4) / 2
                    x3 = max(min(x3, x4 - _INT * (x4 - x2)), x2 + _INT * (x4 - x2))

                    f3, df3 = _evaluate(gp, X + s * x3)
                    if f3 < F0:
                        X0, F0, dF0 = X + s * x3, f3, df3
                    if verbose:
                        _report(F0)
                    M -= 1
                    i += 1
                    d3 = np.float64(df3 @ s)

                if abs(d3) < -_SIG * d0 and f3 < f0 + x3 * _RHO * d0:
                    X = X + s * x3
                    f0 = f3
                    # Polack-Ribiere direction
                    s = (df3 @ df3 - df0 @ df3) / (df0 @ df0) * s - df3
                    df0 = df3
                    d3, d0 = d0, np.float64(df0 @ s)
                    if verbose:
                        _report(f0)
                    if d0 > 0:
                        s = -df0
                        d0 = np.float64(-(s @ s))
                    x3 = x3 * min(_RATIO, d3 / (d0 - _TINY))
                    ls_failed = False
                else:
                    X, f0, df0 = X0, F0, dF0
                    if verbose:
                        _report(f0)
                    if ls_failed or i >= n:
                        break
                    s = -df0
                    d0 = np.float64(-(s @ s))
                    x3 = np.float64(1.0) / (1.0 - d0)
                    ls_failed = True

                i += 1

        gp.covf.set_loghyper(X)