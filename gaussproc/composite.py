"""Covariance functions built from other covariance functions."""

from __future__ import annotations

from typing import Any

import numpy as np

from .cov import CovarianceFunction

__all__ = ["CovSum", "CovProd", "InputDimFilter"]


class _Combination(CovarianceFunction):
    """Two covariance functions whose parameter vectors are concatenated."""

    _name = ""

    def __init__(
        self,
        input_dim: int,
        first: CovarianceFunction,
        second: CovarianceFunction,
    ) -> None:
        super().__init__(input_dim, first.param_dim + second.param_dim)
        self.first = first
        self.second = second

    def set_loghyper(self, p: Any) -> None:
        super().set_loghyper(p)
        split = self.first.param_dim
        self.first.set_loghyper(self._loghyper[:split])
        self.second.set_loghyper(self._loghyper[split:])

    def __str__(self) -> str:
        return f"{self._name}({self.first}, {self.second})"


class CovSum(_Combination):
    """Sum of two covariance functions."""

    _name = "CovSum"

    def __init__(
        self,
        input_dim: int,
        first: CovarianceFunction,
        second: CovarianceFunction,
    ) -> None:
        super().__init__(input_dim, first, second)

    def get(self, x1: Any, x2: Any) -> float:
        return self.first.get(x1, x2) + self.second.get(x1, x2)

    def grad(self, x1: Any, x2: Any) -> np.ndarray:
        return np.concatenate(
            [self.first.grad(x1, x2), self.second.grad(x1, x2)]
        )

    def set_loghyper(self, p: Any) -> None:
        super().set_loghyper(p)


class CovProd(_Combination):
    """Product of two covariance functions."""

    _name = "CovProd"

    def __init__(
        self,
        input_dim: int,
        first: CovarianceFunction,
        second: CovarianceFunction,
    ) -> None:
        super().__init__(input_dim, first, second)

    def get(self, x1: Any, x2: Any) -> float:
        return self.first.get(x1, x2) * self.second.get(x1, x2)

    def grad(self, x1: Any, x2: Any) -> np.ndarray:
        return np.concatenate(
            [
                self.first.grad(x1, x2) * self.second.get(x1, x2),
                self.second.grad(x1, x2) * self.first.get(x1, x2),
            ]
        )

    def set_loghyper(self, p: Any) -> None:
        super().set_loghyper(p)


class InputDimFilter(CovarianceFunction):
    """Apply a one-dimensional covariance function to a single input dimension.

    The nested function receives freshly sliced vectors, so it never sees
    two identical objects: a nested white-noise term always contributes zero.
    """

    def __init__(
        self, input_dim: int, filter: int, nested: CovarianceFunction
    ) -> None:
        filter = int(filter)
        if not 0 <= filter < int(input_dim):
            raise ValueError(
                f"filter dimension {filter} outside 0..{int(input_dim) - 1}"
            )
        super().__init__(input_dim, nested.param_dim)
        self.filter = filter
        self.nested = nested

    def _slice(self, x: Any) -> np.ndarray:
        return np.asarray(x, dtype=float)[self.filter : self.filter + 1]

    def get(self, x1: Any, x2: Any) -> float:
        return self.nested.get(self._slice(x1), self._slice(x2))

    def grad(self, x1: Any, x2: Any) -> np.ndarray:
        return self.nested.grad(self._slice(x1), self._slice(x2))

    def set_loghyper(self, p: Any) -> None:
        super().set_loghyper(p)
        self.nested.set_loghyper(self._loghyper)

    def __str__(self) -> str:
        return f"InputDimFilter({self.filter}/{self.nested})"