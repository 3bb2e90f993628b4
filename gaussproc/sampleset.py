"""Container of training patterns."""

from __future__ import annotations

from collections.abc import Iterable

import numpy as np

__all__ = ["SampleSet"]


class SampleSet:
    """Input vectors with their target values.

    Stored input vectors are read-only arrays and ``x(k)`` always returns the
    same object for the same sample.
    """

    def __init__(self, input_dim: int) -> None:
        self.input_dim = int(input_dim)
        self._inputs: list[np.ndarray] = []
        self._targets: list[float] = []

    def _frozen(self, x: Iterable[float]) -> np.ndarray:
        v = np.array(x, dtype=float).ravel()
        if v.size != self.input_dim:
            raise ValueError(
                f"input has {v.size} elements, expected {self.input_dim}"
            )
        v.flags.writeable = False
        return v

    def _check_index(self, k: int) -> None:
        if not 0 <= k < len(self._targets):
            raise IndexError(f"sample index {k} out of range")

    def add(self, x: Iterable[float], y: float) -> None:
        """Append a copy of input ``x`` with target ``y``."""
        self._inputs.append(self._frozen(x))
        self._targets.append(float(y))

    def x(self, k: int) -> np.ndarray:
        """Input vector of sample ``k``."""
        self._check_index(k)
        return self._inputs[k]

    def y(self, k: int) -> float:
        """Target value of sample ``k``."""
        self._check_index(k)
        return self._targets[k]

    def targets(self) -> np.ndarray:
        """All target values as a new array."""
        return np.array(self._targets, dtype=float)

    def set_y(self, i: int, y: float) -> None:
        """Replace the target value of sample ``i``."""
        self._check_index(i)
        self._targets[i] = float(y)

    def clear(self) -> None:
        """Remove all samples."""
        self._inputs.clear()
        self._targets.clear()

    def copy(self) -> SampleSet:
        """Return an independent copy of this sample set."""
        other = SampleSet(self.input_dim)
        for x, y in zip(self._inputs, self._targets):
            other.add(x, y)
        return other

    def __len__(self) -> int:
        return len(self._targets)