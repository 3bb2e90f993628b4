"""Creation of covariance functions from definition strings."""

from __future__ import annotations

from enum import Enum, auto

from .composite import CovProd, CovSum, InputDimFilter
from .cov import CovarianceFunction
from .linear import CovLinearard, CovLinearone, CovNoise
from .stationary import (
    CovMatern3iso,
    CovMatern5iso,
    CovPeriodic,
    CovPeriodicMatern3iso,
    CovRQiso,
    CovSEard,
    CovSEiso,
)

__all__ = ["CovFactoryError", "CovFactory"]


class CovFactoryError(ValueError):
    """A covariance function definition could not be parsed or built."""


class _Form(Enum):
    ATOMIC = auto()
    PAIR = auto()
    FILTER = auto()


_REGISTRY: dict[str, tuple[type, _Form]] = {
    "CovLinearard": (CovLinearard, _Form.ATOMIC),
    "CovLinearone": (CovLinearone, _Form.ATOMIC),
    "CovMatern3iso": (CovMatern3iso, _Form.ATOMIC),
    "CovMatern5iso": (CovMatern5iso, _Form.ATOMIC),
    "CovNoise": (CovNoise, _Form.ATOMIC),
    "CovRQiso": (CovRQiso, _Form.ATOMIC),
    "CovSEard": (CovSEard, _Form.ATOMIC),
    "CovSEiso": (CovSEiso, _Form.ATOMIC),
    "CovSum": (CovSum, _Form.PAIR),
    "CovProd": (CovProd, _Form.PAIR),
    "CovPeriodicMatern3iso": (CovPeriodicMatern3iso, _Form.ATOMIC),
    "CovPeriodic": (CovPeriodic, _Form.ATOMIC),
    "InputDimFilter": (InputDimFilter, _Form.FILTER),
}


def _top_level_comma(arg: str) -> int | None:
    """Position of the last comma directly inside the outer parentheses."""
    depth = 0
    sep = None
    for pos, ch in enumerate(arg):
        if ch == "(":
            depth += 1
        elif ch == ")":
            depth -= 1
        elif ch == "," and depth == 1:
            sep = pos
    return sep


class CovFactory:
    """Builds covariance functions from strings such as ``CovSum(CovSEiso, CovNoise)``."""

    def __init__(self) -> None:
        self._registry = dict(_REGISTRY)

    def _lookup(self, name: str) -> tuple[type, _Form]:
        try:
            return self._registry[name]
        except KeyError:
            raise CovFactoryError(
                f"error while parsing covariance function: {name!r} not found"
            ) from None

    def create(self, input_dim: int, key: str) -> CovarianceFunction:
        """Create the covariance function described by ``key``."""
        trimmed = key.replace(" ", "")
        left = trimmed.find("(")
        right = trimmed.rfind(")")

        if left == -1 and right == -1:
            cls, form = self._lookup(trimmed)
            if form is not _Form.ATOMIC:
                raise CovFactoryError(f"{trimmed} needs arguments")
            return cls(input_dim)

        if left == -1 or right < left or right != len(trimmed) - 1:
            raise CovFactoryError(f"unbalanced parentheses in {key!r}")

        func = trimmed[:left]
        arg = trimmed[left:]
        sep = _top_level_comma(arg)
        cls, form = self._lookup(func)

        if sep is None:
            if form is not _Form.FILTER:
                raise CovFactoryError(f"{func} does not take a filter argument")
            slash = arg.find("/")
            if slash == -1:
                raise CovFactoryError(f"missing '/' in filter definition {key!r}")
            try:
                filter_dim = int(arg[1:slash])
            except ValueError:
                raise CovFactoryError(
                    f"invalid filter dimension {arg[1:slash]!r}"
                ) from None
            nested = self.create(1, arg[slash + 1 : -1])
            try:
                return cls(input_dim, filter_dim, nested)
            except ValueError as exc:
                raise CovFactoryError(str(exc)) from exc

        if form is not _Form.PAIR:
            raise CovFactoryError(f"{func} does not take two arguments")
        first = self.create(input_dim, arg[1:sep])
        second = self.create(input_dim, arg[sep + 1 : -1])
        return cls(input_dim, first, second)

    def list(self) -> list[str]:
        """Names of the available covariance functions, sorted."""
        return sorted(self._registry)