"""Box constraints as a component that problems hold and delegate to."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from mocma.foundation.exceptions import BoundsError


@dataclass(frozen=True)
class BoxConstraints:
    """Axis-aligned bounds ``xl <= x <= xu``.

    Provides the feasibility capability (``is_feasible`` / ``closest_feasible``)
    and uniform starting points for problems that own one.
    """

    xl: np.ndarray
    xu: np.ndarray

    def __post_init__(self) -> None:
        xl = np.asarray(self.xl, dtype=float).reshape(-1)
        xu = np.asarray(self.xu, dtype=float).reshape(-1)
        if xl.shape != xu.shape:
            raise BoundsError(f"Bounds have different shapes: xl {xl.shape}, xu {xu.shape}.")
        if np.any(xl > xu):
            raise BoundsError("Lower bound exceeds upper bound.")
        object.__setattr__(self, "xl", xl)
        object.__setattr__(self, "xu", xu)

    @classmethod
    def uniform(cls, n_var: int, lower: float, upper: float) -> "BoxConstraints":
        return cls(np.full(n_var, float(lower)), np.full(n_var, float(upper)))

    @property
    def n_var(self) -> int:
        return int(self.xl.shape[0])

    def is_feasible(self, x: np.ndarray) -> bool:
        x = np.asarray(x, dtype=float)
        return bool(np.all(x >= self.xl) and np.all(x <= self.xu))

    def closest_feasible(self, x: np.ndarray) -> np.ndarray:
        return np.clip(np.asarray(x, dtype=float), self.xl, self.xu)

    def propose_starting_point(self, rng: np.random.Generator) -> np.ndarray:
        return rng.uniform(self.xl, self.xu)


class BoxConstrainedMixin:
    """Delegates the optional problem capabilities to ``self.bounds``."""

    bounds: BoxConstraints

    @property
    def xl(self) -> np.ndarray:
        return self.bounds.xl

    @property
    def xu(self) -> np.ndarray:
        return self.bounds.xu

    def is_feasible(self, x: np.ndarray) -> bool:
        return self.bounds.is_feasible(x)

    def closest_feasible(self, x: np.ndarray) -> np.ndarray:
        return self.bounds.closest_feasible(x)

    def propose_starting_point(self, rng: np.random.Generator) -> np.ndarray:
        return self.bounds.propose_starting_point(rng)


__all__ = ["BoxConstraints", "BoxConstrainedMixin"]
