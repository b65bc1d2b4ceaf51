from __future__ import annotations

from typing import Protocol, runtime_checkable

import numpy as np


class ObjectiveFunction(Protocol):
    """Minimal contract of a multi-objective function consumed by the optimizer.

    ``evaluate`` is batched: ``X`` has shape ``(N, n_var)`` and the function
    fills ``out["F"]`` with an ``(N, n_obj)`` array of objective values.
    """

    n_var: int
    n_obj: int

    def evaluate(self, X: np.ndarray, out: dict[str, np.ndarray]) -> None: ...


@runtime_checkable
class SupportsStartingPoint(Protocol):
    """Optional capability: the problem proposes its own starting points."""

    def propose_starting_point(self, rng: np.random.Generator) -> np.ndarray: ...


@runtime_checkable
class SupportsFeasibility(Protocol):
    """Optional capability of constrained problems: feasibility test and repair."""

    def is_feasible(self, x: np.ndarray) -> bool: ...

    def closest_feasible(self, x: np.ndarray) -> np.ndarray: ...


__all__ = ["ObjectiveFunction", "SupportsStartingPoint", "SupportsFeasibility"]
