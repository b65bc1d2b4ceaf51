"""Constraint-penalizing evaluation of search points.

Infeasible points are evaluated at their closest feasible point; the squared
distance to that point, scaled by the penalty factor, is added to every
objective of the penalized fitness. The unpenalized fitness is what ends up
in solution sets.
"""

from __future__ import annotations

import threading
from typing import TYPE_CHECKING, Any

import numpy as np

from mocma.foundation.eval.population import evaluate_points
from mocma.foundation.problem.types import SupportsFeasibility

if TYPE_CHECKING:
    from mocma.foundation.eval import EvaluationBackend
    from mocma.foundation.problem.types import ObjectiveFunction


class EvaluationCounter:
    """Number of objective evaluations performed; safe for concurrent increments."""

    def __init__(self, value: int = 0) -> None:
        self._value = int(value)
        self._lock = threading.Lock()

    def increment(self, n: int = 1) -> int:
        with self._lock:
            self._value += int(n)
            return self._value

    @property
    def value(self) -> int:
        return self._value

    def reset(self, value: int = 0) -> None:
        with self._lock:
            self._value = int(value)

    def __getstate__(self) -> dict[str, Any]:
        return {"value": self._value}

    def __setstate__(self, state: dict[str, Any]) -> None:
        self._value = int(state["value"])
        self._lock = threading.Lock()


class PenalizingEvaluator:
    """Evaluate points, returning ``(penalized, unpenalized)`` fitness vectors.

    Parameters
    ----------
    penalty_factor : float
        Scale of the squared-distance penalty (default 1e-6).
    counter : EvaluationCounter, optional
        Shared counter incremented once per objective evaluation.
    """

    def __init__(self, penalty_factor: float = 1e-6, counter: EvaluationCounter | None = None) -> None:
        self.penalty_factor = float(penalty_factor)
        self.counter = counter if counter is not None else EvaluationCounter()

    def _repair(self, problem: "ObjectiveFunction", X: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
        """Return the points to evaluate and the per-row scalar penalty."""
        penalties = np.zeros(X.shape[0])
        if not isinstance(problem, SupportsFeasibility):
            return X, penalties
        Y = X.copy()
        for i, x in enumerate(X):
            if problem.is_feasible(x):
                continue
            y = np.asarray(problem.closest_feasible(x.copy()), dtype=float)
            Y[i] = y
            penalties[i] = self.penalty_factor * float(np.sum((x - y) ** 2))
        return Y, penalties

    def __call__(self, problem: "ObjectiveFunction", x: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
        """Evaluate a single point."""
        penalized, unpenalized = self.evaluate_many(problem, np.asarray(x, dtype=float).reshape(1, -1))
        return penalized[0], unpenalized[0]

    def evaluate_many(
        self,
        problem: "ObjectiveFunction",
        X: np.ndarray,
        backend: "EvaluationBackend | None" = None,
    ) -> tuple[np.ndarray, np.ndarray]:
        """Evaluate the rows of ``X``; row ``i`` of both outputs belongs to ``X[i]``.

        Errors raised by the objective function propagate unchanged.
        """
        X = np.atleast_2d(np.asarray(X, dtype=float))
        Y, penalties = self._repair(problem, X)
        if backend is None:
            unpenalized = evaluate_points(problem, Y)
        else:
            unpenalized = np.asarray(backend.evaluate(Y, problem), dtype=float)
        self.counter.increment(X.shape[0])
        penalized = unpenalized + penalties[:, None]
        return penalized, unpenalized.copy()


__all__ = ["EvaluationCounter", "PenalizingEvaluator"]
