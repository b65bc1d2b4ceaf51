from __future__ import annotations

import numpy as np

from mocma.foundation.exceptions import EvaluationError


def evaluate_points(problem, X: np.ndarray) -> np.ndarray:
    """
    Evaluate a batch of points, returning an (N, n_obj) objective matrix.
    """
    X = np.atleast_2d(np.asarray(X, dtype=float))
    out = {"F": np.empty((X.shape[0], problem.n_obj))}
    problem.evaluate(X, out)
    F = np.asarray(out["F"], dtype=float)
    if F.shape != (X.shape[0], problem.n_obj):
        raise EvaluationError(
            f"Objective function returned shape {F.shape}, expected {(X.shape[0], problem.n_obj)}.",
            solution=X,
        )
    return F


__all__ = ["evaluate_points"]
