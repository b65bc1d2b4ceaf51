from __future__ import annotations

from typing import Any, Protocol

import numpy as np


class EvaluationBackend(Protocol):
    """Protocol for evaluation backends.

    ``evaluate`` returns the objective matrix with row ``i`` belonging to
    ``X[i]``; backends never reorder rows.
    """

    def evaluate(self, X: np.ndarray, problem: Any) -> np.ndarray: ...

    def close(self) -> None:  # pragma: no cover - optional for pooled backends
        """Clean up any resources (executors, pools)."""
        return None


from .backends import ProcessEvalBackend, SerialEvalBackend, resolve_eval_backend  # noqa: E402
from .population import evaluate_points  # noqa: E402

__all__ = [
    "EvaluationBackend",
    "ProcessEvalBackend",
    "SerialEvalBackend",
    "evaluate_points",
    "resolve_eval_backend",
]
