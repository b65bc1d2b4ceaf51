from __future__ import annotations

import math
import os
from concurrent.futures import ProcessPoolExecutor, as_completed
from typing import Optional

import numpy as np

from mocma.foundation.exceptions import InvalidEvalBackendError
from mocma.foundation.eval.population import evaluate_points


def _eval_chunk(problem, X_chunk: np.ndarray) -> np.ndarray:
    """Worker helper to evaluate a chunk; kept at module level for pickling."""
    return evaluate_points(problem, X_chunk)


class SerialEvalBackend:
    """Synchronous in-process evaluation (default)."""

    name = "serial"

    def evaluate(self, X: np.ndarray, problem) -> np.ndarray:
        return evaluate_points(problem, X)

    def close(self) -> None:
        return None


class ProcessEvalBackend:
    """
    Parallel evaluation of independent rows in a process pool.

    Notes:
        - Requires the problem instance to be picklable.
        - Each chunk is written back to the rows it came from, so the
          parent/offspring pairing of the caller is preserved.
        - Best suited for expensive evaluations; overhead dominates for tiny problems.
    """

    name = "process"

    def __init__(self, n_workers: Optional[int] = None, chunk_size: Optional[int] = None):
        self.n_workers = max(1, n_workers or os.cpu_count() or 1)
        self.chunk_size = chunk_size
        self._executor: ProcessPoolExecutor | None = None

    def _pool(self) -> ProcessPoolExecutor:
        if self._executor is None:
            self._executor = ProcessPoolExecutor(max_workers=self.n_workers)
        return self._executor

    def evaluate(self, X: np.ndarray, problem) -> np.ndarray:
        X = np.atleast_2d(np.asarray(X, dtype=float))
        n = X.shape[0]
        if self.n_workers <= 1 or n <= 1:
            return evaluate_points(problem, X)

        if self.chunk_size is not None and self.chunk_size > 0:
            chunk_size = self.chunk_size
        else:
            chunk_size = max(1, math.ceil(n / self.n_workers))
        slices = [(i, min(i + chunk_size, n)) for i in range(0, n, chunk_size)]

        F = np.empty((n, problem.n_obj), dtype=float)
        ex = self._pool()
        future_map = {ex.submit(_eval_chunk, problem, X[start:end]): (start, end) for start, end in slices}
        for fut in as_completed(future_map):
            start, end = future_map[fut]
            F[start:end] = fut.result()
        return F

    def close(self) -> None:
        if self._executor is not None:
            self._executor.shutdown(wait=True)
            self._executor = None


def resolve_eval_backend(name: str | None, *, n_workers: Optional[int] = None, chunk_size: Optional[int] = None):
    key = (name or "serial").lower()
    if key == "serial":
        return SerialEvalBackend()
    if key in {"process", "multiprocessing"}:
        return ProcessEvalBackend(n_workers=n_workers, chunk_size=chunk_size)
    raise InvalidEvalBackendError(str(name))


__all__ = ["SerialEvalBackend", "ProcessEvalBackend", "resolve_eval_backend"]
