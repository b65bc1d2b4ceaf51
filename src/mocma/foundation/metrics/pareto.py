"""Pareto dominance primitives (minimization).

Assumes F is float64 of shape (N, M). Performance-sensitive: keep the
pairwise comparisons vectorized.
"""

from __future__ import annotations

from typing import Literal, overload

import numpy as np


def dominates(a: np.ndarray, b: np.ndarray) -> bool:
    """True when ``a`` is no worse than ``b`` everywhere and strictly better somewhere."""
    a = np.asarray(a, dtype=float)
    b = np.asarray(b, dtype=float)
    return bool(np.all(a <= b) and np.any(a < b))


def dominance_matrix(F: np.ndarray) -> np.ndarray:
    """Boolean matrix D with ``D[i, j]`` True when row i dominates row j."""
    F = np.asarray(F, dtype=float)
    less_equal = F[:, None, :] <= F[None, :, :]
    strictly_less = F[:, None, :] < F[None, :, :]
    return np.logical_and(np.all(less_equal, axis=2), np.any(strictly_less, axis=2))


def non_dominated_sort(F: np.ndarray) -> tuple[list[np.ndarray], np.ndarray]:
    """
    Classic O(N^2) fast non-dominated sort.

    Args:
        F: objective matrix (N, M).

    Returns:
      - fronts: list of index arrays per front (0 = best), ascending indices
      - rank: array with the front index of each solution
    """
    F = np.asarray(F, dtype=float)
    N = F.shape[0]
    if N == 0:
        return [], np.empty(0, dtype=int)

    dom_matrix = dominance_matrix(F)
    dominated_count = dom_matrix.sum(axis=0).astype(np.int64)
    rank = np.empty(N, dtype=int)
    fronts: list[np.ndarray] = []

    current = np.flatnonzero(dominated_count == 0)
    level = 0
    while current.size > 0:
        fronts.append(current)
        rank[current] = level
        dominated_count -= dom_matrix[current].sum(axis=0)
        dominated_count[current] = -1
        dom_matrix[current] = False
        level += 1
        current = np.flatnonzero(dominated_count == 0)

    return fronts, rank


@overload
def pareto_filter(F: np.ndarray, *, return_indices: Literal[False] = False) -> np.ndarray: ...


@overload
def pareto_filter(F: np.ndarray, *, return_indices: Literal[True]) -> tuple[np.ndarray, np.ndarray]: ...


def pareto_filter(F: np.ndarray, *, return_indices: bool = False) -> np.ndarray | tuple[np.ndarray, np.ndarray]:
    """
    Return the non-dominated subset of points (first Pareto front).

    Args:
        F: Objective values array (n_solutions, n_objectives).
        return_indices: When True, also return indices of the front in F.
    """
    F = np.asarray(F, dtype=float)
    if F.size == 0 or F.ndim < 2:
        idx = np.arange(F.shape[0] if F.ndim > 0 else 0, dtype=int)
        return (F, idx) if return_indices else F
    fronts, _ = non_dominated_sort(F)
    idx = fronts[0]
    front = F[idx]
    return (front, idx) if return_indices else front


def is_mutually_non_dominated(F: np.ndarray) -> bool:
    """True when no row of F dominates another row."""
    F = np.asarray(F, dtype=float)
    if F.shape[0] < 2:
        return True
    return not bool(dominance_matrix(F).any())


__all__ = [
    "dominates",
    "dominance_matrix",
    "non_dominated_sort",
    "pareto_filter",
    "is_mutually_non_dominated",
]
