from __future__ import annotations

from typing import Sequence

import numpy as np


def _is_finite_array(arr: np.ndarray) -> bool:
    return bool(np.isfinite(arr).all())


def _validate(F: np.ndarray, ref_point: Sequence[float] | np.ndarray) -> tuple[np.ndarray, np.ndarray]:
    F = np.asarray(F, dtype=float)
    ref = np.asarray(ref_point, dtype=float).reshape(-1)
    if F.ndim != 2:
        raise ValueError("F must be a 2D array of shape (n_points, n_obj)")
    if F.shape[0] > 0 and F.shape[1] != ref.shape[0]:
        raise ValueError("reference point dimensionality mismatch")
    if not _is_finite_array(F) or not _is_finite_array(ref):
        raise ValueError("F and ref_point must contain finite numbers")
    return F, ref


def _hv_2d(pts: np.ndarray, ref: np.ndarray) -> float:
    # For 2D minimization: sort by f1 ascending, keep points with strictly decreasing f2
    order = np.lexsort((pts[:, 1], pts[:, 0]))
    sorted_pts = pts[order]
    prev_best = np.minimum.accumulate(np.concatenate(([np.inf], sorted_pts[:-1, 1])))
    front = sorted_pts[sorted_pts[:, 1] < prev_best]
    right = np.append(front[1:, 0], ref[0])
    return float(np.sum((right - front[:, 0]) * (ref[1] - front[:, 1])))


def _hv_recursive(pts: np.ndarray, ref: np.ndarray) -> float:
    n_obj = pts.shape[1]
    if pts.shape[0] == 0:
        return 0.0
    if n_obj == 1:
        return float(ref[0] - pts[:, 0].min())
    if n_obj == 2:
        return _hv_2d(pts, ref)

    # Slice along the last objective; each slab is the (m-1)-dimensional
    # volume of the points below it times the slab height.
    order = np.argsort(pts[:, -1], kind="mergesort")
    sorted_pts = pts[order]
    levels = np.append(sorted_pts[:, -1], ref[-1])
    volume = 0.0
    for k in range(sorted_pts.shape[0]):
        height = levels[k + 1] - levels[k]
        if height <= 0.0:
            continue
        volume += _hv_recursive(sorted_pts[: k + 1, :-1], ref[:-1]) * height
    return volume


def hypervolume(F: np.ndarray, ref_point: Sequence[float] | np.ndarray) -> float:
    """Exact hypervolume dominated by a minimization front and bounded by ``ref_point``.

    Points that are not strictly better than the reference point in every
    objective are ignored. Two objectives use an O(n log n) sweep; more
    objectives use recursive slicing, which is exponential in the number of
    objectives and meant for the small fronts met during selection.
    """
    F, ref = _validate(F, ref_point)
    if F.shape[0] == 0:
        return 0.0
    pts = F[np.all(F < ref, axis=1)]
    if pts.shape[0] == 0:
        return 0.0
    return float(max(_hv_recursive(pts, ref), 0.0))


def _contributions_by_exclusion(F: np.ndarray, ref: np.ndarray) -> np.ndarray:
    n = F.shape[0]
    total = hypervolume(F, ref)
    contrib = np.empty(n, dtype=float)
    mask = np.ones(n, dtype=bool)
    for i in range(n):
        mask[i] = False
        contrib[i] = total - hypervolume(F[mask], ref)
        mask[i] = True
    return np.maximum(contrib, 0.0)


def _contributions_2d(F: np.ndarray, ref: np.ndarray) -> np.ndarray:
    n = F.shape[0]
    contrib = np.zeros(n, dtype=float)
    inside = np.flatnonzero(np.all(F < ref, axis=1))
    if inside.size == 0:
        return contrib
    pts = F[inside]
    order = np.lexsort((pts[:, 1], pts[:, 0]))
    sorted_pts = pts[order]
    prev_best = np.minimum.accumulate(np.concatenate(([np.inf], sorted_pts[:-1, 1])))
    keep = sorted_pts[:, 1] < prev_best
    kept_idx = inside[order[keep]]
    front = sorted_pts[keep]

    # The strip formula only holds for mutually non-dominated points (up to
    # exact duplicates); dominated points shrink their dominator's share.
    kept_rows = {tuple(row) for row in front}
    if any(tuple(row) not in kept_rows for row in sorted_pts[~keep]):
        return _contributions_by_exclusion(F, ref)

    right = np.append(front[1:, 0], ref[0])
    up = np.concatenate(([ref[1]], front[:-1, 1]))
    values = (right - front[:, 0]) * (up - front[:, 1])

    # An exact duplicate shares the region, so nothing is exclusive to either copy.
    for pos, idx in enumerate(kept_idx):
        if np.count_nonzero(np.all(F == F[idx], axis=1)) > 1:
            values[pos] = 0.0
    contrib[kept_idx] = values
    return contrib


def hypervolume_contributions(F: np.ndarray, ref_point: Sequence[float] | np.ndarray) -> np.ndarray:
    """Exclusive hypervolume contribution ``HV(F) - HV(F without i)`` of every point.

    Dominated points, duplicated points and points outside the reference box
    contribute exactly zero. Never returns NaN.
    """
    F, ref = _validate(F, ref_point)
    n = F.shape[0]
    if n == 0:
        return np.empty(0, dtype=float)
    if F.shape[1] == 2:
        return _contributions_2d(F, ref)
    return _contributions_by_exclusion(F, ref)


__all__ = ["hypervolume", "hypervolume_contributions"]
