"""
Indicators used to truncate the boundary front during environmental selection.

Each indicator scores the members of a front (minimization) by their
exclusive contribution to a quality measure; selection repeatedly drops the
least contributor. Ties are broken towards the lowest index so that
truncation is reproducible.

- ``HypervolumeIndicator``: exact exclusive hypervolume contributions.
- ``AdditiveEpsilonIndicator``: additive-epsilon loss incurred by removing a point.
- ``LeastContributorApproximator``: unbiased Monte-Carlo estimate of the
  hypervolume contributions, for fronts with many objectives.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Sequence

import numpy as np

from mocma.foundation.exceptions import ConfigurationError, InvalidIndicatorError
from mocma.foundation.metrics.hypervolume import hypervolume_contributions


def epsilon_indicator_matrix(F: np.ndarray) -> np.ndarray:
    """Additive epsilon matrix, ``eps[i, j] = max_k (f_jk - f_ik)``.

    ``eps[i, j]`` is the shift that point ``j`` needs to weakly dominate point ``i``.
    """
    diff = F[None, :, :] - F[:, None, :]
    return np.asarray(np.max(diff, axis=2), dtype=float)


def _as_front(F: np.ndarray) -> np.ndarray:
    F = np.asarray(F, dtype=float)
    if F.ndim != 2:
        raise ValueError(f"Expected a front of shape (n_points, n_obj), got {F.shape}.")
    return F


class Indicator(ABC):
    """Scores a front and identifies its least contributor."""

    name: str = ""

    @abstractmethod
    def contributions(self, F: np.ndarray, rng: np.random.Generator | None = None) -> np.ndarray:
        """Exclusive contribution of each row of ``F``; never NaN."""

    def least_contributor(self, F: np.ndarray, rng: np.random.Generator | None = None) -> int:
        """Index of the member with the smallest contribution (lowest index on ties)."""
        F = _as_front(F)
        if F.shape[0] == 0:
            raise ValueError("Cannot pick the least contributor of an empty front.")
        if F.shape[0] == 1:
            return 0
        return int(np.argmin(self.contributions(F, rng)))


class _ReferencePointMixin:
    reference_point: np.ndarray | None
    offset: float

    def _reference(self, F: np.ndarray) -> np.ndarray:
        if self.reference_point is not None:
            ref = np.asarray(self.reference_point, dtype=float)
            if ref.shape[0] != F.shape[1]:
                raise ValueError("reference_point vector dimensionality mismatch.")
            return ref
        return F.max(axis=0) + self.offset


class HypervolumeIndicator(_ReferencePointMixin, Indicator):
    """Exact hypervolume contributions.

    The reference point is the configured vector or, by default, the
    component-wise maximum of the front shifted by ``offset``.
    """

    name = "hypervolume"

    def __init__(self, reference_point: Sequence[float] | None = None, offset: float = 1.0) -> None:
        self.reference_point = None if reference_point is None else np.asarray(reference_point, dtype=float)
        self.offset = float(offset)

    def contributions(self, F: np.ndarray, rng: np.random.Generator | None = None) -> np.ndarray:
        F = _as_front(F)
        if F.shape[0] == 0:
            return np.empty(0, dtype=float)
        return hypervolume_contributions(F, self._reference(F))


class AdditiveEpsilonIndicator(Indicator):
    """Additive-epsilon loss of removing each point.

    The contribution of point ``i`` is ``min_{j != i} max_k (f_jk - f_ik)``,
    clipped at zero: how far the rest of the front falls short of covering
    ``i``. Duplicated or weakly dominated points contribute zero.
    """

    name = "epsilon"

    def contributions(self, F: np.ndarray, rng: np.random.Generator | None = None) -> np.ndarray:
        F = _as_front(F)
        n = F.shape[0]
        if n <= 1:
            return np.zeros(n, dtype=float)
        eps = epsilon_indicator_matrix(F)
        np.fill_diagonal(eps, np.inf)
        return np.maximum(eps.min(axis=1), 0.0)


class LeastContributorApproximator(_ReferencePointMixin, Indicator):
    """Monte-Carlo approximation of hypervolume contributions.

    For every point the exclusive region is enclosed in a tight box between
    the point and the bound imposed by its neighbours; ``n_samples`` uniform
    samples in that box estimate the fraction dominated by this point alone.
    The estimate is unbiased and its standard deviation decays as
    ``1 / sqrt(n_samples)``: more samples trade run time for a more reliable
    choice of the least contributor when contributions are close.

    Parameters
    ----------
    n_samples : int
        Samples drawn per point (default 10000).
    reference_point : sequence of float, optional
        Fixed reference point; defaults to ``max(F) + offset``.
    offset : float
        Shift of the default reference point.
    seed : int, optional
        Seed of the fallback generator used when no RNG handle is passed.
    """

    name = "approximated"

    def __init__(
        self,
        n_samples: int = 10_000,
        reference_point: Sequence[float] | None = None,
        offset: float = 1.0,
        seed: int | None = None,
    ) -> None:
        if int(n_samples) <= 0:
            raise ConfigurationError(f"n_samples must be positive, got {n_samples!r}.")
        self.n_samples = int(n_samples)
        self.reference_point = None if reference_point is None else np.asarray(reference_point, dtype=float)
        self.offset = float(offset)
        self._rng = np.random.default_rng(seed)

    def exclusive_box(self, F: np.ndarray, i: int, ref: np.ndarray) -> np.ndarray | None:
        """Upper corner of the box enclosing the exclusive region of ``F[i]``, or None if empty."""
        point = F[i]
        if np.any(point >= ref):
            return None
        upper = ref.copy()
        for j in range(F.shape[0]):
            if j == i:
                continue
            worse = F[j] > point
            n_worse = int(np.count_nonzero(worse))
            if n_worse == 0:
                # F[j] weakly dominates F[i]: nothing is exclusive to i.
                return None
            if n_worse == 1:
                k = int(np.flatnonzero(worse)[0])
                upper[k] = min(upper[k], F[j, k])
        return upper

    def contributions(self, F: np.ndarray, rng: np.random.Generator | None = None) -> np.ndarray:
        F = _as_front(F)
        n = F.shape[0]
        if n == 0:
            return np.empty(0, dtype=float)
        rng = rng if rng is not None else self._rng
        ref = self._reference(F)
        estimates = np.zeros(n, dtype=float)
        for i in range(n):
            upper = self.exclusive_box(F, i, ref)
            if upper is None:
                continue
            lower = F[i]
            volume = float(np.prod(upper - lower))
            if volume <= 0.0:
                continue
            samples = rng.uniform(lower, upper, size=(self.n_samples, F.shape[1]))
            covered = np.zeros(self.n_samples, dtype=bool)
            for j in range(n):
                if j != i:
                    covered |= np.all(samples >= F[j], axis=1)
            estimates[i] = volume * (1.0 - covered.mean())
        return estimates


_INDICATORS: dict[str, type[Indicator]] = {
    "hypervolume": HypervolumeIndicator,
    "epsilon": AdditiveEpsilonIndicator,
    "approximated": LeastContributorApproximator,
}

_ALIASES = {
    "hv": "hypervolume",
    "additive_epsilon": "epsilon",
    "additiveepsilon": "epsilon",
    "approximated_hypervolume": "approximated",
    "least_contributor_approximator": "approximated",
}


def available_indicators() -> tuple[str, ...]:
    return tuple(_INDICATORS) + tuple(_ALIASES)


def canonical_indicator_name(name: str) -> str:
    """Registry key of an indicator name or alias ("HV" -> "hypervolume")."""
    key = str(name).strip().lower()
    key = _ALIASES.get(key, key)
    if key not in _INDICATORS:
        raise InvalidIndicatorError(str(name), available=list(_INDICATORS))
    return key


def resolve_indicator(name: str | Indicator, **params: Any) -> Indicator:
    """Build an indicator by name, or pass an instance through unchanged."""
    if isinstance(name, Indicator):
        return name
    key = canonical_indicator_name(name)
    cls = _INDICATORS[key]
    try:
        return cls(**params)
    except TypeError as exc:
        raise ConfigurationError(
            f"Invalid parameters for indicator '{key}': {exc}",
            details={"indicator": key, "params": dict(params)},
        ) from exc


__all__ = [
    "Indicator",
    "HypervolumeIndicator",
    "AdditiveEpsilonIndicator",
    "LeastContributorApproximator",
    "available_indicators",
    "canonical_indicator_name",
    "epsilon_indicator_matrix",
    "resolve_indicator",
]
