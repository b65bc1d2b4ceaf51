"""Indicator-based environmental selection.

The combined parent+offspring population is split into non-dominated fronts.
Whole fronts are accepted best-first while they fit into ``mu`` slots; the
front that would overflow is truncated by repeatedly removing its least
contributor under the configured indicator, recomputing contributions after
every removal.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Sequence

import numpy as np

from mocma.foundation.exceptions import ConfigurationError
from mocma.foundation.metrics.pareto import non_dominated_sort
from .indicators import Indicator, resolve_indicator

if TYPE_CHECKING:
    from .individual import CMAIndividual

_FITNESS_KEYS = {"unpenalized": "unpenalized_fitness", "penalized": "penalized_fitness"}


def _logger() -> logging.Logger:
    return logging.getLogger(__name__)


class IndicatorBasedSelection:
    """Select ``mu`` survivors by non-dominated rank and indicator contribution.

    Parameters
    ----------
    mu : int
        Number of individuals to select.
    indicator : str or Indicator
        Indicator used to truncate the boundary front ("hypervolume",
        "epsilon", "approximated") or an indicator instance.
    fitness : str
        Which fitness vector ranks the individuals: "unpenalized" (default)
        or "penalized".
    """

    def __init__(self, mu: int, indicator: str | Indicator = "hypervolume", fitness: str = "unpenalized") -> None:
        if int(mu) <= 0:
            raise ConfigurationError(f"mu must be a positive integer, got {mu!r}.", details={"mu": mu})
        if fitness not in _FITNESS_KEYS:
            raise ConfigurationError(
                f"Unknown fitness '{fitness}' for selection.",
                suggestion=f"Use one of: {', '.join(_FITNESS_KEYS)}",
            )
        self.mu = int(mu)
        self.indicator = resolve_indicator(indicator)
        self.fitness = fitness

    def select_indices(self, F: np.ndarray, rng: np.random.Generator | None = None) -> tuple[np.ndarray, np.ndarray]:
        """Selection on a raw objective matrix.

        Returns
        -------
        tuple
            (selected, ranks): boolean mask of survivors and front index of every row.
        """
        F = np.asarray(F, dtype=float)
        n = F.shape[0]
        selected = np.zeros(n, dtype=bool)
        fronts, ranks = non_dominated_sort(F)

        remaining = self.mu
        for level, front in enumerate(fronts):
            if remaining <= 0:
                break
            if front.size <= remaining:
                selected[front] = True
                remaining -= front.size
                continue

            members = list(front)
            while len(members) > remaining:
                worst = self.indicator.least_contributor(F[members], rng)
                members.pop(worst)
            selected[members] = True
            _logger().debug(
                "Truncated front %d from %d to %d members using the %s indicator.",
                level,
                front.size,
                remaining,
                self.indicator.name,
            )
            remaining = 0

        return selected, ranks

    def __call__(self, population: Sequence["CMAIndividual"], rng: np.random.Generator | None = None) -> None:
        """Mark survivors in place: sets ``selected`` and ``rank`` on every individual."""
        if len(population) == 0:
            return
        attr = _FITNESS_KEYS[self.fitness]
        F = np.vstack([getattr(ind, attr) for ind in population])
        selected, ranks = self.select_indices(F, rng)
        for ind, is_sel, rank in zip(population, selected, ranks):
            ind.selected = bool(is_sel)
            ind.rank = int(rank)


__all__ = ["IndicatorBasedSelection"]
