"""MO-CMA-ES state container and result building."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import numpy as np

from .individual import CMAIndividual


@dataclass(frozen=True)
class SolutionSetEntry:
    """Read-only snapshot ``(search_point, fitness)`` of a surviving parent.

    Arrays are copied on construction and flagged read-only, so entries stay
    valid after the individual that produced them mutates.
    """

    search_point: np.ndarray
    fitness: np.ndarray

    def __post_init__(self) -> None:
        point = np.array(self.search_point, dtype=float, copy=True)
        fitness = np.array(self.fitness, dtype=float, copy=True)
        point.setflags(write=False)
        fitness.setflags(write=False)
        object.__setattr__(self, "search_point", point)
        object.__setattr__(self, "fitness", fitness)

    @classmethod
    def from_individual(cls, individual: CMAIndividual) -> "SolutionSetEntry":
        return cls(individual.search_point, individual.unpenalized_fitness)


@dataclass
class MOCMAState:
    """Population arena of ``2 * mu`` slots plus run counters.

    Slots ``[0, mu)`` hold the parents and slots ``[mu, 2 * mu)`` their
    offspring; offspring slot ``mu + i`` is generated from parent slot ``i``.
    After selection the population is partitioned so that the survivors
    occupy the parent slots.
    """

    population: list[CMAIndividual]
    mu: int
    n_var: int
    n_obj: int
    generation: int = 0
    last_solution_set: list[SolutionSetEntry] = field(default_factory=list)

    def parents(self) -> list[CMAIndividual]:
        return self.population[: self.mu]

    def offspring(self) -> list[CMAIndividual]:
        return self.population[self.mu :]


def solution_set_arrays(entries: list[SolutionSetEntry]) -> tuple[np.ndarray, np.ndarray]:
    """Stack a solution set into ``(X, F)`` arrays."""
    if not entries:
        return np.empty((0, 0)), np.empty((0, 0))
    X = np.vstack([entry.search_point for entry in entries])
    F = np.vstack([entry.fitness for entry in entries])
    return X, F


def build_mocma_result(state: MOCMAState, n_eval: int) -> dict[str, Any]:
    """Build the MO-CMA-ES result dictionary from state.

    Returns
    -------
    dict
        ``X``/``F`` of the current parents (unpenalized fitness), the last
        solution set, step sizes, evaluation and generation counters.
    """
    entries = state.last_solution_set or [SolutionSetEntry.from_individual(ind) for ind in state.parents()]
    X, F = solution_set_arrays(entries)
    return {
        "X": X,
        "F": F,
        "solution_set": list(entries),
        "step_sizes": np.array([ind.step_size for ind in state.parents()]),
        "n_eval": int(n_eval),
        "generation": state.generation,
    }


__all__ = ["MOCMAState", "SolutionSetEntry", "build_mocma_result", "solution_set_arrays"]
