"""MO-CMA-ES initialization and setup routines.

This module handles:
- Problem validation
- Starting point proposal
- Initial population creation and evaluation
- Termination parsing for ``MOCMA.run``
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import numpy as np

from mocma.foundation.exceptions import ConfigurationError, ProblemDimensionError, ProblemError
from mocma.foundation.problem.types import SupportsStartingPoint
from .individual import CMAIndividual
from .state import MOCMAState

if TYPE_CHECKING:
    from mocma.engine.algorithm.config import MOCMAConfigData
    from mocma.foundation.eval import EvaluationBackend
    from mocma.foundation.problem.types import ObjectiveFunction
    from .evaluator import PenalizingEvaluator


__all__ = [
    "problem_dimensions",
    "propose_starting_point",
    "initialize_population",
    "parse_termination",
]


def problem_dimensions(problem: "ObjectiveFunction") -> tuple[int, int]:
    """Return ``(n_var, n_obj)`` after checking both are positive integers."""
    n_var = getattr(problem, "n_var", None)
    n_obj = getattr(problem, "n_obj", None)
    if not isinstance(n_var, (int, np.integer)) or not isinstance(n_obj, (int, np.integer)) or n_var <= 0 or n_obj <= 0:
        raise ProblemDimensionError(
            f"Problem must define positive integer n_var and n_obj, got n_var={n_var!r}, n_obj={n_obj!r}.",
            n_var=n_var,
            n_obj=n_obj,
        )
    return int(n_var), int(n_obj)


def propose_starting_point(problem: "ObjectiveFunction", rng: np.random.Generator) -> np.ndarray:
    """
    Ask the problem for a starting point.

    Problems without ``propose_starting_point`` but with ``xl``/``xu`` bounds get
    a point drawn uniformly inside the bounds.
    """
    n_var = int(problem.n_var)
    if isinstance(problem, SupportsStartingPoint):
        point = np.asarray(problem.propose_starting_point(rng), dtype=float).reshape(-1)
    elif hasattr(problem, "xl") and hasattr(problem, "xu"):
        xl = np.broadcast_to(np.asarray(problem.xl, dtype=float), (n_var,))
        xu = np.broadcast_to(np.asarray(problem.xu, dtype=float), (n_var,))
        point = rng.uniform(xl, xu)
    else:
        raise ProblemError(
            "Problem cannot propose a starting point.",
            suggestion="Implement propose_starting_point(rng), define xl/xu bounds, or pass starting_point to init().",
        )
    if point.shape[0] != n_var:
        raise ProblemDimensionError(
            f"Starting point has {point.shape[0]} variables, problem expects {n_var}.",
            n_var=n_var,
        )
    return point


def initialize_population(
    config: "MOCMAConfigData",
    problem: "ObjectiveFunction",
    evaluator: "PenalizingEvaluator",
    rng: np.random.Generator,
    starting_point: np.ndarray | None = None,
    backend: "EvaluationBackend | None" = None,
) -> MOCMAState:
    """Create and evaluate the ``2 * mu`` individuals of a fresh run.

    Parameters
    ----------
    config : MOCMAConfigData
        Validated configuration (mu, success threshold, initial sigma).
    problem : ObjectiveFunction
        Problem to optimize.
    evaluator : PenalizingEvaluator
        Evaluator producing the fitness pair of each individual.
    rng : np.random.Generator
        Random number generator.
    starting_point : np.ndarray, optional
        Shared starting point for every slot instead of proposed ones.
    backend : EvaluationBackend, optional
        Backend evaluating the initial batch.

    Returns
    -------
    MOCMAState
        State with all slots evaluated.
    """
    n_var, n_obj = problem_dimensions(problem)
    size = 2 * config.mu

    if starting_point is not None:
        start = np.asarray(starting_point, dtype=float).reshape(-1)
        if start.shape[0] != n_var:
            raise ProblemDimensionError(
                f"Starting point has {start.shape[0]} variables, problem expects {n_var}.",
                n_var=n_var,
                n_obj=n_obj,
            )

    population: list[CMAIndividual] = []
    for _ in range(size):
        ind = CMAIndividual(n_var, n_obj, config.success_threshold, config.initial_sigma)
        ind.search_point = start.copy() if starting_point is not None else propose_starting_point(problem, rng)
        population.append(ind)

    X = np.vstack([ind.search_point for ind in population])
    penalized, unpenalized = evaluator.evaluate_many(problem, X, backend)
    for ind, pen, unpen in zip(population, penalized, unpenalized):
        ind.penalized_fitness = pen.copy()
        ind.unpenalized_fitness = unpen.copy()

    return MOCMAState(population=population, mu=config.mu, n_var=n_var, n_obj=n_obj)


def parse_termination(termination: tuple[str, Any]) -> tuple[int | None, int | None]:
    """Parse ``("n_eval", N)`` or ``("max_steps", G)`` into ``(max_eval, max_steps)``."""
    try:
        kind, value = termination
    except (TypeError, ValueError):
        raise ConfigurationError(
            f"Invalid termination {termination!r}.",
            suggestion="Use ('n_eval', 10000) or ('max_steps', 100).",
        ) from None
    key = str(kind).lower()
    if int(value) <= 0:
        raise ConfigurationError(f"Termination budget must be positive, got {value!r}.")
    if key in {"n_eval", "max_evaluations"}:
        return int(value), None
    if key in {"max_steps", "n_gen", "max_generations"}:
        return None, int(value)
    raise ConfigurationError(
        f"Unknown termination criterion '{kind}'.",
        suggestion="Use 'n_eval' or 'max_steps'.",
    )
