"""MO-CMA-ES core algorithm implementation.

Generational multi-objective CMA-ES: every parent produces one offspring by
mutation with its own (1+1)-CMA search distribution, parents and offspring
compete in an indicator-based environmental selection, and the survivors
adapt their step sizes and covariance matrices from their success.

References:
    C. Igel, N. Hansen, and S. Roth, "Covariance Matrix Adaptation for
    Multi-objective Optimization," Evolutionary Computation, vol. 15, no. 1, 2007.
    T. Voss, N. Hansen, and C. Igel, "Improved Step Size Adaptation for the
    MO-CMA-ES," GECCO 2010.
"""

from __future__ import annotations

import dataclasses
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any, Mapping

import numpy as np

from mocma.engine.algorithm.config import MOCMAConfig, MOCMAConfigData, coerce_config
from mocma.foundation.checkpoint import load_checkpoint, restore_rng, save_checkpoint
from mocma.foundation.eval import resolve_eval_backend
from mocma.foundation.exceptions import CheckpointError, NotInitializedError, ProblemDimensionError
from .evaluator import EvaluationCounter, PenalizingEvaluator
from .individual import CMAIndividual
from .indicators import Indicator, resolve_indicator
from .initialization import initialize_population, parse_termination, problem_dimensions
from .selection import IndicatorBasedSelection
from .state import MOCMAState, SolutionSetEntry, build_mocma_result

if TYPE_CHECKING:
    from mocma.foundation.problem.types import ObjectiveFunction


__all__ = ["MOCMA", "EpsilonMOCMA", "ApproximatedVolumeMOCMA"]


def _logger() -> logging.Logger:
    return logging.getLogger(__name__)


class MOCMA:
    """Multi-objective covariance matrix adaptation evolution strategy.

    Parameters
    ----------
    config : MOCMAConfigData or dict, optional
        Algorithm configuration (defaults to ``MOCMAConfig.default()``):
        - mu (int): Number of parents
        - penalty_factor (float): Scale of the constraint penalty
        - success_threshold (float): ``p_thresh`` of the covariance update
        - notion_of_success (str): "individual" or "population"
        - initial_sigma (float): Initial step size of every individual
        - indicator (str): "hypervolume", "epsilon" or "approximated"
        - eval_backend (str): "serial" or "process"
    indicator : str or Indicator, optional
        Indicator instance overriding the configured one.

    Examples
    --------
    Batch mode:

    >>> from mocma import MOCMA, MOCMAConfig, DoubleSphereProblem
    >>> optimizer = MOCMA(MOCMAConfig().mu(10).fixed())
    >>> result = optimizer.run(DoubleSphereProblem(), ("n_eval", 2000), seed=42)

    Step by step:

    >>> rng = np.random.default_rng(1)
    >>> optimizer.init(problem, rng)
    >>> for _ in range(50):
    ...     front = optimizer.step(problem, rng)
    """

    name = "MOCMA"
    default_indicator: str | None = None

    def __init__(
        self,
        config: MOCMAConfigData | Mapping[str, Any] | None = None,
        indicator: str | Indicator | None = None,
    ) -> None:
        cfg = coerce_config(config if config is not None else self._default_config())
        if self.default_indicator is not None and cfg.indicator != self.default_indicator:
            cfg = dataclasses.replace(cfg, indicator=self.default_indicator, indicator_params={})
        self.cfg = cfg
        self._indicator = resolve_indicator(indicator if indicator is not None else cfg.indicator, **cfg.indicator_params)
        self._counter = EvaluationCounter()
        self._evaluator = PenalizingEvaluator(cfg.penalty_factor, counter=self._counter)
        self._selection = IndicatorBasedSelection(cfg.mu, self._indicator)
        self._backend = resolve_eval_backend(cfg.eval_backend, n_workers=cfg.n_workers)
        self._st: MOCMAState | None = None
        self._rng: np.random.Generator | None = None

    @classmethod
    def _default_config(cls) -> MOCMAConfigData:
        if cls.default_indicator is None:
            return MOCMAConfig.default()
        return MOCMAConfig.default(indicator=cls.default_indicator)

    # -------------------------------------------------------------------------
    # Accessors
    # -------------------------------------------------------------------------

    @property
    def mu(self) -> int:
        return self.cfg.mu

    @property
    def indicator(self) -> Indicator:
        return self._indicator

    @property
    def n_eval(self) -> int:
        """Objective evaluations performed since ``init``."""
        return self._counter.value

    @property
    def generation(self) -> int:
        return 0 if self._st is None else self._st.generation

    @property
    def population(self) -> list[CMAIndividual]:
        """The ``2 * mu`` slots: parents in ``[0, mu)``, offspring in ``[mu, 2 * mu)``."""
        return self._require_state("population").population

    @property
    def rng(self) -> np.random.Generator | None:
        return self._rng

    @property
    def initialized(self) -> bool:
        return self._st is not None

    def _require_state(self, operation: str = "step") -> MOCMAState:
        if self._st is None:
            raise NotInitializedError(operation)
        return self._st

    def _resolve_rng(self, rng: np.random.Generator | None) -> np.random.Generator:
        if rng is not None:
            return rng
        if self._rng is None:
            raise NotInitializedError("step")
        return self._rng

    # -------------------------------------------------------------------------
    # Initialization
    # -------------------------------------------------------------------------

    def init(
        self,
        problem: "ObjectiveFunction",
        rng: np.random.Generator | None = None,
        seed: int | None = None,
        starting_point: np.ndarray | None = None,
    ) -> None:
        """Create and evaluate the ``2 * mu`` individuals.

        Parameters
        ----------
        problem : ObjectiveFunction
            Problem to optimize.
        rng : np.random.Generator, optional
            Random number generator; stored and reused by ``step``/``run``
            when they are called without one.
        seed : int, optional
            Seed of a fresh generator when ``rng`` is not given.
        starting_point : np.ndarray, optional
            Starting point shared by every individual.
        """
        self._rng = rng if rng is not None else np.random.default_rng(seed)
        self._counter.reset()
        self._st = initialize_population(
            self.cfg, problem, self._evaluator, self._rng, starting_point=starting_point, backend=self._backend
        )
        _logger().debug(
            "Initialized %s: mu=%d, n_var=%d, n_obj=%d, indicator=%s.",
            self.name,
            self.cfg.mu,
            self._st.n_var,
            self._st.n_obj,
            self._indicator.name,
        )

    # -------------------------------------------------------------------------
    # Generation logic
    # -------------------------------------------------------------------------

    def step(self, problem: "ObjectiveFunction", rng: np.random.Generator | None = None) -> list[SolutionSetEntry]:
        """Perform one generation and return the solution set of the survivors."""
        st = self._require_state("step")
        rng = self._resolve_rng(rng)
        n_var, n_obj = problem_dimensions(problem)
        if n_var != st.n_var or n_obj != st.n_obj:
            raise ProblemDimensionError(
                f"Problem has n_var={n_var}, n_obj={n_obj} but the population was initialized "
                f"with n_var={st.n_var}, n_obj={st.n_obj}.",
                n_var=n_var,
                n_obj=n_obj,
            )

        mu = st.mu
        pop = st.population

        # Offspring slot mu + i is always overwritten from parent slot i.
        for i in range(mu):
            child = pop[mu + i]
            child.copy_from(pop[i])
            child.mutate(rng)
            child.age = 0
        self._evaluate_offspring(problem, st)

        self._selection(pop, rng)
        self._account_success(st)

        pop[:] = [ind for ind in pop if CMAIndividual.is_selected(ind)] + [
            ind for ind in pop if not CMAIndividual.is_selected(ind)
        ]

        entries: list[SolutionSetEntry] = []
        for ind in pop[:mu]:
            ind.age += 1
            ind.update()
            entries.append(SolutionSetEntry.from_individual(ind))

        st.generation += 1
        st.last_solution_set = entries
        _logger().debug("Generation %d done, %d evaluations.", st.generation, self.n_eval)
        return list(entries)

    def _evaluate_offspring(self, problem: "ObjectiveFunction", st: MOCMAState) -> None:
        offspring = st.offspring()
        X = np.vstack([ind.search_point for ind in offspring])
        penalized, unpenalized = self._evaluator.evaluate_many(problem, X, self._backend)
        for ind, pen, unpen in zip(offspring, penalized, unpenalized):
            ind.penalized_fitness = pen.copy()
            ind.unpenalized_fitness = unpen.copy()

    def _account_success(self, st: MOCMAState) -> None:
        mu = st.mu
        pop = st.population
        population_based = self.cfg.population_based
        for i in range(mu):
            parent, child = pop[i], pop[mu + i]
            if not child.selected:
                continue
            if population_based or child.rank <= parent.rank:
                parent.success_count += 1.0
                child.success_count += 1.0

    def solution_set(self) -> list[SolutionSetEntry]:
        """Snapshot ``(search_point, unpenalized fitness)`` of the current parents."""
        st = self._require_state("solution_set")
        return [SolutionSetEntry.from_individual(ind) for ind in st.parents()]

    # -------------------------------------------------------------------------
    # Main run method (batch mode)
    # -------------------------------------------------------------------------

    def run(
        self,
        problem: "ObjectiveFunction",
        termination: tuple[str, Any] = ("n_eval", 10_000),
        seed: int | None = None,
        rng: np.random.Generator | None = None,
        starting_point: np.ndarray | None = None,
    ) -> dict[str, Any]:
        """Run the optimization loop.

        Parameters
        ----------
        problem : ObjectiveFunction
            Problem to optimize.
        termination : tuple
            ``("n_eval", N)`` evaluation budget or ``("max_steps", G)`` generations.
        seed : int, optional
            Random seed for reproducibility (ignored when ``rng`` is given).
        rng : np.random.Generator, optional
            Generator to use instead of a seeded one.
        starting_point : np.ndarray, optional
            Starting point shared by every individual.

        Returns
        -------
        dict
            Result dictionary with X, F, solution_set, step_sizes, n_eval, generation.
        """
        max_eval, max_steps = parse_termination(termination)
        try:
            self.init(problem, rng=rng, seed=seed, starting_point=starting_point)
            st = self._require_state("run")
            _logger().info(
                "Starting %s (mu=%d, indicator=%s, termination=%s).", self.name, self.mu, self._indicator.name, termination
            )
            while True:
                if max_eval is not None and self.n_eval >= max_eval:
                    break
                if max_steps is not None and st.generation >= max_steps:
                    break
                self.step(problem)
        finally:
            self.close()
        _logger().info("%s finished: %d generations, %d evaluations.", self.name, st.generation, self.n_eval)
        return build_mocma_result(st, self.n_eval)

    def close(self) -> None:
        """Release evaluation backend resources."""
        self._backend.close()

    # -------------------------------------------------------------------------
    # Persistence
    # -------------------------------------------------------------------------

    def state_dict(self) -> dict[str, Any]:
        """Serializable snapshot of configuration, population and counters."""
        st = self._require_state("state_dict")
        return {
            "algorithm": self.name,
            "config": self.cfg.to_dict(),
            "n_var": st.n_var,
            "n_obj": st.n_obj,
            "generation": st.generation,
            "n_eval": self.n_eval,
            "population": [ind.to_dict() for ind in st.population],
        }

    def load_state_dict(self, state: Mapping[str, Any]) -> None:
        """Restore a snapshot produced by ``state_dict``."""
        try:
            population = [CMAIndividual.from_dict(item) for item in state["population"]]
            mu = int(state["config"]["mu"])
            st = MOCMAState(
                population=population,
                mu=mu,
                n_var=int(state["n_var"]),
                n_obj=int(state["n_obj"]),
                generation=int(state["generation"]),
            )
            n_eval = int(state["n_eval"])
        except (KeyError, TypeError) as exc:
            raise CheckpointError(f"Incomplete optimizer state: {exc}") from exc
        if mu != self.mu or len(population) != 2 * mu:
            raise CheckpointError(
                f"State holds {len(population)} individuals for mu={mu}; optimizer expects mu={self.mu}."
            )
        st.last_solution_set = [SolutionSetEntry.from_individual(ind) for ind in st.parents()]
        self._st = st
        self._counter.reset(n_eval)

    def save_checkpoint(self, path: str | Path, rng: np.random.Generator | None = None) -> Path:
        """Write config, population, counters and RNG state to ``path``."""
        rng = rng if rng is not None else self._rng
        rng_state = None if rng is None else rng.bit_generator.state
        return save_checkpoint(path, optimizer_state=self.state_dict(), rng_state=rng_state)

    @classmethod
    def from_checkpoint(cls, path: str | Path) -> "MOCMA":
        """Rebuild an optimizer from a checkpoint; its RNG is available as ``.rng``."""
        checkpoint = load_checkpoint(path)
        state = checkpoint["optimizer"]
        try:
            config = MOCMAConfig.from_mapping(state["config"])
        except KeyError as exc:
            raise CheckpointError("Checkpoint is missing the optimizer configuration.", path=str(path)) from exc
        optimizer = cls(config)
        optimizer.load_state_dict(state)
        rng_state = checkpoint.get("rng_state")
        if rng_state is not None:
            bit_generator = getattr(np.random, rng_state["bit_generator"])()
            rng = np.random.Generator(bit_generator)
            restore_rng(rng, rng_state)
            optimizer._rng = rng
        return optimizer


class EpsilonMOCMA(MOCMA):
    """MO-CMA-ES truncating fronts by the additive epsilon indicator."""

    name = "EpsilonMOCMA"
    default_indicator = "epsilon"


class ApproximatedVolumeMOCMA(MOCMA):
    """MO-CMA-ES with Monte-Carlo approximated hypervolume contributions."""

    name = "ApproximatedVolumeMOCMA"
    default_indicator = "approximated"
