"""Self-adaptive individual of the MO-CMA-ES.

Every individual carries its own (1+1)-CMA search distribution: a global step
size, a covariance matrix (with cached Cholesky factor) and an evolution path.
Step sizes follow the success rule and the covariance the cumulative rank-one
update of the (1+1)-CMA-ES.

References:
    C. Igel, N. Hansen, and S. Roth, "Covariance Matrix Adaptation for
    Multi-objective Optimization," Evolutionary Computation, vol. 15, no. 1, 2007.
    T. Voss, N. Hansen, and C. Igel, "Improved Step Size Adaptation for the
    MO-CMA-ES," GECCO 2010.
"""

from __future__ import annotations

import logging
import math
from typing import Any

import numpy as np

MIN_STEP_SIZE = 1e-20
MAX_STEP_SIZE = 1e20
_EIGEN_FLOOR = 1e-14


def _logger() -> logging.Logger:
    return logging.getLogger(__name__)


def _factorize(covariance: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
    """Return a symmetric PSD covariance and its lower Cholesky factor.

    A matrix that lost positive definiteness to round-off is repaired by
    clipping its eigenvalues; a non-finite matrix is reset to the identity.
    """
    n = covariance.shape[0]
    C = 0.5 * (covariance + covariance.T)
    if not np.isfinite(C).all():
        _logger().debug("Non-finite covariance matrix reset to identity.")
        eye = np.eye(n)
        return eye, eye.copy()
    try:
        return C, np.linalg.cholesky(C)
    except np.linalg.LinAlgError:
        eigvals, eigvecs = np.linalg.eigh(C)
        floor = _EIGEN_FLOOR * max(float(eigvals.max()), 1.0)
        _logger().debug("Covariance regularized; smallest eigenvalue %.3e clipped to %.3e.", eigvals.min(), floor)
        C = (eigvecs * np.maximum(eigvals, floor)) @ eigvecs.T
        C = 0.5 * (C + C.T)
        return C, np.linalg.cholesky(C)


class CMAIndividual:
    """Candidate solution with its own search distribution and success bookkeeping.

    Parameters
    ----------
    n_var : int
        Search space dimension.
    n_obj : int
        Number of objectives (length of the fitness vectors).
    success_threshold : float
        Success probability above which the evolution path is not updated
        with the last step (``p_thresh``, default 0.44).
    initial_sigma : float
        Initial step size.
    """

    def __init__(
        self,
        n_var: int,
        n_obj: int,
        success_threshold: float = 0.44,
        initial_sigma: float = 1.0,
    ) -> None:
        self.n_var = int(n_var)
        self.n_obj = int(n_obj)
        n = float(self.n_var)

        self.target_success_probability = 1.0 / (5.0 + math.sqrt(0.5))
        self.step_size_learning_rate = self.target_success_probability / (2.0 + self.target_success_probability)
        self.step_size_damping = 1.0 + n / 2.0
        self.evolution_path_learning_rate = 2.0 / (n + 2.0)
        self.covariance_learning_rate = 2.0 / (n**2 + 6.0)
        self.success_threshold = float(success_threshold)

        self.search_point = np.zeros(self.n_var)
        self.step_size = float(initial_sigma)
        self.covariance = np.eye(self.n_var)
        self._cholesky = np.eye(self.n_var)
        self.evolution_path = np.zeros(self.n_var)
        self.last_step = np.zeros(self.n_var)
        self.success_probability = self.target_success_probability
        self.success_count = 0.0
        self.needs_covariance_update = False

        self.age = 0
        self.rank = 0
        self.selected = False
        self.penalized_fitness = np.zeros(self.n_obj)
        self.unpenalized_fitness = np.zeros(self.n_obj)

    # ------------------------------------------------------------------
    # Variation
    # ------------------------------------------------------------------

    def mutate(self, rng: np.random.Generator) -> None:
        """Add ``step_size * N(0, C)`` to the search point and reset the age."""
        z = rng.standard_normal(self.n_var)
        self.last_step = self._cholesky @ z
        self.search_point = self.search_point + self.step_size * self.last_step
        self.age = 0
        self.needs_covariance_update = True

    # ------------------------------------------------------------------
    # Adaptation
    # ------------------------------------------------------------------

    def update(self) -> None:
        """Adapt step size (and covariance, if the last mutation succeeded).

        The step size follows the success accumulated since the last update;
        the smoothed ``success_probability`` only selects the covariance
        update branch. Consumes ``success_count`` and resets it to zero.
        """
        success_rate = min(max(self.success_count, 0.0), 1.0)
        c_p = self.step_size_learning_rate
        self.success_probability = (1.0 - c_p) * self.success_probability + c_p * success_rate
        self._update_step_size(success_rate)

        if self.success_count > 0.0 and self.needs_covariance_update:
            self._update_covariance()

        self.success_count = 0.0
        self.needs_covariance_update = False

    def _update_step_size(self, success_rate: float) -> None:
        p_target = self.target_success_probability
        exponent = (success_rate - p_target) / (self.step_size_damping * (1.0 - p_target))
        sigma = self.step_size * math.exp(exponent)
        if not math.isfinite(sigma):
            _logger().debug("Non-finite step size clamped to the floor.")
            sigma = MIN_STEP_SIZE
        self.step_size = min(max(sigma, MIN_STEP_SIZE), MAX_STEP_SIZE)

    def _update_covariance(self) -> None:
        c_c = self.evolution_path_learning_rate
        c_cov = self.covariance_learning_rate
        if self.success_probability < self.success_threshold:
            self.evolution_path = (1.0 - c_c) * self.evolution_path + math.sqrt(c_c * (2.0 - c_c)) * self.last_step
            C = (1.0 - c_cov) * self.covariance + c_cov * np.outer(self.evolution_path, self.evolution_path)
        else:
            self.evolution_path = (1.0 - c_c) * self.evolution_path
            C = (1.0 - c_cov) * self.covariance + c_cov * (
                np.outer(self.evolution_path, self.evolution_path) + c_c * (2.0 - c_c) * self.covariance
            )
        self.covariance, self._cholesky = _factorize(C)

    # ------------------------------------------------------------------
    # Copy / persistence
    # ------------------------------------------------------------------

    def copy_from(self, other: "CMAIndividual") -> None:
        """Overwrite this individual with the state of ``other``; no arrays are shared."""
        for key, value in other.__dict__.items():
            if isinstance(value, np.ndarray):
                current = self.__dict__.get(key)
                if isinstance(current, np.ndarray) and current.shape == value.shape and current is not value:
                    np.copyto(current, value)
                else:
                    self.__dict__[key] = value.copy()
            else:
                self.__dict__[key] = value

    def copy(self) -> "CMAIndividual":
        """Independent copy; no arrays are shared with the original."""
        clone = CMAIndividual.__new__(CMAIndividual)
        clone.copy_from(self)
        return clone

    def to_dict(self) -> dict[str, Any]:
        return {key: (value.copy() if isinstance(value, np.ndarray) else value) for key, value in self.__dict__.items()}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CMAIndividual":
        ind = cls(int(data["n_var"]), int(data["n_obj"]), float(data["success_threshold"]))
        for key, value in data.items():
            ind.__dict__[key] = value.copy() if isinstance(value, np.ndarray) else value
        return ind

    @property
    def cholesky_factor(self) -> np.ndarray:
        return self._cholesky

    @staticmethod
    def is_selected(individual: "CMAIndividual") -> bool:
        """Partition predicate: selected individuals go first."""
        return bool(individual.selected)

    def __repr__(self) -> str:
        return (
            f"CMAIndividual(n_var={self.n_var}, step_size={self.step_size:.4g}, "
            f"rank={self.rank}, selected={self.selected}, age={self.age})"
        )


__all__ = ["CMAIndividual", "MIN_STEP_SIZE", "MAX_STEP_SIZE"]
