import numpy as np

from mocma.foundation.exceptions import ProblemDimensionError

from .box import BoxConstrainedMixin, BoxConstraints


class DTLZ3Problem(BoxConstrainedMixin):
    """DTLZ3: scalable, highly multimodal, box-constrained to [0, 1]^n_var.

    The Pareto front is the positive part of the unit sphere.
    """

    def __init__(self, n_var: int = 12, n_obj: int = 2):
        if n_obj < 2:
            raise ProblemDimensionError("DTLZ3 requires at least two objectives.", n_var=n_var, n_obj=n_obj)
        if n_var < n_obj:
            raise ProblemDimensionError("DTLZ3 requires n_var >= n_obj.", n_var=n_var, n_obj=n_obj)
        self.n_var = int(n_var)
        self.n_obj = int(n_obj)
        self.bounds = BoxConstraints.uniform(self.n_var, 0.0, 1.0)

    def evaluate(self, X: np.ndarray, out: dict) -> None:
        X = np.asarray(X, dtype=float)
        if X.ndim != 2 or X.shape[1] != self.n_var:
            raise ValueError(f"Expected input shape (N, {self.n_var}), got {X.shape}.")
        tail = X[:, self.n_obj - 1 :]
        k = tail.shape[1]
        g = 100.0 * (k + np.sum((tail - 0.5) ** 2 - np.cos(20.0 * np.pi * (tail - 0.5)), axis=1))
        F = np.ones((X.shape[0], self.n_obj))
        for i in range(self.n_obj):
            f = 1.0 + g
            for j in range(self.n_obj - i - 1):
                f = f * np.cos(X[:, j] * np.pi / 2.0)
            if i > 0:
                f = f * np.sin(X[:, self.n_obj - i - 1] * np.pi / 2.0)
            F[:, i] = f

        if "F" in out and out["F"] is not None:
            out["F"][:] = F
        else:
            out["F"] = F

    def reference_front(self, n_points: int = 100) -> np.ndarray:
        """Sampled Pareto front; only available for two objectives."""
        if self.n_obj != 2:
            raise ProblemDimensionError(
                "DTLZ3: no reference front for a number of objectives other than 2.",
                n_var=self.n_var,
                n_obj=self.n_obj,
            )
        f1 = np.linspace(0.0, 1.0, n_points)
        return np.column_stack([f1, np.sqrt(1.0 - f1**2)])
