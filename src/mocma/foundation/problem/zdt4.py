import numpy as np

from mocma.foundation.exceptions import ProblemDimensionError

from .box import BoxConstrainedMixin, BoxConstraints


class ZDT4Problem(BoxConstrainedMixin):
    """ZDT4 benchmark introducing multimodality through shifted bounds."""

    def __init__(self, n_var: int = 10):
        if n_var < 2:
            raise ProblemDimensionError("ZDT4 requires at least two decision variables.", n_var=n_var, n_obj=2)
        self.n_var = int(n_var)
        self.n_obj = 2
        lower = np.full(self.n_var, -5.0)
        upper = np.full(self.n_var, 5.0)
        lower[0] = 0.0
        upper[0] = 1.0
        self.bounds = BoxConstraints(lower, upper)

    def evaluate(self, X: np.ndarray, out: dict) -> None:
        X = np.asarray(X, dtype=float)
        if X.ndim != 2 or X.shape[1] != self.n_var:
            raise ValueError(f"Expected input shape (N, {self.n_var}), got {X.shape}.")
        f1 = X[:, 0]
        x_tail = X[:, 1:]
        g = 1.0 + 10.0 * (self.n_var - 1) + np.sum(x_tail**2 - 10.0 * np.cos(4.0 * np.pi * x_tail), axis=1)
        ratio = np.divide(f1, g, out=np.zeros_like(f1), where=g != 0.0)
        f2 = g * (1.0 - np.sqrt(ratio))
        F = out["F"]
        F[:, 0] = f1
        F[:, 1] = f2

    def reference_front(self, n_points: int = 100) -> np.ndarray:
        f1 = np.linspace(0.0, 1.0, n_points)
        return np.column_stack([f1, 1.0 - np.sqrt(f1)])
