import numpy as np


class DoubleSphereProblem:
    """Unconstrained bi-objective sphere: ``f1 = |x|^2``, ``f2 = |x - c|^2``.

    The Pareto set is the segment between the origin and ``c = shift * 1``;
    starting points are drawn from ``N(0, init_scale^2 I)``.
    """

    def __init__(self, n_var: int = 1, shift: float = 2.0, init_scale: float = 1.0):
        if n_var < 1:
            raise ValueError("DoubleSphereProblem requires at least one decision variable.")
        self.n_var = int(n_var)
        self.n_obj = 2
        self.shift = float(shift)
        self.init_scale = float(init_scale)

    def evaluate(self, X: np.ndarray, out: dict) -> None:
        X = np.asarray(X, dtype=float)
        if X.ndim != 2 or X.shape[1] != self.n_var:
            raise ValueError(f"Expected input shape (N, {self.n_var}), got {X.shape}.")
        F = out["F"]
        F[:, 0] = np.sum(X**2, axis=1)
        F[:, 1] = np.sum((X - self.shift) ** 2, axis=1)

    def propose_starting_point(self, rng: np.random.Generator) -> np.ndarray:
        return rng.normal(0.0, self.init_scale, size=self.n_var)
