import numpy as np
import pytest

from mocma.engine.algorithm.mocma import EvaluationCounter, PenalizingEvaluator
from mocma.foundation.eval import SerialEvalBackend
from mocma.foundation.exceptions import EvaluationError
from mocma.foundation.problem import DoubleSphereProblem, ZDT4Problem


class FailingProblem:
    n_var = 1
    n_obj = 2

    def evaluate(self, X, out):
        raise RuntimeError("objective blew up")


class WrongShapeProblem:
    n_var = 1
    n_obj = 2

    def evaluate(self, X, out):
        out["F"] = np.zeros((X.shape[0], 3))


def test_feasible_point_has_equal_fitness_pair():
    evaluator = PenalizingEvaluator(penalty_factor=1.0)
    penalized, unpenalized = evaluator(ZDT4Problem(n_var=2), np.array([0.25, 0.0]))

    np.testing.assert_array_equal(penalized, unpenalized)
    assert penalized is not unpenalized
    assert evaluator.counter.value == 1


def test_infeasible_point_is_repaired_and_penalized():
    evaluator = PenalizingEvaluator(penalty_factor=1.0)
    penalized, unpenalized = evaluator(ZDT4Problem(n_var=2), np.array([1.5, 0.0]))

    # Evaluated at the closest feasible point (1, 0); squared distance 0.25.
    np.testing.assert_allclose(unpenalized, [1.0, 0.0], atol=1e-12)
    np.testing.assert_allclose(penalized, [1.25, 0.25], atol=1e-12)


def test_unconstrained_problem_is_never_penalized():
    evaluator = PenalizingEvaluator(penalty_factor=1e6)
    penalized, unpenalized = evaluator(DoubleSphereProblem(), np.array([100.0]))
    np.testing.assert_array_equal(penalized, unpenalized)
    np.testing.assert_allclose(unpenalized, [1e4, 98.0**2])


def test_evaluate_many_keeps_rows_and_counts():
    counter = EvaluationCounter(5)
    evaluator = PenalizingEvaluator(counter=counter)
    X = np.array([[0.0], [1.0], [2.0]])
    penalized, unpenalized = evaluator.evaluate_many(DoubleSphereProblem(), X, SerialEvalBackend())

    np.testing.assert_allclose(unpenalized, [[0.0, 4.0], [1.0, 1.0], [4.0, 0.0]])
    np.testing.assert_array_equal(penalized, unpenalized)
    assert counter.value == 8


def test_objective_errors_propagate():
    evaluator = PenalizingEvaluator()
    with pytest.raises(RuntimeError, match="blew up"):
        evaluator(FailingProblem(), np.array([0.0]))


def test_wrong_objective_count_raises():
    evaluator = PenalizingEvaluator()
    with pytest.raises(EvaluationError):
        evaluator(WrongShapeProblem(), np.array([0.0]))


def test_counter_reset_and_pickle_state():
    import pickle

    counter = EvaluationCounter()
    counter.increment(3)
    restored = pickle.loads(pickle.dumps(counter))
    assert restored.value == 3
    restored.increment()
    assert restored.value == 4
    counter.reset()
    assert counter.value == 0
