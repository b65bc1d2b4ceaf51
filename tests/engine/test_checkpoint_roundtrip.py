import numpy as np
import pytest

from mocma import MOCMA, EpsilonMOCMA, MOCMAConfig, ZDT4Problem
from mocma.foundation.exceptions import CheckpointError


def _points(entries):
    return np.vstack([entry.search_point for entry in entries])


def test_restored_optimizer_reproduces_steps(tmp_path):
    problem = ZDT4Problem(n_var=3)
    optimizer = MOCMA(MOCMAConfig().mu(5).fixed())
    rng = np.random.default_rng(17)
    optimizer.init(problem, rng)
    for _ in range(4):
        optimizer.step(problem, rng)

    path = optimizer.save_checkpoint(tmp_path / "run")
    assert path.suffix == ".ckpt"

    expected = [_points(optimizer.step(problem, rng)) for _ in range(3)]

    restored = MOCMA.from_checkpoint(path)
    assert restored.generation == 4
    assert restored.n_eval == 10 + 4 * 5
    actual = [_points(restored.step(problem, restored.rng)) for _ in range(3)]

    for exp, act in zip(expected, actual):
        np.testing.assert_array_equal(exp, act)
    assert restored.n_eval == optimizer.n_eval


def test_state_dict_roundtrip_keeps_individual_state():
    problem = ZDT4Problem(n_var=2)
    optimizer = EpsilonMOCMA(MOCMAConfig().mu(3).fixed())
    rng = np.random.default_rng(1)
    optimizer.init(problem, rng)
    optimizer.step(problem, rng)

    state = optimizer.state_dict()
    other = EpsilonMOCMA(MOCMAConfig().mu(3).fixed())
    other.load_state_dict(state)

    for a, b in zip(optimizer.population, other.population):
        np.testing.assert_array_equal(a.covariance, b.covariance)
        np.testing.assert_array_equal(a.unpenalized_fitness, b.unpenalized_fitness)
        assert a.step_size == b.step_size
        assert a.success_probability == b.success_probability
    assert other.generation == 1


def test_load_state_with_other_mu_fails():
    problem = ZDT4Problem(n_var=2)
    optimizer = MOCMA(MOCMAConfig().mu(3).fixed())
    optimizer.init(problem, seed=0)
    with pytest.raises(CheckpointError):
        MOCMA(MOCMAConfig().mu(4).fixed()).load_state_dict(optimizer.state_dict())


def test_state_dict_requires_init():
    from mocma import NotInitializedError

    with pytest.raises(NotInitializedError):
        MOCMA(MOCMAConfig().mu(3).fixed()).state_dict()
