import numpy as np
import pytest

from mocma.engine.algorithm.mocma import CMAIndividual, IndicatorBasedSelection
from mocma.foundation.exceptions import ConfigurationError


def _population(F: np.ndarray) -> list[CMAIndividual]:
    pop = []
    for row in F:
        ind = CMAIndividual(1, F.shape[1])
        ind.unpenalized_fitness = np.asarray(row, dtype=float)
        ind.penalized_fitness = np.asarray(row, dtype=float) + 100.0
        pop.append(ind)
    return pop


def test_whole_fronts_then_truncation():
    F = np.array([[0.0, 0.0], [1.0, 2.0], [2.0, 1.0], [1.5, 1.5], [3.0, 3.0]])
    selected, ranks = IndicatorBasedSelection(3).select_indices(F)

    np.testing.assert_array_equal(ranks, [0, 1, 1, 1, 2])
    # (1.5, 1.5) has the smallest hypervolume contribution within front 1.
    np.testing.assert_array_equal(selected, [True, True, True, False, False])


def test_truncation_removes_exactly_the_excess():
    rng = np.random.default_rng(2)
    t = np.sort(rng.uniform(0.0, 1.0, 12))
    F = np.column_stack([t, 1.0 - t])
    for mu in (1, 4, 7, 11, 12):
        selected, ranks = IndicatorBasedSelection(mu).select_indices(F)
        assert selected.sum() == mu
        assert np.all(ranks == 0)


def test_fewer_individuals_than_mu_selects_all():
    F = np.array([[0.0, 1.0], [1.0, 0.0], [2.0, 2.0]])
    selected, _ = IndicatorBasedSelection(10).select_indices(F)
    assert selected.all()


def test_identical_front_is_deterministic():
    F = np.ones((6, 2))
    selection = IndicatorBasedSelection(3)
    first, _ = selection.select_indices(F)
    second, _ = selection.select_indices(F)

    np.testing.assert_array_equal(first, [False, False, False, True, True, True])
    np.testing.assert_array_equal(first, second)


@pytest.mark.parametrize("indicator", ["hypervolume", "epsilon", "approximated"])
def test_call_marks_individuals(indicator):
    F = np.array([[0.0, 3.0], [1.0, 1.0], [3.0, 0.0], [2.0, 2.0], [4.0, 4.0], [0.5, 2.5]])
    pop = _population(F)
    IndicatorBasedSelection(4, indicator)(pop, np.random.default_rng(0))

    assert sum(ind.selected for ind in pop) == 4
    assert [ind.rank for ind in pop] == [0, 0, 0, 1, 2, 0]
    assert not pop[4].selected


def test_selection_ranks_unpenalized_fitness_by_default():
    pop = _population(np.array([[0.0, 0.0], [1.0, 1.0]]))
    pop[0].penalized_fitness = np.array([5.0, 5.0])
    pop[1].penalized_fitness = np.array([1.0, 1.0])

    IndicatorBasedSelection(1)(pop)
    assert pop[0].selected and not pop[1].selected

    IndicatorBasedSelection(1, fitness="penalized")(pop)
    assert pop[1].selected and not pop[0].selected


def test_invalid_arguments():
    with pytest.raises(ConfigurationError):
        IndicatorBasedSelection(0)
    with pytest.raises(ConfigurationError):
        IndicatorBasedSelection(3, fitness="raw")
