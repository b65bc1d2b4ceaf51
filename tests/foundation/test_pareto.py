import numpy as np

from mocma.foundation.metrics import (
    dominance_matrix,
    dominates,
    is_mutually_non_dominated,
    non_dominated_sort,
    pareto_filter,
)


def test_dominates_is_strict():
    assert dominates([0.0, 1.0], [1.0, 1.0])
    assert not dominates([1.0, 1.0], [1.0, 1.0])
    assert not dominates([0.0, 2.0], [1.0, 1.0])


def test_non_dominated_sort_invariant():
    rng = np.random.default_rng(7)
    F = rng.integers(0, 5, size=(40, 3)).astype(float)
    fronts, rank = non_dominated_sort(F)
    D = dominance_matrix(F)

    assert sum(front.size for front in fronts) == F.shape[0]
    for level, front in enumerate(fronts):
        for i in front:
            dominators = np.flatnonzero(D[:, i])
            # Only members of earlier fronts dominate i.
            assert np.all(rank[dominators] < level)
            if level > 0:
                assert np.any(rank[dominators] == level - 1)


def test_pareto_filter_returns_first_front():
    F = np.array([[0.0, 1.0], [1.0, 0.0], [1.0, 1.0], [0.5, 0.5]])
    front, idx = pareto_filter(F, return_indices=True)
    np.testing.assert_array_equal(idx, [0, 1, 3])
    assert is_mutually_non_dominated(front)
    assert not is_mutually_non_dominated(F)


def test_empty_input():
    fronts, rank = non_dominated_sort(np.empty((0, 2)))
    assert fronts == []
    assert rank.size == 0
