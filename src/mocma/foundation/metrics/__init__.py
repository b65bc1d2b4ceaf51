from .hypervolume import hypervolume, hypervolume_contributions
from .pareto import (
    dominance_matrix,
    dominates,
    is_mutually_non_dominated,
    non_dominated_sort,
    pareto_filter,
)

__all__ = [
    "hypervolume",
    "hypervolume_contributions",
    "dominance_matrix",
    "dominates",
    "is_mutually_non_dominated",
    "non_dominated_sort",
    "pareto_filter",
]
