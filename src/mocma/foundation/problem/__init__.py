from .box import BoxConstrainedMixin, BoxConstraints
from .dtlz import DTLZ3Problem
from .sphere import DoubleSphereProblem
from .types import ObjectiveFunction, SupportsFeasibility, SupportsStartingPoint
from .zdt4 import ZDT4Problem

__all__ = [
    "BoxConstrainedMixin",
    "BoxConstraints",
    "DTLZ3Problem",
    "DoubleSphereProblem",
    "ObjectiveFunction",
    "SupportsFeasibility",
    "SupportsStartingPoint",
    "ZDT4Problem",
]
