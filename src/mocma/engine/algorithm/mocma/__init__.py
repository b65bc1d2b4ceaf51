"""
MO-CMA-ES algorithm module.

This package provides the multi-objective CMA-ES with indicator-based
selection, split into:
- `mocma.py`: MOCMA class and its indicator variants (init/step/run loop)
- `individual.py`: CMAIndividual with per-individual step size and covariance
- `evaluator.py`: PenalizingEvaluator and the shared evaluation counter
- `indicators.py`: hypervolume, additive-epsilon and approximated contributors
- `selection.py`: IndicatorBasedSelection
- `initialization.py`: population setup and termination parsing
- `state.py`: MOCMAState, SolutionSetEntry + result building

References:
    C. Igel, N. Hansen, and S. Roth, "Covariance Matrix Adaptation for
    Multi-objective Optimization," Evolutionary Computation, vol. 15, no. 1, 2007.
"""

from .evaluator import EvaluationCounter, PenalizingEvaluator
from .indicators import (
    AdditiveEpsilonIndicator,
    HypervolumeIndicator,
    Indicator,
    LeastContributorApproximator,
    available_indicators,
    canonical_indicator_name,
    resolve_indicator,
)
from .individual import MAX_STEP_SIZE, MIN_STEP_SIZE, CMAIndividual
from .initialization import initialize_population, parse_termination
from .mocma import MOCMA, ApproximatedVolumeMOCMA, EpsilonMOCMA
from .selection import IndicatorBasedSelection
from .state import MOCMAState, SolutionSetEntry, build_mocma_result

__all__ = [
    "MOCMA",
    "EpsilonMOCMA",
    "ApproximatedVolumeMOCMA",
    # Individual
    "CMAIndividual",
    "MIN_STEP_SIZE",
    "MAX_STEP_SIZE",
    # Evaluation
    "EvaluationCounter",
    "PenalizingEvaluator",
    # Indicators
    "Indicator",
    "HypervolumeIndicator",
    "AdditiveEpsilonIndicator",
    "LeastContributorApproximator",
    "available_indicators",
    "canonical_indicator_name",
    "resolve_indicator",
    # Selection
    "IndicatorBasedSelection",
    # Setup
    "initialize_population",
    "parse_termination",
    # State
    "MOCMAState",
    "SolutionSetEntry",
    "build_mocma_result",
]
