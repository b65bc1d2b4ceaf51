"""
mocma: multi-objective covariance matrix adaptation with indicator-based selection.

Quick start:
    from mocma import MOCMA, MOCMAConfig, DTLZ3Problem

    config = MOCMAConfig().mu(20).indicator("hypervolume").fixed()
    result = MOCMA(config).run(DTLZ3Problem(n_var=12), ("n_eval", 20000), seed=1)
"""

from mocma.engine.algorithm.config import MOCMAConfig, MOCMAConfigData, load_config
from mocma.engine.algorithm.mocma import (
    MOCMA,
    AdditiveEpsilonIndicator,
    ApproximatedVolumeMOCMA,
    CMAIndividual,
    EpsilonMOCMA,
    HypervolumeIndicator,
    IndicatorBasedSelection,
    LeastContributorApproximator,
    PenalizingEvaluator,
    SolutionSetEntry,
)
from mocma.foundation.exceptions import (
    ConfigurationError,
    MOCMAError,
    NotInitializedError,
    ProblemDimensionError,
)
from mocma.foundation.logging import configure_mocma_logging
from mocma.foundation.problem import DoubleSphereProblem, DTLZ3Problem, ZDT4Problem

__version__ = "0.1.0"

__all__ = [
    "MOCMA",
    "EpsilonMOCMA",
    "ApproximatedVolumeMOCMA",
    "MOCMAConfig",
    "MOCMAConfigData",
    "load_config",
    "CMAIndividual",
    "PenalizingEvaluator",
    "IndicatorBasedSelection",
    "HypervolumeIndicator",
    "AdditiveEpsilonIndicator",
    "LeastContributorApproximator",
    "SolutionSetEntry",
    "MOCMAError",
    "ConfigurationError",
    "NotInitializedError",
    "ProblemDimensionError",
    "configure_mocma_logging",
    "DTLZ3Problem",
    "ZDT4Problem",
    "DoubleSphereProblem",
]
