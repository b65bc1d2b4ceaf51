import pytest

from mocma.foundation.exceptions import (
    BoundsError,
    CheckpointError,
    ConfigurationError,
    DataError,
    EvaluationError,
    InvalidIndicatorError,
    MOCMAError,
    NotInitializedError,
    OptimizationError,
    ProblemDimensionError,
    ProblemError,
)


def test_hierarchy():
    assert issubclass(InvalidIndicatorError, ConfigurationError)
    assert issubclass(ProblemDimensionError, ProblemError)
    assert issubclass(BoundsError, ProblemError)
    assert issubclass(NotInitializedError, OptimizationError)
    assert issubclass(EvaluationError, OptimizationError)
    assert issubclass(CheckpointError, DataError)
    for cls in (ConfigurationError, ProblemError, OptimizationError, DataError):
        assert issubclass(cls, MOCMAError)


def test_message_includes_suggestion():
    err = NotInitializedError("step")
    assert "Cannot call step() before" in str(err)
    assert "Suggestion: Call init(problem, rng) first" in str(err)
    assert err.details == {"operation": "step"}


def test_invalid_indicator_lists_available():
    err = InvalidIndicatorError("r2", available=["hypervolume", "epsilon"])
    assert err.details["indicator"] == "r2"
    assert "hypervolume, epsilon" in err.suggestion


def test_catch_as_base():
    with pytest.raises(MOCMAError):
        raise ProblemDimensionError("bad", n_var=0, n_obj=2)
