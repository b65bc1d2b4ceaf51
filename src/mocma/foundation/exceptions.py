"""
mocma exception hierarchy.

Provides user-friendly exceptions with helpful error messages and suggestions.
All mocma-specific exceptions inherit from MOCMAError for easy catching.

Example:
    try:
        optimizer = MOCMA(config)
    except MOCMAError as e:
        print(f"Setup failed: {e}")
        print(f"Suggestion: {e.suggestion}")
"""

from __future__ import annotations

from typing import Any


class MOCMAError(Exception):
    """
    Base exception for all mocma errors.

    Attributes:
        message: Human-readable error description
        suggestion: Optional suggestion for fixing the error
        details: Optional dict with additional context
    """

    def __init__(
        self,
        message: str,
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message
        self.suggestion = suggestion
        self.details = details or {}
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the full error message with suggestion."""
        msg = self.message
        if self.suggestion:
            msg += f"\n\nSuggestion: {self.suggestion}"
        return msg


# =============================================================================
# Configuration Errors
# =============================================================================


class ConfigurationError(MOCMAError):
    """Raised when configuration is invalid or incomplete."""

    pass


class InvalidIndicatorError(ConfigurationError):
    """Raised when an unknown selection indicator is specified."""

    def __init__(self, indicator: str, available: list[str] | None = None) -> None:
        available = available or ["hypervolume", "epsilon", "approximated"]
        message = f"Unknown indicator '{indicator}'."
        suggestion = f"Available indicators: {', '.join(available)}"
        super().__init__(message, suggestion, {"indicator": indicator, "available": available})


class InvalidNotionOfSuccessError(ConfigurationError):
    """Raised when the notion of success is neither individual- nor population-based."""

    def __init__(self, notion: str, available: list[str] | None = None) -> None:
        available = available or ["individual", "population"]
        message = f"Unknown notion of success '{notion}'."
        suggestion = f"Available notions of success: {', '.join(available)}"
        super().__init__(message, suggestion, {"notion_of_success": notion, "available": available})


class InvalidEvalBackendError(ConfigurationError):
    """Raised when an unknown evaluation backend is specified."""

    def __init__(self, backend: str, available: list[str] | None = None) -> None:
        available = available or ["serial", "process"]
        message = f"Unknown evaluation backend '{backend}'."
        suggestion = f"Available evaluation backends: {', '.join(available)}"
        super().__init__(message, suggestion, {"backend": backend, "available": available})


class MissingConfigError(ConfigurationError):
    """Raised when required configuration is missing."""

    def __init__(self, field: str, config_class: str | None = None) -> None:
        message = f"Missing required configuration: '{field}'."
        suggestion = f"Add '{field}' to your configuration"
        if config_class:
            suggestion += f" or use {config_class}.default() for sensible defaults"
        super().__init__(message, suggestion, {"field": field})


# =============================================================================
# Problem Errors
# =============================================================================


class ProblemError(MOCMAError):
    """Base class for problem-related errors."""

    pass


class ProblemDimensionError(ProblemError):
    """Raised when problem dimensions are invalid or do not match the population."""

    def __init__(
        self,
        message: str,
        n_var: int | None = None,
        n_obj: int | None = None,
    ) -> None:
        suggestion = "Check problem dimensions: n_var (variables), n_obj (objectives)"
        super().__init__(message, suggestion, {"n_var": n_var, "n_obj": n_obj})


class BoundsError(ProblemError):
    """Raised when bounds are invalid or inconsistent."""

    def __init__(self, message: str) -> None:
        suggestion = "Ensure xl <= xu for all variables and bounds have correct shape"
        super().__init__(message, suggestion)


# =============================================================================
# Runtime Errors
# =============================================================================


class OptimizationError(MOCMAError):
    """Raised when optimization fails during execution."""

    pass


class NotInitializedError(OptimizationError):
    """Raised when stepping an optimizer that has not been initialized."""

    def __init__(self, operation: str = "step") -> None:
        message = f"Cannot call {operation}() before the optimizer is initialized."
        suggestion = "Call init(problem, rng) first"
        super().__init__(message, suggestion, {"operation": operation})


class EvaluationError(OptimizationError):
    """Raised when objective evaluation returns malformed values."""

    def __init__(self, message: str, solution: Any = None) -> None:
        suggestion = "Check your problem's evaluate() function for errors"
        super().__init__(message, suggestion, {"solution": solution})


# =============================================================================
# Data/IO Errors
# =============================================================================


class DataError(MOCMAError):
    """Base class for data-related errors."""

    pass


class CheckpointError(DataError):
    """Raised when a checkpoint cannot be read or has an unsupported layout."""

    def __init__(self, message: str, path: str | None = None) -> None:
        suggestion = "Checkpoint may be corrupted or written by an incompatible version. Try re-running the optimization."
        super().__init__(message, suggestion, {"path": path})


# =============================================================================
# Exports
# =============================================================================

__all__ = [
    # Base
    "MOCMAError",
    # Configuration
    "ConfigurationError",
    "InvalidIndicatorError",
    "InvalidNotionOfSuccessError",
    "InvalidEvalBackendError",
    "MissingConfigError",
    # Problem
    "ProblemError",
    "ProblemDimensionError",
    "BoundsError",
    # Runtime
    "OptimizationError",
    "NotInitializedError",
    "EvaluationError",
    # Data/IO
    "DataError",
    "CheckpointError",
]
