"""
hydromoo exception hierarchy.

All library errors inherit from HydroMOOError so callers can catch them in one
place. Messages may carry a suggestion that is appended to the text.

Example:
    try:
        algorithm.run()
    except EvaluationError as e:
        print(f"Simulation failed: {e}")
"""

from __future__ import annotations

from typing import Any


class HydroMOOError(Exception):
    """
    Base exception for all hydromoo errors.

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
        msg = self.message
        if self.suggestion:
            msg += f"\n\nSuggestion: {self.suggestion}"
        return msg


# =============================================================================
# Configuration Errors
# =============================================================================


class ConfigurationError(HydroMOOError, ValueError):
    """Raised when configuration is invalid or incomplete."""

    pass


class InvalidAlgorithmError(ConfigurationError):
    """Raised when an unknown algorithm is specified."""

    def __init__(self, algorithm: str, available: list[str] | None = None) -> None:
        available = available or []
        message = f"Unknown algorithm '{algorithm}'."
        suggestion = f"Available algorithms: {', '.join(available)}" if available else None
        super().__init__(message, suggestion, {"algorithm": algorithm, "available": available})


class InvalidOperatorError(ConfigurationError):
    """Raised when an unknown operator (or DE variant) is specified."""

    def __init__(
        self,
        operator_type: str,
        operator_name: str,
        available: list[str] | None = None,
    ) -> None:
        message = f"Unknown {operator_type} operator '{operator_name}'."
        suggestion = f"Available {operator_type} operators: {', '.join(available)}" if available else None
        super().__init__(
            message,
            suggestion,
            {"operator_type": operator_type, "operator_name": operator_name},
        )


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


class ProblemError(HydroMOOError):
    """Base class for problem-related errors."""

    pass


class InvalidProblemError(ProblemError):
    """Raised when an unknown problem is specified."""

    def __init__(self, problem: str, available: list[str] | None = None) -> None:
        message = f"Unknown problem '{problem}'."
        suggestion = f"Available problems: {', '.join(available)}" if available else None
        super().__init__(message, suggestion, {"problem": problem})


class ProblemDimensionError(ProblemError, ValueError):
    """Raised when bounds do not match the declared number of variables."""

    def __init__(self, message: str, expected: int | None = None, actual: int | None = None) -> None:
        details: dict[str, Any] = {}
        if expected is not None:
            details["expected"] = expected
        if actual is not None:
            details["actual"] = actual
        super().__init__(message, "Check n_var and the lower/upper bound arrays", details)


class EvaluationError(HydroMOOError):
    """
    Raised by Problem.evaluate when the objective function cannot be computed,
    e.g. when an external hydraulic simulator reports a fault.
    """

    pass


# =============================================================================
# Runtime Errors
# =============================================================================


class InvariantViolationError(HydroMOOError, RuntimeError):
    """Raised when an internal precondition does not hold (a caller defect)."""

    pass


class AlgorithmStateError(HydroMOOError, RuntimeError):
    """Raised when an algorithm is driven out of its life-cycle order."""

    def __init__(self, algorithm: str, action: str, state: str) -> None:
        message = f"Cannot {action} on {algorithm} while it is {state}."
        super().__init__(message, None, {"algorithm": algorithm, "action": action, "state": state})


__all__ = [
    "HydroMOOError",
    "ConfigurationError",
    "InvalidAlgorithmError",
    "InvalidOperatorError",
    "MissingConfigError",
    "ProblemError",
    "InvalidProblemError",
    "ProblemDimensionError",
    "EvaluationError",
    "InvariantViolationError",
    "AlgorithmStateError",
]
