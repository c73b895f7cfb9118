"""Exception taxonomy.

ValidationError and ConfigurationError are recoverable and reported to the
caller. ComputationFault is recovered inside the evaluator by substituting
worst-case objectives. InvariantViolation aborts an optimization run.
"""

from __future__ import annotations


class ValidationError(ValueError):
    """A parameter lies outside its documented domain."""

    def __init__(
        self,
        field: str,
        value: object,
        low: object = None,
        high: object = None,
        message: str | None = None,
    ) -> None:
        self.field = field
        self.value = value
        self.low = low
        self.high = high
        if message is None:
            if low is None and high is None:
                message = f"{field}: invalid value {value!r}"
            else:
                message = f"{field} must be between {low} and {high}, got {value!r}"
        super().__init__(message)


class ConfigurationError(ValidationError):
    """Run configuration (duration, load factor, population, generations) is invalid."""


class ComputationFault(ArithmeticError):
    """Degenerate input to an objective formula (e.g. an empty load trace)."""


class InvariantViolation(RuntimeError):
    """Internal optimizer state is corrupted; the run cannot continue."""
