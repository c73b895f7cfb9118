"""Core module: encoding, types, errors.

The evaluator, simulation and archive modules depend on `spindle.physics`
and are imported from their own submodules.
"""

from .encoding import (
    ParameterVector,
    bounds,
    decode_parameters,
    encode_parameters,
    random_parameters,
    validate_parameters,
)
from .errors import ComputationFault, ConfigurationError, InvariantViolation, ValidationError
from .types import DEFAULT_SCENARIOS, Individual, ObjectiveSet, Scenario

__all__ = [
    "DEFAULT_SCENARIOS",
    "ComputationFault",
    "ConfigurationError",
    "Individual",
    "InvariantViolation",
    "ObjectiveSet",
    "ParameterVector",
    "Scenario",
    "ValidationError",
    "bounds",
    "decode_parameters",
    "encode_parameters",
    "random_parameters",
    "validate_parameters",
]
