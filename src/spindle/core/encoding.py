"""Spindle parameter space: design vector, domains, validation and encoding.

This module defines the parameter structure and provides pack/unpack
functions for the flat decision vector x used by array-based optimizers.

Layout (ENCODING_VERSION = "1.0"):
    x[0]  - spindle_type (option index)
    x[1]  - power_rating (kW)
    x[2]  - max_speed (RPM, truncated to int on decode)
    x[3]  - wheel_diameter (mm)
    x[4]  - bearing_type (option index)
    x[5]  - bearing_preload (N)
    x[6]  - cooling_type (option index)
    x[7]  - lubrication_type (option index)
    x[8]  - tool_interface (option index)
    x[9]  - alignment_tolerance (mm)
    Total: 10 decision variables
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from enum import Enum
from typing import Any

import numpy as np

from .errors import ValidationError

ENCODING_VERSION = "1.0"


class SpindleDriveType(str, Enum):
    BELT_DRIVEN = "Belt-Driven"
    DIRECT_DRIVE = "Direct-Drive"
    MOTORIZED = "Motorized"


class BearingType(str, Enum):
    ANGULAR_CONTACT = "Angular Contact"
    HYBRID_CERAMIC = "Hybrid Ceramic"


class CoolingType(str, Enum):
    LIQUID = "Liquid"
    AIR = "Air"


class LubricationType(str, Enum):
    GREASE = "Grease"
    OIL_MIST = "Oil-Mist"
    OIL_AIR = "Oil-Air"


class ToolInterface(str, Enum):
    PRECISION_COLLET = "Precision Collet"
    HYDRAULIC_CHUCK = "Hydraulic Chuck"
    HSK = "HSK"


# Continuous/integer domains, in validation order (inclusive bounds)
CONTINUOUS_BOUNDS: dict[str, tuple[float, float]] = {
    "power_rating": (0.5, 50.0),
    "max_speed": (1000, 30000),
    "wheel_diameter": (50.0, 1000.0),
    "bearing_preload": (100.0, 2000.0),
    "alignment_tolerance": (0.0001, 0.01),
}

INTEGER_FIELDS = frozenset({"max_speed"})

# Flat encoding order
VARIABLE_ORDER = (
    "spindle_type",
    "power_rating",
    "max_speed",
    "wheel_diameter",
    "bearing_type",
    "bearing_preload",
    "cooling_type",
    "lubrication_type",
    "tool_interface",
    "alignment_tolerance",
)
N_TOTAL = len(VARIABLE_ORDER)

CATEGORICAL_OPTIONS: dict[str, type[Enum]] = {
    "spindle_type": SpindleDriveType,
    "bearing_type": BearingType,
    "cooling_type": CoolingType,
    "lubrication_type": LubricationType,
    "tool_interface": ToolInterface,
}


@dataclass(frozen=True)
class ParameterVector:
    """Spindle design under evaluation.

    Attributes:
        spindle_type: Drive arrangement.
        power_rating: Motor power (kW), [0.5, 50].
        max_speed: Maximum spindle speed (RPM), [1000, 30000].
        wheel_diameter: Grinding wheel diameter (mm), [50, 1000].
        bearing_type: Spindle bearing family.
        bearing_preload: Axial bearing preload (N), [100, 2000].
        cooling_type: Spindle cooling.
        lubrication_type: Bearing lubrication.
        tool_interface: Tool/wheel clamping interface.
        alignment_tolerance: Shaft alignment tolerance (mm), [0.0001, 0.01].
    """

    spindle_type: SpindleDriveType
    power_rating: float
    max_speed: int
    wheel_diameter: float
    bearing_type: BearingType
    bearing_preload: float
    cooling_type: CoolingType
    lubrication_type: LubricationType
    tool_interface: ToolInterface
    alignment_tolerance: float

    @property
    def wheel_diameter_m(self) -> float:
        return self.wheel_diameter / 1000.0

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-friendly dict (enums as their string values)."""
        out = asdict(self)
        for name in CATEGORICAL_OPTIONS:
            out[name] = out[name].value
        return out

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ParameterVector:
        """Create from a dict; categoricals may be enum members or their values.

        Raises:
            ValidationError: unknown field, missing field, unknown option or a
                non-numeric value for a numeric field.
        """
        names = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - names)
        if unknown:
            raise ValidationError(
                unknown[0], data[unknown[0]], message=f"Unknown fields: {unknown}"
            )
        missing = sorted(names - set(data))
        if missing:
            raise ValidationError(missing[0], None, message=f"Missing fields: {missing}")

        kwargs: dict[str, Any] = {}
        for name in names:
            value = data[name]
            if name in CATEGORICAL_OPTIONS:
                enum_cls = CATEGORICAL_OPTIONS[name]
                try:
                    kwargs[name] = enum_cls(value)
                except ValueError as exc:
                    options = [m.value for m in enum_cls]
                    raise ValidationError(
                        name, value, message=f"{name} must be one of {options}, got {value!r}"
                    ) from exc
            else:
                convert = int if name in INTEGER_FIELDS else float
                try:
                    kwargs[name] = convert(value)
                except (TypeError, ValueError) as exc:
                    raise ValidationError(
                        name, value, message=f"{name} must be numeric, got {value!r}"
                    ) from exc
        return cls(**kwargs)


def validate_parameters(params: ParameterVector) -> None:
    """Check every continuous/integer field against its domain.

    Fails fast on the first out-of-range field. Categorical fields are legal
    by construction of their enum types.

    Raises:
        ValidationError: naming the offending field and its domain.
    """
    for name, (low, high) in CONTINUOUS_BOUNDS.items():
        value = getattr(params, name)
        if not (low <= value <= high):
            raise ValidationError(name, value, low, high)


def is_valid(params: ParameterVector) -> bool:
    """Return True if `validate_parameters` would accept params."""
    try:
        validate_parameters(params)
    except ValidationError:
        return False
    return True


def clamp_field(name: str, value: float) -> float:
    """Clamp a continuous value to its field's domain."""
    low, high = CONTINUOUS_BOUNDS[name]
    return float(min(max(value, low), high))


def random_parameters(rng: np.random.Generator | None = None) -> ParameterVector:
    """Sample a random design uniformly within every domain.

    Args:
        rng: Random number generator (uses default if None).

    Returns:
        ParameterVector with continuous fields uniform in range and
        categorical fields uniform over their options.
    """
    if rng is None:
        rng = np.random.default_rng()

    kwargs: dict[str, Any] = {}
    for name, (low, high) in CONTINUOUS_BOUNDS.items():
        value = low + rng.random() * (high - low)
        kwargs[name] = int(value) if name in INTEGER_FIELDS else float(value)

    for name, enum_cls in CATEGORICAL_OPTIONS.items():
        options = list(enum_cls)
        kwargs[name] = options[int(rng.random() * len(options))]

    return ParameterVector(**kwargs)


def mid_bounds_parameters() -> ParameterVector:
    """Return the design at the midpoint of every continuous domain."""
    xl, xu = bounds()
    x = (xl + xu) / 2
    for i, name in enumerate(VARIABLE_ORDER):
        if name in CATEGORICAL_OPTIONS:
            x[i] = 0.0
    return decode_parameters(x)


def encode_parameters(params: ParameterVector) -> np.ndarray:
    """Encode a ParameterVector to a flat float array.

    Categorical fields are stored as their option index.
    """
    x = np.zeros(N_TOTAL, dtype=np.float64)
    for i, name in enumerate(VARIABLE_ORDER):
        value = getattr(params, name)
        if name in CATEGORICAL_OPTIONS:
            x[i] = list(CATEGORICAL_OPTIONS[name]).index(value)
        else:
            x[i] = float(value)
    return x


def decode_parameters(x: np.ndarray) -> ParameterVector:
    """Decode a flat array to a ParameterVector.

    Categorical entries are floored and clipped to a valid option index;
    max_speed is truncated to int. Continuous values are not clipped.
    """
    x = np.asarray(x, dtype=np.float64)
    if len(x) != N_TOTAL:
        raise ValueError(f"Expected {N_TOTAL} variables, got {len(x)}")

    kwargs: dict[str, Any] = {}
    for i, name in enumerate(VARIABLE_ORDER):
        if name in CATEGORICAL_OPTIONS:
            options = list(CATEGORICAL_OPTIONS[name])
            idx = int(np.clip(np.floor(x[i]), 0, len(options) - 1))
            kwargs[name] = options[idx]
        elif name in INTEGER_FIELDS:
            kwargs[name] = int(x[i])
        else:
            kwargs[name] = float(x[i])
    return ParameterVector(**kwargs)


def bounds() -> tuple[np.ndarray, np.ndarray]:
    """Return lower and upper bounds for the flat decision vector.

    Categorical upper bounds equal the number of options (exclusive,
    handled by `decode_parameters`).

    Returns:
        (xl, xu) tuple of bound arrays, each of length N_TOTAL.
    """
    xl = np.zeros(N_TOTAL, dtype=np.float64)
    xu = np.zeros(N_TOTAL, dtype=np.float64)
    for i, name in enumerate(VARIABLE_ORDER):
        if name in CATEGORICAL_OPTIONS:
            xl[i] = 0.0
            xu[i] = float(len(CATEGORICAL_OPTIONS[name]))
        else:
            xl[i], xu[i] = CONTINUOUS_BOUNDS[name]
    return xl, xu
