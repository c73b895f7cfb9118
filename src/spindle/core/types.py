"""Core types for evaluation scenarios, objective sets and individuals.

This module defines the canonical types that form the interface
between the physics surrogate and the optimizer.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace

import numpy as np

from .constants import N_OBJ, TIME_STEP_S
from .encoding import ParameterVector
from .errors import ConfigurationError


@dataclass(frozen=True)
class Scenario:
    """Operating scenario used by the reporting path.

    Attributes:
        name: Scenario label.
        speed_factor: Multiplier on max_speed (result truncated to int).
        load_factor: Multiplier on the base dynamic load.
        duration: Load trace duration (s), at least one time step.
    """

    name: str
    speed_factor: float = 1.0
    load_factor: float = 1.0
    duration: float = 10.0

    def __post_init__(self) -> None:
        for name in ("speed_factor", "load_factor", "duration"):
            value = getattr(self, name)
            if value <= 0:
                raise ConfigurationError(
                    name, value, message=f"{name} must be positive, got {value}"
                )
        if self.duration < TIME_STEP_S:
            raise ConfigurationError(
                "duration",
                self.duration,
                message=f"duration must be >= {TIME_STEP_S} s, got {self.duration}",
            )

    def apply(self, params: ParameterVector) -> ParameterVector:
        """Return params with the scenario speed factor applied."""
        return replace(params, max_speed=int(params.max_speed * self.speed_factor))


DEFAULT_SCENARIOS: tuple[Scenario, ...] = (
    Scenario("High-Speed", speed_factor=1.0, load_factor=0.8, duration=10.0),
    Scenario("High-Torque", speed_factor=0.6, load_factor=1.2, duration=10.0),
    Scenario("Balanced", speed_factor=0.8, load_factor=1.0, duration=10.0),
)


@dataclass(frozen=True)
class ObjectiveSet:
    """Physical outputs of one evaluation.

    Attributes:
        vibration: Speed/bearing/alignment vibration (mm/s).
        wear_vibration: Wheel-imbalance vibration from wear (mm/s).
        temperature_rise: Steady temperature rise (°C).
        bearing_life: Bearing L10 life (hours).
        spindle_life: Remaining shaft fatigue life fraction [0, 1].
        wheel_wear: Wheel diameter reduction (mm).
        avg_load: Mean of the dynamic load trace (N).
        required_power: Estimated grinding power demand (kW).
        power_sufficient: required_power <= power_rating.
    """

    vibration: float
    wear_vibration: float
    temperature_rise: float
    bearing_life: float
    spindle_life: float
    wheel_wear: float
    avg_load: float
    required_power: float
    power_sufficient: bool

    @property
    def total_vibration(self) -> float:
        return self.vibration + self.wear_vibration

    @property
    def F(self) -> np.ndarray:
        """Objectives (minimize): [total_vibration, -bearing_life, temperature_rise]."""
        return np.array(
            [self.total_vibration, -self.bearing_life, self.temperature_rise],
            dtype=np.float64,
        )

    def to_dict(self) -> dict[str, float | bool]:
        return {
            "vibration": self.vibration,
            "wear_vibration": self.wear_vibration,
            "total_vibration": self.total_vibration,
            "temperature_rise": self.temperature_rise,
            "bearing_life": self.bearing_life,
            "spindle_life": self.spindle_life,
            "wheel_wear": self.wheel_wear,
            "avg_load": self.avg_load,
            "required_power": self.required_power,
            "power_sufficient": self.power_sufficient,
        }


@dataclass
class Individual:
    """Member of the optimizer population.

    Attributes:
        params: Design vector.
        objectives: [total_vibration, -bearing_life, temperature_rise]. Shape: (3,)
        rank: Pareto rank (1 = non-dominated). 0 until ranked.
        crowding_distance: Diversity within its front (inf at boundaries).
        result: Full evaluation behind objectives; None until evaluated or
            when the evaluation faulted and objectives hold the sentinel.
    """

    params: ParameterVector
    objectives: np.ndarray = field(default_factory=lambda: np.zeros(N_OBJ, dtype=np.float64))
    rank: int = 0
    crowding_distance: float = 0.0
    result: ObjectiveSet | None = None

    def __post_init__(self) -> None:
        # Enforce float64
        self.objectives = np.asarray(self.objectives, dtype=np.float64)
