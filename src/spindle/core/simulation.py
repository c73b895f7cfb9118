"""Reporting-path producers: multi-scenario and time-stepped simulation.

Both entry points validate the design first, run the physics surrogates,
ask the maintenance classifier for a prediction, and then append the run
to the classifier's history with a rule-based label. They return plain
dataclasses; formatting is left to the caller.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import asdict, dataclass, field
from typing import Any

import numpy as np

from ..maintenance.classifier import (
    MaintenanceClassifier,
    MaintenanceFeatures,
    get_default_classifier,
    label_for,
)
from ..physics.life import bearing_l10_life, spindle_fatigue_life, wheel_wear
from ..physics.load import required_power
from ..physics.thermal import temperature_rise, thermal_expansion
from ..physics.vibration import resonance_frequency, vibration, wear_induced_vibration
from .constants import AMBIENT_TEMPERATURE_C, MAX_WEAR_FRACTION, TIME_STEP_S
from .encoding import ParameterVector, validate_parameters
from .errors import ConfigurationError
from .evaluator import SpindleEvaluator
from .logging import get_logger
from .types import DEFAULT_SCENARIOS, Scenario

logger = get_logger(__name__)

# Advisory thresholds
VIBRATION_ADVISORY_MM_S = 1.0
TEMPERATURE_ADVISORY_C = 30.0
BEARING_LIFE_ADVISORY_H = 20000.0


@dataclass(frozen=True)
class ScenarioReport:
    """Physical outputs of one scenario run."""

    scenario: str
    max_speed: int
    required_power: float
    power_sufficient: bool
    temperature_rise: float
    thermal_expansion: float
    vibration: float
    resonance_frequency: float
    load_profile: np.ndarray = field(repr=False)
    bearing_life: float
    spindle_life: float
    wheel_wear: float
    remaining_diameter: float
    wear_vibration: float
    maintenance_needed: bool

    @property
    def total_vibration(self) -> float:
        return self.vibration + self.wear_vibration

    def to_dict(self) -> dict[str, Any]:
        out = asdict(self)
        out["load_profile"] = self.load_profile.tolist()
        out["total_vibration"] = self.total_vibration
        return out


@dataclass(frozen=True)
class TimeBasedReport:
    """Time-stepped run under the nominal load (load factor 1.0)."""

    duration: float
    time: np.ndarray = field(repr=False)
    load: np.ndarray = field(repr=False)
    vibration: np.ndarray = field(repr=False)
    temperature: np.ndarray = field(repr=False)
    bearing_life: float
    spindle_life: float
    wheel_wear: float
    remaining_diameter: float
    wear_vibration: float
    maintenance_needed: bool

    @property
    def avg_vibration(self) -> float:
        return float(np.mean(self.vibration))

    @property
    def max_vibration(self) -> float:
        return float(np.max(self.vibration))

    @property
    def avg_temperature(self) -> float:
        return float(np.mean(self.temperature))

    @property
    def max_temperature(self) -> float:
        return float(np.max(self.temperature))

    def to_dict(self) -> dict[str, Any]:
        return {
            "duration": self.duration,
            "avg_vibration": self.avg_vibration,
            "max_vibration": self.max_vibration,
            "avg_temperature": self.avg_temperature,
            "max_temperature": self.max_temperature,
            "bearing_life": self.bearing_life,
            "spindle_life": self.spindle_life,
            "wheel_wear": self.wheel_wear,
            "remaining_diameter": self.remaining_diameter,
            "wear_vibration": self.wear_vibration,
            "maintenance_needed": self.maintenance_needed,
        }


def _predict_and_record(
    classifier: MaintenanceClassifier,
    features: MaintenanceFeatures,
    wheel_diameter: float,
) -> bool:
    classifier.init_once()
    needed = classifier.predict(features)
    classifier.record(features, label_for(features, wear_limit=wheel_diameter * MAX_WEAR_FRACTION))
    return bool(needed)


def run_scenario(
    params: ParameterVector,
    scenario: Scenario,
    evaluator: SpindleEvaluator,
    classifier: MaintenanceClassifier,
) -> ScenarioReport:
    """One scenario stage: speed factor applied, then every surrogate."""
    adjusted = scenario.apply(params)

    power = required_power(adjusted.wheel_diameter, adjusted.max_speed)
    temp_rise = temperature_rise(adjusted)
    vib = vibration(adjusted)

    load_profile = evaluator.generate_load_profile(adjusted, scenario.duration, scenario.load_factor)
    bearing_life = bearing_l10_life(adjusted, load_profile)
    spindle_life = spindle_fatigue_life(load_profile)
    wear = wheel_wear(adjusted, load_profile, scenario.duration)
    wear_vib = wear_induced_vibration(adjusted, wear)

    features = MaintenanceFeatures(
        vibration=vib + wear_vib,
        temperature=temp_rise + AMBIENT_TEMPERATURE_C,
        load=float(np.mean(load_profile)),
        bearing_life=bearing_life,
        spindle_life=spindle_life,
        wheel_wear=wear,
    )
    needed = _predict_and_record(classifier, features, adjusted.wheel_diameter)

    return ScenarioReport(
        scenario=scenario.name,
        max_speed=adjusted.max_speed,
        required_power=power,
        power_sufficient=bool(power <= adjusted.power_rating),
        temperature_rise=temp_rise,
        thermal_expansion=thermal_expansion(temp_rise),
        vibration=vib,
        resonance_frequency=resonance_frequency(adjusted),
        load_profile=load_profile,
        bearing_life=bearing_life,
        spindle_life=spindle_life,
        wheel_wear=wear,
        remaining_diameter=adjusted.wheel_diameter - wear,
        wear_vibration=wear_vib,
        maintenance_needed=needed,
    )


def simulate(
    params: ParameterVector,
    scenarios: Sequence[Scenario] = DEFAULT_SCENARIOS,
    evaluator: SpindleEvaluator | None = None,
    classifier: MaintenanceClassifier | None = None,
) -> list[ScenarioReport]:
    """Run params through each scenario in order.

    Raises:
        ValidationError: params outside their domain (nothing is run).
    """
    validate_parameters(params)
    if evaluator is None:
        evaluator = SpindleEvaluator()
    if classifier is None:
        classifier = get_default_classifier()

    reports = [run_scenario(params, s, evaluator, classifier) for s in scenarios]
    logger.debug(
        "simulation complete",
        scenarios=[r.scenario for r in reports],
        maintenance=[r.maintenance_needed for r in reports],
    )
    return reports


def recommendations(reports: Sequence[ScenarioReport]) -> list[str]:
    """Design advice triggered by any scenario exceeding an advisory limit."""
    advice = []
    if any(r.total_vibration > VIBRATION_ADVISORY_MM_S for r in reports):
        advice.append(
            "Consider Hybrid Ceramic bearings or an HSK tool interface to reduce vibration."
        )
    if any(r.temperature_rise > TEMPERATURE_ADVISORY_C for r in reports):
        advice.append("Switch to Liquid cooling to improve thermal performance.")
    if any(r.bearing_life < BEARING_LIFE_ADVISORY_H for r in reports):
        advice.append(
            "Optimize lubrication (e.g. Oil-Air) or reduce bearing preload to extend bearing life."
        )
    return advice


def simulate_time_based(
    params: ParameterVector,
    duration: float,
    evaluator: SpindleEvaluator | None = None,
    classifier: MaintenanceClassifier | None = None,
) -> TimeBasedReport:
    """Step through a nominal load trace accumulating temperature.

    Each step uses the load-aware vibration and temperature models;
    temperature starts at ambient and integrates rise * dt / 10.

    Raises:
        ValidationError: params outside their domain.
        ConfigurationError: duration too short for a single time step.
    """
    validate_parameters(params)
    if duration < TIME_STEP_S:
        raise ConfigurationError(
            "duration", duration, message=f"duration must be >= {TIME_STEP_S} s, got {duration}"
        )
    if evaluator is None:
        evaluator = SpindleEvaluator()
    if classifier is None:
        classifier = get_default_classifier()

    load_profile = evaluator.generate_load_profile(params, duration, 1.0)
    vib = np.array([vibration(params, load) for load in load_profile])
    rise = np.array([temperature_rise(params, load) for load in load_profile])
    temperature = AMBIENT_TEMPERATURE_C + np.cumsum(rise * TIME_STEP_S / 10.0)

    bearing_life = bearing_l10_life(params, load_profile)
    spindle_life = spindle_fatigue_life(load_profile)
    wear = wheel_wear(params, load_profile, duration)
    wear_vib = wear_induced_vibration(params, wear)

    features = MaintenanceFeatures(
        vibration=float(np.max(vib)) + wear_vib,
        temperature=float(np.max(temperature)),
        load=float(np.mean(load_profile)),
        bearing_life=bearing_life,
        spindle_life=spindle_life,
        wheel_wear=wear,
    )
    needed = _predict_and_record(classifier, features, params.wheel_diameter)

    return TimeBasedReport(
        duration=duration,
        time=np.arange(len(load_profile)) * TIME_STEP_S,
        load=load_profile,
        vibration=vib,
        temperature=temperature,
        bearing_life=bearing_life,
        spindle_life=spindle_life,
        wheel_wear=wear,
        remaining_diameter=params.wheel_diameter - wear,
        wear_vibration=wear_vib,
        maintenance_needed=needed,
    )
