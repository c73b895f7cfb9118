"""Design evaluation: the canonical interface.

This is the ONLY interface between the physics surrogate and optimizers.
No optimizer-specific code should exist in physics modules.

Interface:
    evaluate_parameters(params, duration, load_factor, rng) -> ObjectiveSet
    SpindleEvaluator.evaluate_objectives(individual, duration, load_factor)

Flow:
    1. generate_load_profile(params, duration, load_factor, rng)
    2. vibration / temperature_rise (closed form)
    3. bearing_l10_life, spindle_fatigue_life, wheel_wear over the trace
    4. wear_induced_vibration from wheel wear
    5. Pack F = [total_vibration, -bearing_life, temperature_rise]
"""

from __future__ import annotations

from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor

import numpy as np

from ..physics.life import bearing_l10_life, spindle_fatigue_life, wheel_wear
from ..physics.load import generate_load_profile, required_power
from ..physics.thermal import temperature_rise
from ..physics.vibration import vibration, wear_induced_vibration
from .constants import WORST_OBJECTIVES
from .encoding import ParameterVector
from .errors import ComputationFault
from .logging import get_logger
from .types import Individual, ObjectiveSet, Scenario

logger = get_logger(__name__)


def evaluate_parameters(
    params: ParameterVector,
    duration: float,
    load_factor: float,
    rng: np.random.Generator,
) -> ObjectiveSet:
    """Evaluate one design over a freshly sampled load trace.

    Args:
        params: Design vector (assumed validated).
        duration: Load trace duration (s).
        load_factor: Multiplier on the nominal load.
        rng: Generator for the load-spike draws.

    Returns:
        ObjectiveSet with all physical outputs.

    Raises:
        ComputationFault: empty load trace or non-finite objective.
    """
    load_profile = generate_load_profile(params, duration, load_factor, rng)
    if len(load_profile) == 0:
        raise ComputationFault(f"Empty load profile generated (duration={duration})")

    vib = vibration(params)
    temp_rise = temperature_rise(params)
    bearing_life = bearing_l10_life(params, load_profile)
    spindle_life = spindle_fatigue_life(load_profile)
    wear = wheel_wear(params, load_profile, duration)
    wear_vib = wear_induced_vibration(params, wear)
    power = required_power(params.wheel_diameter, params.max_speed)

    result = ObjectiveSet(
        vibration=vib,
        wear_vibration=wear_vib,
        temperature_rise=temp_rise,
        bearing_life=bearing_life,
        spindle_life=spindle_life,
        wheel_wear=wear,
        avg_load=float(np.mean(load_profile)),
        required_power=power,
        power_sufficient=bool(power <= params.power_rating),
    )
    if not np.all(np.isfinite(result.F)):
        raise ComputationFault(f"Non-finite objectives: {result.F.tolist()}")
    return result


def evaluate_or_none(
    params: ParameterVector,
    duration: float,
    load_factor: float,
    rng: np.random.Generator,
) -> ObjectiveSet | None:
    """Full evaluation, or None (logged at WARN) if evaluation faults."""
    try:
        return evaluate_parameters(params, duration, load_factor, rng)
    except (ArithmeticError, ValueError) as exc:
        logger.warn(
            "evaluation fault, assigning worst-case objectives",
            error=str(exc),
            params=params.to_dict(),
        )
        return None


def objectives_or_sentinel(result: ObjectiveSet | None) -> np.ndarray:
    """Objective vector of result, or WORST_OBJECTIVES for a faulted evaluation."""
    if result is None:
        return np.array(WORST_OBJECTIVES, dtype=np.float64)
    return result.F


class SpindleEvaluator:
    """Fitness evaluator owning the shared random generator.

    The generator is seeded once at construction, from OS entropy when
    `seed` is None.
    """

    def __init__(self, seed: int | None = None) -> None:
        self.seed = seed
        self.rng = np.random.default_rng(seed)
        self._n_evals = 0

    @property
    def n_evals(self) -> int:
        """Total number of objective evaluations performed."""
        return self._n_evals

    def generate_load_profile(
        self, params: ParameterVector, duration: float, load_factor: float
    ) -> np.ndarray:
        """Load trace drawn from the shared generator."""
        return generate_load_profile(params, duration, load_factor, self.rng)

    def evaluate(self, params: ParameterVector, scenario: Scenario) -> ObjectiveSet:
        """Evaluate params under a scenario (speed factor applied first)."""
        return evaluate_parameters(
            scenario.apply(params), scenario.duration, scenario.load_factor, self.rng
        )

    def evaluate_objectives(
        self, individual: Individual, duration: float, load_factor: float
    ) -> None:
        """Score an individual in place; never raises on computation faults."""
        individual.result = evaluate_or_none(individual.params, duration, load_factor, self.rng)
        individual.objectives = objectives_or_sentinel(individual.result)
        self._n_evals += 1

    def evaluate_population(
        self,
        individuals: Sequence[Individual],
        duration: float,
        load_factor: float,
        n_workers: int = 1,
    ) -> None:
        """Score individuals in place, optionally on a thread pool.

        One child generator is spawned per individual, in index order, before
        any evaluation runs; results therefore do not depend on n_workers or
        on completion order.
        """
        if not individuals:
            return
        children = self.rng.spawn(len(individuals))

        def _score(pair: tuple[Individual, np.random.Generator]) -> ObjectiveSet | None:
            ind, child = pair
            return evaluate_or_none(ind.params, duration, load_factor, child)

        pairs = list(zip(individuals, children))
        if n_workers > 1:
            with ThreadPoolExecutor(max_workers=n_workers) as pool:
                results = list(pool.map(_score, pairs))
        else:
            results = [_score(p) for p in pairs]

        for ind, result in zip(individuals, results):
            ind.result = result
            ind.objectives = objectives_or_sentinel(result)
        self._n_evals += len(individuals)
