"""Service-life models: bearing L10, shaft fatigue, wheel wear.

All functions take the dynamic load trace produced by
`physics.load.generate_load_profile` and raise ComputationFault on an
empty trace.
"""

from __future__ import annotations

import numpy as np

from ..core.constants import (
    MAX_WEAR_FRACTION,
    MIN_BEARING_LIFE_H,
    SHAFT_DIAMETER_M,
    SHAFT_MOMENT_ARM_M,
    SN_INTERCEPT,
    SN_SLOPE,
    WEAR_COEFF,
    WHEEL_THICKNESS_M,
)
from ..core.encoding import BearingType, CoolingType, LubricationType, ParameterVector
from ..core.errors import ComputationFault


def _mean_load(load_profile: np.ndarray) -> float:
    if len(load_profile) == 0:
        raise ComputationFault("Empty load profile")
    return float(np.mean(load_profile))


def life_adjustment(params: ParameterVector) -> float:
    """Lubrication/cooling life multiplier (multipliers compose)."""
    factor = 1.0
    if params.lubrication_type == LubricationType.GREASE:
        factor *= 0.8
    elif params.lubrication_type == LubricationType.OIL_AIR:
        factor *= 1.2
    if params.cooling_type == CoolingType.LIQUID:
        factor *= 1.1
    return factor


def bearing_l10_life(params: ParameterVector, load_profile: np.ndarray) -> float:
    """Bearing L10 life (hours), floored at 1000 h.

    Model: L10h = (C/P)^3 * 1e6 / (60 * rpm) * a, P = (avg_load + preload)/1000 kN
    """
    c = 50.0 if params.bearing_type == BearingType.HYBRID_CERAMIC else 40.0
    p = (_mean_load(load_profile) + params.bearing_preload) / 1000.0
    l10 = (c / p) ** 3 * 1_000_000
    l10h = l10 / (60.0 * params.max_speed) * life_adjustment(params)
    return float(max(MIN_BEARING_LIFE_H, l10h))


def spindle_fatigue_life(load_profile: np.ndarray) -> float:
    """Remaining shaft fatigue life fraction in [0, 1] (Miner's rule on an S-N curve).

    stress = (load * 0.1) / (π d³ / 32), log10(N) = 20 - 6 log10(stress / 1e6)
    """
    load_profile = np.asarray(load_profile, dtype=np.float64)
    if len(load_profile) == 0:
        raise ComputationFault("Empty load profile")

    section_modulus = np.pi * SHAFT_DIAMETER_M**3 / 32
    stress = load_profile * SHAFT_MOMENT_ARM_M / section_modulus

    # Zero stress contributes no damage (N -> inf)
    loaded = stress > 0
    log_n = SN_INTERCEPT - SN_SLOPE * np.log10(stress[loaded] / 1e6)
    damage = float(np.sum(10.0 ** (-log_n)))

    return float(np.clip(1.0 - damage, 0.0, 1.0))


def wheel_wear(params: ParameterVector, load_profile: np.ndarray, duration: float) -> float:
    """Wheel diameter reduction (mm), capped at 20% of the wheel diameter.

    Archard-type wear: volume = k * avg_load * sliding_distance.
    """
    d = params.wheel_diameter_m
    peripheral_speed = np.pi * d * params.max_speed / 60.0
    sliding_distance = peripheral_speed * duration
    wear_volume = WEAR_COEFF * _mean_load(load_profile) * sliding_distance
    reduction = wear_volume / (np.pi * d * WHEEL_THICKNESS_M * 1000.0)
    return float(min(reduction, params.wheel_diameter * MAX_WEAR_FRACTION))
