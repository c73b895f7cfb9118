"""Vibration surrogates: bearing/alignment vibration, resonance, wheel imbalance."""

from __future__ import annotations

import numpy as np

from ..core.constants import (
    MAX_WEAR_VIBRATION_MM_S,
    SYSTEM_STIFFNESS_N_M,
    WHEEL_DENSITY_KG_M3,
    WHEEL_THICKNESS_M,
)
from ..core.encoding import BearingType, ParameterVector, ToolInterface


def vibration(params: ParameterVector, load: float | None = None) -> float:
    """Spindle vibration velocity (mm/s).

    Model: base(bearing) * speed/10000 * alignment * tool [* (1 + 0.5*load/1000)]

    Args:
        params: Design vector.
        load: Instantaneous load (N) for the load-aware variant.
    """
    base = 0.4 if params.bearing_type == BearingType.HYBRID_CERAMIC else 0.6
    speed_factor = params.max_speed / 10000.0
    alignment_factor = 1.2 if params.alignment_tolerance > 0.002 else 1.0
    tool_factor = 0.9 if params.tool_interface == ToolInterface.HSK else 1.0
    vib = base * speed_factor * alignment_factor * tool_factor
    if load is not None:
        vib *= 1.0 + (load / 1000.0) * 0.5
    return vib


def resonance_frequency(params: ParameterVector) -> float:
    """First bending resonance of the wheel/shaft assembly (Hz)."""
    stiffness = 1.5e8 if params.bearing_type == BearingType.HYBRID_CERAMIC else 1.2e8
    mass = params.wheel_diameter_m * 2.0
    return float(np.sqrt(stiffness / mass) / (2 * np.pi))


def wear_induced_vibration(params: ParameterVector, wear: float) -> float:
    """Vibration from wheel imbalance caused by uneven wear (mm/s), capped at 2.0.

    Chain: wear depth -> wear volume -> imbalance mass -> eccentricity
    -> centrifugal force at ω = 2π·rpm/60 -> deflection against stiffness.

    Args:
        params: Design vector.
        wear: Wheel diameter reduction (mm).
    """
    d = params.wheel_diameter_m
    wear_volume = wear * np.pi * d * WHEEL_THICKNESS_M * 1000.0
    imbalance_mass = WHEEL_DENSITY_KG_M3 * wear_volume * 1e-9
    wheel_mass = WHEEL_DENSITY_KG_M3 * np.pi * (d / 2) ** 2 * WHEEL_THICKNESS_M
    eccentricity = (imbalance_mass * (d / 2)) / wheel_mass
    omega = 2 * np.pi * params.max_speed / 60.0
    imbalance_force = imbalance_mass * omega**2 * eccentricity
    amplitude = imbalance_force / SYSTEM_STIFFNESS_N_M * 1000.0
    return float(min(amplitude, MAX_WEAR_VIBRATION_MM_S))
