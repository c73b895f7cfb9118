"""Dynamic load model for the grinding spindle."""

from __future__ import annotations

import numpy as np

from ..core.constants import (
    LOAD_COEFF_N,
    LOAD_SPIKE_FACTOR,
    LOAD_SPIKE_PROBABILITY,
    LOAD_VARIATION_AMPLITUDE,
    LOAD_VARIATION_PERIOD_S,
    MATERIAL_FACTOR,
    POWER_COEFF_KW,
    TIME_STEP_S,
)
from ..core.encoding import ParameterVector


def required_power(wheel_diameter: float, speed: int) -> float:
    """Estimated grinding power demand (kW).

    Args:
        wheel_diameter: Wheel diameter (mm).
        speed: Spindle speed (RPM).
    """
    return (wheel_diameter / 1000.0) * (speed / 1000.0) * POWER_COEFF_KW * MATERIAL_FACTOR


def estimate_load(params: ParameterVector) -> float:
    """Nominal radial grinding load (N)."""
    return params.wheel_diameter_m * (params.max_speed / 1000.0) * LOAD_COEFF_N


def n_samples(duration: float) -> int:
    """Number of load samples for a trace of `duration` seconds (0 if non-positive)."""
    return max(int(duration / TIME_STEP_S), 0)


def generate_load_profile(
    params: ParameterVector,
    duration: float,
    load_factor: float,
    rng: np.random.Generator,
) -> np.ndarray:
    """Sample a stochastic dynamic load trace at TIME_STEP_S resolution.

    Each sample is the base load modulated by a 2 s sinusoid (±30%);
    with probability 0.1 a sample is scaled by 1.5 to model a transient
    spike. Exactly one uniform draw is consumed per sample.

    Args:
        params: Design vector.
        duration: Trace duration (s).
        load_factor: Multiplier on the nominal load.
        rng: Generator supplying the spike draws.

    Returns:
        Load samples (N), shape (int(duration / 0.1),). Empty if duration <= 0.
    """
    steps = n_samples(duration)
    base = estimate_load(params) * load_factor

    t = np.arange(steps, dtype=np.float64) * TIME_STEP_S
    variation = np.sin(2.0 * np.pi * t / LOAD_VARIATION_PERIOD_S) * LOAD_VARIATION_AMPLITUDE
    load = base * (1.0 + variation)

    spikes = rng.random(steps) < LOAD_SPIKE_PROBABILITY
    load = np.where(spikes, load * LOAD_SPIKE_FACTOR, load)

    return np.maximum(load, 0.0)
