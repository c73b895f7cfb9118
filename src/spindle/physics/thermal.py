"""Thermal surrogate: temperature rise and shaft growth."""

from __future__ import annotations

from ..core.constants import SHAFT_CTE_PER_C, SHAFT_LENGTH_M
from ..core.encoding import CoolingType, ParameterVector


def temperature_rise(params: ParameterVector, load: float | None = None) -> float:
    """Spindle temperature rise (°C).

    Model: base(cooling) + 5*(speed/10000) + 2*(preload/500) [+ 2*(load/1000)]

    Args:
        params: Design vector.
        load: Instantaneous load (N) for the load-aware variant.
    """
    base = 18.0 if params.cooling_type == CoolingType.LIQUID else 22.0
    speed_factor = params.max_speed / 10000.0
    preload_factor = params.bearing_preload / 500.0
    rise = base + speed_factor * 5.0 + preload_factor * 2.0
    if load is not None:
        rise += (load / 1000.0) * 2.0
    return rise


def thermal_expansion(temp_rise: float) -> float:
    """Axial shaft growth for a temperature rise (same length unit as SHAFT_LENGTH_M)."""
    return SHAFT_LENGTH_M * SHAFT_CTE_PER_C * temp_rise
