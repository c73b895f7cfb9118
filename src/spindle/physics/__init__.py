"""Physics module: closed-form spindle surrogates."""

from .life import bearing_l10_life, spindle_fatigue_life, wheel_wear
from .load import estimate_load, generate_load_profile, required_power
from .thermal import temperature_rise, thermal_expansion
from .vibration import resonance_frequency, vibration, wear_induced_vibration

__all__ = [
    "bearing_l10_life",
    "spindle_fatigue_life",
    "wheel_wear",
    "estimate_load",
    "generate_load_profile",
    "required_power",
    "temperature_rise",
    "thermal_expansion",
    "resonance_frequency",
    "vibration",
    "wear_induced_vibration",
]
