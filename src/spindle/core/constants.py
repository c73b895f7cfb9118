"""Core constants and configuration for spindle evaluation.

This module defines system-wide invariants such as:
- Load-trace time resolution
- Model version strings (for archives)
- Physical constants used by the closed-form surrogates
"""

from __future__ import annotations

# Load trace discretization (seconds per sample)
TIME_STEP_S = 0.1

# Model Versioning for Archives
# Update when any closed-form formula changes
MODEL_VERSION_PHYSICS_V1 = "v1.0_20261018_closed_form"

# Objective layout: [total_vibration, -bearing_life, temperature_rise]
N_OBJ = 3
OBJECTIVE_NAMES = ("vibration_mm_s", "neg_bearing_life_h", "temperature_rise_c")

# Worst-case objectives substituted when evaluation fails
WORST_OBJECTIVES = (1e10, -1e-10, 1e10)

# Dynamic load profile
LOAD_COEFF_N = 100.0
LOAD_VARIATION_AMPLITUDE = 0.3
LOAD_VARIATION_PERIOD_S = 2.0
LOAD_SPIKE_PROBABILITY = 0.1
LOAD_SPIKE_FACTOR = 1.5

# Power
POWER_COEFF_KW = 2.5
MATERIAL_FACTOR = 1.2

# Shaft
SHAFT_DIAMETER_M = 0.05
SHAFT_LENGTH_M = 0.2
SHAFT_MOMENT_ARM_M = 0.1
SHAFT_CTE_PER_C = 12e-6
SN_INTERCEPT = 20.0
SN_SLOPE = 6.0

# Grinding wheel
WHEEL_THICKNESS_M = 0.02
WHEEL_DENSITY_KG_M3 = 2500.0
WEAR_COEFF = 1e-6
MAX_WEAR_FRACTION = 0.2
SYSTEM_STIFFNESS_N_M = 1e8
MAX_WEAR_VIBRATION_MM_S = 2.0

# Bearings
MIN_BEARING_LIFE_H = 1000.0

# Degenerate-range threshold for crowding distance
CROWDING_RANGE_EPS = 1e-10

# Reporting path: temperatures are reported as ambient + rise
AMBIENT_TEMPERATURE_C = 20.0
