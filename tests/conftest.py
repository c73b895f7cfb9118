"""Pytest configuration for spindle.

Fixtures give every test its own seeded evaluator and classifier, and the
process-scoped classifier and logger state are restored after each test.
"""

from __future__ import annotations

import numpy as np
import pytest

from spindle.core.encoding import (
    BearingType,
    CoolingType,
    LubricationType,
    ParameterVector,
    SpindleDriveType,
    ToolInterface,
)
from spindle.core.evaluator import SpindleEvaluator
from spindle.core.logging import set_log_level, set_log_output
from spindle.maintenance.classifier import MaintenanceClassifier, reset_default_classifier


@pytest.fixture(autouse=True)
def _isolate_process_state():
    reset_default_classifier()
    yield
    reset_default_classifier()
    set_log_level("INFO")
    set_log_output(None)


@pytest.fixture
def reference_params() -> ParameterVector:
    """High-speed motorized design with hybrid ceramic bearings."""
    return ParameterVector(
        spindle_type=SpindleDriveType.MOTORIZED,
        power_rating=10.0,
        max_speed=20000,
        wheel_diameter=150.0,
        bearing_type=BearingType.HYBRID_CERAMIC,
        bearing_preload=500.0,
        cooling_type=CoolingType.LIQUID,
        lubrication_type=LubricationType.OIL_AIR,
        tool_interface=ToolInterface.HSK,
        alignment_tolerance=0.001,
    )


@pytest.fixture
def evaluator() -> SpindleEvaluator:
    return SpindleEvaluator(seed=42)


@pytest.fixture
def classifier() -> MaintenanceClassifier:
    return MaintenanceClassifier(seed=7)


@pytest.fixture
def rng() -> np.random.Generator:
    return np.random.default_rng(123)


class ScriptedRNG:
    """Stand-in generator returning a fixed sequence from random()."""

    def __init__(self, values):
        self._values = list(values)

    def random(self):
        return self._values.pop(0)


@pytest.fixture
def scripted_rng():
    return ScriptedRNG
