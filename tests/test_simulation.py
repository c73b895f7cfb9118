"""Reporting-path producers: scenario and time-based simulation."""

from dataclasses import replace

import numpy as np
import pytest

from spindle.core.encoding import CoolingType
from spindle.core.errors import ConfigurationError, ValidationError
from spindle.core.simulation import recommendations, simulate, simulate_time_based
from spindle.core.types import Scenario
from spindle.maintenance.classifier import get_default_classifier


def test_default_scenarios(reference_params, evaluator, classifier):
    reports = simulate(reference_params, evaluator=evaluator, classifier=classifier)
    assert [r.scenario for r in reports] == ["High-Speed", "High-Torque", "Balanced"]
    assert [r.max_speed for r in reports] == [20000, 12000, 16000]

    high_speed = reports[0]
    assert high_speed.temperature_rise == pytest.approx(30.0)
    assert high_speed.thermal_expansion == pytest.approx(7.2e-5)
    assert high_speed.vibration == pytest.approx(0.72)
    assert high_speed.power_sufficient
    assert len(high_speed.load_profile) == 100
    assert high_speed.remaining_diameter == pytest.approx(150.0 - high_speed.wheel_wear)


def test_simulation_appends_history(reference_params, evaluator, classifier):
    simulate(reference_params, evaluator=evaluator, classifier=classifier)
    assert len(classifier) == 100 + 3
    newest = classifier.records[-1]
    assert newest.features.temperature == pytest.approx(20.0 + 8.0 + 2.0 + 18.0)


def test_simulation_uses_default_classifier(reference_params, evaluator):
    simulate(reference_params, scenarios=[Scenario("only")], evaluator=evaluator)
    assert len(get_default_classifier()) == 101


def test_invalid_params_touch_nothing(reference_params, evaluator, classifier):
    bad = replace(reference_params, bearing_preload=5000.0)
    with pytest.raises(ValidationError, match="bearing_preload"):
        simulate(bad, evaluator=evaluator, classifier=classifier)
    assert len(classifier) == 0


def test_recommendations(reference_params, evaluator, classifier):
    reports = simulate(reference_params, evaluator=evaluator, classifier=classifier)
    assert recommendations(reports) == []

    hot = replace(reference_params, cooling_type=CoolingType.AIR)
    advice = recommendations(simulate(hot, evaluator=evaluator, classifier=classifier))
    assert any("Liquid cooling" in a for a in advice)


def test_report_dict(reference_params, evaluator, classifier):
    report = simulate(reference_params, evaluator=evaluator, classifier=classifier)[0]
    data = report.to_dict()
    assert data["scenario"] == "High-Speed"
    assert data["total_vibration"] == pytest.approx(report.vibration + report.wear_vibration)
    assert isinstance(data["load_profile"], list)


def test_time_based(reference_params, evaluator, classifier):
    report = simulate_time_based(reference_params, 10.0, evaluator=evaluator, classifier=classifier)
    assert len(report.time) == 100
    assert np.all(np.diff(report.temperature) > 0), "Temperature accumulates every step"
    assert report.temperature[0] > 20.0
    assert report.max_temperature == report.temperature[-1]
    assert report.max_vibration >= report.avg_vibration > 0.72
    assert len(classifier) == 101
    assert classifier.records[-1].features.temperature == pytest.approx(report.max_temperature)


def test_time_based_rejects_short_duration(reference_params, evaluator, classifier):
    with pytest.raises(ConfigurationError):
        simulate_time_based(reference_params, 0.05, evaluator=evaluator, classifier=classifier)
    assert len(classifier) == 0


def test_time_based_dict(reference_params, evaluator, classifier):
    data = simulate_time_based(
        reference_params, 2.0, evaluator=evaluator, classifier=classifier
    ).to_dict()
    assert data["duration"] == 2.0
    assert "max_temperature" in data
