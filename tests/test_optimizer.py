"""NSGA-II driver: configuration, environmental selection, full runs."""

import io
import json

import numpy as np
import pytest

from spindle.core.config import OptimizationConfig
from spindle.core.encoding import is_valid, random_parameters
from spindle.core.errors import ConfigurationError, InvariantViolation, ValidationError
from spindle.core.logging import set_log_level, set_log_output
from spindle.core.types import Individual
from spindle.optimize.nsga2 import (
    SpindleOptimizer,
    environmental_select,
    optimize,
    pareto_front,
)
from spindle.optimize.sorting import dominates, rank_population

FRONT_1 = [[0.0, 4.0, 0.0], [2.0, 2.0, 0.0], [4.0, 0.0, 0.0]]
FRONT_2 = [[1.0, 5.0, 0.0], [3.0, 3.0, 0.0], [5.0, 1.0, 0.0]]


@pytest.fixture
def merged():
    rng = np.random.default_rng(0)
    population = [
        Individual(params=random_parameters(rng), objectives=f) for f in FRONT_1 + FRONT_2
    ]
    fronts = rank_population(population)
    return population, fronts


def _small_config(**overrides):
    values = dict(pop_size=10, n_gen=3, duration_s=1.0, load_factor=1.0, seed=21)
    values.update(overrides)
    return OptimizationConfig(**values)


def test_selection_whole_fronts_exactly_fill(merged):
    population, fronts = merged
    selected = environmental_select(population, fronts, 3)
    assert selected == population[:3]


def test_selection_truncates_by_crowding(merged):
    """The partial front keeps its two boundary (infinite-crowding) members."""
    population, fronts = merged
    selected = environmental_select(population, fronts, 5)
    assert len(selected) == 5
    assert selected[:3] == population[:3]
    assert selected[3] is population[3]
    assert selected[4] is population[5]


def test_selection_everything_fits(merged):
    population, fronts = merged
    assert environmental_select(population, fronts, 6) == population


def test_selection_empty_merged_population():
    with pytest.raises(InvariantViolation, match="Combined population is empty"):
        environmental_select([], [], 10)


def test_selection_empty_result(merged):
    population, fronts = merged
    with pytest.raises(InvariantViolation, match="empty after selection"):
        environmental_select(population, fronts, 0)


@pytest.mark.parametrize(
    "kwargs, field",
    [
        (dict(duration=0.0), "duration_s"),
        (dict(duration=-1.0), "duration_s"),
        (dict(load_factor=0.49), "load_factor"),
        (dict(load_factor=2.01), "load_factor"),
        (dict(population_size=9), "pop_size"),
        (dict(generations=0), "n_gen"),
    ],
)
def test_invalid_configuration_fails_fast(kwargs, field):
    args = dict(duration=1.0, load_factor=1.0, population_size=10, generations=1)
    args.update(kwargs)
    with pytest.raises(ConfigurationError) as info:
        optimize(**args)
    assert info.value.field == field
    assert isinstance(info.value, ValidationError)


def test_boundary_configuration_accepted():
    for load_factor in (0.5, 2.0):
        pareto = optimize(0.5, load_factor, 10, 1, seed=1)
        assert pareto, "Rank-1 set is never empty"


def test_population_size_constant_every_generation():
    sizes = []
    optimizer = SpindleOptimizer(_small_config(), on_generation=lambda s: sizes.append(s.pop_size))
    result = optimizer.run()
    assert sizes == [10, 10, 10]
    assert len(result.population) == 10
    assert [s.generation for s in result.history] == [1, 2, 3]


def test_pareto_set_is_non_dominated():
    result = SpindleOptimizer(_small_config(n_gen=4)).run()
    F = result.F
    assert len(result.pareto) >= 1
    for i in range(len(F)):
        for j in range(len(F)):
            assert not dominates(F[i], F[j])
    for solution in result.pareto:
        assert is_valid(solution.params)
        assert solution.bearing_life > 0


def test_pareto_in_population_order():
    result = SpindleOptimizer(_small_config()).run()
    expected = [ind.params for ind in result.population if ind.rank == 1]
    assert [s.params for s in result.pareto] == expected


def test_seeded_run_reproducible():
    a = SpindleOptimizer(_small_config()).run()
    b = SpindleOptimizer(_small_config()).run()
    np.testing.assert_array_equal(a.F, b.F)
    assert a.X == b.X


def test_threaded_evaluation_matches_serial():
    serial = SpindleOptimizer(_small_config(n_workers=1)).run()
    threaded = SpindleOptimizer(_small_config(n_workers=3)).run()
    np.testing.assert_array_equal(serial.F, threaded.F)


def test_evaluation_count():
    result = SpindleOptimizer(_small_config()).run()
    assert result.n_evals == 10 * (1 + 3)


def test_optimize_returns_pareto_solutions():
    pareto = optimize(1.0, 1.0, 12, 2, seed=8)
    assert all(s.objectives.shape == (3,) for s in pareto)
    d = pareto[0].to_dict()
    assert set(d) == {"params", "vibration", "bearing_life", "temperature_rise", "result"}


def test_pareto_solutions_carry_full_evaluation():
    for solution in optimize(1.0, 1.0, 12, 2, seed=8):
        assert solution.result is not None
        np.testing.assert_array_equal(solution.result.F, solution.objectives)
        assert 0.0 <= solution.result.spindle_life <= 1.0
        assert isinstance(solution.result.power_sufficient, bool)
        assert solution.to_dict()["result"]["wheel_wear"] == solution.result.wheel_wear


def test_pareto_front_helper(merged):
    population, _ = merged
    solutions = pareto_front(population)
    assert [list(s.objectives) for s in solutions] == FRONT_1
    assert all(s.result is None for s in solutions)
    assert solutions[1].bearing_life == -2.0


def test_optimizer_rejects_unvalidated_config():
    bad = OptimizationConfig.model_construct(pop_size=3)
    with pytest.raises(ConfigurationError):
        SpindleOptimizer(bad)


@pytest.mark.parametrize(("level", "expected"), [("DEBUG", 3), ("INFO", 0)])
def test_generation_progress_logged_only_at_debug(level, expected):
    stream = io.StringIO()
    set_log_output(stream)
    set_log_level(level)
    SpindleOptimizer(_small_config()).run()
    records = [json.loads(line) for line in stream.getvalue().splitlines()]
    progress = [r for r in records if r["message"] == "generation complete"]
    assert len(progress) == expected
    if progress:
        assert progress[-1]["generation"] == 3
