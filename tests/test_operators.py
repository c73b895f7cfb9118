"""Tournament selection, BLX-α crossover and mutation."""

from dataclasses import replace

import numpy as np
import pytest

from spindle.core.encoding import (
    CATEGORICAL_OPTIONS,
    CONTINUOUS_BOUNDS,
    is_valid,
    random_parameters,
)
from spindle.core.errors import InvariantViolation
from spindle.core.types import Individual
from spindle.optimize.operators import (
    crossover,
    mutate,
    polynomial_mutation,
    tournament_select,
)


def _individual(params, rank, crowding):
    return Individual(params=params, rank=rank, crowding_distance=crowding)


@pytest.fixture
def pair(reference_params):
    a = _individual(reference_params, rank=1, crowding=0.5)
    b = _individual(replace(reference_params, power_rating=20.0), rank=2, crowding=5.0)
    return a, b


def test_tournament_lower_rank_wins(pair, scripted_rng):
    a, b = pair
    assert tournament_select([a, b], scripted_rng([0.0, 0.6])) is a
    assert tournament_select([a, b], scripted_rng([0.6, 0.0])) is a


def test_tournament_crowding_breaks_rank_ties(pair, scripted_rng):
    a, b = pair
    b.rank = 1
    assert tournament_select([a, b], scripted_rng([0.0, 0.6])) is b


def test_tournament_full_tie_takes_second_draw(pair, scripted_rng):
    a, b = pair
    b.rank, b.crowding_distance = a.rank, a.crowding_distance
    assert tournament_select([a, b], scripted_rng([0.0, 0.6])) is b
    assert tournament_select([a, b], scripted_rng([0.6, 0.0])) is a


def test_tournament_out_of_range_index(pair, scripted_rng):
    with pytest.raises(InvariantViolation, match="Invalid tournament indices"):
        tournament_select(list(pair), scripted_rng([1.0, 0.0]))


def test_tournament_empty_population(rng):
    with pytest.raises(InvariantViolation):
        tournament_select([], rng)


def test_self_crossover_reproduces_parent():
    """d = 0 collapses the blend interval, so the child equals the parent."""
    rng = np.random.default_rng(0)
    for _ in range(50):
        parent = random_parameters(rng)
        assert crossover(parent, parent, rng) == parent


def test_crossover_child_within_domains(rng):
    for _ in range(200):
        p1 = random_parameters(rng)
        p2 = random_parameters(rng)
        child = crossover(p1, p2, rng)
        assert is_valid(child), f"Child out of domain: {child}"
        assert isinstance(child.max_speed, int)
        for name in CATEGORICAL_OPTIONS:
            assert getattr(child, name) in (getattr(p1, name), getattr(p2, name))


def test_crossover_blend_interval(reference_params, rng):
    """Continuous genes land in [min - αd, max + αd]."""
    p2 = replace(reference_params, bearing_preload=700.0)
    for _ in range(100):
        child = crossover(reference_params, p2, rng, alpha=0.5)
        assert 400.0 <= child.bearing_preload <= 800.0


def test_polynomial_mutation_stays_in_bounds(rng):
    for value in (0.0, 0.5, 1.0):
        for _ in range(200):
            out = polynomial_mutation(value, 0.0, 1.0, rng, eta=20.0)
            assert 0.0 <= out <= 1.0


def test_polynomial_mutation_small_steps(rng):
    """η = 20 concentrates perturbations near the parent."""
    steps = [abs(polynomial_mutation(0.5, 0.0, 1.0, rng) - 0.5) for _ in range(500)]
    assert np.median(steps) < 0.05


def test_polynomial_mutation_degenerate_domain(rng):
    assert polynomial_mutation(3.0, 3.0, 3.0, rng) == 3.0


def test_mutation_probability_zero_is_identity(reference_params, rng):
    assert mutate(reference_params, rng, probability=0.0) is reference_params


def test_mutation_probability_one_changes_continuous(reference_params, rng):
    for _ in range(50):
        child = mutate(reference_params, rng, probability=1.0)
        assert is_valid(child)
        for name in CATEGORICAL_OPTIONS:
            assert getattr(child, name) in list(CATEGORICAL_OPTIONS[name])
    changed = [
        name
        for name in CONTINUOUS_BOUNDS
        if getattr(mutate(reference_params, rng, probability=1.0), name)
        != getattr(reference_params, name)
    ]
    assert changed, "Continuous fields are perturbed when probability is 1"


def test_mutation_reproducible(reference_params):
    a = mutate(reference_params, np.random.default_rng(4), probability=0.5)
    b = mutate(reference_params, np.random.default_rng(4), probability=0.5)
    assert a == b
