"""Genetic operators over mixed continuous/categorical spindle genomes.

Every operator draws from an explicitly passed generator; draw order is
fixed (continuous fields in CONTINUOUS_BOUNDS order, then categorical
fields in CATEGORICAL_OPTIONS order) so a seeded run is reproducible.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import replace
from typing import Any

import numpy as np

from ..core.encoding import (
    CATEGORICAL_OPTIONS,
    CONTINUOUS_BOUNDS,
    INTEGER_FIELDS,
    ParameterVector,
    clamp_field,
)
from ..core.errors import InvariantViolation
from ..core.types import Individual


def _store(name: str, value: float) -> float | int:
    return int(value) if name in INTEGER_FIELDS else float(value)


def better(a: Individual, b: Individual) -> bool:
    """Crowded-comparison: lower rank wins, ties go to higher crowding distance."""
    return a.rank < b.rank or (a.rank == b.rank and a.crowding_distance > b.crowding_distance)


def tournament_select(population: Sequence[Individual], rng: np.random.Generator) -> Individual:
    """Binary tournament between two uniformly drawn members.

    Raises:
        InvariantViolation: empty population or an out-of-range draw.
    """
    n = len(population)
    if n == 0:
        raise InvariantViolation("Tournament selection on an empty population")

    idx1 = int(rng.random() * n)
    idx2 = int(rng.random() * n)
    if not (0 <= idx1 < n and 0 <= idx2 < n):
        raise InvariantViolation(f"Invalid tournament indices idx1={idx1}, idx2={idx2} (n={n})")

    a, b = population[idx1], population[idx2]
    return a if better(a, b) else b


def blend(p1: float, p2: float, name: str, rng: np.random.Generator, alpha: float = 0.5) -> float:
    """BLX-α draw for one continuous field, clamped to its domain."""
    d = abs(p1 - p2)
    lower = min(p1, p2) - alpha * d
    upper = max(p1, p2) + alpha * d
    return clamp_field(name, lower + rng.random() * (upper - lower))


def crossover(
    parent1: ParameterVector,
    parent2: ParameterVector,
    rng: np.random.Generator,
    alpha: float = 0.5,
) -> ParameterVector:
    """BLX-α on continuous fields, fair coin per categorical field.

    Identical parents reproduce themselves exactly (the blend interval
    collapses to a point).
    """
    kwargs: dict[str, Any] = {}
    for name in CONTINUOUS_BOUNDS:
        value = blend(getattr(parent1, name), getattr(parent2, name), name, rng, alpha)
        kwargs[name] = _store(name, value)

    for name in CATEGORICAL_OPTIONS:
        source = parent1 if rng.random() < 0.5 else parent2
        kwargs[name] = getattr(source, name)

    return ParameterVector(**kwargs)


def polynomial_mutation(
    value: float,
    low: float,
    high: float,
    rng: np.random.Generator,
    eta: float = 20.0,
) -> float:
    """Polynomial perturbation of one value (no probability gate).

    δq = (2r)^(1/(η+1)) - 1 for r <= 0.5, else 1 - (2(1-r))^(1/(η+1)).
    The step is scaled by the distance from value to the bound it moves
    toward, then clamped to [low, high].
    """
    span = high - low
    if span <= 0:
        return value
    delta1 = (value - low) / span
    delta2 = (high - value) / span
    r = rng.random()
    if r <= 0.5:
        deltaq = (2.0 * r) ** (1.0 / (eta + 1.0)) - 1.0
    else:
        deltaq = 1.0 - (2.0 * (1.0 - r)) ** (1.0 / (eta + 1.0))
    delta = (delta1 if deltaq < 0 else delta2) * deltaq
    return min(max(value + delta * span, low), high)


def mutate(
    params: ParameterVector,
    rng: np.random.Generator,
    probability: float = 0.1,
    eta: float = 20.0,
) -> ParameterVector:
    """Per-field mutation with independent probability.

    Continuous fields use polynomial mutation; categorical fields are
    re-drawn uniformly from their options (may reselect the same value).
    """
    changes: dict[str, Any] = {}
    for name, (low, high) in CONTINUOUS_BOUNDS.items():
        if rng.random() >= probability:
            continue
        value = polynomial_mutation(float(getattr(params, name)), low, high, rng, eta)
        changes[name] = _store(name, value)

    for name, enum_cls in CATEGORICAL_OPTIONS.items():
        if rng.random() >= probability:
            continue
        options = list(enum_cls)
        changes[name] = options[int(rng.random() * len(options))]

    return replace(params, **changes) if changes else params
