"""Pareto ranking: dominance, non-dominated sorting, crowding distance.

Fronts are lists of indices into a dense population/objective array.
"""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np

from ..core.constants import CROWDING_RANGE_EPS
from ..core.types import Individual


def dominates(a: np.ndarray, b: np.ndarray) -> bool:
    """True if a is no worse than b in every objective and strictly better in one.

    Minimization assumed.
    """
    a = np.asarray(a)
    b = np.asarray(b)
    return bool(np.all(a <= b) and np.any(a < b))


def non_dominated_sort(F: np.ndarray) -> list[list[int]]:
    """Fast non-dominated sort (front peeling).

    Args:
        F: Objective matrix (N x M), minimization.

    Returns:
        Fronts as index lists; fronts[0] is the non-dominated set.
    """
    F = np.asarray(F, dtype=np.float64)
    n = len(F)
    if n == 0:
        return []

    domination_count = np.zeros(n, dtype=int)
    dominated_by: list[list[int]] = [[] for _ in range(n)]

    for i in range(n):
        for j in range(i + 1, n):
            if dominates(F[i], F[j]):
                dominated_by[i].append(j)
                domination_count[j] += 1
            elif dominates(F[j], F[i]):
                dominated_by[j].append(i)
                domination_count[i] += 1

    fronts = [[i for i in range(n) if domination_count[i] == 0]]
    while True:
        next_front: list[int] = []
        for i in fronts[-1]:
            for j in dominated_by[i]:
                domination_count[j] -= 1
                if domination_count[j] == 0:
                    next_front.append(j)
        if not next_front:
            break
        fronts.append(next_front)

    return fronts


def crowding_distance(F: np.ndarray, front: Sequence[int]) -> np.ndarray:
    """Crowding distance of each member of a front.

    Boundary members per objective get inf; interior members accumulate the
    normalized gap between their neighbours. Objectives whose range within
    the front is below CROWDING_RANGE_EPS are skipped. Fronts of size <= 2
    are all inf.

    Args:
        F: Objective matrix (N x M).
        front: Indices of the front members.

    Returns:
        Distances aligned with `front`.
    """
    front = list(front)
    m = len(front)
    if m <= 2:
        return np.full(m, np.inf)

    Ff = np.asarray(F, dtype=np.float64)[front]
    distance = np.zeros(m, dtype=np.float64)

    for obj in range(Ff.shape[1]):
        order = np.argsort(Ff[:, obj], kind="stable")
        distance[order[0]] = np.inf
        distance[order[-1]] = np.inf

        values = Ff[order, obj]
        obj_range = values[-1] - values[0]
        if abs(obj_range) < CROWDING_RANGE_EPS:
            continue

        gaps = (values[2:] - values[:-2]) / obj_range
        distance[order[1:-1]] += gaps

    return distance


def objective_matrix(population: Sequence[Individual]) -> np.ndarray:
    """Stack individual objectives into an (N x M) array."""
    return np.stack([ind.objectives for ind in population], axis=0)


def rank_population(population: Sequence[Individual]) -> list[list[int]]:
    """Assign rank and crowding distance to every individual in place.

    Returns:
        Fronts as index lists into `population`.
    """
    if len(population) == 0:
        return []

    F = objective_matrix(population)
    fronts = non_dominated_sort(F)

    for rank, front in enumerate(fronts, start=1):
        distances = crowding_distance(F, front)
        for idx, dist in zip(front, distances):
            population[idx].rank = rank
            population[idx].crowding_distance = float(dist)

    return fronts
