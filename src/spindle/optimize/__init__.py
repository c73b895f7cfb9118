"""Optimize module: NSGA-II ranking, operators and driver."""

from .nsga2 import (
    GenerationStats,
    OptimizationResult,
    ParetoSolution,
    SpindleOptimizer,
    environmental_select,
    optimize,
)
from .operators import crossover, mutate, polynomial_mutation, tournament_select
from .sorting import crowding_distance, dominates, non_dominated_sort, rank_population

__all__ = [
    "GenerationStats",
    "OptimizationResult",
    "ParetoSolution",
    "SpindleOptimizer",
    "crossover",
    "crowding_distance",
    "dominates",
    "environmental_select",
    "mutate",
    "non_dominated_sort",
    "optimize",
    "polynomial_mutation",
    "rank_population",
    "tournament_select",
]
