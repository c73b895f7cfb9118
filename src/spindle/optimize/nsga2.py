"""NSGA-II driver for spindle design search.

Interface:
    SpindleOptimizer(config, evaluator).run() -> OptimizationResult
    optimize(duration, load_factor, population_size, generations) -> list[ParetoSolution]

Flow per generation:
    1. Offspring: tournament x2 -> crossover -> mutate, until pop_size children
    2. Evaluate offspring (optionally on a thread pool)
    3. Merge parents + offspring (2N), re-rank
    4. Environmental selection back to N
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import Any

import numpy as np

from ..core.config import OptimizationConfig, make_optimization_config
from ..core.constants import OBJECTIVE_NAMES
from ..core.encoding import ParameterVector, random_parameters
from ..core.errors import InvariantViolation
from ..core.evaluator import SpindleEvaluator
from ..core.logging import get_logger
from ..core.types import Individual, ObjectiveSet
from .operators import crossover, mutate, tournament_select
from .sorting import objective_matrix, rank_population

logger = get_logger(__name__)


@dataclass(frozen=True)
class ParetoSolution:
    """Rank-1 design with its objective vector.

    Attributes:
        params: Design vector.
        objectives: [total_vibration, -bearing_life, temperature_rise].
        result: Full evaluation (spindle life, wear, power check); None for
            a design that only carries the sentinel objectives.
    """

    params: ParameterVector
    objectives: np.ndarray
    result: ObjectiveSet | None = None

    @property
    def vibration(self) -> float:
        return float(self.objectives[0])

    @property
    def bearing_life(self) -> float:
        return float(-self.objectives[1])

    @property
    def temperature_rise(self) -> float:
        return float(self.objectives[2])

    def to_dict(self) -> dict[str, Any]:
        return {
            "params": self.params.to_dict(),
            "vibration": self.vibration,
            "bearing_life": self.bearing_life,
            "temperature_rise": self.temperature_rise,
            "result": None if self.result is None else self.result.to_dict(),
        }


@dataclass(frozen=True)
class GenerationStats:
    """Snapshot of the population at a generation boundary."""

    generation: int
    pop_size: int
    n_fronts: int
    n_pareto: int
    f_min: tuple[float, ...]

    def to_dict(self) -> dict[str, Any]:
        return {
            "generation": self.generation,
            "pop_size": self.pop_size,
            "n_fronts": self.n_fronts,
            "n_pareto": self.n_pareto,
            "f_min": dict(zip(OBJECTIVE_NAMES, self.f_min)),
        }


@dataclass
class OptimizationResult:
    """Outcome of a full run."""

    pareto: list[ParetoSolution]
    population: list[Individual]
    history: list[GenerationStats] = field(default_factory=list)
    n_evals: int = 0

    @property
    def X(self) -> list[ParameterVector]:
        return [s.params for s in self.pareto]

    @property
    def F(self) -> np.ndarray:
        if not self.pareto:
            return np.zeros((0, len(OBJECTIVE_NAMES)), dtype=np.float64)
        return np.stack([s.objectives for s in self.pareto], axis=0)


def environmental_select(
    merged: Sequence[Individual], fronts: Sequence[Sequence[int]], pop_size: int
) -> list[Individual]:
    """Truncate a ranked merged population back to pop_size.

    Whole fronts are taken in rank order while they fit; the first front
    that does not fit is truncated by descending crowding distance (ties
    keep front order).

    Raises:
        InvariantViolation: empty merged population or empty selection.
    """
    if len(merged) == 0:
        raise InvariantViolation("Combined population is empty")

    selected: list[Individual] = []
    for front in fronts:
        if len(selected) + len(front) <= pop_size:
            selected.extend(merged[i] for i in front)
            continue
        remaining = pop_size - len(selected)
        by_crowding = sorted(front, key=lambda i: -merged[i].crowding_distance)
        selected.extend(merged[i] for i in by_crowding[:remaining])
        break

    if not selected:
        raise InvariantViolation("Population is empty after selection")
    return selected


def pareto_front(population: Sequence[Individual]) -> list[ParetoSolution]:
    """Rank-1 members in population order."""
    return [
        ParetoSolution(params=ind.params, objectives=ind.objectives.copy(), result=ind.result)
        for ind in population
        if ind.rank == 1
    ]


class SpindleOptimizer:
    """Generational NSGA-II over ParameterVector genomes.

    One generator drives every stochastic operator, in a fixed order:
    initialization, then per generation the tournaments, crossover and
    mutation for each child in turn. Fitness evaluation draws from child
    generators spawned off the evaluator's generator.
    """

    def __init__(
        self,
        config: OptimizationConfig | None = None,
        evaluator: SpindleEvaluator | None = None,
        on_generation: Callable[[GenerationStats], None] | None = None,
    ) -> None:
        if config is None:
            config = OptimizationConfig()
        # model_construct() skips validation
        self.config = make_optimization_config(**config.model_dump())
        self.rng = np.random.default_rng(self.config.seed)
        self.evaluator = evaluator if evaluator is not None else SpindleEvaluator(self.config.seed)
        self.on_generation = on_generation
        self.population: list[Individual] = []
        self.history: list[GenerationStats] = []

    def _evaluate(self, individuals: Sequence[Individual]) -> None:
        self.evaluator.evaluate_population(
            individuals,
            self.config.duration_s,
            self.config.load_factor,
            n_workers=self.config.n_workers,
        )

    def initialize(self) -> list[Individual]:
        """Random initial population, evaluated and ranked."""
        population = [
            Individual(params=random_parameters(self.rng)) for _ in range(self.config.pop_size)
        ]
        self._evaluate(population)
        rank_population(population)
        self.population = population
        return population

    def make_offspring(self, population: Sequence[Individual]) -> list[Individual]:
        """pop_size children via tournament, crossover and mutation (unevaluated)."""
        cfg = self.config
        offspring: list[Individual] = []
        while len(offspring) < cfg.pop_size:
            parent1 = tournament_select(population, self.rng)
            parent2 = tournament_select(population, self.rng)
            child = crossover(parent1.params, parent2.params, self.rng, alpha=cfg.crossover_alpha)
            child = mutate(child, self.rng, probability=cfg.mutation_prob, eta=cfg.eta_m)
            offspring.append(Individual(params=child))
        return offspring

    def step(self) -> list[Individual]:
        """Advance one generation and return the new population."""
        offspring = self.make_offspring(self.population)
        self._evaluate(offspring)

        merged = list(self.population) + offspring
        for ind in merged:
            ind.crowding_distance = 0.0
        fronts = rank_population(merged)

        self.population = environmental_select(merged, fronts, self.config.pop_size)
        if len(self.population) != self.config.pop_size:
            raise InvariantViolation(
                f"Population size {len(self.population)} != {self.config.pop_size} after selection"
            )
        return self.population

    def _record(self, generation: int) -> GenerationStats:
        F = objective_matrix(self.population)
        ranks = {ind.rank for ind in self.population}
        stats = GenerationStats(
            generation=generation,
            pop_size=len(self.population),
            n_fronts=len(ranks),
            n_pareto=sum(1 for ind in self.population if ind.rank == 1),
            f_min=tuple(float(v) for v in F.min(axis=0)),
        )
        self.history.append(stats)
        if logger.is_enabled("DEBUG"):
            logger.debug("generation complete", **stats.to_dict())
        if self.on_generation is not None:
            self.on_generation(stats)
        return stats

    def run(self) -> OptimizationResult:
        """Run the configured number of generations."""
        cfg = self.config
        logger.info(
            "starting NSGA-II",
            pop_size=cfg.pop_size,
            n_gen=cfg.n_gen,
            duration_s=cfg.duration_s,
            load_factor=cfg.load_factor,
            seed=cfg.seed,
            n_workers=cfg.n_workers,
        )
        self.history = []

        with logger.timer("nsga2_run"):
            self.initialize()
            for gen in range(1, cfg.n_gen + 1):
                self.step()
                self._record(gen)

        pareto = pareto_front(self.population)
        logger.info("NSGA-II complete", n_pareto=len(pareto), n_evals=self.evaluator.n_evals)
        return OptimizationResult(
            pareto=pareto,
            population=list(self.population),
            history=list(self.history),
            n_evals=self.evaluator.n_evals,
        )


def optimize(
    duration: float,
    load_factor: float,
    population_size: int,
    generations: int,
    *,
    seed: int | None = None,
    n_workers: int = 1,
) -> list[ParetoSolution]:
    """Pareto-optimal spindle designs for one operating condition.

    Raises:
        ConfigurationError: duration <= 0, load factor outside [0.5, 2.0],
            population_size < 10 or generations < 1. Raised before any
            population work.
        InvariantViolation: internal selection failure.
    """
    config = make_optimization_config(
        duration_s=duration,
        load_factor=load_factor,
        pop_size=population_size,
        n_gen=generations,
        seed=seed,
        n_workers=n_workers,
    )
    return SpindleOptimizer(config).run().pareto
