"""PyMoo adapter for multi-objective optimization.

Wraps the flat spindle encoding and the evaluator's sentinel-safe scoring
for use with pymoo algorithms.
"""

from __future__ import annotations

import numpy as np
from pymoo.core.problem import Problem

from ..core.constants import N_OBJ
from ..core.encoding import N_TOTAL, bounds, decode_parameters
from ..core.evaluator import SpindleEvaluator
from ..core.types import Individual


class SpindleProblem(Problem):
    """PyMoo Problem over encoded ParameterVectors.

    Rows of X are decoded (categoricals floored and clipped) and scored
    with the evaluator, one spawned generator per row.
    """

    def __init__(
        self,
        duration: float = 10.0,
        load_factor: float = 1.0,
        evaluator: SpindleEvaluator | None = None,
        n_workers: int = 1,
        **kwargs,
    ) -> None:
        """Initialize spindle problem.

        Args:
            duration: Load trace duration (s).
            load_factor: Multiplier on the nominal load.
            evaluator: Evaluator to score with (a fresh unseeded one if None).
            n_workers: Thread-pool size for population evaluation.
            **kwargs: Additional arguments passed to pymoo Problem.
        """
        xl, xu = bounds()

        super().__init__(
            n_var=N_TOTAL,
            n_obj=N_OBJ,
            xl=xl,
            xu=xu,
            **kwargs,
        )

        self.duration = duration
        self.load_factor = load_factor
        self.evaluator = evaluator if evaluator is not None else SpindleEvaluator()
        self.n_workers = n_workers

    def _evaluate(
        self,
        X: np.ndarray,
        out: dict,
        *args,
        **kwargs,
    ) -> None:
        """Evaluate population.

        Args:
            X: Decision matrix of shape (pop_size, n_var).
            out: Output dict for F.
        """
        X = np.clip(np.atleast_2d(X), self.xl, self.xu)
        individuals = [Individual(params=decode_parameters(x)) for x in X]
        self.evaluator.evaluate_population(
            individuals, self.duration, self.load_factor, n_workers=self.n_workers
        )
        out["F"] = np.stack([ind.objectives for ind in individuals], axis=0)

    @property
    def n_evals(self) -> int:
        """Total number of evaluations performed."""
        return self.evaluator.n_evals


def create_problem(
    duration: float = 10.0,
    load_factor: float = 1.0,
    seed: int | None = None,
    n_workers: int = 1,
) -> SpindleProblem:
    """Create a SpindleProblem with a seeded evaluator."""
    return SpindleProblem(
        duration=duration,
        load_factor=load_factor,
        evaluator=SpindleEvaluator(seed),
        n_workers=n_workers,
    )
