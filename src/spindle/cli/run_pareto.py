"""Pareto optimization CLI runner.

Usage:
    spindle-pareto --pop 50 --gen 20 --duration 10 --load-factor 1.0
    spindle-pareto --config run.yaml --seed 123 --output ./results
    spindle-pareto --engine pymoo --pop 64 --gen 50

Outputs:
    pareto_X.npy  - Encoded designs of the Pareto front
    pareto_F.npy  - Objective values of the Pareto front
    summary.json  - Run metadata and statistics
"""

from __future__ import annotations

import argparse
import sys
import time
from pathlib import Path
from typing import Any

import numpy as np

from ..core.archive_io import save_archive
from ..core.config import OptimizationConfig, default_config, load_config, merge_config
from ..core.encoding import N_TOTAL, encode_parameters
from ..core.errors import ValidationError
from ..core.logging import get_logger, set_log_level

logger = get_logger(__name__)


def _run_native(cfg: OptimizationConfig) -> tuple[np.ndarray, np.ndarray, int]:
    from ..optimize.nsga2 import SpindleOptimizer

    result = SpindleOptimizer(cfg).run()
    X = np.array([encode_parameters(s.params) for s in result.pareto]).reshape(-1, N_TOTAL)
    return X, result.F, result.n_evals


def _run_pymoo(cfg: OptimizationConfig) -> tuple[np.ndarray, np.ndarray, int]:
    # Import here to avoid loading pymoo for the native engine
    from pymoo.algorithms.moo.nsga2 import NSGA2
    from pymoo.optimize import minimize
    from pymoo.termination import get_termination

    from ..adapters.pymoo_problem import create_problem

    problem = create_problem(
        duration=cfg.duration_s,
        load_factor=cfg.load_factor,
        seed=cfg.seed,
        n_workers=cfg.n_workers,
    )
    result = minimize(
        problem,
        NSGA2(pop_size=cfg.pop_size),
        get_termination("n_gen", cfg.n_gen),
        seed=cfg.seed,
        verbose=False,
    )
    if result.X is None:
        return np.zeros((0, problem.n_var)), np.zeros((0, problem.n_obj)), problem.n_evals
    return np.atleast_2d(result.X), np.atleast_2d(result.F), problem.n_evals


def main(argv: list[str] | None = None) -> int:
    """Run Pareto optimization.

    Args:
        argv: Command-line arguments (uses sys.argv if None).

    Returns:
        Exit code (0 = success, 2 = invalid parameters or configuration).
    """
    parser = argparse.ArgumentParser(description="Search spindle designs for a Pareto front")
    parser.add_argument("--config", type=str, default=None, help="YAML config file")
    parser.add_argument("--pop", type=int, default=None, help="Population size")
    parser.add_argument("--gen", type=int, default=None, help="Number of generations")
    parser.add_argument("--duration", type=float, default=None, help="Load trace duration (s)")
    parser.add_argument("--load-factor", type=float, default=None, help="Nominal load multiplier")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument("--workers", type=int, default=None, help="Evaluation threads")
    parser.add_argument(
        "--engine", choices=["native", "pymoo"], default="native", help="NSGA-II implementation"
    )
    parser.add_argument(
        "--output", "--outdir", type=str, default=".", dest="output", help="Output directory"
    )
    parser.add_argument("--verbose", action="store_true", help="Log per-generation progress")

    args = parser.parse_args(argv)

    overrides: dict[str, Any] = {}
    for key, value in (
        ("pop_size", args.pop),
        ("n_gen", args.gen),
        ("duration_s", args.duration),
        ("load_factor", args.load_factor),
        ("seed", args.seed),
        ("n_workers", args.workers),
    ):
        if value is not None:
            overrides[key] = value

    try:
        base = load_config(args.config) if args.config else default_config()
        config = merge_config(base, {"optimization": overrides})
    except ValidationError as exc:
        logger.error("invalid configuration", error=str(exc), field=exc.field)
        return 2

    set_log_level("DEBUG" if args.verbose else config.logging.level)
    cfg = config.optimization

    output_dir = Path(args.output)
    output_dir.mkdir(parents=True, exist_ok=True)

    t_start = time.perf_counter()
    if args.engine == "pymoo":
        X, F, n_evals = _run_pymoo(cfg)
    else:
        X, F, n_evals = _run_native(cfg)
    t_elapsed = time.perf_counter() - t_start

    n_pareto = len(X)
    summary = {
        "engine": args.engine,
        "n_evals": n_evals,
        "elapsed_s": t_elapsed,
        **cfg.model_dump(),
        "F_min": F.min(axis=0).tolist() if n_pareto else [],
        "F_max": F.max(axis=0).tolist() if n_pareto else [],
        "best_vibration": float(F[:, 0].min()) if n_pareto else None,
        "best_bearing_life": float(-F[:, 1].min()) if n_pareto else None,
        "best_temperature_rise": float(F[:, 2].min()) if n_pareto else None,
    }
    save_archive(output_dir, X, F, summary)

    logger.info(
        "pareto run complete",
        n_pareto=n_pareto,
        elapsed_s=round(t_elapsed, 3),
        output=str(output_dir),
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
