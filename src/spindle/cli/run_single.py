"""Single design evaluation CLI.

Usage:
    spindle-single
    spindle-single --random --seed 7
    spindle-single --params '{"spindle_type": "Motorized", ...}' --time-based 30

Outputs JSON with per-scenario results, maintenance predictions and
recommendations to stdout.
"""

from __future__ import annotations

import argparse
import json
import sys

import numpy as np


def main(argv: list[str] | None = None) -> int:
    """Run single design evaluation.

    Args:
        argv: Command-line arguments (uses sys.argv if None).

    Returns:
        Exit code (0 = success, 2 = invalid parameters).
    """
    parser = argparse.ArgumentParser(description="Evaluate a single spindle design")
    parser.add_argument("--params", type=str, default=None, help="Design as a JSON object")
    parser.add_argument("--random", action="store_true", help="Use a random design")
    parser.add_argument("--seed", type=int, default=42, help="Random seed")
    parser.add_argument("--config", type=str, default=None, help="YAML config file")
    parser.add_argument(
        "--time-based",
        type=float,
        default=None,
        metavar="SECONDS",
        help="Also run a time-stepped simulation of this duration",
    )

    args = parser.parse_args(argv)

    from ..core.config import default_config, load_config
    from ..core.encoding import ParameterVector, mid_bounds_parameters, random_parameters
    from ..core.errors import ValidationError
    from ..core.evaluator import SpindleEvaluator
    from ..core.logging import get_logger, set_log_level
    from ..core.simulation import recommendations, simulate, simulate_time_based
    from ..maintenance.classifier import MaintenanceClassifier

    logger = get_logger(__name__)

    if args.params is not None:
        try:
            data = json.loads(args.params)
        except json.JSONDecodeError as exc:
            parser.error(f"--params is not valid JSON: {exc}")
        if not isinstance(data, dict):
            parser.error("--params must be a JSON object")
    else:
        data = None

    try:
        config = load_config(args.config) if args.config else default_config()
        set_log_level(config.logging.level)
        evaluator = SpindleEvaluator(args.seed)
        classifier = MaintenanceClassifier(
            k=config.maintenance.k,
            n_synthetic=config.maintenance.n_synthetic,
            seed=args.seed if config.maintenance.seed is None else config.maintenance.seed,
        )

        if data is not None:
            params = ParameterVector.from_dict(data)
        elif args.random:
            params = random_parameters(np.random.default_rng(args.seed))
        else:
            params = mid_bounds_parameters()

        reports = simulate(params, evaluator=evaluator, classifier=classifier)
        time_based = (
            simulate_time_based(params, args.time_based, evaluator=evaluator, classifier=classifier)
            if args.time_based is not None
            else None
        )
    except ValidationError as exc:
        logger.error("invalid parameters", error=str(exc), field=exc.field)
        return 2

    scenarios = []
    for report in reports:
        entry = report.to_dict()
        entry.pop("load_profile")
        scenarios.append(entry)

    output = {
        "params": params.to_dict(),
        "scenarios": scenarios,
        "recommendations": recommendations(reports),
    }
    if time_based is not None:
        output["time_based"] = time_based.to_dict()

    print(json.dumps(output, indent=2))

    return 0


if __name__ == "__main__":
    sys.exit(main())
