"""Command-line entry points (`spindle-pareto`, `spindle-single`).

Submodules are imported lazily so `python -m spindle.cli.run_pareto` does not
trigger a `runpy` double-import warning.
"""

from __future__ import annotations


def run_pareto_main(argv: list[str] | None = None) -> int:
    from .run_pareto import main

    return main(argv)


def run_single_main(argv: list[str] | None = None) -> int:
    from .run_single import main

    return main(argv)


__all__ = ["run_pareto_main", "run_single_main"]
