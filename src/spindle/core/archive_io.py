"""Pareto archive IO with encoding-version guards."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import numpy as np

from .constants import MODEL_VERSION_PHYSICS_V1, N_OBJ, OBJECTIVE_NAMES
from .encoding import ENCODING_VERSION, N_TOTAL, ParameterVector, decode_parameters

META_FILENAME = "summary.json"


def save_archive(
    outdir: Path,
    X: np.ndarray,
    F: np.ndarray,
    summary: dict[str, Any],
) -> None:
    """Save encoded designs, objectives and run metadata.

    Args:
        outdir: Output directory (created if missing).
        X: Encoded designs, shape (n, N_TOTAL).
        F: Objectives, shape (n, N_OBJ).
        summary: Run metadata; version fields are added here.
    """
    outdir = Path(outdir)
    outdir.mkdir(parents=True, exist_ok=True)
    X = np.asarray(X, dtype=np.float64).reshape(-1, N_TOTAL)
    F = np.asarray(F, dtype=np.float64).reshape(-1, N_OBJ)
    if len(X) != len(F):
        raise ValueError(f"X/F row mismatch: {len(X)} vs {len(F)}")

    np.save(outdir / "pareto_X.npy", X)
    np.save(outdir / "pareto_F.npy", F)

    summary = {
        **summary,
        "n_pareto": int(len(X)),
        "encoding_version": ENCODING_VERSION,
        "model_versions": {"physics_v1": MODEL_VERSION_PHYSICS_V1},
        "objective_names": list(OBJECTIVE_NAMES),
        "n_var": N_TOTAL,
        "n_obj": N_OBJ,
    }
    with open(outdir / META_FILENAME, "w") as f:
        json.dump(summary, f, indent=2, default=str)


def load_archive(outdir: Path) -> tuple[np.ndarray, np.ndarray, dict]:
    """Load archive with version validation. Raises on incompatible encoding."""
    outdir = Path(outdir)
    summary_path = outdir / META_FILENAME
    if not summary_path.exists():
        raise FileNotFoundError(f"Missing {META_FILENAME} in {outdir}")

    with open(summary_path) as f:
        summary = json.load(f)

    enc = summary.get("encoding_version")
    if enc != ENCODING_VERSION:
        raise ValueError(f"Encoding version mismatch: archive {enc}, expected {ENCODING_VERSION}")

    X = np.load(outdir / "pareto_X.npy", allow_pickle=False)
    F = np.load(outdir / "pareto_F.npy", allow_pickle=False)

    if X.shape[1] != summary.get("n_var", N_TOTAL):
        raise ValueError(f"n_var mismatch: {X.shape[1]} vs {summary.get('n_var')}")
    if len(X) != len(F):
        raise ValueError(f"X/F row mismatch: {len(X)} vs {len(F)}")

    return X, F, summary


def load_designs(outdir: Path) -> list[tuple[ParameterVector, np.ndarray]]:
    """Decoded (design, objectives) pairs from an archive, in stored order."""
    X, F, _ = load_archive(outdir)
    return [(decode_parameters(x), f) for x, f in zip(X, F)]
