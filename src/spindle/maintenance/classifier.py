"""Similarity-based maintenance classifier.

A k-nearest-neighbour vote over a historical dataset of operating
records. The dataset is owned by the classifier instance: it is
materialized lazily with synthetic records on first use and is
append-only afterwards (simulation runs add their own labelled records).
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import astuple, dataclass

import numpy as np

from ..core.logging import get_logger

logger = get_logger(__name__)

# Characteristic scale per feature, in MaintenanceFeatures field order
FEATURE_SCALES = np.array([2.0, 30.0, 1500.0, 50000.0, 1.0, 40.0], dtype=np.float64)

# Synthetic corpus sampling ranges: (low, span), value = low + u * span
SYNTHETIC_RANGES = (
    (0.2, 2.0),  # vibration (mm/s)
    (20.0, 30.0),  # temperature (°C)
    (500.0, 1500.0),  # load (N)
    (1000.0, 49000.0),  # bearing life (h)
    (0.0, 1.0),  # spindle life fraction
    (0.0, 40.0),  # wheel wear (mm)
)

# Label thresholds
VIBRATION_LIMIT = 1.0
BEARING_LIFE_LIMIT = 5000.0
SPINDLE_LIFE_LIMIT = 0.5
SYNTHETIC_WEAR_LIMIT = 40.0 * 0.5


@dataclass(frozen=True)
class MaintenanceFeatures:
    """Feature vector for one operating record."""

    vibration: float
    temperature: float
    load: float
    bearing_life: float
    spindle_life: float
    wheel_wear: float

    def to_array(self) -> np.ndarray:
        return np.array(astuple(self), dtype=np.float64)

    @classmethod
    def from_sequence(cls, values: Sequence[float]) -> MaintenanceFeatures:
        if len(values) != 6:
            raise ValueError(f"Expected 6 features, got {len(values)}")
        return cls(*(float(v) for v in values))


@dataclass(frozen=True)
class HistoricalRecord:
    """Labelled record (label 1 = maintenance needed)."""

    features: MaintenanceFeatures
    label: int


def label_for(features: MaintenanceFeatures, wear_limit: float = SYNTHETIC_WEAR_LIMIT) -> int:
    """Deterministic maintenance rule used to label records.

    Args:
        features: Record features.
        wear_limit: Wheel wear above which maintenance is needed (mm).
    """
    needed = (
        features.vibration > VIBRATION_LIMIT
        or features.bearing_life < BEARING_LIFE_LIMIT
        or features.spindle_life < SPINDLE_LIFE_LIMIT
        or features.wheel_wear > wear_limit
    )
    return 1 if needed else 0


class MaintenanceClassifier:
    """k-NN maintenance predictor owning its historical dataset."""

    def __init__(
        self,
        k: int = 3,
        n_synthetic: int = 100,
        seed: int | None = None,
        records: Iterable[HistoricalRecord] | None = None,
    ) -> None:
        if k < 1:
            raise ValueError(f"k must be >= 1, got {k}")
        if n_synthetic < 1:
            raise ValueError(f"n_synthetic must be >= 1, got {n_synthetic}")
        self.k = k
        self.n_synthetic = n_synthetic
        self.rng = np.random.default_rng(seed)
        self._records: list[HistoricalRecord] = list(records or [])

    def __len__(self) -> int:
        return len(self._records)

    @property
    def records(self) -> tuple[HistoricalRecord, ...]:
        return tuple(self._records)

    def init_once(self) -> None:
        """Materialize the synthetic corpus if the dataset is empty."""
        if self._records:
            return
        u = self.rng.random((self.n_synthetic, len(SYNTHETIC_RANGES)))
        for row in u:
            values = [low + ui * span for ui, (low, span) in zip(row, SYNTHETIC_RANGES)]
            features = MaintenanceFeatures.from_sequence(values)
            self._records.append(HistoricalRecord(features, label_for(features)))
        logger.debug("generated synthetic maintenance history", n_records=len(self._records))

    def reset(self) -> None:
        """Drop all records; the next prediction regenerates the corpus."""
        self._records.clear()

    def record(self, features: MaintenanceFeatures, label: int) -> HistoricalRecord:
        """Append a labelled record."""
        if label not in (0, 1):
            raise ValueError(f"label must be 0 or 1, got {label}")
        rec = HistoricalRecord(features, int(label))
        self._records.append(rec)
        return rec

    def distances(self, features: MaintenanceFeatures) -> np.ndarray:
        """Scale-normalized Euclidean distance to every record, in insertion order."""
        X = np.array([r.features.to_array() for r in self._records], dtype=np.float64)
        diff = (X - features.to_array()) / FEATURE_SCALES
        return np.sqrt(np.sum(diff**2, axis=1))

    def nearest(self, features: MaintenanceFeatures) -> np.ndarray:
        """Indices of the k nearest records (ties broken by insertion order)."""
        self.init_once()
        d = self.distances(features)
        return np.argsort(d, kind="stable")[: self.k]

    def predict(self, features: MaintenanceFeatures | Sequence[float]) -> int:
        """Return 1 if a strict majority of the k nearest records need maintenance."""
        if not isinstance(features, MaintenanceFeatures):
            features = MaintenanceFeatures.from_sequence(features)
        idx = self.nearest(features)
        yes = sum(self._records[i].label for i in idx)
        return 1 if yes > self.k // 2 else 0


_default_classifier: MaintenanceClassifier | None = None


def get_default_classifier() -> MaintenanceClassifier:
    """Process-scoped classifier, created on first use."""
    global _default_classifier
    if _default_classifier is None:
        _default_classifier = MaintenanceClassifier()
    return _default_classifier


def reset_default_classifier(classifier: MaintenanceClassifier | None = None) -> None:
    """Replace (or drop, when None) the process-scoped classifier."""
    global _default_classifier
    _default_classifier = classifier


def predict_maintenance(
    features: MaintenanceFeatures | Sequence[float],
    classifier: MaintenanceClassifier | None = None,
) -> int:
    """Predict maintenance need (0/1) for a feature tuple."""
    if classifier is None:
        classifier = get_default_classifier()
    return classifier.predict(features)
