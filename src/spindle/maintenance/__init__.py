"""Maintenance module: k-NN maintenance prediction."""

from .classifier import (
    HistoricalRecord,
    MaintenanceClassifier,
    MaintenanceFeatures,
    get_default_classifier,
    label_for,
    predict_maintenance,
    reset_default_classifier,
)

__all__ = [
    "HistoricalRecord",
    "MaintenanceClassifier",
    "MaintenanceFeatures",
    "get_default_classifier",
    "label_for",
    "predict_maintenance",
    "reset_default_classifier",
]
