"""
Anomaly evaluation harness.

Runs univariate anomaly detectors against ground-truth labels and scores
them with precision, recall, F1, grid search and precision-recall curves.
"""

from anomaly_eval.anomaly import (
    Detector,
    IsolationForestScore,
    LabelingDetector,
    OneClassSVMEmbedding,
    ScoringDetector,
    SeasonalHybridESD,
    StatisticalIQR,
)
from anomaly_eval.core import config, setup_logging
from anomaly_eval.data import Series
from anomaly_eval.evaluation import (
    compare_detectors,
    confusion,
    f1,
    grid_search,
    pr_curve_sweep,
    precision,
    recall,
    score_pr_curve,
)

__version__ = "0.1.0"

if config.configure_logging:
    setup_logging()

__all__ = [
    "setup_logging",
    "Series",
    "Detector",
    "LabelingDetector",
    "ScoringDetector",
    "StatisticalIQR",
    "OneClassSVMEmbedding",
    "SeasonalHybridESD",
    "IsolationForestScore",
    "confusion",
    "precision",
    "recall",
    "f1",
    "grid_search",
    "pr_curve_sweep",
    "score_pr_curve",
    "compare_detectors",
]
