"""
Data module: the Series input container, label validation, and result models.
"""

from anomaly_eval.data.labels import as_aligned_labels, as_labels, scores_to_labels
from anomaly_eval.data.schema import (
    ComparisonReport,
    ConfusionCounts,
    DetectorReport,
    GridResult,
    GridRow,
    PRCurve,
    PRPoint,
    Series,
)

__all__ = [
    # Input
    "Series",
    
    # Labels
    "as_labels",
    "as_aligned_labels",
    "scores_to_labels",
    
    # Results
    "ConfusionCounts",
    "PRPoint",
    "PRCurve",
    "GridRow",
    "GridResult",
    "DetectorReport",
    "ComparisonReport",
]
