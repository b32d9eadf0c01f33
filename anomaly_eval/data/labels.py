"""
Validation helpers for Labels and Scores sequences.

Labels are {0, 1} sequences aligned index-for-index with a Series. Every
metric and detector output goes through these helpers so invalid input fails
early with a precise error kind.
"""

from typing import Sequence

import numpy as np

from anomaly_eval.core.exceptions import (
    EmptySeriesError,
    InvalidLabelError,
    ShapeMismatchError,
)


def as_labels(labels: Sequence[int], name: str = "labels") -> np.ndarray:
    """
    Validate a label sequence and return it as an int8 array.
    
    Args:
        labels: Sequence of 0/1 values (booleans accepted)
        name: Used in error messages
    
    Returns:
        Fresh int8 numpy array
    
    Raises:
        EmptySeriesError: If the sequence is empty
        ShapeMismatchError: If the sequence is not one-dimensional
        InvalidLabelError: If any value is outside {0, 1}
    """
    array = np.asarray(labels)
    if array.ndim != 1:
        raise ShapeMismatchError(f"{name} must be one-dimensional, got shape {array.shape}")
    if array.size == 0:
        raise EmptySeriesError(f"{name} is empty")

    if array.dtype == bool:
        return array.astype(np.int8)

    if not np.issubdtype(array.dtype, np.number):
        raise InvalidLabelError(f"{name} must be numeric 0/1, got dtype {array.dtype}")

    invalid = ~np.isin(array, (0, 1))
    if invalid.any():
        position = int(np.flatnonzero(invalid)[0])
        raise InvalidLabelError(
            f"{name}[{position}] = {array[position]!r} is not a valid label (expected 0 or 1)"
        )
    return array.astype(np.int8)


def as_aligned_labels(truth: Sequence[int], prediction: Sequence[int]) -> tuple:
    """Validate two label sequences and check they have equal length."""
    truth_arr = as_labels(truth, "truth")
    pred_arr = as_labels(prediction, "prediction")
    if truth_arr.size != pred_arr.size:
        raise ShapeMismatchError(
            f"truth has {truth_arr.size} labels but prediction has {pred_arr.size}"
        )
    return truth_arr, pred_arr


def scores_to_labels(scores: Sequence[float], threshold: float) -> np.ndarray:
    """Convert anomaly scores to labels via ``score > threshold``."""
    return (np.asarray(scores, dtype=np.float64) > threshold).astype(np.int8)
