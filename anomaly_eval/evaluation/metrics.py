"""
Classification metrics for anomaly labels.

Zero-denominator convention:
- precision = 1.0 when nothing is predicted anomalous (TP + FP = 0)
- recall = 0.0 when the truth has no anomalies (TP + FN = 0)
- f1 = 0.0 when precision + recall = 0

A detector that predicts no anomalies is therefore well defined: precision 1,
recall 0, F1 0, which is also the seed point of a PR sweep.
"""

from typing import Sequence, Tuple

from sklearn.metrics import confusion_matrix

from anomaly_eval.data.labels import as_aligned_labels
from anomaly_eval.data.schema import ConfusionCounts


def confusion(truth: Sequence[int], prediction: Sequence[int]) -> ConfusionCounts:
    """
    Confusion counts for two aligned label sequences.
    
    Raises:
        EmptySeriesError: If either sequence is empty
        ShapeMismatchError: If lengths differ
        InvalidLabelError: If a value is outside {0, 1}
    """
    truth_arr, pred_arr = as_aligned_labels(truth, prediction)
    tn, fp, fn, tp = confusion_matrix(truth_arr, pred_arr, labels=[0, 1]).ravel()
    return ConfusionCounts(
        true_positive=int(tp),
        false_positive=int(fp),
        true_negative=int(tn),
        false_negative=int(fn),
    )


def precision_from_counts(counts: ConfusionCounts) -> float:
    predicted = counts.true_positive + counts.false_positive
    if predicted == 0:
        return 1.0
    return counts.true_positive / predicted


def recall_from_counts(counts: ConfusionCounts) -> float:
    actual = counts.true_positive + counts.false_negative
    if actual == 0:
        return 0.0
    return counts.true_positive / actual


def f1_from_counts(counts: ConfusionCounts) -> float:
    p = precision_from_counts(counts)
    r = recall_from_counts(counts)
    if p + r == 0:
        return 0.0
    return 2 * p * r / (p + r)


def precision(truth: Sequence[int], prediction: Sequence[int]) -> float:
    """TP / (TP + FP); 1.0 when nothing was predicted anomalous."""
    return precision_from_counts(confusion(truth, prediction))


def recall(truth: Sequence[int], prediction: Sequence[int]) -> float:
    """TP / (TP + FN); 0.0 when the truth has no anomalies."""
    return recall_from_counts(confusion(truth, prediction))


def f1(truth: Sequence[int], prediction: Sequence[int]) -> float:
    """Harmonic mean of precision and recall."""
    return f1_from_counts(confusion(truth, prediction))


def evaluate(
    truth: Sequence[int], prediction: Sequence[int]
) -> Tuple[ConfusionCounts, float, float, float]:
    """Counts, precision, recall and F1 from a single confusion computation."""
    counts = confusion(truth, prediction)
    return (
        counts,
        precision_from_counts(counts),
        recall_from_counts(counts),
        f1_from_counts(counts),
    )
