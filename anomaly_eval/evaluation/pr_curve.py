"""
Precision-recall curves.

Two ways to trace a curve:

- ``pr_curve_sweep``: for detectors steered by one scalar threshold but
  without a probability output. The detector is re-run at
  ``dt, 2*dt, 3*dt, ...`` until recall reaches 1.0, starting from the seed
  point (precision=1, recall=0). The sweep is bounded by ``max_iterations``.
- ``score_pr_curve``: for scoring detectors, computed directly from the
  scores.
"""

import logging
from typing import Callable, Optional, Sequence, Union

import numpy as np
from sklearn.metrics import precision_recall_curve

from anomaly_eval.anomaly.base import Detector
from anomaly_eval.core.config import config
from anomaly_eval.core.exceptions import (
    InvalidParameterError,
    NonConvergentError,
    ShapeMismatchError,
)
from anomaly_eval.data.labels import as_labels
from anomaly_eval.data.schema import PRCurve, PRPoint, Series

from ._common import family_name, truth_for
from .metrics import evaluate

logger = logging.getLogger(__name__)

ThresholdFamily = Union[Detector, Callable[[float], Detector]]


def _at_threshold(detector: ThresholdFamily, threshold: float) -> Detector:
    if isinstance(detector, Detector):
        return detector.with_threshold(threshold)
    return detector(threshold)


def pr_curve_sweep(
    detector: ThresholdFamily,
    series: Series,
    truth: Sequence[int],
    dt: Optional[float] = None,
    max_iterations: Optional[int] = None,
) -> PRCurve:
    """
    Trace a PR curve by re-running ``detector`` at increasing thresholds.
    
    Args:
        detector: Detector with a ``sweep_parameter``, or a callable mapping a
            threshold to a detector
        series: Input series
        truth: Ground-truth labels aligned with ``series``
        dt: Threshold increment (defaults to config.evaluation.sweep_step)
        max_iterations: Maximum number of thresholds evaluated (defaults to
            config.evaluation.max_sweep_iterations)
    
    Returns:
        PRCurve from (1, 0) to the first point with recall 1.0
    
    Raises:
        InvalidParameterError: If dt <= 0 or max_iterations < 1
        NonConvergentError: If the truth has no anomalies, the detector's
            threshold range is exhausted, or recall stays below 1.0 for
            max_iterations steps
    """
    dt = config.evaluation.sweep_step if dt is None else dt
    max_iterations = config.evaluation.max_sweep_iterations if max_iterations is None else max_iterations

    if not dt > 0:
        raise InvalidParameterError(f"dt must be positive, got {dt}")
    if max_iterations < 1:
        raise InvalidParameterError(f"max_iterations must be >= 1, got {max_iterations}")
    if isinstance(detector, Detector) and detector.sweep_parameter is None:
        raise InvalidParameterError(f"{detector.name} has no sweepable threshold")

    truth_arr = truth_for(series, truth)
    name = family_name(detector)
    if truth_arr.sum() == 0:
        raise NonConvergentError(
            f"{name}: ground truth has no anomalies, recall is undefined at every threshold"
        )

    points = [PRPoint(precision=1.0, recall=0.0, threshold=0.0)]

    for step in range(1, max_iterations + 1):
        # Multiply instead of accumulating to keep thresholds exact
        threshold = round(step * dt, 12)
        try:
            current = _at_threshold(detector, threshold)
        except InvalidParameterError as exc:
            raise NonConvergentError(
                f"{name}: threshold {threshold} is outside the detector's range "
                f"before recall reached 1.0 ({exc})"
            ) from exc

        _, p, r, _ = evaluate(truth_arr, current.detect(series))
        points.append(PRPoint(precision=p, recall=r, threshold=threshold))

        if r >= 1.0:
            logger.info("%s sweep reached full recall at threshold %s after %d steps", name, threshold, step)
            return PRCurve(points=points)

    logger.warning("%s sweep did not reach full recall within %d steps", name, max_iterations)
    raise NonConvergentError(
        f"{name}: recall {points[-1].recall:.4f} < 1.0 after {max_iterations} steps of {dt}"
    )


def score_pr_curve(scores: Sequence[float], truth: Sequence[int]) -> PRCurve:
    """
    PR curve from continuous scores, ordered by ascending recall.
    
    Raises:
        ShapeMismatchError: If scores and truth differ in length
        NonConvergentError: If the truth has no anomalies
    """
    truth_arr = as_labels(truth, "truth")
    scores_arr = np.asarray(scores, dtype=np.float64).ravel()
    if scores_arr.size != truth_arr.size:
        raise ShapeMismatchError(
            f"truth has {truth_arr.size} labels but scores has {scores_arr.size} values"
        )
    if truth_arr.sum() == 0:
        raise NonConvergentError("ground truth has no anomalies, recall is undefined")

    precision, recall, thresholds = precision_recall_curve(truth_arr, scores_arr)

    # sklearn orders by decreasing recall and ends with (1, 0) without a threshold
    points = [PRPoint(precision=float(precision[-1]), recall=float(recall[-1]))]
    for i in range(len(thresholds) - 1, -1, -1):
        points.append(
            PRPoint(precision=float(precision[i]), recall=float(recall[i]), threshold=float(thresholds[i]))
        )
    return PRCurve(points=points)
