"""Run several detectors on one series and compare them side by side."""

import logging
from typing import Iterable, Sequence

from anomaly_eval.anomaly.base import Detector
from anomaly_eval.core.exceptions import InvalidParameterError
from anomaly_eval.data.schema import ComparisonReport, DetectorReport, Series

from ._common import truth_for
from .metrics import evaluate

logger = logging.getLogger(__name__)


def evaluate_detector(detector: Detector, series: Series, truth: Sequence[int]) -> DetectorReport:
    """Run ``detector`` once and score it against ``truth``."""
    truth_arr = truth_for(series, truth)
    prediction = detector.detect(series)
    counts, p, r, score = evaluate(truth_arr, prediction)
    return DetectorReport(
        detector=detector.name,
        params=detector.params(),
        confusion=counts,
        precision=p,
        recall=r,
        f1=score,
        flagged=int(prediction.sum()),
    )


def compare_detectors(
    detectors: Iterable[Detector], series: Series, truth: Sequence[int]
) -> ComparisonReport:
    """
    Evaluate independent detectors on the same series.

    Each detector sees the same read-only series; reports are sorted by
    descending F1 (ties keep input order).

    Raises:
        InvalidParameterError: If no detectors are given
    """
    detectors = list(detectors)
    if not detectors:
        raise InvalidParameterError("compare_detectors needs at least one detector")
    reports = [evaluate_detector(detector, series, truth) for detector in detectors]
    reports.sort(key=lambda report: report.f1, reverse=True)

    for report in reports:
        logger.info(
            "%s: precision=%.4f recall=%.4f f1=%.4f",
            report.detector, report.precision, report.recall, report.f1,
        )
    return ComparisonReport(reports=reports)
