"""
Unit tests for the threshold sweep and score-based PR curves.
"""

from dataclasses import dataclass
from typing import ClassVar

import numpy as np
import pytest

from anomaly_eval.anomaly.base import LabelingDetector, require
from anomaly_eval.core.exceptions import (
    InvalidParameterError,
    NonConvergentError,
    ShapeMismatchError,
)
from anomaly_eval.data.schema import Series
from anomaly_eval.evaluation.pr_curve import pr_curve_sweep, score_pr_curve


@dataclass(frozen=True)
class _TopFractionDetector(LabelingDetector):
    """Flags the largest ``fraction`` of values; more points as fraction grows."""

    fraction: float = 0.0

    name: ClassVar[str] = "TopFraction"
    sweep_parameter: ClassVar[str] = "fraction"

    def __post_init__(self) -> None:
        require(0.0 <= self.fraction <= 1.0, f"fraction must be in [0, 1], got {self.fraction}")

    def _detect(self, series: Series) -> np.ndarray:
        count = int(np.floor(self.fraction * len(series)))
        labels = np.zeros(len(series), dtype=np.int8)
        labels[np.argsort(-series.values, kind="stable")[:count]] = 1
        return labels


@dataclass(frozen=True)
class _FixedDetector(LabelingDetector):
    name: ClassVar[str] = "Fixed"

    def _detect(self, series: Series) -> np.ndarray:
        return np.zeros(len(series), dtype=np.int8)


@pytest.fixture
def ramp():
    series = Series.from_values(np.arange(10.0))
    truth = np.zeros(10, dtype=np.int8)
    truth[[7, 9]] = 1
    return series, truth


class TestSweep:
    """Test the bounded manual sweep."""

    def test_curve_points(self, ramp):
        series, truth = ramp

        curve = pr_curve_sweep(_TopFractionDetector(), series, truth, dt=0.1, max_iterations=50)

        assert curve.recalls == [0.0, 0.5, 0.5, 1.0]
        assert curve.precisions == pytest.approx([1.0, 1.0, 0.5, 2 / 3])
        assert [p.threshold for p in curve.points] == pytest.approx([0.0, 0.1, 0.2, 0.3])

    def test_starts_at_seed_point(self, ramp):
        series, truth = ramp
        first = pr_curve_sweep(_TopFractionDetector(), series, truth, dt=0.1).points[0]
        assert (first.precision, first.recall) == (1.0, 0.0)

    def test_recall_is_non_decreasing_and_ends_at_one(self, seasonal_data):
        series, truth = seasonal_data

        curve = pr_curve_sweep(_TopFractionDetector(), series, truth, dt=0.005, max_iterations=400)

        assert curve.recalls == sorted(curve.recalls)
        assert curve.recalls[-1] == 1.0
        assert all(r < 1.0 for r in curve.recalls[:-1])

    def test_callable_factory(self, ramp):
        series, truth = ramp

        curve = pr_curve_sweep(lambda t: _TopFractionDetector(fraction=t), series, truth, dt=0.1)

        assert curve.recalls[-1] == 1.0

    def test_no_true_anomalies_is_non_convergent(self, ramp):
        series, _ = ramp
        with pytest.raises(NonConvergentError, match="no anomalies"):
            pr_curve_sweep(_TopFractionDetector(), series, np.zeros(10, dtype=int), dt=0.1)

    def test_iteration_bound(self, ramp):
        series, truth = ramp
        with pytest.raises(NonConvergentError):
            pr_curve_sweep(_TopFractionDetector(), series, truth, dt=0.1, max_iterations=2)

    def test_detector_that_never_reaches_full_recall(self, ramp):
        series, truth = ramp
        with pytest.raises(NonConvergentError):
            pr_curve_sweep(lambda t: _FixedDetector(), series, truth, dt=0.1, max_iterations=25)

    def test_threshold_range_exhausted(self, ramp):
        """Index 0 needs fraction 1.0; dt=0.6 jumps from 0.6 straight to 1.2."""
        series, _ = ramp
        truth = np.zeros(10, dtype=np.int8)
        truth[0] = 1

        with pytest.raises(NonConvergentError) as excinfo:
            pr_curve_sweep(_TopFractionDetector(), series, truth, dt=0.6, max_iterations=10)

        assert isinstance(excinfo.value.__cause__, InvalidParameterError)

    @pytest.mark.parametrize("dt", [0.0, -0.1])
    def test_non_positive_step(self, ramp, dt):
        series, truth = ramp
        with pytest.raises(InvalidParameterError):
            pr_curve_sweep(_TopFractionDetector(), series, truth, dt=dt)

    def test_non_positive_iteration_bound(self, ramp):
        series, truth = ramp
        with pytest.raises(InvalidParameterError):
            pr_curve_sweep(_TopFractionDetector(), series, truth, dt=0.1, max_iterations=0)

    def test_detector_without_sweep_parameter(self, ramp):
        series, truth = ramp
        with pytest.raises(InvalidParameterError):
            pr_curve_sweep(_FixedDetector(), series, truth, dt=0.1)

    def test_truth_must_align(self, ramp):
        series, _ = ramp
        with pytest.raises(ShapeMismatchError):
            pr_curve_sweep(_TopFractionDetector(), series, [0, 1], dt=0.1)


class TestScoreCurve:
    """Test PR curves computed from continuous scores."""

    def test_ascending_recall_from_seed(self):
        curve = score_pr_curve([0.1, 0.4, 0.35, 0.8], [0, 0, 1, 1])

        first = curve.points[0]
        assert (first.precision, first.recall, first.threshold) == (1.0, 0.0, None)
        assert curve.recalls == sorted(curve.recalls)
        assert curve.recalls[-1] == 1.0
        assert 0.0 < curve.auc() <= 1.0

    def test_perfect_scores(self):
        curve = score_pr_curve([0.9, 0.1, 0.8, 0.2], [1, 0, 1, 0])

        full_recall = [p for p in curve.points if p.recall == 1.0]
        assert max(p.precision for p in full_recall) == 1.0
        assert curve.auc() == pytest.approx(1.0)

    def test_no_positives(self):
        with pytest.raises(NonConvergentError):
            score_pr_curve([0.1, 0.2], [0, 0])

    def test_length_mismatch(self):
        with pytest.raises(ShapeMismatchError):
            score_pr_curve([0.1, 0.2, 0.3], [0, 1])
