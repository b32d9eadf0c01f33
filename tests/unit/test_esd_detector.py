"""
Unit tests for the seasonal-hybrid ESD search and detector.
"""

import numpy as np
import pandas as pd
import pytest

from anomaly_eval.anomaly import esd as esd_module
from anomaly_eval.anomaly.esd import generalized_esd, seasonal_hybrid_esd, seasonal_residuals
from anomaly_eval.anomaly.seasonal import SeasonalHybridESD
from anomaly_eval.core.exceptions import DetectorFitError, InvalidParameterError
from anomaly_eval.data.schema import Series
from anomaly_eval.evaluation.metrics import recall


def _uniform_with(position: int, value: float) -> np.ndarray:
    residuals = np.linspace(-1.0, 1.0, 101)
    residuals[position] = value
    return residuals


class TestGeneralizedESD:
    """Test the median/MAD generalized ESD test."""

    def test_single_outlier_found(self):
        assert generalized_esd(_uniform_with(50, 20.0), max_outliers=10) == [50]

    def test_direction_positive_ignores_low_outlier(self):
        residuals = _uniform_with(50, -20.0)

        assert generalized_esd(residuals, max_outliers=10, direction="positive") == []
        assert generalized_esd(residuals, max_outliers=10, direction="negative") == [50]
        assert generalized_esd(residuals, max_outliers=10, direction="both") == [50]

    def test_removal_order_is_most_extreme_first(self):
        residuals = np.linspace(-1.0, 1.0, 101)
        residuals[10] = 15.0
        residuals[90] = 40.0

        assert generalized_esd(residuals, max_outliers=5) == [90, 10]

    def test_zero_budget_flags_nothing(self):
        assert generalized_esd(_uniform_with(50, 20.0), max_outliers=0) == []

    def test_tiny_series_flags_nothing(self):
        assert generalized_esd(np.array([1.0, 50.0]), max_outliers=1) == []

    def test_constant_residuals_stop_early(self):
        assert generalized_esd(np.zeros(20), max_outliers=5) == []


class TestSeasonalHybridESD:
    """Test the frame-level S-H-ESD search."""

    def test_returns_anomalous_rows(self):
        values = _uniform_with(50, 20.0)
        frame = pd.DataFrame({"timestamp": np.arange(101) * 10.0, "value": values})

        anomalies = seasonal_hybrid_esd(frame, max_anoms=0.1)

        assert list(anomalies.columns) == ["timestamp", "value"]
        assert anomalies["timestamp"].tolist() == [500.0]
        assert anomalies["value"].tolist() == [20.0]

    def test_zero_max_anoms_returns_empty_frame(self):
        frame = pd.DataFrame({"timestamp": np.arange(101.0), "value": _uniform_with(50, 20.0)})
        assert seasonal_hybrid_esd(frame, max_anoms=0.0).empty

    def test_seasonal_component_is_removed(self, seasonal_data):
        series, _ = seasonal_data
        raw = series.values - np.median(series.values)

        residuals = seasonal_residuals(series.values, period=24)

        assert np.median(np.abs(residuals)) < 0.5 * np.median(np.abs(raw))

    def test_short_series_skips_decomposition(self):
        values = np.array([1.0, 2.0, 3.0, 4.0])
        np.testing.assert_allclose(seasonal_residuals(values, period=24), values - 2.5)


class TestDetector:
    """Test the detector wrapper and its timestamp mapping."""

    def test_maps_reordered_timestamps_back(self, monkeypatch):
        series = Series(timestamps=[10.0, 20.0, 30.0, 40.0, 50.0], values=[1.0, 2.0, 3.0, 4.0, 5.0])
        captured = {}

        def fake_search(frame, **kwargs):
            captured["frame"] = frame
            captured["kwargs"] = kwargs
            # Reordered, plus a timestamp that is not in the series
            return pd.DataFrame({"timestamp": [40.0, 15.0, 10.0], "value": [4.0, 0.0, 1.0]})

        monkeypatch.setattr(esd_module, "seasonal_hybrid_esd", fake_search)

        labels = SeasonalHybridESD(max_anoms=0.4, direction="positive").detect(series)

        assert labels.tolist() == [1, 0, 0, 1, 0]
        assert captured["frame"]["timestamp"].tolist() == [10.0, 20.0, 30.0, 40.0, 50.0]
        assert captured["kwargs"]["max_anoms"] == 0.4
        assert captured["kwargs"]["direction"] == "positive"

    def test_finds_injected_anomalies(self, seasonal_data):
        series, truth = seasonal_data

        labels = SeasonalHybridESD(max_anoms=0.05, period=24).detect(series)

        assert recall(truth, labels) == 1.0

    def test_collaborator_failure_is_wrapped(self, monkeypatch):
        def broken(frame, **kwargs):
            raise np.linalg.LinAlgError("singular")

        monkeypatch.setattr(esd_module, "seasonal_hybrid_esd", broken)

        with pytest.raises(DetectorFitError, match="SeasonalHybridESD"):
            SeasonalHybridESD().detect(Series.from_values(np.arange(10.0)))

    @pytest.mark.parametrize(
        "params",
        [
            {"max_anoms": -0.1},
            {"max_anoms": 1.5},
            {"direction": "up"},
            {"alpha": 0.0},
            {"period": 1},
        ],
    )
    def test_invalid_parameters(self, params):
        with pytest.raises(InvalidParameterError):
            SeasonalHybridESD(**params)

    def test_max_anoms_is_the_sweep_parameter(self):
        detector = SeasonalHybridESD(max_anoms=0.1)
        assert detector.with_threshold(0.25).max_anoms == 0.25
        assert detector.max_anoms == 0.1
