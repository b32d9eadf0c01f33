"""
Interquartile-range (Tukey fence) detector.

Batch detector: quartiles are computed over the entire series, not a rolling
window.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar, Tuple

import numpy as np

from anomaly_eval.core.config import config
from anomaly_eval.data.schema import Series

from .base import LabelingDetector, require


@dataclass(frozen=True)
class StatisticalIQR(LabelingDetector):
    """
    Flag points outside ``[Q1 - k*IQR, Q3 + k*IQR]``.

    Increasing ``k`` widens the fences, so it never increases the number of
    flagged points. Recall falls as ``k`` rises, which is the wrong direction
    for ``pr_curve_sweep``; tune ``k`` with ``grid_search`` instead.
    """

    k: float = field(default_factory=lambda: config.detectors.iqr_k)

    name: ClassVar[str] = "StatisticalIQR"

    def __post_init__(self) -> None:
        require(np.isfinite(self.k) and self.k >= 0, f"k must be a non-negative number, got {self.k}")

    def fences(self, series: Series) -> Tuple[float, float]:
        """Return the (lower, upper) fences for ``series``."""
        q1, q3 = np.quantile(series.values, [0.25, 0.75])
        iqr = q3 - q1
        return float(q1 - self.k * iqr), float(q3 + self.k * iqr)

    def _detect(self, series: Series) -> np.ndarray:
        lower, upper = self.fences(series)
        values = series.values
        return ((values < lower) | (values > upper)).astype(np.int8)
