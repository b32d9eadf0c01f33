"""Seasonal-hybrid ESD detector."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar, Optional

import numpy as np

from anomaly_eval.core.config import config
from anomaly_eval.data.schema import Series

from . import esd
from .base import LabelingDetector, require

DIRECTIONS = ("positive", "negative", "both")


@dataclass(frozen=True)
class SeasonalHybridESD(LabelingDetector):
    """
    Wraps the S-H-ESD search and maps its result back onto the series.

    Anomalies come back as timestamps, possibly reordered or subset, so they
    are matched to the series by exact timestamp rather than by position.
    ``max_anoms`` is the threshold moved by a PR sweep: larger values let
    the test flag more points.
    """

    max_anoms: float = field(default_factory=lambda: config.detectors.esd_max_anoms)
    direction: str = field(default_factory=lambda: config.detectors.esd_direction)
    alpha: float = field(default_factory=lambda: config.detectors.esd_alpha)
    period: Optional[int] = None

    name: ClassVar[str] = "SeasonalHybridESD"
    sweep_parameter: ClassVar[str] = "max_anoms"

    def __post_init__(self) -> None:
        require(0.0 <= self.max_anoms <= 1.0, f"max_anoms must be in [0, 1], got {self.max_anoms}")
        require(self.direction in DIRECTIONS, f"direction must be one of {DIRECTIONS}, got {self.direction!r}")
        require(0.0 < self.alpha < 1.0, f"alpha must be in (0, 1), got {self.alpha}")
        require(self.period is None or self.period >= 2, f"period must be >= 2, got {self.period}")

    def _detect(self, series: Series) -> np.ndarray:
        frame = series.to_frame()
        with self._collaborator():
            anomalies = esd.seasonal_hybrid_esd(
                frame,
                max_anoms=self.max_anoms,
                direction=self.direction,
                alpha=self.alpha,
                period=self.period,
            )
        return np.isin(series.timestamps, anomalies["timestamp"].to_numpy()).astype(np.int8)
