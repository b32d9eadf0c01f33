"""Isolation Forest based anomaly scorer."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import ClassVar, Optional

import numpy as np
from sklearn.ensemble import IsolationForest

from anomaly_eval.core.config import config
from anomaly_eval.data.schema import Series

from .base import ScoringDetector, require

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IsolationForestScore(ScoringDetector):
    """
    Anomaly scoring with an isolation forest fitted on the value column.

    The forest is fitted once per call. Scores are the isolation-forest
    anomaly score s(x, n) in [0, 1]: values near 1 are isolated in few
    splits, values well below 0.5 are ordinary. Labels are ``score > threshold``.
    """

    threshold: float = field(default_factory=lambda: config.detectors.iforest_threshold)
    n_estimators: int = field(default_factory=lambda: config.detectors.iforest_n_estimators)
    max_samples: str = "auto"
    random_state: Optional[int] = field(default_factory=lambda: config.detectors.random_state)

    name: ClassVar[str] = "IsolationForestScore"

    def __post_init__(self) -> None:
        require(0.0 <= self.threshold <= 1.0, f"threshold must be in [0, 1], got {self.threshold}")
        require(self.n_estimators >= 1, f"n_estimators must be >= 1, got {self.n_estimators}")

    def score(self, series: Series) -> np.ndarray:
        X = series.values.reshape(-1, 1)

        with self._collaborator():
            model = IsolationForest(
                n_estimators=self.n_estimators,
                max_samples=self.max_samples,
                random_state=self.random_state,
            )
            model.fit(X)
            # score_samples returns the negated paper score
            scores = -model.score_samples(X)

        logger.debug("Isolation forest scored %d points (max=%.3f)", scores.size, scores.max())
        return np.clip(scores, 0.0, 1.0).astype(np.float64)
