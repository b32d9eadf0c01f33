"""Base detector interface for the evaluation harness."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from contextlib import contextmanager
from dataclasses import fields, replace
from typing import Any, ClassVar, Dict, Iterator, Optional

import numpy as np

from anomaly_eval.core.exceptions import (
    AnomalyEvaluationError,
    DetectorFitError,
    InvalidParameterError,
)
from anomaly_eval.data.labels import scores_to_labels
from anomaly_eval.data.schema import Series

logger = logging.getLogger(__name__)


def require(condition: bool, message: str) -> None:
    """Raise InvalidParameterError with ``message`` unless ``condition`` holds."""
    if not condition:
        raise InvalidParameterError(message)


class Detector(ABC):
    """
    Abstract base class for anomaly detectors.

    Concrete detectors are frozen dataclasses: hyperparameters are fields,
    validated in ``__post_init__``, and a new combination is a new instance
    (see ``with_params``). ``detect`` never mutates the series it is given and
    always returns a fresh Labels array of the same length.
    """

    name: ClassVar[str] = "Detector"

    # Hyperparameter moved by ``with_threshold`` during a PR sweep.
    sweep_parameter: ClassVar[Optional[str]] = None

    def detect(self, series: Series) -> np.ndarray:
        """
        Label every point of ``series``.

        Args:
            series: Input series (read-only)

        Returns:
            int8 array of 0/1 labels aligned with ``series.values``
        """
        labels = self._detect(series)
        logger.debug(
            "%s%s flagged %d/%d points", self.name, self.params(), int(labels.sum()), len(series)
        )
        return labels

    @abstractmethod
    def _detect(self, series: Series) -> np.ndarray:
        pass

    def params(self) -> Dict[str, Any]:
        """Current hyperparameters as a plain dict."""
        return {f.name: getattr(self, f.name) for f in fields(self)}

    def with_params(self, **overrides: Any) -> "Detector":
        """Return a new, validated detector with some hyperparameters replaced."""
        return replace(self, **overrides)

    def with_threshold(self, threshold: float) -> "Detector":
        """Return a copy whose sweep parameter is set to ``threshold``."""
        if self.sweep_parameter is None:
            raise InvalidParameterError(f"{self.name} has no sweepable threshold")
        return self.with_params(**{self.sweep_parameter: threshold})

    @contextmanager
    def _collaborator(self) -> Iterator[None]:
        """
        Wrap calls into external libraries.

        Harness errors pass through unchanged; anything else is re-raised as
        DetectorFitError carrying the detector name and parameters.
        """
        try:
            yield
        except AnomalyEvaluationError:
            raise
        except Exception as exc:
            logger.error("%s collaborator failure: %s", self.name, exc)
            raise DetectorFitError(self.name, self.params(), exc) from exc


class LabelingDetector(Detector):
    """Detector whose native output is a Labels sequence."""


class ScoringDetector(Detector):
    """
    Detector whose native output is a continuous score (higher = more anomalous).

    Labels are derived as ``score > threshold``; subclasses declare a
    ``threshold`` field. Raising the threshold lowers recall, so scoring
    detectors have no sweep parameter: build their PR curve from
    ``score()`` with ``score_pr_curve``.
    """

    threshold: float

    @abstractmethod
    def score(self, series: Series) -> np.ndarray:
        """Return a float64 score per point, aligned with ``series.values``."""
        pass

    def _detect(self, series: Series) -> np.ndarray:
        return scores_to_labels(self.score(series), self.threshold)
