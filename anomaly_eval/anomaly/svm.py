"""
One-class SVM over time-delay embeddings.

The series is turned into overlapping windows of ``window`` consecutive
values; a one-class SVM is fitted on those rows and every row it rejects
marks a short run of original indices as anomalous.

Run-marking convention:
    A flagged row j marks indices ``j .. j + run_span`` inclusive, clipped at
    the end of the series. With the default ``run_span=4`` that is five
    indices (row 2 -> 2, 3, 4, 5, 6). Pass ``run_span=3`` for runs of four.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import ClassVar, Iterable, Optional

import numpy as np
from sklearn.preprocessing import StandardScaler
from sklearn.svm import OneClassSVM

from anomaly_eval.core.config import config
from anomaly_eval.core.exceptions import InvalidParameterError
from anomaly_eval.data.schema import Series

from .base import LabelingDetector, require

logger = logging.getLogger(__name__)

# Kernel names as exposed by the harness -> scikit-learn names
KERNELS = {
    "radial": "rbf",
    "sigmoid": "sigmoid",
    "polynomial": "poly",
    "linear": "linear",
}


def time_delay_embedding(values: np.ndarray, window: int) -> np.ndarray:
    """
    Build the time-delay embedding matrix.

    Row j is ``values[j : j + window]``; there are ``N - window + 1`` rows.

    Raises:
        InvalidParameterError: If window < 1 or window > N
    """
    values = np.asarray(values, dtype=np.float64)
    if window < 1 or window > values.size:
        raise InvalidParameterError(
            f"window must be in [1, {values.size}] for a series of length {values.size}, got {window}"
        )
    return np.lib.stride_tricks.sliding_window_view(values, window).copy()


def mark_outlier_runs(outlier_rows: Iterable[int], n: int, run_span: int) -> np.ndarray:
    """
    Turn flagged embedding rows into a Labels array of length ``n``.

    Each row j marks ``j .. j + run_span`` inclusive; positions past ``n`` are
    dropped.
    """
    labels = np.zeros(n, dtype=np.int8)
    for row in outlier_rows:
        start = int(row)
        labels[start : min(start + run_span + 1, n)] = 1
    return labels


@dataclass(frozen=True)
class OneClassSVMEmbedding(LabelingDetector):
    """
    One-class SVM anomaly detector on windowed embeddings.

    Attributes:
        window: embedding dimension
        nu: upper bound on the fraction of training rows treated as outliers
        kernel: radial, sigmoid, polynomial or linear
        gamma: kernel coefficient; None means 1 / window
        scale: standardise embedding columns before fitting
        run_span: extra indices marked after each flagged row
    """

    window: int = field(default_factory=lambda: config.detectors.svm_window)
    nu: float = field(default_factory=lambda: config.detectors.svm_nu)
    kernel: str = field(default_factory=lambda: config.detectors.svm_kernel)
    gamma: Optional[float] = None
    scale: bool = True
    run_span: int = field(default_factory=lambda: config.detectors.svm_run_span)

    name: ClassVar[str] = "OneClassSVMEmbedding"
    sweep_parameter: ClassVar[str] = "nu"

    def __post_init__(self) -> None:
        require(isinstance(self.window, (int, np.integer)) and self.window >= 1,
                f"window must be a positive integer, got {self.window}")
        require(0.0 < self.nu <= 1.0, f"nu must be in (0, 1], got {self.nu}")
        require(self.kernel in KERNELS, f"kernel must be one of {sorted(KERNELS)}, got {self.kernel!r}")
        require(self.gamma is None or self.gamma > 0, f"gamma must be positive, got {self.gamma}")
        require(self.run_span >= 0, f"run_span must be >= 0, got {self.run_span}")

    def outlier_rows(self, series: Series) -> np.ndarray:
        """Indices of embedding rows the SVM classifies as outliers."""
        embedding = time_delay_embedding(series.values, self.window)
        gamma = self.gamma if self.gamma is not None else 1.0 / self.window

        with self._collaborator():
            if self.scale:
                embedding = StandardScaler().fit_transform(embedding)
            model = OneClassSVM(kernel=KERNELS[self.kernel], nu=self.nu, gamma=gamma)
            predictions = model.fit(embedding).predict(embedding)

        logger.debug(
            "Fitted one-class SVM on %d embedding rows (window=%d)", embedding.shape[0], self.window
        )
        # -1 = not normal
        return np.flatnonzero(predictions == -1)

    def _detect(self, series: Series) -> np.ndarray:
        return mark_outlier_runs(self.outlier_rows(series), len(series), self.run_span)
